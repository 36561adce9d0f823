from matplotlib.figure import Figure
import numpy as np
import pytest

from bank_queue.core import simulate
from bank_queue.system import compare_scenarios
from bank_queue.visualization import (
    create_performance_report,
    plot_queue_length,
    plot_scenario_comparison,
    plot_server_utilization,
    plot_system_metrics,
    plot_waiting_time_histogram,
)


@pytest.fixture
def results(random_day):
    arrivals, services = random_day
    return {'c=2': simulate(arrivals, services, 2), 'c=3': simulate(arrivals, services, 3)}


@pytest.fixture
def empty_results():
    return {'c=2': simulate([], [], 2)}


@pytest.mark.parametrize('plot', [
    plot_waiting_time_histogram,
    plot_queue_length,
    plot_server_utilization,
    plot_system_metrics,
])
def test_plots_return_figures(plot, results):
    assert isinstance(plot(results), Figure)


@pytest.mark.parametrize('plot', [
    plot_waiting_time_histogram,
    plot_queue_length,
    plot_server_utilization,
])
def test_plots_handle_empty_days(plot, empty_results):
    assert isinstance(plot(empty_results), Figure)


def test_queue_length_plot_has_one_line_per_scenario(results):
    fig = plot_queue_length(results)
    ax = fig.axes[0]

    assert len(ax.get_lines()) == 2
    np.testing.assert_array_equal(ax.get_lines()[0].get_xdata(), results['c=2'].queue_times)


def test_comparison_plot(results):
    comparison = compare_scenarios(results['c=2'], results['c=3'])
    fig = plot_scenario_comparison(comparison)
    assert isinstance(fig, Figure)


def test_performance_report_is_saved(results, tmp_path):
    comparison = compare_scenarios(results['c=2'], results['c=3'])
    path = tmp_path / 'report.png'

    fig = create_performance_report(results, comparison, save_path=str(path))

    assert isinstance(fig, Figure)
    assert path.exists()
    assert path.stat().st_size > 0
