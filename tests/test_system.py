import json
import math

import numpy as np
import pytest

from bank_queue.core import ConfigurationError
from bank_queue.system import (
    SCALAR_METRICS,
    SimulationConfig,
    config_from_dict,
    generate_day,
    load_config,
    run_replications,
    run_scenario,
    run_scenarios,
    summarize_values,
)


@pytest.fixture
def config():
    return SimulationConfig(hourly_rate=45.0, mean_service_time=2.5, horizon=240.0,
                            servers=(2, 3), seed=11)


def test_generate_day_is_reproducible(config):
    arrivals, services = generate_day(config)
    again_arrivals, again_services = generate_day(config, seed=config.seed)

    np.testing.assert_array_equal(arrivals, again_arrivals)
    np.testing.assert_array_equal(services, again_services)
    assert len(arrivals) == len(services)
    assert np.all(arrivals <= config.horizon)


def test_generate_day_changes_with_seed(config):
    a, _ = generate_day(config, seed=1)
    b, _ = generate_day(config, seed=2)
    assert len(a) != len(b) or not np.array_equal(a, b)


def test_scenarios_share_the_same_customers(config):
    results = run_scenarios(config)

    assert list(results) == ['c=2', 'c=3']
    np.testing.assert_array_equal(results['c=2'].arrival_times, results['c=3'].arrival_times)
    np.testing.assert_array_equal(results['c=2'].service_times, results['c=3'].service_times)
    assert results['c=3'].metrics.mean_wait <= results['c=2'].metrics.mean_wait
    assert results['c=3'].num_servers == 3


def test_run_scenario_matches_run_scenarios(config):
    single = run_scenario(config, 2)
    both = run_scenarios(config)
    np.testing.assert_array_equal(single.service_starts, both['c=2'].service_starts)


def test_heap_selection_through_config(config):
    scan = run_scenario(config, 3)
    heap = run_scenario(config.with_overrides(selection='heap'), 3)
    np.testing.assert_array_equal(scan.assignments, heap.assignments)


def test_run_replications(config):
    summary = run_replications(config, 2, num_replications=4, base_seed=100)

    assert summary['replications'] == 4
    assert summary['num_servers'] == 2
    assert set(summary['metrics']) == set(SCALAR_METRICS)

    wait = summary['metrics']['mean_wait']
    assert wait['min'] <= wait['mean'] <= wait['max']
    assert wait['ci_half_width'] > 0

    first = run_scenario(config, 2, seed=100).metrics.mean_wait
    assert wait['min'] <= first <= wait['max']


def test_single_replication_has_no_interval(config):
    summary = run_replications(config, 2, num_replications=1)
    assert math.isnan(summary['metrics']['mean_wait']['ci_half_width'])
    assert summary['metrics']['mean_wait']['std'] == 0.0


def test_summarize_values():
    stats = summarize_values([1.0, 2.0, 3.0])
    assert stats['mean'] == pytest.approx(2.0)
    assert stats['std'] == pytest.approx(1.0)
    # t(0.975, 2) * 1 / sqrt(3)
    assert stats['ci_half_width'] == pytest.approx(4.302653 / np.sqrt(3), rel=1e-5)


def test_config_rates(config):
    assert config.arrival_rate == pytest.approx(0.75)
    assert config.service_rate == pytest.approx(0.4)


@pytest.mark.parametrize('changes', [
    {'hourly_rate': 0},
    {'mean_service_time': -1},
    {'horizon': 0},
    {'servers': ()},
    {'servers': (2, 0)},
    {'replications': 0},
    {'selection': 'random'},
    {'hourly_rate': float('nan')},
    {'mean_service_time': float('inf')},
    {'horizon': float('inf')},
    {'hourly_rate': '45'},
    {'hourly_rate': True},
    {'seed': 'abc'},
    {'replications': True},
])
def test_invalid_config(changes):
    with pytest.raises(ConfigurationError):
        SimulationConfig(**changes).validate()


def test_overrides_skip_none(config):
    updated = config.with_overrides(hourly_rate=None, servers=[1, 4])
    assert updated.hourly_rate == config.hourly_rate
    assert updated.servers == (1, 4)


def test_load_config(tmp_path):
    path = tmp_path / 'bank.json'
    path.write_text(json.dumps({'hourly_rate': 60, 'servers': [2, 3, 4], 'seed': 7}))

    config = load_config(str(path))

    assert config.hourly_rate == 60
    assert config.servers == (2, 3, 4)
    assert config.seed == 7
    assert config.mean_service_time == SimulationConfig().mean_service_time


def test_load_config_rejects_bad_files(tmp_path):
    unknown = tmp_path / 'unknown.json'
    unknown.write_text(json.dumps({'tellers': 2}))
    with pytest.raises(ConfigurationError):
        load_config(str(unknown))

    broken = tmp_path / 'broken.json'
    broken.write_text('{"hourly_rate": ')
    with pytest.raises(ConfigurationError):
        load_config(str(broken))

    not_object = tmp_path / 'list.json'
    not_object.write_text('[1, 2]')
    with pytest.raises(ConfigurationError):
        load_config(str(not_object))


def test_config_from_dict_validates():
    with pytest.raises(ConfigurationError):
        config_from_dict({'horizon': -5})


def test_config_from_dict_rejects_non_list_servers():
    with pytest.raises(ConfigurationError):
        config_from_dict({'servers': 2})
    with pytest.raises(ConfigurationError):
        config_from_dict({'servers': '23'})


def test_seed_may_be_null():
    assert config_from_dict({'seed': None}).seed == SimulationConfig().seed
    assert SimulationConfig(seed=None).validate().seed is None
