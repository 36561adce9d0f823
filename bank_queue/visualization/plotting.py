"""
Visualization utilities for the bank queue scenarios.
"""

from typing import Dict, Optional
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns

from bank_queue.core import SimulationResult


def _new_axes(ax, figsize=(10, 6)):
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure
    return fig, ax


def _no_data(ax, message: str = 'No customers'):
    ax.text(0.5, 0.5, message, ha='center', va='center', transform=ax.transAxes)


def plot_waiting_time_histogram(results: Dict[str, SimulationResult],
                                bins: int = 30, ax=None):
    """Histogram of per-customer waiting times, one colour per scenario."""
    fig, ax = _new_axes(ax)

    frames = [pd.DataFrame({'Waiting time (min)': r.waiting_times, 'Scenario': name})
              for name, r in results.items() if r.total_customers]

    if not frames:
        _no_data(ax)
    else:
        data = pd.concat(frames, ignore_index=True)
        sns.histplot(data=data, x='Waiting time (min)', hue='Scenario',
                     bins=bins, element='step', stat='count', common_bins=True, ax=ax)

    ax.set_ylabel('Customers')
    ax.set_title('Waiting Time Distribution')
    return fig


def plot_queue_length(results: Dict[str, SimulationResult], ax=None):
    """Queue length over the day for each scenario (step chart)."""
    fig, ax = _new_axes(ax, figsize=(12, 5))

    plotted = False
    for name, result in results.items():
        if len(result.queue_times) == 0:
            continue
        ax.step(result.queue_times, result.queue_lengths, where='post', label=name)
        plotted = True

    if plotted:
        ax.legend()
    else:
        _no_data(ax)

    ax.set_xlabel('Time (min)')
    ax.set_ylabel('Customers waiting')
    ax.set_title('Queue Length Over Time')
    ax.grid(True, alpha=0.3)
    return fig


def plot_server_utilization(results: Dict[str, SimulationResult], ax=None):
    """Busy fraction of each teller, grouped by scenario."""
    fig, ax = _new_axes(ax)

    rows = []
    for name, result in results.items():
        for k, util in enumerate(result.metrics.server_utilizations):
            rows.append({'Scenario': name, 'Teller': f"Teller {k + 1}", 'Utilization': util})

    data = pd.DataFrame(rows)
    if data.empty or data['Utilization'].isna().all():
        _no_data(ax)
    else:
        sns.barplot(data=data, x='Teller', y='Utilization', hue='Scenario', ax=ax)
        ax.set_ylim(0, 1)

    ax.set_title('Teller Utilization')
    return fig


def plot_scenario_comparison(comparison: pd.DataFrame, ax=None):
    """Horizontal bars of the 'Improvement (%)' column of a comparison table."""
    fig, ax = _new_axes(ax)

    improvement = comparison['Improvement (%)'].dropna()
    if improvement.empty:
        _no_data(ax, 'No comparable metrics')
    else:
        colors = ['tab:green' if v >= 0 else 'tab:red' for v in improvement.values]
        ax.barh(improvement.index, improvement.values, color=colors)
        ax.axvline(0, color='black', linewidth=0.8)

    ax.set_xlabel('Improvement (%)')
    ax.set_title('Scenario Improvement')
    return fig


def plot_system_metrics(results: Dict[str, SimulationResult],
                        title: str = "Bank Queue Metrics"):
    """Create a 2x2 dashboard comparing the scenarios."""
    fig, ((ax1, ax2), (ax3, ax4)) = plt.subplots(2, 2, figsize=(15, 10))
    fig.suptitle(title, fontsize=16)

    names = list(results.keys())

    # Plot 1: Average waits
    ax1.bar(names, [results[n].metrics.mean_wait for n in names])
    ax1.set_ylabel('Minutes')
    ax1.set_title('Mean Waiting Time')

    # Plot 2: Queue lengths
    x = np.arange(len(names))
    width = 0.35
    ax2.bar(x - width/2, [results[n].metrics.mean_queue_length for n in names],
            width, label='Mean')
    ax2.bar(x + width/2, [results[n].metrics.max_queue_length for n in names],
            width, label='Max')
    ax2.set_xticks(x)
    ax2.set_xticklabels(names)
    ax2.set_ylabel('Customers')
    ax2.set_title('Queue Length')
    ax2.legend()

    # Plot 3: Waiting time histogram
    plot_waiting_time_histogram(results, ax=ax3)

    # Plot 4: Queue length over time
    plot_queue_length(results, ax=ax4)

    plt.tight_layout()
    return fig


def create_performance_report(results: Dict[str, SimulationResult],
                              comparison: Optional[pd.DataFrame] = None,
                              save_path: Optional[str] = None):
    """Create a report figure with every chart and a text summary."""
    fig = plt.figure(figsize=(16, 18))
    grid = fig.add_gridspec(3, 2)

    plot_waiting_time_histogram(results, ax=fig.add_subplot(grid[0, 0]))
    plot_server_utilization(results, ax=fig.add_subplot(grid[0, 1]))
    plot_queue_length(results, ax=fig.add_subplot(grid[1, :]))

    if comparison is not None:
        plot_scenario_comparison(comparison, ax=fig.add_subplot(grid[2, 0]))
        text_ax = fig.add_subplot(grid[2, 1])
    else:
        text_ax = fig.add_subplot(grid[2, :])

    text_ax.axis('off')

    stats_text = "Scenario Summary\n----------------\n"
    for name, result in results.items():
        m = result.metrics
        stats_text += f"\n{name}:"
        stats_text += f"\n  Customers Served: {m.total_customers}"
        stats_text += f"\n  Mean Waiting Time: {m.mean_wait:.3f} min"
        stats_text += f"\n  Mean Queue Length: {m.mean_queue_length:.3f}"
        stats_text += f"\n  Max Queue Length: {m.max_queue_length}"
        stats_text += f"\n  Utilization: {m.utilization:.3f}\n"

    text_ax.text(0.05, 0.95, stats_text, transform=text_ax.transAxes,
                 fontfamily='monospace', verticalalignment='top')

    fig.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=300, bbox_inches='tight')

    return fig
