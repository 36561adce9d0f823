"""Visualization utilities for the bank queue."""

from .plotting import (
    plot_waiting_time_histogram,
    plot_queue_length,
    plot_server_utilization,
    plot_scenario_comparison,
    plot_system_metrics,
    create_performance_report
)

__all__ = [
    'plot_waiting_time_histogram',
    'plot_queue_length',
    'plot_server_utilization',
    'plot_scenario_comparison',
    'plot_system_metrics',
    'create_performance_report'
]
