"""Tabular views of simulation results (pandas)."""

from typing import Dict, Optional
import numpy as np
import pandas as pd

from bank_queue.core import SimulationResult


# (metric, label, direction): +1 higher is better, -1 lower is better, 0 neutral
COMPARED_METRICS = [
    ('mean_wait', 'Mean waiting time (min)', -1),
    ('max_wait', 'Max waiting time (min)', -1),
    ('mean_queue_length', 'Mean queue length', -1),
    ('max_queue_length', 'Max queue length', -1),
    ('time_average_queue_length', 'Time-average queue length', -1),
    ('utilization', 'Utilization', 0),
    ('throughput', 'Throughput (customers/min)', 1),
    ('total_customers', 'Customers served', 0),
]


def customer_table(result: SimulationResult) -> pd.DataFrame:
    """One row per customer in arrival order."""
    return pd.DataFrame({
        'customer_id': np.arange(result.total_customers),
        'arrival_time': result.arrival_times,
        'service_time': result.service_times,
        'server': result.assignments,
        'service_start': result.service_starts,
        'service_end': result.service_ends,
        'waiting_time': result.waiting_times,
    })


def summary_table(results: Dict[str, SimulationResult]) -> pd.DataFrame:
    """Aggregate statistics with one column per scenario."""
    data = {}
    for name, result in results.items():
        metrics = result.metrics.as_dict()
        data[name] = {label: metrics[key] for key, label, _ in COMPARED_METRICS}
    return pd.DataFrame(data)


def percent_change(baseline: float, alternative: float) -> float:
    """Relative change from baseline in percent (nan when baseline is 0 or nan)."""
    if baseline == 0 or np.isnan(baseline) or np.isnan(alternative):
        return float('nan')
    return (alternative - baseline) / abs(baseline) * 100.0


def compare_scenarios(baseline: SimulationResult,
                      alternative: SimulationResult,
                      baseline_label: Optional[str] = None,
                      alternative_label: Optional[str] = None) -> pd.DataFrame:
    """
    Side-by-side comparison of two scenarios.

    ``Change (%)`` is the raw relative change from the baseline.
    ``Improvement (%)`` is signed so that positive means better: it is the
    negated change for lower-is-better metrics (waits, queue lengths), the
    change itself for throughput, and nan for neutral metrics.
    """
    if baseline_label is None:
        baseline_label = f"c={baseline.num_servers}"
    if alternative_label is None:
        alternative_label = f"c={alternative.num_servers}"

    base = baseline.metrics.as_dict()
    alt = alternative.metrics.as_dict()

    rows = []
    for key, label, direction in COMPARED_METRICS:
        b = float(base[key])
        a = float(alt[key])
        change = percent_change(b, a)
        rows.append({
            'Metric': label,
            baseline_label: b,
            alternative_label: a,
            'Change (%)': change,
            'Improvement (%)': change * direction if direction else float('nan'),
        })

    return pd.DataFrame(rows).set_index('Metric')
