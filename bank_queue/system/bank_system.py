"""Scenario runner: generate a bank day, simulate it, repeat across seeds."""

from typing import Dict, Optional, Tuple
import numpy as np
from scipy import stats

from bank_queue.core import QueueSimulator, SimulationResult
from bank_queue.distributions import (
    exponential_distribution,
    generate_arrivals,
    generate_service_times,
    spawn_streams,
)
from .config import SimulationConfig


SCALAR_METRICS = (
    'total_customers',
    'mean_wait',
    'max_wait',
    'mean_queue_length',
    'max_queue_length',
    'time_average_queue_length',
    'utilization',
    'throughput',
    'makespan',
)


def scenario_label(num_servers: int) -> str:
    return f"c={num_servers}"


def generate_day(config: SimulationConfig,
                 seed: Optional[int] = None) -> Tuple[np.ndarray, np.ndarray]:
    """
    Draw one day of customers: Poisson arrival times and exponential service times.

    Arrivals and services come from independent child streams of ``seed``
    (``config.seed`` when omitted), so the same seed always gives the same day.
    """
    if seed is None:
        seed = config.seed
    arrival_rng, service_rng = spawn_streams(seed, 2)

    arrivals = generate_arrivals(exponential_distribution(config.arrival_rate),
                                 config.horizon, arrival_rng)
    services = generate_service_times(exponential_distribution(config.service_rate),
                                      len(arrivals), service_rng)
    return arrivals, services


def run_scenario(config: SimulationConfig, num_servers: int,
                 seed: Optional[int] = None) -> SimulationResult:
    """Simulate one day with ``num_servers`` tellers."""
    arrivals, services = generate_day(config, seed)
    simulator = QueueSimulator(num_servers, selection=config.selection)
    return simulator.run(arrivals, services)


def run_scenarios(config: SimulationConfig,
                  seed: Optional[int] = None) -> Dict[str, SimulationResult]:
    """
    Simulate the same day once per server count in ``config.servers``.

    Every scenario sees identical customers, so differences come from the
    number of tellers only.
    """
    arrivals, services = generate_day(config, seed)

    results = {}
    for c in config.servers:
        simulator = QueueSimulator(c, selection=config.selection)
        results[scenario_label(c)] = simulator.run(arrivals, services)
    return results


def summarize_values(values, confidence: float = 0.95) -> Dict[str, float]:
    """Mean, spread and Student-t confidence half width of replicated values."""
    values = np.asarray(values, dtype=float)
    n = len(values)
    std = float(np.std(values, ddof=1)) if n > 1 else 0.0

    if n > 1:
        half_width = float(stats.t.ppf((1 + confidence) / 2, n - 1) * std / np.sqrt(n))
    else:
        half_width = float('nan')

    return {
        'mean': float(np.mean(values)),
        'std': std,
        'min': float(np.min(values)),
        'max': float(np.max(values)),
        'ci_half_width': half_width,
    }


def run_replications(config: SimulationConfig,
                     num_servers: int,
                     num_replications: Optional[int] = None,
                     base_seed: Optional[int] = None) -> Dict:
    """Run independent days (seeds base_seed + i) and compute statistics."""
    if num_replications is None:
        num_replications = config.replications
    if num_replications < 1:
        raise ValueError(f"num_replications must be >= 1, got {num_replications}")
    if base_seed is None:
        base_seed = config.seed if config.seed is not None else 0

    results = []
    for i in range(num_replications):
        result = run_scenario(config, num_servers, seed=base_seed + i)
        results.append(result.get_metrics_summary())

    summary = {
        'replications': num_replications,
        'num_servers': num_servers,
        'base_seed': base_seed,
        'metrics': {},
    }

    for key in SCALAR_METRICS:
        summary['metrics'][key] = summarize_values([r[key] for r in results])

    return summary
