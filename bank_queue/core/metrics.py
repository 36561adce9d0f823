"""Queue-length series and aggregate statistics for a finished run."""

from typing import Tuple
import numpy as np

from .base import SystemMetrics


ROUNDING_TOLERANCE = 1e-9


def queue_length_series(arrival_times: np.ndarray,
                        service_starts: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Sample the number of waiting customers at every arrival and service start.

    The length at time t counts customers with ``arrival <= t < start``.
    Returns (times, lengths) with times distinct and ascending.
    """
    arrival_times = np.asarray(arrival_times, dtype=float)
    service_starts = np.asarray(service_starts, dtype=float)

    times = np.unique(np.concatenate([arrival_times, service_starts]))

    # Every start is >= its arrival, so started customers are a subset of arrived ones
    arrived = np.searchsorted(np.sort(arrival_times), times, side='right')
    started = np.searchsorted(np.sort(service_starts), times, side='right')

    return times, (arrived - started).astype(int)


def time_average(times: np.ndarray, values: np.ndarray, horizon: float) -> float:
    """Time-weighted mean of a step function sampled at ``times``."""
    if len(times) == 0 or horizon <= 0:
        return float('nan')
    # Each value holds until the next sample; the last sample is always zero
    area = float(np.sum(values[:-1] * np.diff(times)))
    return area / horizon


def busy_fraction(busy: float, capacity: float) -> float:
    """
    Busy time over available time.

    Only floating-point noise above 1 is rounded away; larger ratios mean
    overlapping services and are returned as they are.
    """
    ratio = busy / capacity
    if 1.0 < ratio <= 1.0 + ROUNDING_TOLERANCE:
        return 1.0
    return ratio


def compute_metrics(num_servers: int,
                    arrival_times: np.ndarray,
                    service_starts: np.ndarray,
                    service_ends: np.ndarray,
                    assignments: np.ndarray,
                    queue_times: np.ndarray,
                    queue_lengths: np.ndarray) -> SystemMetrics:
    """Compute the run summary from per-customer timestamps."""
    n = len(arrival_times)

    busy = np.bincount(assignments, weights=service_ends - service_starts,
                       minlength=num_servers).astype(float)
    served = np.bincount(assignments, minlength=num_servers)

    if n == 0:
        return SystemMetrics(
            total_customers=0,
            server_busy_times=busy.tolist(),
            server_utilizations=[float('nan')] * num_servers,
            customers_per_server=served.tolist(),
        )

    waits = service_starts - arrival_times
    makespan = float(np.max(service_ends))

    if makespan > 0:
        utilization = busy_fraction(float(busy.sum()), num_servers * makespan)
        server_utilizations = [busy_fraction(b, makespan) for b in busy.tolist()]
        throughput = n / makespan
    else:
        utilization = float('nan')
        server_utilizations = [float('nan')] * num_servers
        throughput = float('nan')

    return SystemMetrics(
        total_customers=n,
        mean_wait=float(np.mean(waits)),
        max_wait=float(np.max(waits)),
        mean_queue_length=float(np.mean(queue_lengths)),
        max_queue_length=int(np.max(queue_lengths)),
        time_average_queue_length=time_average(queue_times, queue_lengths, makespan),
        utilization=utilization,
        throughput=throughput,
        makespan=makespan,
        server_busy_times=busy.tolist(),
        server_utilizations=server_utilizations,
        customers_per_server=served.tolist(),
    )
