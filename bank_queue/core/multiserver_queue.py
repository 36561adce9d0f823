"""Multi-server FCFS queue: earliest-available-teller assignment."""

import heapq
from typing import List, Sequence
import numpy as np

from .base import SimulationResult
from .errors import (
    InvalidServerCount,
    InvalidServiceTime,
    LengthMismatch,
    SimulationError,
    UnsortedArrivals,
)
from .metrics import compute_metrics, queue_length_series


SELECTION_METHODS = ('scan', 'heap')


class QueueSimulator:
    """
    Queue with ``num_servers`` tellers working in parallel.

    Customers are taken in arrival order and each goes to the teller that
    becomes free first; ties go to the lowest teller index. The simulator keeps
    no state between runs.

    Args:
        num_servers: Number of tellers (c >= 1)
        selection: 'scan' walks every teller per customer (O(c)), 'heap' keeps
            tellers in a min-heap keyed by (next free time, index) (O(log c)).
            Both give identical assignments.
    """

    def __init__(self, num_servers: int, selection: str = 'scan'):
        if (isinstance(num_servers, bool)
                or not isinstance(num_servers, (int, np.integer))
                or num_servers < 1):
            raise InvalidServerCount(num_servers)
        if selection not in SELECTION_METHODS:
            raise ValueError(f"selection must be one of {SELECTION_METHODS}, got {selection!r}")
        self.num_servers = int(num_servers)
        self.selection = selection

    def run(self, arrival_times: Sequence[float],
            service_times: Sequence[float]) -> SimulationResult:
        """Serve every customer and return the timestamps and statistics."""
        arrivals, services = self._validate(arrival_times, service_times)

        if self.selection == 'heap':
            starts, ends, assignments = self._assign_with_heap(arrivals, services)
        else:
            starts, ends, assignments = self._assign_with_scan(arrivals, services)

        arrivals = np.asarray(arrivals, dtype=float)
        starts = np.asarray(starts, dtype=float)
        ends = np.asarray(ends, dtype=float)
        assignments = np.asarray(assignments, dtype=int)

        queue_times, queue_lengths = queue_length_series(arrivals, starts)
        metrics = compute_metrics(self.num_servers, arrivals, starts, ends,
                                  assignments, queue_times, queue_lengths)

        return SimulationResult(
            num_servers=self.num_servers,
            arrival_times=arrivals,
            service_times=np.asarray(services, dtype=float),
            service_starts=starts,
            service_ends=ends,
            assignments=assignments,
            queue_times=queue_times,
            queue_lengths=queue_lengths,
            metrics=metrics,
        )

    def _validate(self, arrival_times, service_times):
        """Check inputs before any customer is served."""
        arrivals = np.asarray(arrival_times, dtype=float).ravel()
        services = np.asarray(service_times, dtype=float).ravel()

        if len(arrivals) != len(services):
            raise LengthMismatch(len(arrivals), len(services))

        if not np.all(np.isfinite(arrivals)):
            raise SimulationError("arrival times must be finite")

        # First position where an arrival precedes the one before it
        backwards = np.flatnonzero(np.diff(arrivals) < 0)
        if len(backwards):
            i = int(backwards[0]) + 1
            raise UnsortedArrivals(i, float(arrivals[i - 1]), float(arrivals[i]))

        bad = np.flatnonzero(~np.isfinite(services) | (services < 0))
        if len(bad):
            i = int(bad[0])
            raise InvalidServiceTime(i, float(services[i]))

        return arrivals.tolist(), services.tolist()

    def _find_next_free_server(self, next_free: List[float]) -> int:
        """Find the teller that frees up first (lowest index on ties)."""
        min_time = next_free[0]
        min_server = 0

        for i in range(1, len(next_free)):
            if next_free[i] < min_time:
                min_time = next_free[i]
                min_server = i

        return min_server

    def _assign_with_scan(self, arrivals: List[float], services: List[float]):
        next_free = [0.0] * self.num_servers
        starts, ends, assignments = [], [], []

        for arrival, service in zip(arrivals, services):
            k = self._find_next_free_server(next_free)
            start = max(arrival, next_free[k])
            end = start + service
            next_free[k] = end

            starts.append(start)
            ends.append(end)
            assignments.append(k)

        return starts, ends, assignments

    def _assign_with_heap(self, arrivals: List[float], services: List[float]):
        # (next free time, teller index): tuple order gives the lowest index on ties
        free_heap = [(0.0, k) for k in range(self.num_servers)]
        heapq.heapify(free_heap)
        starts, ends, assignments = [], [], []

        for arrival, service in zip(arrivals, services):
            free_at, k = heapq.heappop(free_heap)
            start = max(arrival, free_at)
            end = start + service
            heapq.heappush(free_heap, (end, k))

            starts.append(start)
            ends.append(end)
            assignments.append(k)

        return starts, ends, assignments


def simulate(arrival_times: Sequence[float],
             service_times: Sequence[float],
             num_servers: int,
             selection: str = 'scan') -> SimulationResult:
    """Run a one-off simulation with a fresh QueueSimulator."""
    return QueueSimulator(num_servers, selection=selection).run(arrival_times, service_times)
