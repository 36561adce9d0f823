"""Records produced by the queue simulator."""

from dataclasses import dataclass, field, asdict
from typing import Dict, List
import numpy as np


@dataclass(frozen=True)
class CustomerRecord:
    """One customer's path through the bank."""
    customer_id: int
    arrival_time: float
    service_time: float
    server: int
    service_start: float
    service_end: float

    @property
    def waiting_time(self) -> float:
        """Time spent in the queue before a teller picked the customer up."""
        return self.service_start - self.arrival_time

    @property
    def system_time(self) -> float:
        """Time from arrival until service ends."""
        return self.service_end - self.arrival_time


@dataclass
class SystemMetrics:
    """Aggregate statistics for a single simulation run.

    Averages over an empty run are ``nan``; counts and maxima are zero.
    """
    total_customers: int = 0
    mean_wait: float = float('nan')
    max_wait: float = float('nan')
    mean_queue_length: float = float('nan')
    max_queue_length: int = 0
    time_average_queue_length: float = float('nan')
    utilization: float = float('nan')
    throughput: float = float('nan')  # customers per minute
    makespan: float = 0.0
    server_busy_times: List[float] = field(default_factory=list)
    server_utilizations: List[float] = field(default_factory=list)
    customers_per_server: List[int] = field(default_factory=list)

    def as_dict(self) -> Dict:
        """Plain-python copy of the metrics (JSON friendly)."""
        return asdict(self)


@dataclass(eq=False)
class SimulationResult:
    """Output of one QueueSimulator run.

    Per-customer arrays are indexed by arrival order. ``queue_times`` and
    ``queue_lengths`` form the sampled queue-length series.
    """
    num_servers: int
    arrival_times: np.ndarray
    service_times: np.ndarray
    service_starts: np.ndarray
    service_ends: np.ndarray
    assignments: np.ndarray
    queue_times: np.ndarray
    queue_lengths: np.ndarray
    metrics: SystemMetrics

    @property
    def waiting_times(self) -> np.ndarray:
        return self.service_starts - self.arrival_times

    @property
    def total_customers(self) -> int:
        return len(self.arrival_times)

    @property
    def customers(self) -> List[CustomerRecord]:
        """Customer records in arrival order."""
        return [
            CustomerRecord(
                customer_id=i,
                arrival_time=float(self.arrival_times[i]),
                service_time=float(self.service_times[i]),
                server=int(self.assignments[i]),
                service_start=float(self.service_starts[i]),
                service_end=float(self.service_ends[i]),
            )
            for i in range(self.total_customers)
        ]

    def get_metrics_summary(self) -> Dict:
        """Get a summary of the run suitable for printing or JSON output."""
        summary = {'num_servers': self.num_servers}
        summary.update(self.metrics.as_dict())
        return summary
