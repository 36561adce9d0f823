"""Core components of the bank queue simulation."""

from .base import CustomerRecord, SystemMetrics, SimulationResult
from .errors import (
    SimulationError,
    InvalidServerCount,
    LengthMismatch,
    UnsortedArrivals,
    InvalidServiceTime,
    ConfigurationError,
)
from .metrics import queue_length_series, compute_metrics
from .multiserver_queue import QueueSimulator, simulate

__all__ = [
    'CustomerRecord',
    'SystemMetrics',
    'SimulationResult',
    'SimulationError',
    'InvalidServerCount',
    'LengthMismatch',
    'UnsortedArrivals',
    'InvalidServiceTime',
    'ConfigurationError',
    'queue_length_series',
    'compute_metrics',
    'QueueSimulator',
    'simulate',
]
