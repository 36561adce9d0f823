"""Bank M/M/c queue simulation package."""

from bank_queue.core import (
    CustomerRecord,
    SystemMetrics,
    SimulationResult,
    QueueSimulator,
    simulate,
    SimulationError,
    InvalidServerCount,
    LengthMismatch,
    UnsortedArrivals,
)
from bank_queue.system import SimulationConfig, run_scenario, run_scenarios

__version__ = '1.0.0'

__all__ = [
    'CustomerRecord',
    'SystemMetrics',
    'SimulationResult',
    'QueueSimulator',
    'simulate',
    'SimulationError',
    'InvalidServerCount',
    'LengthMismatch',
    'UnsortedArrivals',
    'SimulationConfig',
    'run_scenario',
    'run_scenarios',
]
