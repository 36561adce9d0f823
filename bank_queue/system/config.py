"""Run configuration for the bank scenarios. All times are in minutes."""

import json
from dataclasses import dataclass, field, fields, replace, asdict
from typing import Any, Dict, Optional, Tuple
import numpy as np

from bank_queue.core.errors import ConfigurationError
from bank_queue.core.multiserver_queue import SELECTION_METHODS
from bank_queue.distributions import MINUTES_PER_HOUR


def _is_integer(value) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


def _require_positive_number(name: str, value) -> None:
    """Finite and > 0; bools and strings are rejected."""
    if (isinstance(value, bool) or not isinstance(value, (int, float, np.integer, np.floating))
            or not np.isfinite(value) or value <= 0):
        raise ConfigurationError(f"{name} must be a finite number > 0, got {value!r}")


@dataclass(frozen=True)
class SimulationConfig:
    """Parameters of one study: a working day simulated for each server count."""
    hourly_rate: float = 45.0        # customers per hour
    mean_service_time: float = 2.5   # minutes
    horizon: float = 480.0           # 8 hour day
    servers: Tuple[int, ...] = field(default=(2, 3))
    seed: Optional[int] = 42
    replications: int = 1
    selection: str = 'scan'

    @property
    def arrival_rate(self) -> float:
        """Arrivals per minute."""
        return self.hourly_rate / MINUTES_PER_HOUR

    @property
    def service_rate(self) -> float:
        """Services per minute per teller."""
        return 1.0 / self.mean_service_time

    def validate(self) -> 'SimulationConfig':
        for name in ('hourly_rate', 'mean_service_time', 'horizon'):
            _require_positive_number(name, getattr(self, name))
        if not self.servers:
            raise ConfigurationError("at least one server count is required")
        for c in self.servers:
            if not _is_integer(c) or c < 1:
                raise ConfigurationError(f"server counts must be integers >= 1, got {c!r}")
        if not _is_integer(self.replications) or self.replications < 1:
            raise ConfigurationError(
                f"replications must be an integer >= 1, got {self.replications!r}")
        if self.seed is not None and not _is_integer(self.seed):
            raise ConfigurationError(f"seed must be an integer or null, got {self.seed!r}")
        if self.selection not in SELECTION_METHODS:
            raise ConfigurationError(
                f"selection must be one of {SELECTION_METHODS}, got {self.selection!r}")
        return self

    def with_overrides(self, **overrides) -> 'SimulationConfig':
        """Copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if 'servers' in changes:
            changes['servers'] = tuple(changes['servers'])
        return replace(self, **changes)

    def as_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['servers'] = list(self.servers)
        return data


def config_from_dict(data: Dict[str, Any],
                     base: Optional[SimulationConfig] = None) -> SimulationConfig:
    """Merge a mapping over ``base`` (defaults when omitted)."""
    if base is None:
        base = SimulationConfig()

    known = {f.name for f in fields(SimulationConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigurationError(f"unknown configuration keys: {', '.join(unknown)}")
    if 'servers' in data and not isinstance(data['servers'], list):
        raise ConfigurationError(f"servers must be a list of integers, got {data['servers']!r}")

    return base.with_overrides(**data).validate()


def load_config(path: str, base: Optional[SimulationConfig] = None) -> SimulationConfig:
    """
    Load a JSON configuration file.

    Example file:
        {"hourly_rate": 60, "mean_service_time": 3.0, "servers": [2, 3, 4]}
    """
    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"{path}: invalid JSON ({e})") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"{path}: expected a JSON object")
    return config_from_dict(data, base)
