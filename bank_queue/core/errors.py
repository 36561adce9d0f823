"""Exceptions raised by the queue simulator and run configuration."""


class SimulationError(ValueError):
    """Base class for invalid simulation inputs."""
    pass


class InvalidServerCount(SimulationError):
    """Server count is not a positive integer."""

    def __init__(self, num_servers):
        self.num_servers = num_servers
        super().__init__(f"num_servers must be an integer >= 1, got {num_servers!r}")


class LengthMismatch(SimulationError):
    """Arrival and service sequences have different lengths."""

    def __init__(self, num_arrivals: int, num_services: int):
        self.num_arrivals = num_arrivals
        self.num_services = num_services
        super().__init__(
            f"got {num_arrivals} arrival times but {num_services} service times"
        )


class UnsortedArrivals(SimulationError):
    """Arrival times are not in non-decreasing order."""

    def __init__(self, index: int, previous: float, current: float):
        self.index = index
        super().__init__(
            f"arrival times must be non-decreasing: arrival {index} "
            f"({current}) is earlier than arrival {index - 1} ({previous})"
        )


class InvalidServiceTime(SimulationError):
    """A service duration is negative or not finite."""

    def __init__(self, index: int, value: float):
        self.index = index
        super().__init__(f"service time {index} must be finite and >= 0, got {value}")


class ConfigurationError(SimulationError):
    """Run configuration holds an invalid value."""
    pass
