"""
Random variable generators for the bank queue.

Every sampler takes an explicit ``numpy.random.Generator`` so runs are
reproducible from a seed without touching global random state.
Samplers have the signature ``sample(rng, size) -> np.ndarray``.
"""

from typing import Callable, Optional, Tuple, Union
import numpy as np
from scipy import stats


Sampler = Callable[[np.random.Generator, int], np.ndarray]
SeedLike = Union[None, int, np.random.SeedSequence]

MINUTES_PER_HOUR = 60.0


def make_rng(seed: SeedLike = None) -> np.random.Generator:
    """Create a generator from a seed (None draws fresh OS entropy)."""
    return np.random.default_rng(seed)


def spawn_streams(seed: SeedLike = None, n_streams: int = 2) -> Tuple[np.random.Generator, ...]:
    """Split one seed into independent generators (arrivals, service, ...)."""
    if not isinstance(seed, np.random.SeedSequence):
        seed = np.random.SeedSequence(seed)
    return tuple(np.random.default_rng(child) for child in seed.spawn(n_streams))


def _require_positive(name: str, value: float) -> None:
    if value is None or not np.isfinite(value) or value <= 0:
        raise ValueError(f"{name} must be > 0, got {value}")


# Distribution factory functions
def exponential_distribution(rate: float) -> Sampler:
    """Create an exponential sampler with the given rate (mean 1/rate)."""
    _require_positive("rate", rate)
    scale = 1.0 / rate
    return lambda rng, size: stats.expon.rvs(scale=scale, size=size, random_state=rng)


def deterministic_distribution(value: float) -> Sampler:
    """Create a deterministic sampler (always returns the same value)."""
    if value < 0:
        raise ValueError(f"value must be >= 0, got {value}")
    return lambda rng, size: np.full(size, float(value))


def uniform_distribution(a: float, b: float) -> Sampler:
    """Create a uniform sampler on [a, b)."""
    if a < 0 or b <= a:
        raise ValueError("uniform requires 0 <= a < b")
    return lambda rng, size: rng.uniform(a, b, size=size)


def gamma_distribution(shape: float, scale: float) -> Sampler:
    """Create a gamma sampler."""
    _require_positive("shape", shape)
    _require_positive("scale", scale)
    return lambda rng, size: rng.gamma(shape, scale, size=size)


def lognormal_distribution(mean: float, std: float) -> Sampler:
    """Create a log-normal sampler (mean/std of the underlying normal)."""
    _require_positive("std", std)
    return lambda rng, size: rng.lognormal(mean, std, size=size)


def scipy_distribution(dist_name: str, **params) -> Sampler:
    """
    Create a sampler from any scipy.stats distribution.

    Examples:
        scipy_distribution('gamma', a=2, scale=1.5)
        scipy_distribution('weibull_min', c=1.2, scale=3.0)
    """
    dist = getattr(stats, dist_name)
    return lambda rng, size: np.asarray(dist.rvs(size=size, random_state=rng, **params),
                                        dtype=float)


# Input streams for the simulator
def generate_arrivals(interarrival: Sampler, horizon: float,
                      rng: np.random.Generator, batch_size: int = 256) -> np.ndarray:
    """
    Accumulate inter-arrival gaps from time 0 until the horizon is passed.

    Arrivals later than ``horizon`` are dropped. Gaps are drawn ``batch_size``
    at a time.
    """
    _require_positive("horizon", horizon)

    arrivals = []
    current = 0.0
    while current <= horizon:
        gaps = np.asarray(interarrival(rng, batch_size), dtype=float)
        if np.any(gaps < 0) or not np.any(gaps > 0):
            raise ValueError("inter-arrival times must be >= 0 and not all zero")
        times = current + np.cumsum(gaps)
        arrivals.append(times[times <= horizon])
        current = float(times[-1])

    return np.concatenate(arrivals)


def generate_service_times(service: Sampler, n: int,
                           rng: np.random.Generator) -> np.ndarray:
    """Draw one service duration per customer."""
    if n < 0:
        raise ValueError(f"n must be >= 0, got {n}")
    return np.asarray(service(rng, n), dtype=float).reshape(n)


def poisson_arrivals(hourly_rate: float, horizon: float = 480.0,
                     rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """Poisson arrival times in minutes for ``hourly_rate`` customers per hour."""
    _require_positive("hourly_rate", hourly_rate)
    if rng is None:
        rng = make_rng()
    return generate_arrivals(exponential_distribution(hourly_rate / MINUTES_PER_HOUR),
                             horizon, rng)


def exponential_service_times(mean_service_time: float, n: int,
                              rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """Exponential service durations with the given mean (minutes)."""
    _require_positive("mean_service_time", mean_service_time)
    if rng is None:
        rng = make_rng()
    return generate_service_times(exponential_distribution(1.0 / mean_service_time), n, rng)
