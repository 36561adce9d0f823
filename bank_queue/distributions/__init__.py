"""Random variable distributions for the bank queue."""

from .random_variables import (
    MINUTES_PER_HOUR,
    make_rng,
    spawn_streams,
    exponential_distribution,
    deterministic_distribution,
    uniform_distribution,
    gamma_distribution,
    lognormal_distribution,
    scipy_distribution,
    generate_arrivals,
    generate_service_times,
    poisson_arrivals,
    exponential_service_times,
)

__all__ = [
    'MINUTES_PER_HOUR',
    'make_rng',
    'spawn_streams',
    'exponential_distribution',
    'deterministic_distribution',
    'uniform_distribution',
    'gamma_distribution',
    'lognormal_distribution',
    'scipy_distribution',
    'generate_arrivals',
    'generate_service_times',
    'poisson_arrivals',
    'exponential_service_times',
]
