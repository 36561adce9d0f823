"""Closed-form M/M/c results used as a reference for simulated runs."""

import math
from dataclasses import dataclass, asdict
from typing import Dict, Optional, Tuple


@dataclass
class AnalyticalResult:
    arrival_rate: float   # lambda
    service_rate: float   # mu, per server
    num_servers: int
    utilization: float    # rho = lambda / (c * mu)
    wait_probability: float
    Lq: float
    Wq: float
    W: float
    L: float
    note: Optional[str] = None

    @property
    def stable(self) -> bool:
        return self.utilization < 1.0

    def as_dict(self) -> Dict:
        return asdict(self)


def traffic_intensity(lambda_: float, mu: float, c: int) -> float:
    """rho = lambda / (c * mu)."""
    if lambda_ <= 0 or mu <= 0:
        raise ValueError("lambda and mu must be > 0")
    if c <= 0:
        raise ValueError("servers c must be >= 1")
    return lambda_ / (c * mu)


def erlang_c(lambda_: float, mu: float, c: int) -> Tuple[float, float]:
    """Erlang C: chance that an arriving customer finds every teller busy.

    Returned together with the traffic intensity. An unstable system
    (rho >= 1) always makes customers wait, so Pw is 1 there.
    """
    rho = traffic_intensity(lambda_, mu, c)
    if rho >= 1:
        return 1.0, rho

    a = lambda_ / mu  # offered load

    # sum_{n=0}^{c-1} a^n / n!
    s = sum((a ** n) / math.factorial(n) for n in range(c))

    # (a^c / c!) * (c / (c - a))
    last = (a ** c) / math.factorial(c) * (c / (c - a))

    P0 = 1.0 / (s + last)
    return last * P0, rho


def mmc(lambda_: float, mu: float, c: int) -> AnalyticalResult:
    """Steady-state M/M/c measures; rates share one time unit."""
    Pw, rho = erlang_c(lambda_, mu, c)

    if rho >= 1:
        inf = float("inf")
        return AnalyticalResult(
            arrival_rate=lambda_,
            service_rate=mu,
            num_servers=c,
            utilization=rho,
            wait_probability=1.0,
            Lq=inf, Wq=inf, W=inf, L=inf,
            note="Unstable system (λ ≥ cμ)",
        )

    Wq = Pw / (c * mu - lambda_)
    Lq = lambda_ * Wq
    W = Wq + 1.0 / mu
    L = lambda_ * W

    return AnalyticalResult(
        arrival_rate=lambda_,
        service_rate=mu,
        num_servers=c,
        utilization=rho,
        wait_probability=Pw,
        Lq=Lq,
        Wq=Wq,
        W=W,
        L=L,
    )
