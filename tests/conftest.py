import matplotlib

matplotlib.use('Agg')

import matplotlib.pyplot as plt
import numpy as np
import pytest


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close('all')


@pytest.fixture
def random_day():
    """A busy morning: 400 sorted arrivals and exponential service times."""
    rng = np.random.default_rng(7)
    arrivals = np.cumsum(rng.exponential(1.2, size=400))
    services = rng.exponential(2.5, size=400)
    return arrivals, services
