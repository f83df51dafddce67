import random

import pytest

from simulation import Building


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def make_building():
    def _make(num_floors=5, num_elevators=1, p_in=0.0, **kwargs):
        kwargs.setdefault("energy_up", 5.0)
        kwargs.setdefault("energy_down", 2.5)
        kwargs.setdefault("energy_coef", 0.5)
        return Building(num_floors, num_elevators, p_in, **kwargs)

    return _make
