from __future__ import annotations

import math
from dataclasses import dataclass

from .errors import ConfigurationError

# Per-tick probability that a resting passenger decides to leave the building.
P_OUT = 0.05

# Probability that a passenger leaving the building leaves a tip.
P_TIP = 0.5

# Binomial parameters for the value of a single tip.
TIP_TRIALS = 100
TIP_SUCCESS = 0.5

DEFAULT_FLOOR_CAPACITY = 100
DEFAULT_ELEVATOR_CAPACITY = 10


def check_probability(name: str, value: float) -> float:
    if not isinstance(value, (int, float)) or not 0.0 <= value <= 1.0:
        raise ConfigurationError(f"{name} must be a probability in [0, 1], got {value!r}")
    return float(value)


def check_rate(name: str, value: float) -> float:
    if not isinstance(value, (int, float)) or not math.isfinite(value) or value < 0:
        raise ConfigurationError(f"{name} must be a finite non-negative rate, got {value!r}")
    return float(value)


def check_count(name: str, value: int, minimum: int = 0) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise ConfigurationError(f"{name} must be an integer >= {minimum}, got {value!r}")
    return value


def check_energy(name: str, value: float) -> float:
    if not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ConfigurationError(f"{name} must be a finite number, got {value!r}")
    return float(value)


@dataclass
class BuildingConfig:
    """Parameters fixed for the lifetime of a simulated building.

    ``p_in`` is the mean of the Poisson arrival count per tick. Although it is
    often called the arrival probability, it is validated as a rate: any
    finite value >= 0 is accepted, including values above 1 and exactly 0
    (no arrivals). Only the true probabilities elsewhere are held to [0, 1].
    """

    num_floors: int = 5
    num_elevators: int = 2
    p_in: float = 0.5
    energy_up: float = 5.0
    energy_down: float = 2.5
    energy_coef: float = 0.5
    floor_capacity: int = DEFAULT_FLOOR_CAPACITY
    elevator_capacity: int = DEFAULT_ELEVATOR_CAPACITY

    def __post_init__(self) -> None:
        check_count("num_floors", self.num_floors, minimum=1)
        check_count("num_elevators", self.num_elevators)
        check_rate("p_in", self.p_in)
        check_energy("energy_up", self.energy_up)
        check_energy("energy_down", self.energy_down)
        check_energy("energy_coef", self.energy_coef)
        check_count("floor_capacity", self.floor_capacity)
        check_count("elevator_capacity", self.elevator_capacity)
