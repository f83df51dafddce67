"""Simulation primitives for the elevator bank."""

from .building import Building
from .config import BuildingConfig
from .elevator import Elevator
from .errors import ConfigurationError, UpgradeError
from .floor import Floor
from .passenger import Passenger
from .render import render_building
from .sampling import Bernoulli, Binomial, Poisson, UniformFloor
from .simulation import MetricsSnapshot, Simulation

__all__ = [
    "Bernoulli",
    "Binomial",
    "Building",
    "BuildingConfig",
    "ConfigurationError",
    "Elevator",
    "Floor",
    "MetricsSnapshot",
    "Passenger",
    "Poisson",
    "Simulation",
    "UniformFloor",
    "UpgradeError",
    "render_building",
]
