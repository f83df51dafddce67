from __future__ import annotations

import random
from typing import Callable, Dict, Optional

from simulation import Building, ConfigurationError

from .interface import ElevatorController
from .nearest import NearestController
from .random_rational import RandomController

__all__ = [
    "ElevatorController",
    "NearestController",
    "RandomController",
    "get_controller",
]


ControllerFactory = Callable[..., ElevatorController]


def _build_random(
    building: Building, rng: Optional[random.Random], **options
) -> RandomController:
    if rng is None:
        raise ConfigurationError("Controller 'random' needs an explicit random source")
    return RandomController(building, rng, **options)


CONTROLLER_REGISTRY: Dict[str, ControllerFactory] = {
    "nearest": lambda building, rng, **options: NearestController(building, **options),
    "random": _build_random,
}


def get_controller(
    name: str, building: Building, rng: Optional[random.Random] = None, **kwargs
) -> ElevatorController:
    factory = CONTROLLER_REGISTRY.get(name.lower())
    if factory is None:
        raise ValueError(f"Unknown controller '{name}'. Available: {', '.join(CONTROLLER_REGISTRY)}")
    return factory(building, rng, **kwargs)
