from __future__ import annotations

import logging
import random
from typing import List, Optional

from simulation import Bernoulli, Building, Elevator, UniformFloor, UpgradeError
from simulation.config import check_probability

from .interface import ElevatorController
from .utils import apply_decision, direction_towards

logger = logging.getLogger(__name__)


class RandomController(ElevatorController):
    """Mixes uniformly random targets with nearest-request targets.

    Each elevator keeps its target until it gets there. A new target is
    chosen greedily with probability ``p_rational`` and uniformly at random
    otherwise. ``p_rational`` only ever grows, through ``upgrade``.
    """

    name = "random"

    def __init__(self, building: Building, rng: random.Random, p_rational: float = 0.0) -> None:
        super().__init__(building)
        self.rng = rng
        self.p_rational = check_probability("p_rational", p_rational)
        self.rational_sampler = Bernoulli(self.p_rational)
        self.floor_sampler = UniformFloor(len(building.floors))
        self.floors_to: List[Optional[int]] = [None] * len(building.elevators)

    def update_elevators(self) -> None:
        self._sync_with_building()
        for index, elevator in enumerate(self.building.elevators):
            floor_to = self.floors_to[index]
            if floor_to is None:
                floor_to = self._choose_target(elevator)
                self.floors_to[index] = floor_to

            decision = direction_towards(floor_to, elevator.floor_on)
            if decision == 0:
                self.floors_to[index] = None
            apply_decision(elevator, decision)

    def _choose_target(self, elevator: Elevator) -> int:
        if not self.rational_sampler.sample(self.rng):
            return self.floor_sampler.sample(self.rng)

        dest_floor, dest_distance = elevator.nearest_onboard_destination()
        if dest_distance > 0:
            return dest_floor
        wait_floor, wait_distance = self.building.nearest_wait_floor(elevator.floor_on)
        if wait_distance > 0:
            return wait_floor
        return elevator.floor_on

    def can_be_upgraded(self) -> bool:
        return self.p_rational < 1.0

    def upgrade(self, increment: float) -> None:
        if not increment >= 0:
            raise UpgradeError(f"Upgrade increment must be non-negative, got {increment!r}")
        self.p_rational = min(1.0, self.p_rational + increment)
        self.rational_sampler = Bernoulli(self.p_rational)
        logger.info("Rationality upgraded to %.2f", self.p_rational)

    def add_floor(self) -> None:
        super().add_floor()
        self._sync_with_building()

    def add_elevator(self) -> None:
        super().add_elevator()
        self._sync_with_building()

    def _sync_with_building(self) -> None:
        """Pick up floors and elevators added to the building since the last tick."""
        missing = len(self.building.elevators) - len(self.floors_to)
        if missing > 0:
            self.floors_to.extend([None] * missing)
        if self.floor_sampler.num_floors != len(self.building.floors):
            self.floor_sampler = UniformFloor(len(self.building.floors))
