from __future__ import annotations

import random

from simulation import Building, UpgradeError


class ElevatorController:
    """Base class for dispatch policies.

    A controller exclusively owns its building. Subclasses decide where each
    elevator goes in ``update_elevators``; ``advance_tick`` then hands the
    moved building its post-dispatch bookkeeping.
    """

    name = "base"

    def __init__(self, building: Building) -> None:
        self.building = building

    def update_elevators(self) -> None:
        """Set every elevator's direction or stop state and advance it one floor."""
        raise NotImplementedError

    def advance_tick(self, rng: random.Random) -> None:
        self.update_elevators()
        self.building.step(rng)

    def can_be_upgraded(self) -> bool:
        return False

    def upgrade(self, increment: float) -> None:
        raise UpgradeError(f"Controller '{self.name}' cannot be upgraded")

    def add_floor(self) -> None:
        self.building.append_floor()

    def add_elevator(self) -> None:
        self.building.append_elevator()
