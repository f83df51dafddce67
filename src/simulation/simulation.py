from __future__ import annotations

import copy
import logging
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Dict, List, Optional

from .building import Building

if TYPE_CHECKING:  # pragma: no cover - import cycle safe typing
    from controller import ElevatorController

logger = logging.getLogger(__name__)


@dataclass
class MetricsSnapshot:
    time_step: int
    avg_wait_time: float
    avg_energy: float
    tot_tips: float
    passengers: int
    p_rational: Optional[float] = None


class Simulation:
    """Tick driver pairing a controller with the random source for the building."""

    def __init__(
        self,
        controller: "ElevatorController",
        random_seed: Optional[int] = None,
        metrics_hook_interval: int = 1,
    ) -> None:
        self.controller = controller
        self.random = random.Random(random_seed)
        self.current_time: int = 0
        self.event_hooks: Dict[str, List[Callable[[object], None]]] = {}
        self.metrics_hook_interval = max(1, metrics_hook_interval)

    @property
    def building(self) -> Building:
        return self.controller.building

    def run(self, duration: int) -> List[MetricsSnapshot]:
        snapshots: List[MetricsSnapshot] = []
        for _ in range(duration):
            self.step()
            snapshots.append(self.snapshot())
        return snapshots

    def step(self) -> None:
        tips_before = self.building.tot_tips
        self.controller.advance_tick(self.random)
        self.current_time += 1

        earned = self.building.tot_tips - tips_before
        if earned > 0:
            self._emit("tips", {"time": self.current_time, "value": earned})
        if self.current_time % self.metrics_hook_interval == 0:
            self._emit("metrics", {"metrics": self.snapshot(), "building": self.building.snapshot()})

    def snapshot(self) -> MetricsSnapshot:
        return MetricsSnapshot(
            time_step=self.current_time,
            avg_wait_time=self.building.avg_wait_time,
            avg_energy=self.building.avg_energy,
            tot_tips=self.building.tot_tips,
            passengers=self.building.total_passengers,
            p_rational=getattr(self.controller, "p_rational", None),
        )

    def collect_tips(self) -> float:
        return self.building.collect_tips()

    def upgrade(self, increment: float) -> bool:
        """Upgrade the controller if it still accepts upgrades."""
        if not self.controller.can_be_upgraded():
            return False
        self.controller.upgrade(increment)
        self._emit("upgrade", {"time": self.current_time, "increment": increment})
        return True

    def hand_off_building(self) -> Building:
        """Return an independent copy of the building for a new controller."""
        return copy.deepcopy(self.building)

    def replace_controller(self, controller: "ElevatorController") -> None:
        if controller.building is self.building:
            raise ValueError("New controller must own its own copy of the building")
        logger.info(
            "Replacing controller '%s' with '%s' at tick %d",
            self.controller.name,
            controller.name,
            self.current_time,
        )
        self.controller = controller

    def swap_controller(self, name: str, **options) -> "ElevatorController":
        """Build controller ``name`` on a copy of the building and switch to it.

        The new controller's random source is seeded from this simulation's
        generator, so seeded runs stay reproducible across swaps.
        """
        from controller import get_controller

        building = self.hand_off_building()
        rng = random.Random(self.random.getrandbits(64))
        controller = get_controller(name, building, rng, **options)
        self.replace_controller(controller)
        return controller

    def on_event(self, event: str, callback: Callable[[object], None]) -> None:
        self.event_hooks.setdefault(event, []).append(callback)

    def _emit(self, event: str, payload: object) -> None:
        for callback in self.event_hooks.get(event, []):
            callback(payload)
