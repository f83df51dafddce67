from __future__ import annotations

from typing import List

from simulation import Elevator

from .interface import ElevatorController
from .utils import apply_decision, direction_towards


class NearestController(ElevatorController):
    """Sends each elevator to the nearest rider destination, then the nearest call."""

    name = "nearest"

    def update_elevators(self) -> None:
        # Decide for every car first so all decisions see the same state
        decisions: List[int] = [self._decide(elevator) for elevator in self.building.elevators]
        for elevator, decision in zip(self.building.elevators, decisions):
            apply_decision(elevator, decision)

    def _decide(self, elevator: Elevator) -> int:
        if elevator.stopped:
            return self._decide_from_rest(elevator)
        if self._should_stop(elevator):
            return 0
        return elevator.direction

    def _decide_from_rest(self, elevator: Elevator) -> int:
        dest_floor, dest_distance = elevator.nearest_onboard_destination()
        if dest_distance > 0:
            return direction_towards(dest_floor, elevator.floor_on)

        wait_floor, wait_distance = self.building.nearest_wait_floor(elevator.floor_on)
        if wait_distance > 0:
            return direction_towards(wait_floor, elevator.floor_on)
        return 0

    def _should_stop(self, elevator: Elevator) -> bool:
        if elevator.moving_up and elevator.floor_on >= self.building.top_floor:
            return True
        if not elevator.moving_up and elevator.floor_on <= 0:
            return True
        if elevator.is_anyone_going_to(elevator.floor_on):
            return True
        return self.building.is_anyone_waiting_on(elevator.floor_on)
