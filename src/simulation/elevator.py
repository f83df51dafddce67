from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

from .passenger import Passenger, destination_floors


@dataclass
class Elevator:
    """A car moving one floor per tick, carrying a bounded set of passengers."""

    elevator_id: int
    capacity: int
    energy_up: float
    energy_down: float
    energy_coef: float
    floor_on: int = 0
    moving_up: bool = False
    stopped: bool = True
    passengers: List[Passenger] = field(default_factory=list)

    @property
    def direction(self) -> int:
        """Return +1 when moving up, -1 when moving down and 0 when stopped."""
        if self.stopped:
            return 0
        return 1 if self.moving_up else -1

    @property
    def free_capacity(self) -> int:
        return max(0, self.capacity - len(self.passengers))

    def destination_floors(self) -> List[int]:
        return destination_floors(self.passengers)

    def is_anyone_going_to(self, floor_number: int) -> bool:
        return any(p.floor_to == floor_number for p in self.passengers)

    def energy_this_tick(self) -> float:
        if self.stopped:
            return 0.0
        base = self.energy_up if self.moving_up else self.energy_down
        return base + self.energy_coef * len(self.passengers)

    def advance_floor(self) -> int:
        if self.stopped:
            return self.floor_on
        self.floor_on += 1 if self.moving_up else -1
        for passenger in self.passengers:
            passenger.floor_on = self.floor_on
        return self.floor_on

    def nearest_onboard_destination(self) -> Tuple[int, int]:
        """Return ``(floor, distance)`` of the closest rider destination.

        Destinations are scanned in ascending floor order and the incumbent is
        only replaced by a strictly closer floor, so the lower floor wins a
        tie. ``(0, 0)`` means nobody is on board.
        """
        nearest: Tuple[int, int] = (0, 0)
        found = False
        for floor in sorted(self.destination_floors()):
            distance = abs(floor - self.floor_on)
            if not found or distance < nearest[1]:
                nearest = (floor, distance)
                found = True
        return nearest

    def flush_arrived(self) -> List[Passenger]:
        if not self.stopped:
            return []
        arrived = [p for p in self.passengers if p.floor_to == self.floor_on]
        self.passengers = [p for p in self.passengers if p.floor_to != self.floor_on]
        return arrived

    def extend(self, passengers: Iterable[Passenger]) -> int:
        accepted = 0
        for passenger in passengers:
            if len(self.passengers) >= self.capacity:
                break
            passenger.floor_on = self.floor_on
            self.passengers.append(passenger)
            accepted += 1
        return accepted

    def increment_wait_times(self) -> None:
        for passenger in self.passengers:
            if passenger.is_waiting:
                passenger.increment_wait_time()

    def __len__(self) -> int:
        return len(self.passengers)
