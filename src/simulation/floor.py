from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Iterable, List

from .passenger import Passenger, count_waiting


@dataclass
class Floor:
    """A bounded holding area for passengers, kept in arrival order."""

    number: int
    capacity: int
    passengers: List[Passenger] = field(default_factory=list)
    dest_prob: float = 0.0

    @property
    def free_capacity(self) -> int:
        return max(0, self.capacity - len(self.passengers))

    def has_waiting(self) -> bool:
        return any(p.is_waiting for p in self.passengers)

    def num_waiting(self) -> int:
        return count_waiting(self.passengers)

    def is_anyone_going_to(self, floor_number: int) -> bool:
        return any(p.floor_to == floor_number for p in self.passengers)

    def leave_probability(self) -> float:
        """Probability that at least one resting passenger leaves this tick.

        Accumulated as ``sum_i p_i * prod_{j<i} (1 - p_j)``, which telescopes to
        ``1 - prod_i (1 - p_i)``.
        """
        probability = 0.0
        stay_probability = 1.0
        for passenger in self.passengers:
            if passenger.is_waiting:
                continue
            probability += passenger.p_out * stay_probability
            stay_probability *= 1.0 - passenger.p_out
        return probability

    def generate_departures(self, rng: random.Random) -> None:
        for passenger in self.passengers:
            # People waiting for an elevator do not decide to leave
            if passenger.is_waiting:
                continue
            passenger.decide_leaving(rng)

    def pull_boarding(self, max_count: int) -> List[Passenger]:
        """Remove up to ``max_count`` waiting passengers, oldest first."""
        boarding: List[Passenger] = []
        remaining: List[Passenger] = []
        for passenger in self.passengers:
            if passenger.is_waiting and len(boarding) < max_count:
                boarding.append(passenger)
            else:
                remaining.append(passenger)
        self.passengers = remaining
        return boarding

    def pull_exiting_building(self) -> List[Passenger]:
        leaving = [p for p in self.passengers if p.is_leaving]
        self.passengers = [p for p in self.passengers if not p.is_leaving]
        return leaving

    def extend(self, passengers: Iterable[Passenger]) -> int:
        """Add passengers until the floor is full and return how many fit."""
        accepted = 0
        for passenger in passengers:
            if len(self.passengers) >= self.capacity:
                break
            self.passengers.append(passenger)
            accepted += 1
        return accepted

    def increment_wait_times(self) -> None:
        for passenger in self.passengers:
            if passenger.is_waiting:
                passenger.increment_wait_time()

    def reset_wait_times(self) -> None:
        for passenger in self.passengers:
            if not passenger.is_waiting:
                passenger.reset_wait_time()

    def __len__(self) -> int:
        return len(self.passengers)
