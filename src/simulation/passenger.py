from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Iterable, List

from .config import P_OUT, P_TIP
from .sampling import Bernoulli, UniformFloor


@dataclass
class Passenger:
    """Represents a person moving between floors of the building."""

    floor_on: int = 0
    floor_to: int = 0
    is_leaving: bool = False
    wait_time: int = 0
    p_out: float = P_OUT
    p_tip: float = P_TIP
    leave_sampler: Bernoulli = field(init=False, repr=False)
    tip_sampler: Bernoulli = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.leave_sampler = Bernoulli(self.p_out)
        self.tip_sampler = Bernoulli(self.p_tip)

    @classmethod
    def arriving(
        cls,
        num_floors: int,
        rng: random.Random,
        p_out: float = P_OUT,
        p_tip: float = P_TIP,
    ) -> "Passenger":
        """Create a passenger on the ground floor with a uniformly random destination."""
        floor_to = UniformFloor(num_floors).sample(rng)
        return cls(floor_on=0, floor_to=floor_to, p_out=p_out, p_tip=p_tip)

    @property
    def is_waiting(self) -> bool:
        return self.floor_on != self.floor_to

    def decide_leaving(self, rng: random.Random) -> bool:
        """Sample the leave event unless the passenger is already leaving."""
        if self.is_leaving:
            return True
        if self.leave_sampler.sample(rng):
            self.floor_to = 0
            self.is_leaving = True
        return self.is_leaving

    def decide_tip(self, rng: random.Random) -> bool:
        return self.tip_sampler.sample(rng)

    def increment_wait_time(self) -> None:
        self.wait_time += 1

    def reset_wait_time(self) -> None:
        self.wait_time = 0

    def __str__(self) -> str:
        if self.is_waiting:
            return f"Person {self.floor_on} -> {self.floor_to}"
        return f"Person {self.floor_on}"


def destination_floors(passengers: Iterable[Passenger]) -> List[int]:
    """Distinct destination floors in discovery order."""
    floors: List[int] = []
    for passenger in passengers:
        if passenger.floor_to not in floors:
            floors.append(passenger.floor_to)
    return floors


def count_waiting(passengers: Iterable[Passenger]) -> int:
    return sum(1 for passenger in passengers if passenger.is_waiting)


def total_wait_time(passengers: Iterable[Passenger]) -> int:
    return sum(passenger.wait_time for passenger in passengers)


def count_tips(passengers: Iterable[Passenger], rng: random.Random) -> int:
    return sum(1 for passenger in passengers if passenger.decide_tip(rng))
