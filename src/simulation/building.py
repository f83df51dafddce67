from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import List, Tuple

from .config import (
    DEFAULT_ELEVATOR_CAPACITY,
    DEFAULT_FLOOR_CAPACITY,
    P_OUT,
    P_TIP,
    TIP_SUCCESS,
    TIP_TRIALS,
    BuildingConfig,
)
from .elevator import Elevator
from .floor import Floor
from .passenger import Passenger, count_tips, total_wait_time
from .render import render_building
from .sampling import Binomial, Poisson

logger = logging.getLogger(__name__)


@dataclass
class Building:
    """Owns the floors and elevators and applies the per-tick bookkeeping.

    Dispatch decisions are made by a controller; everything that happens after
    the elevators have moved (exchanging people, departures, arrivals, tips,
    wait and energy averages) lives here.
    """

    num_floors: int
    num_elevators: int
    p_in: float
    energy_up: float
    energy_down: float
    energy_coef: float
    floor_capacity: int = DEFAULT_FLOOR_CAPACITY
    elevator_capacity: int = DEFAULT_ELEVATOR_CAPACITY
    floors: List[Floor] = field(init=False)
    elevators: List[Elevator] = field(init=False)
    avg_energy: float = field(default=0.0, init=False)
    avg_wait_time: float = field(default=0.0, init=False)
    wait_time_denom: int = field(default=0, init=False)
    tot_tips: float = field(default=0.0, init=False)
    time_step: int = field(default=0, init=False)
    arrival_sampler: Poisson = field(init=False, repr=False)
    tip_sampler: Binomial = field(init=False, repr=False)

    def __post_init__(self) -> None:
        # Validation raises before any state is built
        BuildingConfig(
            num_floors=self.num_floors,
            num_elevators=self.num_elevators,
            p_in=self.p_in,
            energy_up=self.energy_up,
            energy_down=self.energy_down,
            energy_coef=self.energy_coef,
            floor_capacity=self.floor_capacity,
            elevator_capacity=self.elevator_capacity,
        )
        self.arrival_sampler = Poisson(self.p_in)
        self.tip_sampler = Binomial(TIP_TRIALS, TIP_SUCCESS)
        self.floors = [Floor(i, self.floor_capacity) for i in range(self.num_floors)]
        self.elevators = [self._new_elevator(i) for i in range(self.num_elevators)]

    @classmethod
    def from_config(cls, config: BuildingConfig) -> "Building":
        return cls(
            num_floors=config.num_floors,
            num_elevators=config.num_elevators,
            p_in=config.p_in,
            energy_up=config.energy_up,
            energy_down=config.energy_down,
            energy_coef=config.energy_coef,
            floor_capacity=config.floor_capacity,
            elevator_capacity=config.elevator_capacity,
        )

    @property
    def top_floor(self) -> int:
        return len(self.floors) - 1

    @property
    def total_passengers(self) -> int:
        return sum(len(f) for f in self.floors) + sum(len(e) for e in self.elevators)

    def is_anyone_waiting_on(self, floor_number: int) -> bool:
        return self.floors[floor_number].has_waiting()

    def nearest_wait_floor(self, floor_on: int) -> Tuple[int, int]:
        """Return ``(floor, distance)`` of the closest floor with people waiting.

        Floors are scanned bottom-up and only a strictly closer floor replaces
        the incumbent. ``(0, 0)`` means nobody is waiting anywhere.
        """
        nearest: Tuple[int, int] = (0, 0)
        found = False
        for floor in self.floors:
            if not floor.has_waiting():
                continue
            distance = abs(floor.number - floor_on)
            if not found or distance < nearest[1]:
                nearest = (floor.number, distance)
                found = True
        return nearest

    def dest_probabilities(self) -> List[float]:
        return [floor.dest_prob for floor in self.floors]

    # -- tick steps -------------------------------------------------------

    def step(self, rng: random.Random) -> None:
        """Run every tick step that follows dispatch, in protocol order."""
        self.exchange_people_on_elevators()
        self.generate_departures(rng)
        self.flush_and_update_tips(rng)
        self.generate_arrivals(rng)
        self.increment_wait_times()
        self.update_dest_probabilities()
        self.update_average_energy(self.time_step, self.energy_spent())
        self.time_step += 1

    def exchange_people_on_elevators(self) -> None:
        for elevator in self.elevators:
            if not elevator.stopped:
                continue
            floor = self.floors[elevator.floor_on]

            exiting = elevator.flush_arrived()
            boarding = floor.pull_boarding(elevator.free_capacity)

            self._fold_wait_times(exiting)
            for passenger in exiting:
                passenger.reset_wait_time()

            elevator.extend(boarding)
            accepted = floor.extend(exiting)
            if accepted < len(exiting):
                logger.debug(
                    "Floor %d full, dropped %d passengers leaving elevator %d",
                    floor.number,
                    len(exiting) - accepted,
                    elevator.elevator_id,
                )

    def _fold_wait_times(self, exiting: List[Passenger]) -> None:
        numerator = total_wait_time(exiting) + self.avg_wait_time * self.wait_time_denom
        denominator = len(exiting) + self.wait_time_denom
        self.avg_wait_time = numerator / denominator if denominator else 0.0
        self.wait_time_denom = denominator

    def generate_departures(self, rng: random.Random) -> None:
        for floor in self.floors:
            floor.generate_departures(rng)

    def flush_and_update_tips(self, rng: random.Random) -> float:
        """Remove everyone leaving the ground floor and add their tips."""
        leaving = self.floors[0].pull_exiting_building()
        if not leaving:
            return 0.0
        tip_value = self.gen_tip_value(count_tips(leaving, rng), rng)
        self.tot_tips += tip_value
        return tip_value

    def gen_tip_value(self, num_tips: int, rng: random.Random) -> float:
        return float(sum(self.tip_sampler.sample(rng) for _ in range(num_tips)))

    def generate_arrivals(self, rng: random.Random) -> int:
        count = self.arrival_sampler.sample(rng)
        arrivals = [
            Passenger.arriving(len(self.floors), rng, p_out=P_OUT, p_tip=P_TIP)
            for _ in range(count)
        ]
        accepted = self.floors[0].extend(arrivals)
        if accepted < count:
            logger.debug("Ground floor full, turned away %d arrivals", count - accepted)
        return accepted

    def increment_wait_times(self) -> None:
        for elevator in self.elevators:
            elevator.increment_wait_times()
        for floor in self.floors:
            floor.increment_wait_times()

    def update_dest_probabilities(self) -> None:
        num_floors = len(self.floors)
        targeted = set()
        for elevator in self.elevators:
            targeted.update(elevator.destination_floors())

        for floor in self.floors:
            requested = 1.0 if floor.has_waiting() or floor.number in targeted else 0.0
            if floor.number == 0:
                baseline = self.p_in * (num_floors - 1) / num_floors
            else:
                baseline = floor.leave_probability()
            floor.dest_prob = min(1.0, max(requested, baseline))

    def energy_spent(self) -> float:
        return sum(elevator.energy_this_tick() for elevator in self.elevators)

    def update_average_energy(self, time_step: int, energy_spent: float) -> None:
        self.avg_energy = (self.avg_energy * time_step + energy_spent) / (time_step + 1)

    def collect_tips(self) -> float:
        tips = self.tot_tips
        self.tot_tips = 0.0
        return tips

    # -- live changes -----------------------------------------------------

    def append_floor(self) -> Floor:
        floor = Floor(len(self.floors), self.floor_capacity)
        self.floors.append(floor)
        self.num_floors = len(self.floors)
        return floor

    def append_elevator(self) -> Elevator:
        elevator = self._new_elevator(len(self.elevators))
        self.elevators.append(elevator)
        self.num_elevators = len(self.elevators)
        return elevator

    def update_floor_capacities(self, capacity: int) -> bool:
        if capacity < 0 or any(capacity < len(floor) for floor in self.floors):
            logger.debug("Rejected floor capacity %d below current occupancy", capacity)
            return False
        self.floor_capacity = capacity
        for floor in self.floors:
            floor.capacity = capacity
        return True

    def update_elevator_capacities(self, capacity: int) -> bool:
        if capacity < 0 or any(capacity < len(elevator) for elevator in self.elevators):
            logger.debug("Rejected elevator capacity %d below current occupancy", capacity)
            return False
        self.elevator_capacity = capacity
        for elevator in self.elevators:
            elevator.capacity = capacity
        return True

    def snapshot(self) -> dict:
        return {
            "time_step": self.time_step,
            "floors": [
                {
                    "number": floor.number,
                    "occupancy": len(floor),
                    "waiting": floor.num_waiting(),
                    "capacity": floor.capacity,
                    "dest_prob": floor.dest_prob,
                }
                for floor in self.floors
            ],
            "elevators": [
                {
                    "id": elevator.elevator_id,
                    "floor_on": elevator.floor_on,
                    "direction": elevator.direction,
                    "stopped": elevator.stopped,
                    "occupancy": len(elevator),
                    "capacity": elevator.capacity,
                }
                for elevator in self.elevators
            ],
            "avg_energy": self.avg_energy,
            "avg_wait_time": self.avg_wait_time,
            "tot_tips": self.tot_tips,
        }

    def _new_elevator(self, elevator_id: int) -> Elevator:
        return Elevator(
            elevator_id=elevator_id,
            capacity=self.elevator_capacity,
            energy_up=self.energy_up,
            energy_down=self.energy_down,
            energy_coef=self.energy_coef,
        )

    def __str__(self) -> str:
        return render_building(self)
