import copy
import math

import pytest

from simulation import Building, BuildingConfig, ConfigurationError, Passenger


@pytest.mark.parametrize(
    "args",
    [
        (0, 1, 0.5, 5.0, 2.5, 0.5),
        (3, -1, 0.5, 5.0, 2.5, 0.5),
        (3, 1, -0.5, 5.0, 2.5, 0.5),
        (3, 1, float("nan"), 5.0, 2.5, 0.5),
        (3, 1, 0.5, float("inf"), 2.5, 0.5),
    ],
)
def test_invalid_parameters_refuse_construction(args):
    with pytest.raises(ConfigurationError):
        Building(*args)


@pytest.mark.parametrize("p_in", [0.0, 2.5])
def test_arrival_rate_is_not_bounded_by_one(p_in):
    assert BuildingConfig(p_in=p_in).p_in == p_in


def test_new_building_is_empty_and_idle(make_building):
    building = make_building(num_floors=4, num_elevators=3)
    assert len(building.floors) == 4
    assert all(e.floor_on == 0 and e.stopped for e in building.elevators)
    assert building.total_passengers == 0


def test_from_config(make_building):
    building = Building.from_config(BuildingConfig(num_floors=7, num_elevators=2, floor_capacity=3))
    assert len(building.floors) == 7
    assert building.floors[0].capacity == 3


def test_exchange_folds_wait_times_and_boards(make_building):
    building = make_building(num_floors=3)
    elevator = building.elevators[0]
    elevator.floor_on = 2
    arriving = Passenger(floor_on=2, floor_to=2, wait_time=4)
    elevator.extend([arriving])
    caller = Passenger(floor_on=2, floor_to=0, wait_time=2)
    building.floors[2].extend([caller])

    building.exchange_people_on_elevators()

    assert elevator.passengers == [caller]
    assert building.floors[2].passengers == [arriving]
    assert arriving.wait_time == 0
    assert building.avg_wait_time == pytest.approx(4.0)
    assert building.wait_time_denom == 1

    building.exchange_people_on_elevators()
    assert building.avg_wait_time == pytest.approx(4.0)


def test_exchange_flush_frees_capacity_before_boarding(make_building):
    building = make_building(num_floors=3, elevator_capacity=1)
    elevator = building.elevators[0]
    elevator.floor_on = 2
    rider = Passenger(floor_on=2, floor_to=2, wait_time=3)
    elevator.extend([rider])
    caller = Passenger(floor_on=2, floor_to=0)
    building.floors[2].extend([caller])
    assert elevator.free_capacity == 0

    building.exchange_people_on_elevators()

    assert elevator.passengers == [caller]
    assert building.floors[2].passengers == [rider]
    assert building.avg_wait_time == pytest.approx(3.0)


def test_exchange_skips_moving_elevators(make_building):
    building = make_building(num_floors=3)
    building.floors[0].extend([Passenger(floor_on=0, floor_to=2)])
    building.elevators[0].stopped = False
    building.elevators[0].moving_up = True

    building.exchange_people_on_elevators()

    assert len(building.elevators[0]) == 0
    assert len(building.floors[0]) == 1


def test_exchange_boards_only_up_to_free_capacity(make_building):
    building = make_building(num_floors=3, elevator_capacity=2)
    building.floors[0].extend([Passenger(floor_on=0, floor_to=2) for _ in range(5)])

    building.exchange_people_on_elevators()

    assert len(building.elevators[0]) == 2
    assert len(building.floors[0]) == 3


def test_average_wait_time_never_nan(make_building, rng):
    building = make_building()
    for _ in range(10):
        building.step(rng)
    assert building.avg_wait_time == 0.0
    assert not math.isnan(building.avg_wait_time)


def test_ground_floor_flush_collects_tips(make_building, rng):
    building = make_building()
    building.floors[0].extend(
        [Passenger(floor_on=0, floor_to=0, is_leaving=True, p_tip=1.0) for _ in range(3)]
    )

    earned = building.flush_and_update_tips(rng)

    assert len(building.floors[0]) == 0
    assert 0 < earned <= 300
    assert building.tot_tips == earned
    assert building.collect_tips() == earned
    assert building.tot_tips == 0.0


def test_no_tips_when_nobody_tips(make_building, rng):
    building = make_building()
    building.floors[0].extend(
        [Passenger(floor_on=0, floor_to=0, is_leaving=True, p_tip=0.0) for _ in range(3)]
    )
    assert building.flush_and_update_tips(rng) == 0.0
    assert len(building.floors[0]) == 0


def test_arrivals_land_on_ground_floor_up_to_capacity(make_building, rng):
    building = make_building(p_in=50.0, floor_capacity=3)
    accepted = building.generate_arrivals(rng)
    assert accepted == 3
    assert len(building.floors[0]) == 3
    assert all(p.floor_on == 0 and 0 <= p.floor_to < 5 for p in building.floors[0].passengers)


def test_increment_wait_times_covers_floors_and_elevators(make_building):
    building = make_building()
    on_floor = Passenger(floor_on=0, floor_to=3)
    at_rest = Passenger(floor_on=0, floor_to=0)
    building.floors[0].extend([on_floor, at_rest])
    riding = Passenger(floor_on=0, floor_to=4)
    building.elevators[0].extend([riding])

    building.increment_wait_times()

    assert (on_floor.wait_time, at_rest.wait_time, riding.wait_time) == (1, 0, 1)


def test_dest_probabilities(make_building):
    building = make_building(num_floors=4, p_in=0.8)
    building.floors[1].extend([Passenger(floor_on=1, floor_to=3)])
    building.floors[2].extend([Passenger(floor_on=2, floor_to=2, p_out=0.05)])
    building.elevators[0].extend([Passenger(floor_on=0, floor_to=3)])

    building.update_dest_probabilities()

    probabilities = building.dest_probabilities()
    assert probabilities[0] == pytest.approx(0.8 * 3 / 4)
    assert probabilities[1] == 1.0
    assert probabilities[2] == pytest.approx(0.05)
    assert probabilities[3] == 1.0


def test_dest_probability_is_clamped(make_building):
    building = make_building(num_floors=4, p_in=5.0)
    building.update_dest_probabilities()
    assert building.floors[0].dest_prob == 1.0


def test_average_energy_is_running_mean(make_building):
    building = make_building()
    building.update_average_energy(0, 6.0)
    building.update_average_energy(1, 0.0)
    building.update_average_energy(2, 3.0)
    assert building.avg_energy == pytest.approx(3.0)


def test_capacity_reduction_below_occupancy_is_rejected(make_building):
    building = make_building(floor_capacity=10, elevator_capacity=10)
    people = [Passenger(floor_on=0, floor_to=0) for _ in range(3)]
    building.floors[0].extend(people)
    building.elevators[0].extend([Passenger(floor_on=0, floor_to=2) for _ in range(2)])

    assert not building.update_floor_capacities(2)
    assert all(f.capacity == 10 for f in building.floors)
    assert building.floors[0].passengers == people

    assert not building.update_elevator_capacities(1)
    assert building.elevators[0].capacity == 10
    assert len(building.elevators[0]) == 2

    assert building.update_floor_capacities(3)
    assert all(f.capacity == 3 for f in building.floors)
    assert building.update_elevator_capacities(2)
    assert building.elevators[0].capacity == 2


def test_building_grows_live(make_building):
    building = make_building(num_floors=3, num_elevators=1, elevator_capacity=4)
    floor = building.append_floor()
    elevator = building.append_elevator()

    assert floor.number == 3 and building.num_floors == 4
    assert elevator.elevator_id == 1 and elevator.capacity == 4
    assert elevator.floor_on == 0 and elevator.stopped


def test_nearest_wait_floor(make_building):
    building = make_building(num_floors=9)
    assert building.nearest_wait_floor(4) == (0, 0)

    building.floors[7].extend([Passenger(floor_on=7, floor_to=0)])
    building.floors[1].extend([Passenger(floor_on=1, floor_to=0)])
    building.floors[2].extend([Passenger(floor_on=2, floor_to=2)])

    assert building.nearest_wait_floor(4) == (1, 3)
    assert building.nearest_wait_floor(6) == (7, 1)


def test_deep_copy_is_independent(make_building):
    building = make_building()
    building.floors[0].extend([Passenger(floor_on=0, floor_to=3)])
    clone = copy.deepcopy(building)

    assert clone == building
    clone.floors[0].pull_boarding(1)
    assert len(building.floors[0]) == 1


def test_render_layout(make_building):
    building = make_building(num_floors=3, num_elevators=2)
    building.elevators[1].floor_on = 1
    building.floors[0].extend([Passenger(floor_on=0, floor_to=0)])

    lines = str(building).split("\n")

    assert len(lines) == 3 * 2 + 3
    assert lines[0] == "----\t||---\t||"
    assert lines[3] == "0.00\t||0\t||   \t |0\t|"
    assert lines[5] == "0.00\t||1\t|||0\t|"
    assert lines[-3] == "Average wait time:\t0.00"
    assert lines[-1] == "Total tips collected:\t$0.00"
