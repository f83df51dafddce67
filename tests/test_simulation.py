import random

import pytest

from controller import NearestController, RandomController
from simulation import Building, Simulation


def build(controller_name, seed, p_in=0.7, p_rational=0.5):
    building = Building(6, 2, p_in, 5.0, 2.5, 0.5)
    if controller_name == "nearest":
        controller = NearestController(building)
    else:
        controller = RandomController(building, random.Random(seed), p_rational=p_rational)
    return Simulation(controller=controller, random_seed=seed)


def test_empty_building_stays_empty():
    building = Building(2, 1, 0.0, 5.0, 2.5, 0.5)
    simulation = Simulation(NearestController(building), random_seed=0)

    for snapshot in simulation.run(50):
        assert snapshot.avg_wait_time == 0.0

    assert building.total_passengers == 0
    assert building.avg_energy == 0.0
    assert building.avg_wait_time == 0.0
    assert building.tot_tips == 0.0
    assert building.time_step == 50


@pytest.mark.parametrize("controller_name", ["nearest", "random"])
def test_identical_seeds_give_identical_trajectories(controller_name):
    first = build(controller_name, seed=42).run(200)
    second = build(controller_name, seed=42).run(200)
    assert first == second


def test_busy_building_accumulates_metrics():
    simulation = build("nearest", seed=3, p_in=1.0)
    snapshots = simulation.run(400)

    final = snapshots[-1]
    assert final.time_step == 400
    assert final.avg_energy > 0
    assert final.avg_wait_time > 0
    assert all(s.avg_wait_time == s.avg_wait_time for s in snapshots)
    for floor in simulation.building.floors:
        assert len(floor) <= floor.capacity
        assert 0.0 <= floor.dest_prob <= 1.0


def test_metrics_and_tip_events():
    simulation = build("nearest", seed=11, p_in=1.0)
    simulation.metrics_hook_interval = 5
    metrics, tips = [], []
    simulation.on_event("metrics", metrics.append)
    simulation.on_event("tips", tips.append)

    simulation.run(300)

    assert len(metrics) == 60
    assert sum(t["value"] for t in tips) == pytest.approx(simulation.building.tot_tips)


def test_upgrade_goes_through_simulation():
    simulation = build("random", seed=1, p_rational=0.8)
    assert simulation.upgrade(0.5)
    assert simulation.snapshot().p_rational == 1.0
    assert not simulation.upgrade(0.1)

    assert not build("nearest", seed=1).upgrade(0.1)


def test_controller_hand_off_copies_the_building():
    simulation = build("nearest", seed=8)
    simulation.run(30)
    building = simulation.hand_off_building()

    assert building == simulation.building
    assert building is not simulation.building

    with pytest.raises(ValueError):
        simulation.replace_controller(NearestController(simulation.building))

    old_building = simulation.building
    simulation.replace_controller(RandomController(building, random.Random(8)))
    simulation.run(10)
    assert simulation.building is building
    assert old_building.time_step == 30
    assert building.time_step == 40


def test_swap_controller_by_name():
    simulation = Simulation(NearestController(Building(5, 1, 0.5, 5.0, 2.5, 0.5)), random_seed=1)
    simulation.run(20)
    old_building = simulation.building

    controller = simulation.swap_controller("random", p_rational=0.5)

    assert simulation.controller is controller
    assert isinstance(controller, RandomController)
    assert controller.p_rational == 0.5
    assert simulation.building is not old_building
    assert simulation.building == old_building

    simulation.run(5)
    assert old_building.time_step == 20
    assert simulation.building.time_step == 25


def test_swapped_runs_are_reproducible():
    def trajectory():
        simulation = build("nearest", seed=21)
        simulation.run(30)
        simulation.swap_controller("random", p_rational=0.3)
        return simulation.run(100)

    assert trajectory() == trajectory()


def test_swap_to_unknown_controller_keeps_current_one():
    simulation = build("nearest", seed=2)
    current = simulation.controller
    with pytest.raises(ValueError):
        simulation.swap_controller("express")
    assert simulation.controller is current


def test_collect_tips_drains_total():
    simulation = build("nearest", seed=4, p_in=1.0)
    simulation.run(300)
    total = simulation.building.tot_tips
    assert simulation.collect_tips() == total
    assert simulation.building.tot_tips == 0.0
