from __future__ import annotations

from simulation import Elevator


def direction_towards(target: int, current: int) -> int:
    """Return +1 to go up, -1 to go down and 0 to stop at ``current``."""
    if target > current:
        return 1
    if target < current:
        return -1
    return 0


def apply_decision(elevator: Elevator, decision: int) -> int:
    """Set the elevator's stop/direction state from a decision and move it."""
    if decision > 0:
        elevator.stopped = False
        elevator.moving_up = True
    elif decision < 0:
        elevator.stopped = False
        elevator.moving_up = False
    else:
        elevator.stopped = True
    return elevator.advance_floor()
