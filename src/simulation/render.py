from __future__ import annotations

from typing import TYPE_CHECKING, List

if TYPE_CHECKING:  # pragma: no cover - import cycle safe typing
    from .building import Building

ELEVATOR_SPACE = "   \t "


def render_building(building: "Building") -> str:
    """Draw the building as text, top floor first, followed by summary lines.

    Each floor is a roof line and a body line showing its ``dest_prob`` and
    occupancy. Elevators sit in their own column on the floor they are on,
    showing how many people ride them.
    """
    lines: List[str] = []
    for floor in reversed(building.floors):
        roof = "----\t||---\t||"
        body = f"{floor.dest_prob:.2f}\t||{len(floor)}\t||"
        column = 0
        for index, elevator in enumerate(building.elevators):
            if elevator.floor_on != floor.number:
                continue
            gap = ELEVATOR_SPACE * (index - column)
            roof += f"{gap}|-\t|"
            body += f"{gap}|{len(elevator)}\t|"
            column = index + 1
        lines.append(roof)
        lines.append(body)

    lines.append(f"Average wait time:\t{building.avg_wait_time:.2f}")
    lines.append(f"Average energy spent:\t{building.avg_energy:.2f}")
    lines.append(f"Total tips collected:\t${building.tot_tips:.2f}")
    return "\n".join(lines)
