from __future__ import annotations

import asyncio
import random
from dataclasses import asdict
from typing import Dict, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from controller import get_controller
from simulation import Building, BuildingConfig, Simulation, render_building


class ControllerSelection(BaseModel):
    name: str
    options: Dict[str, object] = {}


class TickRequest(BaseModel):
    count: int = Field(default=1, ge=1, le=10_000)


class UpgradeRequest(BaseModel):
    increment: float = Field(ge=0.0)


class CapacityUpdate(BaseModel):
    floor_capacity: Optional[int] = Field(default=None, ge=0)
    elevator_capacity: Optional[int] = Field(default=None, ge=0)


class SimulationManager:
    """Holds one simulation and advances it only when a client asks."""

    def __init__(
        self,
        config: Optional[BuildingConfig] = None,
        controller_name: str = "nearest",
        random_seed: Optional[int] = None,
    ) -> None:
        building = Building.from_config(config or BuildingConfig())
        controller = get_controller(controller_name, building, random.Random(random_seed))
        self.simulation = Simulation(controller=controller, random_seed=random_seed)
        self._lock = asyncio.Lock()

    def current_state(self) -> dict:
        return {
            "time": self.simulation.current_time,
            "building": self.simulation.building.snapshot(),
            "metrics": asdict(self.simulation.snapshot()),
            "controller": self.simulation.controller.name,
            "can_be_upgraded": self.simulation.controller.can_be_upgraded(),
        }

    async def advance(self, count: int) -> dict:
        async with self._lock:
            for _ in range(count):
                self.simulation.step()
                # Yield to the event loop between ticks
                await asyncio.sleep(0)
            return self.current_state()

    async def set_controller(self, name: str, options: Dict[str, object]) -> dict:
        async with self._lock:
            self.simulation.swap_controller(name, **options)
            return self.current_state()

    async def upgrade(self, increment: float) -> dict:
        async with self._lock:
            upgraded = self.simulation.upgrade(increment)
            state = self.current_state()
            state["upgraded"] = upgraded
            return state

    async def collect_tips(self) -> dict:
        async with self._lock:
            tips = self.simulation.collect_tips()
            state = self.current_state()
            state["collected"] = tips
            return state

    async def add_floor(self) -> dict:
        async with self._lock:
            self.simulation.controller.add_floor()
            return self.current_state()

    async def add_elevator(self) -> dict:
        async with self._lock:
            self.simulation.controller.add_elevator()
            return self.current_state()

    async def update_capacities(
        self, floor_capacity: Optional[int], elevator_capacity: Optional[int]
    ) -> dict:
        async with self._lock:
            building = self.simulation.building
            applied: Dict[str, bool] = {}
            if floor_capacity is not None:
                applied["floor_capacity"] = building.update_floor_capacities(floor_capacity)
            if elevator_capacity is not None:
                applied["elevator_capacity"] = building.update_elevator_capacities(
                    elevator_capacity
                )
            state = self.current_state()
            state["applied"] = applied
            return state


manager = SimulationManager()
app = FastAPI(title="Elevator Bank Simulation API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/state")
async def get_state() -> dict:
    return manager.current_state()


@app.get("/diagram")
async def get_diagram() -> dict:
    return {"diagram": render_building(manager.simulation.building)}


@app.post("/tick")
async def tick(request: TickRequest) -> dict:
    return await manager.advance(request.count)


@app.post("/controller")
async def set_controller(selection: ControllerSelection) -> dict:
    try:
        return await manager.set_controller(selection.name, selection.options)
    except (TypeError, ValueError) as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@app.post("/upgrade")
async def upgrade(request: UpgradeRequest) -> dict:
    try:
        return await manager.upgrade(request.increment)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@app.post("/tips/collect")
async def collect_tips() -> dict:
    return await manager.collect_tips()


@app.post("/building/floors")
async def add_floor() -> dict:
    return await manager.add_floor()


@app.post("/building/elevators")
async def add_elevator() -> dict:
    return await manager.add_elevator()


@app.post("/building/capacities")
async def update_capacities(update: CapacityUpdate) -> dict:
    return await manager.update_capacities(update.floor_capacity, update.elevator_capacity)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.app:app", host="0.0.0.0", port=8000, reload=False)
