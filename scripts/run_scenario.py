"""CLI for running offline elevator bank scenarios defined in JSON configs."""
from __future__ import annotations

import argparse
import json
import logging
import random
from dataclasses import asdict
from pathlib import Path
from typing import Dict, List, Optional

from controller import get_controller
from simulation import Building, BuildingConfig, Simulation, render_building


def build_simulation(config: Dict) -> Simulation:
    building = Building.from_config(BuildingConfig(**config.get("building", {})))

    controller_cfg = config.get("controller", {})
    controller_name = controller_cfg.get("name", "nearest")
    controller_options = controller_cfg.get("options", {})
    random_seed = config.get("random_seed")

    controller = get_controller(
        controller_name, building, random.Random(random_seed), **controller_options
    )
    return Simulation(
        controller=controller,
        random_seed=random_seed,
        metrics_hook_interval=config.get("metrics_hook_interval", 10),
    )


def _spend_tips(simulation: Simulation, upgrade_cfg: Dict, wallet: float) -> float:
    """Buy rationality upgrades with collected tips; return what is left."""
    cost = upgrade_cfg.get("cost")
    increment = upgrade_cfg.get("increment", 0.0)
    wallet += simulation.collect_tips()
    if not cost or increment <= 0:
        return wallet
    while wallet >= cost and simulation.upgrade(increment):
        wallet -= cost
    return wallet


def run_simulation(simulation: Simulation, config: Dict) -> List[Dict]:
    duration = config.get("duration", 300)
    upgrade_cfg = config.get("upgrade", {})
    snapshots: List[Dict] = []
    wallet = 0.0

    for _ in range(duration):
        simulation.step()
        if upgrade_cfg:
            wallet = _spend_tips(simulation, upgrade_cfg, wallet)
        if simulation.current_time % simulation.metrics_hook_interval == 0:
            snapshots.append(asdict(simulation.snapshot()))
    return snapshots


def save_results(output_path: Optional[Path], data: Dict) -> None:
    if not output_path:
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(data, indent=2))


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("config", type=Path, help="Path to a JSON scenario configuration file")
    parser.add_argument(
        "--output",
        type=Path,
        help="Optional file path to write metrics snapshots as JSON",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level, e.g. INFO or DEBUG")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    config = json.loads(args.config.read_text())
    simulation = build_simulation(config)
    snapshots = run_simulation(simulation, config)

    final_metrics = asdict(simulation.snapshot())
    results = {
        "scenario": config.get("name", args.config.stem),
        "description": config.get("description"),
        "duration": config.get("duration", 300),
        "controller": simulation.controller.name,
        "final_metrics": final_metrics,
        "metrics_over_time": snapshots,
    }

    save_results(args.output, results)

    print(f"Scenario: {results['scenario']}")
    if results["description"]:
        print(results["description"])
    print(f"Controller: {results['controller']}")
    print(f"Duration: {results['duration']} ticks")
    print(render_building(simulation.building))
    print("Final metrics:")
    for key, value in final_metrics.items():
        print(f"  {key}: {value}")
    if args.output:
        print(f"Saved metrics to {args.output}")


if __name__ == "__main__":
    main()
