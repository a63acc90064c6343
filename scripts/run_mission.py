from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Callable, Optional

# Ensure project root is on path when running this script directly
_script_dir = Path(__file__).resolve().parent
_project_root = _script_dir.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from mars_rover.config import load_config
from mars_rover.errors import ValidationError
from mars_rover.instructions import load_mission
from mars_rover.mission import build_plateau, run_mission
from mars_rover.rover import Rover
from telemetry.logger import TelemetryLogger


def main() -> int:
    parser = argparse.ArgumentParser(description="Run a Mars rover mission file on a seeded plateau.")
    parser.add_argument("mission", type=str, help="Path to the mission instruction file.")
    parser.add_argument(
        "--config",
        type=str,
        default="configs/mission.yaml",
        help="Path to mission YAML config.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Override the config seed.")
    parser.add_argument(
        "--continue-on-error",
        action="store_true",
        help="Keep running later rovers after one fails.",
    )
    parser.add_argument("--render", action="store_true", help="Show the plateau in a pygame window.")
    args = parser.parse_args()

    cfg = load_config(args.config)
    if args.seed is not None:
        cfg.seed = args.seed
    if args.continue_on_error:
        cfg.continue_on_error = True

    telemetry: Optional[TelemetryLogger] = None
    renderer = None
    try:
        mission = load_mission(args.mission)
        source = cfg.location_source(mission.width, mission.height, mission.starting_positions())
        plateau = build_plateau(
            mission,
            source,
            sample_density=cfg.sample_density,
            obstacle_density=cfg.obstacle_density,
        )
        print(f"Plateau {plateau.width}x{plateau.height}: "
              f"{len(plateau.samples)} samples, {len(plateau.obstacles)} obstacles")

        on_rover: Optional[Callable[[Rover], None]] = None
        if args.render or cfg.render_enabled:
            from mars_rover.render import GridRenderer

            renderer = GridRenderer(plateau, cell_size=cfg.render_cell_size)

            def draw_rover(rover: Rover) -> None:
                if not renderer.poll():
                    return
                x, y = rover.get_position().as_tuple()
                renderer.draw(active=rover, hud=f"{x} {y} {rover.get_direction().value} [{rover.status.value}]")
                renderer.tick(cfg.render_fps)

            on_rover = draw_rover

        if cfg.telemetry_path:
            telemetry = TelemetryLogger(cfg.telemetry_path)

        report = run_mission(
            mission,
            plateau,
            register_rovers=cfg.register_rovers,
            continue_on_error=cfg.continue_on_error,
            telemetry=telemetry,
            on_rover=on_rover,
        )
    except ValidationError as exc:
        print(f"Mission aborted: {exc}", file=sys.stderr)
        return 1
    finally:
        if telemetry is not None:
            telemetry.close()
        if renderer is not None:
            renderer.hold(cfg.render_fps, hud="Mission over, close the window to exit")
            renderer.close()

    for entry in report.rovers:
        print(entry.summary())
    print(f"Samples left on plateau: {len(report.remaining_samples)}")
    return 0 if report.succeeded else 1


if __name__ == "__main__":
    sys.exit(main())
