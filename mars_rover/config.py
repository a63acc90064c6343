from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import yaml

from .location import FixedLocations, LocationSource, RandomLocation
from .plateau import OBSTACLE_DENSITY, SAMPLE_DENSITY


def load_yaml(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


@dataclass
class MissionConfig:
    """Run settings read from ``configs/mission.yaml``.

    A non-empty ``fixed_samples`` or ``fixed_obstacles`` switches seeding
    from the random generator to that fixed layout.
    """

    seed: Optional[int] = None
    sample_density: float = SAMPLE_DENSITY
    obstacle_density: float = OBSTACLE_DENSITY
    continue_on_error: bool = False
    register_rovers: bool = True
    fixed_samples: List[Tuple[int, int]] = field(default_factory=list)
    fixed_obstacles: List[Tuple[int, int]] = field(default_factory=list)
    telemetry_path: Optional[str] = None
    render_enabled: bool = False
    render_cell_size: int = 64
    render_fps: int = 4

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MissionConfig":
        plateau_cfg = data.get("plateau") or {}
        mission_cfg = data.get("mission") or {}
        layout_cfg = data.get("layout") or {}
        logging_cfg = data.get("logging") or {}
        render_cfg = data.get("render") or {}
        seed = data.get("seed")
        return cls(
            seed=None if seed is None else int(seed),
            sample_density=float(plateau_cfg.get("sample_density", SAMPLE_DENSITY)),
            obstacle_density=float(plateau_cfg.get("obstacle_density", OBSTACLE_DENSITY)),
            continue_on_error=bool(mission_cfg.get("continue_on_error", False)),
            register_rovers=bool(mission_cfg.get("register_rovers", True)),
            fixed_samples=[(int(x), int(y)) for x, y in layout_cfg.get("samples") or []],
            fixed_obstacles=[(int(x), int(y)) for x, y in layout_cfg.get("obstacles") or []],
            telemetry_path=logging_cfg.get("telemetry_path"),
            render_enabled=bool(render_cfg.get("enabled", False)),
            render_cell_size=int(render_cfg.get("cell_size", 64)),
            render_fps=int(render_cfg.get("fps", 4)),
        )

    def location_source(
        self, width: int, height: int, reserved: List[Tuple[int, int]]
    ) -> LocationSource:
        """Build the seeding source this configuration asks for."""
        if self.fixed_samples or self.fixed_obstacles:
            return FixedLocations(self.fixed_samples, self.fixed_obstacles)
        return RandomLocation(width, height, reserved=reserved, seed=self.seed)


def load_config(path: str) -> MissionConfig:
    return MissionConfig.from_dict(load_yaml(path))
