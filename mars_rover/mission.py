"""
Mission runner: builds a plateau, seeds it and drives each rover in order.

Rovers run strictly one after another. A rover is registered on the plateau
only after its program finishes, so it only ever collides with rovers that
came before it in the mission.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from .errors import ValidationError
from .instructions import Mission
from .location import LocationSource
from .plateau import OBSTACLE_DENSITY, SAMPLE_DENSITY, Plateau
from .rover import Rover, RoverStatus
from telemetry.logger import TelemetryLogger


# Report status for a rover whose program never started: bad start or bad tokens.
REJECTED = "rejected"


@dataclass
class RoverReport:
    """Outcome of one rover's program."""

    index: int
    position: Optional[Tuple[int, int]]
    direction: Optional[str]
    basket: int
    status: str
    error: Optional[str] = None
    error_kind: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def summary(self) -> str:
        if self.position is None:
            return f"rover {self.index}: rejected ({self.error})"
        x, y = self.position
        line = f"{x} {y} {self.direction} basket={self.basket}"
        if self.error is not None:
            line += f" HALTED: {self.error}"
        return line


@dataclass
class MissionReport:
    """Aggregate result of a mission run."""

    size: Tuple[int, int]
    rovers: List[RoverReport] = field(default_factory=list)
    remaining_samples: List[Tuple[int, int]] = field(default_factory=list)
    obstacles: List[Tuple[int, int]] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return all(r.ok for r in self.rovers)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "size": list(self.size),
            "succeeded": self.succeeded,
            "remaining_samples": [list(c) for c in self.remaining_samples],
            "obstacles": [list(c) for c in self.obstacles],
            "rovers": [r.__dict__.copy() for r in self.rovers],
        }


def _report(index: int, rover: Rover, error: Optional[ValidationError] = None) -> RoverReport:
    return RoverReport(
        index=index,
        position=rover.get_position().as_tuple(),
        direction=rover.get_direction().value,
        basket=len(rover.get_basket()),
        status=rover.status.value,
        error=None if error is None else error.message,
        error_kind=None if error is None else error.kind.value,
    )


def build_plateau(
    mission: Mission,
    source: LocationSource,
    sample_density: float = SAMPLE_DENSITY,
    obstacle_density: float = OBSTACLE_DENSITY,
) -> Plateau:
    """Create the mission's plateau and seed samples, then obstacles."""
    plateau = Plateau(
        mission.width,
        mission.height,
        sample_density=sample_density,
        obstacle_density=obstacle_density,
    )
    plateau.seed_samples(source)
    plateau.seed_obstacles(source)
    return plateau


def run_mission(
    mission: Mission,
    plateau: Plateau,
    register_rovers: bool = True,
    continue_on_error: bool = False,
    telemetry: Optional[TelemetryLogger] = None,
    on_rover: Optional[Callable[[Rover], None]] = None,
) -> MissionReport:
    """Run every instruction of ``mission`` against ``plateau`` in order.

    With ``continue_on_error`` a ValidationError is recorded in the report and
    the next rover starts; a rover halted mid-program is still registered at
    its last valid cell, while a rover whose start or movement was rejected
    is reported as ``rejected`` with no position and is not registered.
    Otherwise the error propagates after being logged. ``on_rover`` is called
    with each rover once it has stopped, e.g. for rendering.
    """
    report = MissionReport(size=plateau.size())
    if telemetry is not None:
        telemetry.log_event("mission_start", plateau=plateau.to_dict(), rovers=len(mission.instructions))

    def log_step(index: int) -> Optional[Callable[[Rover, str], None]]:
        if telemetry is None:
            return None
        return lambda rover, token: telemetry.log_step({"rover": index, "token": token, **rover.to_dict()})

    for index, ins in enumerate(mission.instructions):
        rover: Optional[Rover] = None
        try:
            rover = Rover(ins.x, ins.y, ins.direction, plateau)
            rover.set_movement(ins.movement)
            rover.go(on_step=log_step(index))
        except ValidationError as exc:
            started = rover is not None and rover.status is not RoverStatus.IDLE
            if not started:
                rover = None
                entry = RoverReport(
                    index=index,
                    position=None,
                    direction=None,
                    basket=0,
                    status=REJECTED,
                    error=exc.message,
                    error_kind=exc.kind.value,
                )
            else:
                entry = _report(index, rover, exc)
            report.rovers.append(entry)
            if telemetry is not None:
                telemetry.log_event("rover_failed", rover=index, **exc.to_dict())
            if not continue_on_error:
                raise
            if rover is not None:
                if register_rovers:
                    plateau.register_rover(rover)
                if on_rover is not None:
                    on_rover(rover)
            continue

        if register_rovers:
            plateau.register_rover(rover)
        entry = _report(index, rover)
        report.rovers.append(entry)
        if telemetry is not None:
            telemetry.log_event("rover_done", rover=index, **rover.to_dict())
        if on_rover is not None:
            on_rover(rover)

    report.remaining_samples = sorted(c.as_tuple() for c in plateau.samples)
    report.obstacles = sorted(c.as_tuple() for c in plateau.obstacles)
    if telemetry is not None:
        telemetry.log_event("mission_end", **report.to_dict())
    return report
