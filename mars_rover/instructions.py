"""
Mission file ingestion.

A mission file looks like::

    5 5
    1 2 N
    LMLMLMLMM
    3 3 E
    MMRMMRMRRM

The first line is the plateau width and height. Each rover then takes two
lines: its starting X, Y and direction, and its movement string. Blank lines
are ignored. Movement tokens are left for the rover to validate.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple
import os

from .errors import (
    EMPTY_MISSION,
    INVALID_PLATEAU_LINE,
    INVALID_ROVER_LINE,
    MISSING_FILE,
    MISSING_MOVEMENT,
    ValidationError,
)
from .geometry import Direction


@dataclass(frozen=True)
class Instruction:
    """Starting pose and movement program for one rover."""

    x: int
    y: int
    direction: Direction
    movement: str


@dataclass(frozen=True)
class Mission:
    """Plateau size plus rover instructions in execution order."""

    width: int
    height: int
    instructions: Tuple[Instruction, ...]

    def starting_positions(self) -> List[Tuple[int, int]]:
        return [(ins.x, ins.y) for ins in self.instructions]


def _parse_ints(parts: List[str], message: str, line_no: int) -> List[int]:
    try:
        return [int(p) for p in parts]
    except ValueError:
        raise ValidationError(message, context={"line": line_no}) from None


def parse_mission(text: str) -> Mission:
    """Parse mission text into a Mission."""
    lines = [(i + 1, line.strip()) for i, line in enumerate(text.splitlines())]
    lines = [(no, line) for no, line in lines if line]
    if not lines:
        raise ValidationError(EMPTY_MISSION)

    plateau_no, plateau_line = lines[0]
    parts = plateau_line.split()
    if len(parts) != 2:
        raise ValidationError(INVALID_PLATEAU_LINE, context={"line": plateau_no})
    width, height = _parse_ints(parts, INVALID_PLATEAU_LINE, plateau_no)

    rover_lines = lines[1:]
    if len(rover_lines) % 2 != 0:
        raise ValidationError(MISSING_MOVEMENT, context={"line": rover_lines[-1][0]})

    instructions: List[Instruction] = []
    for i in range(0, len(rover_lines), 2):
        pose_no, pose_line = rover_lines[i]
        _, movement = rover_lines[i + 1]
        parts = pose_line.split()
        if len(parts) != 3:
            raise ValidationError(INVALID_ROVER_LINE, context={"line": pose_no})
        x, y = _parse_ints(parts[:2], INVALID_ROVER_LINE, pose_no)
        direction = Direction.parse(parts[2])
        instructions.append(Instruction(x=x, y=y, direction=direction, movement=movement))

    return Mission(width=width, height=height, instructions=tuple(instructions))


def load_mission(path: str) -> Mission:
    """Read and parse a mission file."""
    if not os.path.isfile(path):
        raise ValidationError(MISSING_FILE, context={"path": path})
    with open(path, "r", encoding="utf-8") as f:
        return parse_mission(f.read())
