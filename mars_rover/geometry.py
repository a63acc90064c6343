"""
Grid geometry for the plateau simulator.

Positions are integer cells with origin at the bottom-left of the plateau:
- x increases to the east
- y increases to the north
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Sequence, Tuple, Union

from .errors import INVALID_COORDINATE, INVALID_DIRECTION, ValidationError


# ---------------------------------------------------------------------------
# Heading
# ---------------------------------------------------------------------------


class Direction(Enum):
    """Compass heading, ordered clockwise N -> E -> S -> W."""

    N = "N"
    E = "E"
    S = "S"
    W = "W"

    @classmethod
    def parse(cls, value: Union["Direction", str]) -> "Direction":
        """Return the Direction for a Direction or its one-letter name."""
        if isinstance(value, Direction):
            return value
        if isinstance(value, str) and value in cls.__members__:
            return cls[value]
        raise ValidationError(INVALID_DIRECTION, context={"direction": repr(value)})

    def right(self) -> "Direction":
        """Rotate 90 degrees clockwise."""
        return _CLOCKWISE[(_CLOCKWISE.index(self) + 1) % 4]

    def left(self) -> "Direction":
        """Rotate 90 degrees counter-clockwise."""
        return _CLOCKWISE[(_CLOCKWISE.index(self) - 1) % 4]

    @property
    def delta(self) -> Tuple[int, int]:
        """Unit (dx, dy) of one forward move."""
        return _DELTAS[self]


_CLOCKWISE = (Direction.N, Direction.E, Direction.S, Direction.W)

_DELTAS: Dict[Direction, Tuple[int, int]] = {
    Direction.N: (0, 1),
    Direction.E: (1, 0),
    Direction.S: (0, -1),
    Direction.W: (-1, 0),
}


# ---------------------------------------------------------------------------
# Cells
# ---------------------------------------------------------------------------


def is_int(value: Any) -> bool:
    """True for plain ints; bools are rejected."""
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class Coordinate:
    """Integer cell on the plateau grid."""

    x: int
    y: int

    @classmethod
    def of(cls, value: Union["Coordinate", Sequence[Any]]) -> "Coordinate":
        """Build a Coordinate from another Coordinate or an (x, y) pair of ints.

        Values are never converted; anything but two plain ints raises.
        """
        if isinstance(value, Coordinate):
            coord = value
        else:
            try:
                x, y = value
            except (TypeError, ValueError):
                raise ValidationError(INVALID_COORDINATE, context={"value": repr(value)}) from None
            coord = cls(x, y)
        if not (is_int(coord.x) and is_int(coord.y)):
            raise ValidationError(INVALID_COORDINATE, context={"value": repr(value)})
        return coord

    def step(self, direction: Direction) -> "Coordinate":
        """Return the neighbouring cell one move along ``direction``."""
        dx, dy = direction.delta
        return Coordinate(self.x + dx, self.y + dy)

    def as_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)


CoordLike = Union[Coordinate, Sequence[int]]


def within_bounds(coord: Coordinate, width: int, height: int) -> bool:
    """Return True if ``coord`` lies in [0, width) x [0, height)."""
    return 0 <= coord.x < width and 0 <= coord.y < height
