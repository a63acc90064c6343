from __future__ import annotations

from collections import deque
from enum import Enum
from typing import Any, Callable, Deque, Dict, Iterable, List, Optional, Tuple, Union

from .errors import (
    ALREADY_EXECUTED,
    COLLISION,
    INVALID_MOVEMENT,
    INVALID_POSITION,
    OUT_OF_BOUNDS,
    ErrorKind,
    ValidationError,
)
from .geometry import Coordinate, Direction, is_int
from .plateau import Plateau


MOVE_TOKENS = ("L", "R", "M")

StepCallback = Callable[["Rover", str], None]


class RoverStatus(Enum):
    """Execution state of a rover's movement program."""

    IDLE = "idle"
    RUNNING = "running"
    HALTED = "halted"
    COMPLETED = "completed"


class Rover:
    """Grid rover driven by L/R/M movement tokens.

    The rover validates its starting cell against the plateau on
    construction and checks the plateau before every forward move. A failed
    move leaves the rover exactly where it was before that token.
    """

    def __init__(
        self,
        x: int,
        y: int,
        direction: Union[Direction, str],
        plateau: Plateau,
    ) -> None:
        self.direction = Direction.parse(direction)
        if not (is_int(x) and is_int(y)):
            raise ValidationError(
                INVALID_POSITION, ErrorKind.BOUNDARY, {"x": repr(x), "y": repr(y)}
            )
        start = Coordinate(x, y)
        if not plateau.is_within_bounds(start):
            raise ValidationError(INVALID_POSITION, ErrorKind.BOUNDARY, {"x": x, "y": y})
        if plateau.is_blocked(start):
            raise ValidationError(COLLISION, ErrorKind.COLLISION, {"x": x, "y": y})

        self.position = start
        self.plateau = plateau
        self.status = RoverStatus.IDLE
        self._basket: List[Coordinate] = []
        self._pending: Deque[str] = deque()

    # ------------------------------------------------------------------
    # Program
    # ------------------------------------------------------------------
    def set_movement(self, tokens: Iterable[str]) -> None:
        """Replace the pending movement queue with ``tokens``."""
        if self.status is not RoverStatus.IDLE:
            raise ValidationError(ALREADY_EXECUTED)
        queue = list(tokens)
        bad = [t for t in queue if t not in MOVE_TOKENS]
        if bad:
            raise ValidationError(INVALID_MOVEMENT, context={"tokens": bad})
        self._pending = deque(queue)

    def go(self, on_step: Optional[StepCallback] = None) -> None:
        """Execute the pending queue left to right.

        Stops at the first illegal move, marking the rover halted and
        re-raising the ValidationError. ``on_step`` is called with the rover
        and token after each successful token; anything it raises also halts
        the rover.
        """
        if self.status is not RoverStatus.IDLE:
            raise ValidationError(ALREADY_EXECUTED)
        self.status = RoverStatus.RUNNING
        try:
            while self._pending:
                token = self._pending.popleft()
                self._execute(token)
                if on_step is not None:
                    on_step(self, token)
        except BaseException:
            self.status = RoverStatus.HALTED
            raise
        self.status = RoverStatus.COMPLETED

    def _execute(self, token: str) -> None:
        if token == "L":
            self.direction = self.direction.left()
        elif token == "R":
            self.direction = self.direction.right()
        else:
            self._move_forward()

    def _move_forward(self) -> None:
        target = self.position.step(self.direction)
        if not self.plateau.is_within_bounds(target):
            raise ValidationError(
                OUT_OF_BOUNDS, ErrorKind.BOUNDARY, {"from": self.position.as_tuple(), "to": target.as_tuple()}
            )
        if self.plateau.is_blocked(target):
            raise ValidationError(
                COLLISION, ErrorKind.COLLISION, {"from": self.position.as_tuple(), "to": target.as_tuple()}
            )
        self.position = target
        if self.plateau.collect_sample(target):
            self._basket.append(target)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    def get_position(self) -> Coordinate:
        return self.position

    def get_direction(self) -> Direction:
        return self.direction

    def get_basket(self) -> Tuple[Coordinate, ...]:
        """Cells whose samples this rover collected, in pickup order."""
        return tuple(self._basket)

    @property
    def pending(self) -> Tuple[str, ...]:
        return tuple(self._pending)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize current rover state to a dict for telemetry."""
        return {
            "x": self.position.x,
            "y": self.position.y,
            "direction": self.direction.value,
            "basket": len(self._basket),
            "status": self.status.value,
        }
