"""
Validation errors for the plateau simulator.

Every rejected precondition raises ValidationError with one of the fixed
messages below. The kind tag separates bad input from boundary violations
and collisions for callers that want finer-grained handling.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


# ---------------------------------------------------------------------------
# Message catalogue
# ---------------------------------------------------------------------------

INVALID_PLATEAU = "Plateau width and height must be positive integers."
INVALID_LOCATION = "Generated location is outside the plateau or already taken."
INVALID_POSITION = "Rover position is outside the plateau."
INVALID_DIRECTION = "Direction must be one of N, E, S, W."
INVALID_MOVEMENT = "Movement must only contain L, R or M."
OUT_OF_BOUNDS = "Rover can't move outside the plateau."
COLLISION = "Watch out! You hit obstacle."
ALREADY_EXECUTED = "Rover has already executed its movement."
INVALID_COORDINATE = "Coordinate must be a pair of integers."

EMPTY_MISSION = "Instruction file is empty."
INVALID_PLATEAU_LINE = "Plateau line must contain width and height."
INVALID_ROVER_LINE = "Rover line must contain X, Y and direction."
MISSING_MOVEMENT = "Each rover needs a position line and a movement line."
MISSING_FILE = "Instruction file not found."


class ErrorKind(Enum):
    """Tag attached to every ValidationError."""

    INPUT = "input"
    BOUNDARY = "boundary"
    COLLISION = "collision"


class ValidationError(Exception):
    """Raised whenever the plateau, a rover or a mission rejects its input.

    ``str(error)`` is always the bare message so callers can compare it
    against the catalogue constants.
    """

    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.INPUT,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the error for telemetry records."""
        return {
            "error": self.message,
            "kind": self.kind.value,
            "context": self.context,
        }
