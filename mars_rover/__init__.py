"""
Top-level package for the Mars rover plateau simulator.

Components:
- geometry: Coordinate and Direction value types
- errors: ValidationError and the fixed message catalogue
- location: injected location sources for seeding samples and obstacles
- plateau: bounded grid, obstacle/sample sets and the rover registry
- rover: L/R/M movement state machine
- instructions: mission file ingestion
- mission: sequential mission runner and reports
- config: YAML run configuration
- render: pygame-based grid visualization (imported on demand)
"""

from .errors import ErrorKind, ValidationError
from .geometry import Coordinate, Direction
from .location import FixedLocations, LocationSource, RandomLocation
from .plateau import Plateau
from .rover import Rover, RoverStatus
from .instructions import Instruction, Mission, load_mission, parse_mission

__all__ = [
    "ErrorKind",
    "ValidationError",
    "Coordinate",
    "Direction",
    "FixedLocations",
    "LocationSource",
    "RandomLocation",
    "Plateau",
    "Rover",
    "RoverStatus",
    "Instruction",
    "Mission",
    "load_mission",
    "parse_mission",
]
