from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, FrozenSet, List, Optional, Sequence, Set, Tuple

from .errors import INVALID_LOCATION, INVALID_PLATEAU, ValidationError
from .geometry import Coordinate, CoordLike, is_int, within_bounds
from .location import LocationSource

if TYPE_CHECKING:
    from .rover import Rover


SAMPLE_DENSITY = 0.08
OBSTACLE_DENSITY = 0.12


def _is_positive_int(value: Any) -> bool:
    return is_int(value) and value > 0


class Plateau:
    """Bounded grid holding obstacles, samples and the rovers placed on it.

    The plateau is the single source of truth for whether a cell is out of
    bounds, blocked or holds a sample. Rovers keep a reference to it but
    never own its state.

    Parameters
    ----------
    width : int
        Number of columns; valid x values are 0..width-1.
    height : int
        Number of rows; valid y values are 0..height-1.
    sample_density : float
        Fraction of cells seeded with samples by default.
    obstacle_density : float
        Fraction of cells seeded with obstacles by default.
    """

    def __init__(
        self,
        width: int,
        height: int,
        sample_density: float = SAMPLE_DENSITY,
        obstacle_density: float = OBSTACLE_DENSITY,
    ) -> None:
        if not (_is_positive_int(width) and _is_positive_int(height)):
            raise ValidationError(
                INVALID_PLATEAU, context={"width": repr(width), "height": repr(height)}
            )
        self.width = width
        self.height = height
        self.sample_count = max(1, int(round(width * height * sample_density)))
        self.obstacle_count = max(1, int(round(width * height * obstacle_density)))

        self._obstacles: Set[Coordinate] = set()
        self._samples: Set[Coordinate] = set()
        self._rovers: List["Rover"] = []

    # ------------------------------------------------------------------
    # Seeding
    # ------------------------------------------------------------------
    def seed_samples(self, source: LocationSource, count: Optional[int] = None) -> None:
        """Place samples at the cells returned by ``source``."""
        n = self.sample_count if count is None else count
        self._samples.update(self._validated_batch(source.generate(n)))

    def seed_obstacles(self, source: LocationSource, count: Optional[int] = None) -> None:
        """Place obstacles at the cells returned by ``source``."""
        n = self.obstacle_count if count is None else count
        self._obstacles.update(self._validated_batch(source.generate(n)))

    def _validated_batch(self, locations: Sequence[CoordLike]) -> List[Coordinate]:
        """Check a whole batch before any of it is stored."""
        batch: List[Coordinate] = []
        for raw in locations:
            try:
                coord = Coordinate.of(raw)
            except ValidationError:
                raise ValidationError(INVALID_LOCATION, context={"location": repr(raw)}) from None
            if (
                not self.is_within_bounds(coord)
                or coord in batch
                or coord in self._samples
                or coord in self._obstacles
            ):
                raise ValidationError(INVALID_LOCATION, context={"location": coord.as_tuple()})
            batch.append(coord)
        return batch

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def is_within_bounds(self, coord: CoordLike) -> bool:
        return within_bounds(Coordinate.of(coord), self.width, self.height)

    def is_obstacle(self, coord: CoordLike) -> bool:
        return Coordinate.of(coord) in self._obstacles

    def is_sample(self, coord: CoordLike) -> bool:
        return Coordinate.of(coord) in self._samples

    def is_occupied_by_rover(self, coord: CoordLike) -> bool:
        target = Coordinate.of(coord)
        return any(rover.get_position() == target for rover in self._rovers)

    def is_blocked(self, coord: CoordLike) -> bool:
        """True if a rover may not stand on ``coord``: obstacle or registered rover."""
        return self.is_obstacle(coord) or self.is_occupied_by_rover(coord)

    @property
    def obstacles(self) -> FrozenSet[Coordinate]:
        return frozenset(self._obstacles)

    @property
    def samples(self) -> FrozenSet[Coordinate]:
        return frozenset(self._samples)

    @property
    def rovers(self) -> Tuple["Rover", ...]:
        return tuple(self._rovers)

    # ------------------------------------------------------------------
    # Mutation during a run
    # ------------------------------------------------------------------
    def collect_sample(self, coord: CoordLike) -> bool:
        """Remove the sample at ``coord``. Returns False if there was none."""
        target = Coordinate.of(coord)
        if target not in self._samples:
            return False
        self._samples.remove(target)
        return True

    def register_rover(self, rover: "Rover") -> None:
        """Add ``rover`` to the occupant list. Its position is not re-validated."""
        self._rovers.append(rover)

    # ------------------------------------------------------------------
    # Utility
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        """Serialize the plateau layout for telemetry."""
        return {
            "width": self.width,
            "height": self.height,
            "obstacles": sorted(c.as_tuple() for c in self._obstacles),
            "samples": sorted(c.as_tuple() for c in self._samples),
            "rovers": [rover.to_dict() for rover in self._rovers],
        }
