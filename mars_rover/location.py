"""
Location sources used to seed a plateau with samples and obstacles.

The plateau never draws random numbers itself; it asks an injected
LocationSource for coordinates so that seeding can be replayed from a fixed
layout or a seeded generator.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Sequence, Set

import numpy as np

from .geometry import Coordinate, CoordLike


class LocationSource(ABC):
    """Abstract provider of plateau coordinates."""

    @abstractmethod
    def generate(self, count: int) -> List[CoordLike]:
        """Return up to ``count`` coordinates for the next seeding call."""


class RandomLocation(LocationSource):
    """Draw distinct free cells uniformly at random.

    Cells handed out by earlier calls and ``reserved`` cells (typically the
    rovers' starting positions) are never returned. When fewer free cells
    remain than requested, all of them are returned.
    """

    def __init__(
        self,
        width: int,
        height: int,
        reserved: Iterable[Sequence[int]] = (),
        seed: Optional[int] = None,
    ) -> None:
        self.width = int(width)
        self.height = int(height)
        self.rng = np.random.default_rng(seed)
        self._taken: Set[Coordinate] = {Coordinate.of(c) for c in reserved}

    def generate(self, count: int) -> List[Coordinate]:
        free = [
            Coordinate(x, y)
            for y in range(self.height)
            for x in range(self.width)
            if Coordinate(x, y) not in self._taken
        ]
        n = min(max(int(count), 0), len(free))
        if n == 0:
            return []
        picks = self.rng.choice(len(free), size=n, replace=False)
        chosen = [free[int(i)] for i in picks]
        self._taken.update(chosen)
        return chosen


class FixedLocations(LocationSource):
    """Replay a fixed layout: samples on the first call, obstacles on the second.

    Later calls return nothing. ``count`` is ignored so that a stored layout
    is reproduced exactly. Entries are passed through unchanged; the plateau
    rejects anything that is not an in-bounds integer pair.
    """

    def __init__(
        self,
        samples: Iterable[CoordLike] = (),
        obstacles: Iterable[CoordLike] = (),
    ) -> None:
        self._batches: List[List[CoordLike]] = [list(samples), list(obstacles)]

    def generate(self, count: int) -> List[CoordLike]:
        if not self._batches:
            return []
        return list(self._batches.pop(0))
