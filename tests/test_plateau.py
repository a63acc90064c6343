from __future__ import annotations

from typing import List, Sequence, Tuple

import pytest

from mars_rover.errors import INVALID_LOCATION, INVALID_PLATEAU, ValidationError
from mars_rover.geometry import Coordinate
from mars_rover.location import FixedLocations, LocationSource
from mars_rover.plateau import Plateau
from mars_rover.rover import Rover


class StaticSource(LocationSource):
    """Returns the same points on every call, whatever the count."""

    def __init__(self, points: Sequence[Tuple[int, int]]) -> None:
        self.points = list(points)
        self.requested: List[int] = []

    def generate(self, count: int) -> List[Coordinate]:
        self.requested.append(count)
        return [Coordinate.of(p) for p in self.points]


@pytest.mark.parametrize("width, height", [(1, 1), (5, 5), (3, 8)])
def test_size_reports_dimensions(width: int, height: int) -> None:
    assert Plateau(width, height).size() == (width, height)


@pytest.mark.parametrize("width, height", [(0, 5), (5, 0), (-1, 5), (5, -3), (5.0, 5), (True, 5), ("5", 5)])
def test_invalid_dimensions_rejected(width: object, height: object) -> None:
    with pytest.raises(ValidationError, match=INVALID_PLATEAU):
        Plateau(width, height)  # type: ignore[arg-type]


def test_default_seed_counts_scale_with_area() -> None:
    plateau = Plateau(5, 5)
    assert plateau.sample_count == 2
    assert plateau.obstacle_count == 3
    assert Plateau(1, 1).sample_count == 1


def test_seeding_uses_default_counts() -> None:
    plateau = Plateau(5, 5)
    samples = StaticSource([(1, 1), (2, 2)])
    obstacles = StaticSource([(0, 4), (4, 0), (3, 3)])
    plateau.seed_samples(samples)
    plateau.seed_obstacles(obstacles)

    assert samples.requested == [2]
    assert obstacles.requested == [3]
    assert plateau.is_sample((1, 1)) and plateau.is_sample(Coordinate(2, 2))
    assert plateau.is_obstacle((3, 3))
    assert not plateau.is_obstacle((1, 1))
    assert not plateau.is_sample((3, 3))


def test_seeding_rejects_out_of_bounds_location() -> None:
    plateau = Plateau(5, 5)
    with pytest.raises(ValidationError, match=INVALID_LOCATION):
        plateau.seed_samples(StaticSource([(1, 1), (5, 2)]))
    assert plateau.samples == frozenset()


def test_seeding_rejects_duplicates_within_batch() -> None:
    plateau = Plateau(5, 5)
    with pytest.raises(ValidationError, match=INVALID_LOCATION):
        plateau.seed_obstacles(StaticSource([(2, 2), (2, 2)]))
    assert plateau.obstacles == frozenset()


def test_obstacles_cannot_land_on_samples() -> None:
    plateau = Plateau(5, 5)
    plateau.seed_samples(StaticSource([(1, 1)]))
    with pytest.raises(ValidationError, match=INVALID_LOCATION):
        plateau.seed_obstacles(StaticSource([(3, 3), (1, 1)]))
    assert plateau.obstacles == frozenset()
    assert plateau.is_sample((1, 1))


def test_seeding_twice_with_same_points_fails() -> None:
    plateau = Plateau(5, 5)
    source = StaticSource([(1, 1), (2, 2)])
    plateau.seed_samples(source)
    with pytest.raises(ValidationError, match=INVALID_LOCATION):
        plateau.seed_samples(source)


def test_collect_sample_removes_it_once() -> None:
    plateau = Plateau(5, 5)
    plateau.seed_samples(FixedLocations(samples=[(2, 3)]))
    assert plateau.collect_sample((2, 3)) is True
    assert plateau.collect_sample((2, 3)) is False
    assert not plateau.is_sample((2, 3))


def test_registered_rover_occupies_its_cell() -> None:
    plateau = Plateau(5, 5)
    rover = Rover(1, 2, "N", plateau)
    assert not plateau.is_occupied_by_rover((1, 2))

    plateau.register_rover(rover)
    assert plateau.is_occupied_by_rover((1, 2))
    assert plateau.is_blocked((1, 2))
    assert plateau.rovers == (rover,)


def test_to_dict_snapshot() -> None:
    plateau = Plateau(4, 3)
    plateau.seed_samples(FixedLocations(samples=[(0, 0)], obstacles=[(3, 2), (1, 1)]))
    data = plateau.to_dict()
    assert data["width"] == 4 and data["height"] == 3
    assert data["samples"] == [(0, 0)]
    assert data["obstacles"] == []
    assert data["rovers"] == []


@pytest.mark.parametrize("bad", [(-0.5, 0), Coordinate(1.5, 2), ("a", 1), (True, 0), (1,), None])
def test_seeding_rejects_non_integer_locations(bad: object) -> None:
    plateau = Plateau(5, 5)
    with pytest.raises(ValidationError, match=INVALID_LOCATION):
        plateau.seed_samples(FixedLocations(samples=[(1, 1), bad]))  # type: ignore[list-item]
    assert plateau.samples == frozenset()
    assert not plateau.is_sample((0, 0))
