from __future__ import annotations

from pathlib import Path

import pytest

from mars_rover.errors import (
    EMPTY_MISSION,
    INVALID_DIRECTION,
    INVALID_PLATEAU_LINE,
    INVALID_ROVER_LINE,
    MISSING_FILE,
    MISSING_MOVEMENT,
    ValidationError,
)
from mars_rover.geometry import Direction
from mars_rover.instructions import Instruction, load_mission, parse_mission

MISSIONS_DIR = Path(__file__).resolve().parent.parent / "missions"


def test_parse_two_rovers() -> None:
    mission = parse_mission("5 5\n1 2 N\nLMLMLMLMM\n3 3 E\nMMRMMRMRRM\n")
    assert (mission.width, mission.height) == (5, 5)
    assert mission.instructions == (
        Instruction(1, 2, Direction.N, "LMLMLMLMM"),
        Instruction(3, 3, Direction.E, "MMRMMRMRRM"),
    )
    assert mission.starting_positions() == [(1, 2), (3, 3)]


def test_blank_lines_and_padding_ignored() -> None:
    mission = parse_mission("\n  4 6  \n\n0 0 S\n  MRM \n\n")
    assert (mission.width, mission.height) == (4, 6)
    assert mission.instructions[0] == Instruction(0, 0, Direction.S, "MRM")


def test_movement_tokens_left_for_rover() -> None:
    mission = parse_mission("5 5\n1 1 N\nMXQ\n")
    assert mission.instructions[0].movement == "MXQ"


@pytest.mark.parametrize(
    "text, message",
    [
        ("", EMPTY_MISSION),
        ("\n  \n", EMPTY_MISSION),
        ("5\n1 2 N\nM\n", INVALID_PLATEAU_LINE),
        ("5 five\n1 2 N\nM\n", INVALID_PLATEAU_LINE),
        ("5 5 5\n1 2 N\nM\n", INVALID_PLATEAU_LINE),
        ("5 5\n1 2\nM\n", INVALID_ROVER_LINE),
        ("5 5\nx 2 N\nM\n", INVALID_ROVER_LINE),
        ("5 5\n1 2 Q\nM\n", INVALID_DIRECTION),
        ("5 5\n1 2 N\n", MISSING_MOVEMENT),
        ("5 5\n1 2 N\nM\n3 3 E\n", MISSING_MOVEMENT),
    ],
)
def test_malformed_mission_rejected(text: str, message: str) -> None:
    with pytest.raises(ValidationError) as info:
        parse_mission(text)
    assert str(info.value) == message


def test_plateau_size_not_validated_by_parser() -> None:
    mission = parse_mission("0 -2\n")
    assert (mission.width, mission.height) == (0, -2)
    assert mission.instructions == ()


def test_load_mission_from_file(tmp_path: Path) -> None:
    path = tmp_path / "mission.txt"
    path.write_text("3 3\n0 0 E\nMM\n", encoding="utf-8")
    mission = load_mission(str(path))
    assert mission.instructions == (Instruction(0, 0, Direction.E, "MM"),)


def test_load_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ValidationError) as info:
        load_mission(str(tmp_path / "nope.txt"))
    assert str(info.value) == MISSING_FILE


def test_bundled_missions_parse() -> None:
    one = load_mission(str(MISSIONS_DIR / "input-normal-1rovers.txt"))
    two = load_mission(str(MISSIONS_DIR / "input-normal-2rovers.txt"))
    collision = load_mission(str(MISSIONS_DIR / "input-rovers-collision.txt"))
    assert len(one.instructions) == 1
    assert (two.width, two.height) == (6, 6)
    assert len(collision.instructions) == 2
