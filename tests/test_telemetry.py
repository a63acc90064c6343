from __future__ import annotations

import json
from pathlib import Path

from telemetry.logger import TelemetryLogger


def test_logger_writes_one_json_object_per_line(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "run.jsonl"
    logger = TelemetryLogger(str(path))
    logger.log_step({"rover": 0, "token": "M", "x": 1, "y": 2})
    logger.log_event("rover_done", rover=0)
    logger.close()
    logger.log_event("ignored_after_close")

    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    step, done = (json.loads(line) for line in lines)
    assert step["event"] == "step" and step["x"] == 1
    assert done == {"ts": done["ts"], "event": "rover_done", "rover": 0}


def test_logger_appends(tmp_path: Path) -> None:
    path = tmp_path / "run.jsonl"
    with TelemetryLogger(str(path)) as logger:
        logger.log_event("a")
    with TelemetryLogger(str(path)) as logger:
        logger.log_event("b")
    events = [json.loads(line)["event"] for line in path.read_text(encoding="utf-8").splitlines()]
    assert events == ["a", "b"]
