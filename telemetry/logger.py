from __future__ import annotations

import json
import os
import time
from typing import Any, Dict, Optional, TextIO


class TelemetryLogger:
    """Structured JSONL logger for mission telemetry.

    Append-only; every record is written as one JSON object per line and
    flushed immediately so a halted run still leaves a complete log.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        self._fp: Optional[TextIO] = open(self.path, "a", encoding="utf-8")

    def log_step(self, record: Dict[str, Any]) -> None:
        """Append a single rover step record."""
        self._write({"event": "step", **record})

    def log_event(self, event: str, **fields: Any) -> None:
        """Append a named mission event with arbitrary fields."""
        self._write({"event": event, **fields})

    def _write(self, record: Dict[str, Any]) -> None:
        if self._fp is None:
            return
        record = {"ts": round(time.time(), 3), **record}
        self._fp.write(json.dumps(record, separators=(",", ":")) + "\n")
        self._fp.flush()

    def close(self) -> None:
        if self._fp is not None:
            self._fp.close()
            self._fp = None

    def __enter__(self) -> "TelemetryLogger":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
