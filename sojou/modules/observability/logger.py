"""
Per-trip event journal: one JSON object per line in <LOGS_DIR>/<session_id>.jsonl.

Usage:
    from sojou.modules.observability.logger import StructuredLogger

    journal = StructuredLogger()
    journal.log("trip_abc123", "USER_COMMAND", {"command": "swipe_add", "args": ["louvre"]})
    events = journal.read("trip_abc123")

Every write opens the session file in append mode and closes it again, so a
server holding thousands of trips keeps no descriptors open between events.
SOJOU_STRUCTURED_LOGGING=false turns log() into a no-op; read() still works.
"""

from __future__ import annotations

import json
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from sojou import config


class StructuredLogger:
    """Thread-safe append-only JSONL journal keyed by trip session id."""

    def __init__(self, logs_dir: Path | str | None = None, enabled: Optional[bool] = None) -> None:
        self._logs_dir = Path(logs_dir) if logs_dir else Path(config.LOGS_DIR)
        self.enabled = config.STRUCTURED_LOGGING if enabled is None else enabled
        self._lock = threading.Lock()

    @property
    def logs_dir(self) -> Path:
        return self._logs_dir

    def path_for(self, session_id: str) -> Path:
        return self._logs_dir / f"{session_id}.jsonl"

    def log(self, session_id: str, event_type: str, payload: dict[str, Any]) -> None:
        """Append one event to the session's journal."""
        if not self.enabled:
            return
        line = json.dumps(
            {
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "session_id": session_id,
                "event_type": event_type,
                "payload": payload,
            },
            default=str,
            ensure_ascii=False,
        )
        with self._lock:
            self._logs_dir.mkdir(parents=True, exist_ok=True)
            with open(self.path_for(session_id), "a", encoding="utf-8") as fh:
                fh.write(line + "\n")

    def read(self, session_id: str) -> list[dict[str, Any]]:
        """All events recorded for *session_id*, oldest first. Blank lines are skipped."""
        path = self.path_for(session_id)
        if not path.exists():
            raise FileNotFoundError(f"Log file not found: {path}")
        with self._lock, open(path, "r", encoding="utf-8") as fh:
            return [json.loads(line) for line in fh if line.strip()]
