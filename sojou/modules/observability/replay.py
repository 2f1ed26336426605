"""
modules/observability/replay.py
---------------------------------
Deterministic replay of a recorded trip session from its JSONL log.

Usage:
    sojou replay <session_id> --catalog data/activities.paris.json

Reads <LOGS_DIR>/<session_id>.jsonl, rebuilds a TripSession from the
SESSION_START config, re-issues every USER_COMMAND in order and checks the
resulting state hash against the last recorded after_hash.  A mismatch
raises ReplayDivergenceError.

Replay never writes to the log it is reading.
"""

from __future__ import annotations

import logging
from pathlib import Path

from sojou import config
from sojou.modules.observability.logger import StructuredLogger
from sojou.modules.session.trip_session import REPLAYABLE_COMMANDS, TripSession
from sojou.modules.tool_usage.activity_catalog import ActivityCatalog

logger = logging.getLogger(__name__)


class ReplayDivergenceError(RuntimeError):
    """Replayed state does not hash to what the log recorded."""


def read_log(session_id: str, logs_dir: Path | str | None = None) -> list[dict]:
    return StructuredLogger(logs_dir, enabled=False).read(session_id)


def replay_session(
    session_id: str,
    catalog: ActivityCatalog,
    *,
    logs_dir: Path | str | None = None,
) -> TripSession:
    """Rebuild and verify a session; returns the replayed TripSession."""
    records = read_log(session_id, logs_dir)

    start = next((r for r in records if r.get("event_type") == "SESSION_START"), None)
    cfg = start["payload"].get("config", {}) if start else {}
    session = TripSession(
        catalog,
        session_id=session_id,
        days_count=cfg.get("days_count", config.DEFAULT_DAYS_COUNT),
        budget_tier=cfg.get("budget_tier", config.DEFAULT_BUDGET_TIER),
        categories=cfg.get("categories"),
        logger=StructuredLogger(enabled=False),
    )

    last_logged_hash: str | None = None
    step = 0
    for rec in records:
        if rec.get("event_type") != "USER_COMMAND":
            continue
        payload = rec.get("payload", {})
        command = payload.get("command", "")
        if command not in REPLAYABLE_COMMANDS:
            logger.warning("replay %s: skipping unknown command %r", session_id, command)
            continue
        step += 1
        getattr(session, command)(*payload.get("args", []))
        last_logged_hash = payload.get("after_hash")
        logger.debug("replay %s [%d] %s %r", session_id, step, command, payload.get("args"))

    if last_logged_hash is not None:
        replayed = session.state_hash()
        if replayed != last_logged_hash:
            raise ReplayDivergenceError(
                f"REPLAY_DIVERGENCE: final replayed hash {replayed[:16]} "
                f"!= last logged hash {last_logged_hash[:16]}"
            )
    logger.info("replayed %d command(s) for %s", step, session_id)
    return session
