"""
modules/session/trip_session.py
---------------------------------
TripSession: server-side selection store for one user's trip.

Holds what the swipe screen produces (added / saved / passed activity ids)
plus the trip configuration, and keeps the itinerary in sync with the
selection by rebuilding it after every change that affects it.

Lifecycle:
    session = TripSession(catalog)
    session.swipe_add("louvre")          # rebuilds the itinerary
    session.swipe_pass("catacombs")      # deck only, no rebuild
    session.set_days_count(4)            # clamped to [2, 4], rebuilds
    session.remove_from_trip("louvre")   # rebuilds

    session.itinerary.days, session.itinerary.overflow

Every mutating call is recorded to the structured log as USER_COMMAND and
STATE_MUTATION events so the session can be rebuilt with replay_session().
Calls on one session must be serialized by the caller; separate sessions
share nothing.
"""

from __future__ import annotations
import hashlib
import json
import time as _time_mod
import uuid
from typing import Any, Iterable, Optional

from sojou import config
from sojou.schemas.activity import Activity, Category
from sojou.schemas.itinerary import ItineraryResult
from sojou.modules.planning import build_itinerary
from sojou.modules.tool_usage.activity_catalog import ActivityCatalog
from sojou.modules.observability.logger import StructuredLogger

_default_logger = StructuredLogger()

MIN_BUDGET_TIER: int = 0
MAX_BUDGET_TIER: int = 3

# Commands replay_session() is allowed to re-issue.
REPLAYABLE_COMMANDS = frozenset({
    "swipe_add", "swipe_save", "swipe_pass", "remove_from_trip",
    "set_days_count", "set_budget_tier", "toggle_category",
    "reset_swipes", "regenerate",
})


class UnknownActivityError(KeyError):
    """The activity id is not in this session's catalog."""


def clamp_days_count(n: int) -> int:
    return max(config.MIN_DAYS_COUNT, min(config.MAX_DAYS_COUNT, int(n)))


def clamp_budget_tier(t: int) -> int:
    return max(MIN_BUDGET_TIER, min(MAX_BUDGET_TIER, int(t)))


class TripSession:
    """Selection state and current itinerary for one trip."""

    def __init__(
        self,
        catalog: ActivityCatalog,
        session_id: Optional[str] = None,
        days_count: int = config.DEFAULT_DAYS_COUNT,
        budget_tier: int = config.DEFAULT_BUDGET_TIER,
        categories: Optional[Iterable[Category | str]] = None,
        logger: Optional[StructuredLogger] = None,
    ) -> None:
        self.catalog     = catalog
        self.session_id  = session_id or f"trip_{uuid.uuid4().hex[:12]}"
        self.city        = catalog.city
        self.days_count  = clamp_days_count(days_count)
        self.budget_tier = clamp_budget_tier(budget_tier)
        self.categories: set[Category] = (
            {Category(c) for c in categories} if categories is not None else set(Category)
        )

        self.added_ids:  set[str] = set()
        self.saved_ids:  set[str] = set()
        self.passed_ids: set[str] = set()
        self.itinerary = ItineraryResult()

        self._logger = logger or _default_logger
        self._logger.log(self.session_id, "SESSION_START", {"config": self._config_dict()})
        self._rebuild()

    # ── Swipes ────────────────────────────────────────────────────────────────

    def swipe_add(self, activity_id: str) -> None:
        self._require(activity_id)
        with self._mutation("swipe_add", activity_id):
            self.added_ids.add(activity_id)
            self._rebuild()

    def swipe_save(self, activity_id: str) -> None:
        self._require(activity_id)
        with self._mutation("swipe_save", activity_id):
            self.saved_ids.add(activity_id)

    def swipe_pass(self, activity_id: str) -> None:
        self._require(activity_id)
        with self._mutation("swipe_pass", activity_id):
            self.passed_ids.add(activity_id)

    def remove_from_trip(self, activity_id: str) -> None:
        """Drop an activity from the trip (no-op if it was not added)."""
        self._require(activity_id)
        with self._mutation("remove_from_trip", activity_id):
            self.added_ids.discard(activity_id)
            self._rebuild()

    def reset_swipes(self) -> None:
        with self._mutation("reset_swipes"):
            self.added_ids.clear()
            self.saved_ids.clear()
            self.passed_ids.clear()
            self._rebuild()

    # ── Configuration ─────────────────────────────────────────────────────────

    def set_days_count(self, n: int) -> None:
        with self._mutation("set_days_count", n):
            self.days_count = clamp_days_count(n)
            self._rebuild()

    def set_budget_tier(self, tier: int) -> None:
        with self._mutation("set_budget_tier", tier):
            self.budget_tier = clamp_budget_tier(tier)

    def toggle_category(self, category: Category | str) -> None:
        cat = Category(category)
        with self._mutation("toggle_category", cat.value):
            if cat in self.categories:
                self.categories.discard(cat)
            else:
                self.categories.add(cat)

    # ── Derived views ─────────────────────────────────────────────────────────

    def selected_activities(self) -> list[Activity]:
        """Added activities in catalog order (the builder's input order)."""
        return [a for a in self.catalog if a.id in self.added_ids]

    def remaining_deck(self) -> list[Activity]:
        """Cards still to swipe: unswiped, enabled category, within budget."""
        swiped = self.added_ids | self.saved_ids | self.passed_ids
        return [
            a for a in self.catalog.filter(self.categories, self.budget_tier)
            if a.id not in swiped
        ]

    def regenerate(self) -> ItineraryResult:
        """Rebuild the itinerary from the current selection."""
        with self._mutation("regenerate"):
            self._rebuild()
        return self.itinerary

    # ── Snapshot / hashing ────────────────────────────────────────────────────

    def state_hash(self) -> str:
        """Deterministic SHA-256 of the configuration and id sets."""
        raw = json.dumps(self._state_dict(), sort_keys=True, default=str)
        return hashlib.sha256(raw.encode()).hexdigest()

    def snapshot(self) -> dict[str, Any]:
        state = self._state_dict()
        return {
            "session_id": self.session_id,
            "config":     state["config"],
            "added_ids":  state["added_ids"],
            "saved_ids":  state["saved_ids"],
            "passed_ids": state["passed_ids"],
            "itinerary":  self.itinerary.to_dict(),
            "state_hash": self.state_hash(),
        }

    # ── Internals ─────────────────────────────────────────────────────────────

    def _require(self, activity_id: str) -> None:
        if activity_id not in self.catalog:
            raise UnknownActivityError(activity_id)

    def _rebuild(self) -> None:
        t0 = _time_mod.perf_counter()
        selected = self.selected_activities()
        self.itinerary = build_itinerary(selected, self.days_count)
        self._logger.log(self.session_id, "PERFORMANCE", {
            "component":   "build_itinerary",
            "duration_ms": round((_time_mod.perf_counter() - t0) * 1000, 3),
            "selected":    len(selected),
            "days":        self.days_count,
            "overflow":    len(self.itinerary.overflow),
        })

    def _config_dict(self) -> dict[str, Any]:
        return {
            "city":        self.city,
            "days_count":  self.days_count,
            "budget_tier": self.budget_tier,
            "categories":  sorted(c.value for c in self.categories),
        }

    def _state_dict(self) -> dict[str, Any]:
        return {
            "config":     self._config_dict(),
            "added_ids":  sorted(self.added_ids),
            "saved_ids":  sorted(self.saved_ids),
            "passed_ids": sorted(self.passed_ids),
        }

    def _mutation(self, command: str, *args: Any) -> "_Mutation":
        return _Mutation(self, command, args)


class _Mutation:
    """Context manager logging USER_COMMAND + STATE_MUTATION around a change."""

    def __init__(self, session: TripSession, command: str, args: tuple) -> None:
        self.session = session
        self.command = command
        self.args = list(args)
        self.before_hash = ""

    def __enter__(self) -> "_Mutation":
        self.before_hash = self.session.state_hash()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            return
        after_hash = self.session.state_hash()
        log = self.session._logger
        sid = self.session.session_id
        log.log(sid, "USER_COMMAND", {
            "command":    self.command,
            "args":       self.args,
            "after_hash": after_hash,
        })
        log.log(sid, "STATE_MUTATION", {
            "before_hash": self.before_hash,
            "after_hash":  after_hash,
            "action":      self.command,
        })
