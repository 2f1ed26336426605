"""
api/routes/trips.py
-------------------
Server-side trip sessions over the configured activity catalog.

  POST   /v1/trips                                   create a session
  GET    /v1/trips/{session_id}                      snapshot (config, ids, itinerary)
  GET    /v1/trips/{session_id}/deck                 cards left to swipe
  POST   /v1/trips/{session_id}/swipe                add | save | pass
  DELETE /v1/trips/{session_id}/activities/{id}      remove from trip
  PUT    /v1/trips/{session_id}/config               days / budget / categories
  POST   /v1/trips/{session_id}/regenerate           rebuild itinerary

Sessions live in an in-process LRU dict capped at config.MAX_TRIP_SESSIONS;
a restart or an eviction forgets them (the JSONL log can rebuild one with
`sojou replay`). Every session read and write happens under the store lock.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from typing import Optional

from fastapi import APIRouter, HTTPException

from sojou import config
from sojou.api.models import CreateTripRequest, SwipeRequest, TripConfigUpdate
from sojou.modules.session import TripSession, UnknownActivityError
from sojou.modules.tool_usage.activity_catalog import ActivityCatalog, CatalogError

logger = logging.getLogger(__name__)

router = APIRouter()

# ── In-memory session store ────────────────────────────────────────────────────
# key: session_id, value: TripSession; most recently used last
_store: "OrderedDict[str, TripSession]" = OrderedDict()
# One lock for the store; session calls are serialized through it as well.
_lock = threading.Lock()

_catalog: Optional[ActivityCatalog] = None


def get_catalog() -> ActivityCatalog:
    """Load config.CATALOG_PATH on first use; 503 if it cannot be read."""
    global _catalog
    if _catalog is None:
        try:
            _catalog = ActivityCatalog.load(config.CATALOG_PATH)
        except CatalogError as exc:
            raise HTTPException(status_code=503, detail=str(exc)) from exc
    return _catalog


def set_catalog(catalog: Optional[ActivityCatalog]) -> None:
    """Swap the catalog used for new sessions (None reloads from config)."""
    global _catalog
    _catalog = catalog


def _put_session(session: TripSession) -> None:
    """Store *session*, evicting the least recently used ones over the cap. Caller holds _lock."""
    _store[session.session_id] = session
    while len(_store) > max(1, config.MAX_TRIP_SESSIONS):
        evicted, _ = _store.popitem(last=False)
        logger.info("trip store full; evicted %s", evicted)


def get_session(session_id: str) -> TripSession:
    """Retrieve a stored session or raise 404. Caller holds _lock."""
    session = _store.get(session_id)
    if session is None:
        raise HTTPException(
            status_code=404,
            detail=f"Trip '{session_id}' not found. Call POST /v1/trips first.",
        )
    _store.move_to_end(session_id)
    return session


def _activity_404(exc: UnknownActivityError) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Activity {exc.args[0]!r} is not in the catalog")


# ── Endpoints ──────────────────────────────────────────────────────────────────

@router.post("", summary="Start a trip session", status_code=201)
def create_trip(req: Optional[CreateTripRequest] = None) -> dict:
    req = req or CreateTripRequest()
    session = TripSession(
        get_catalog(),
        days_count=req.days_count if req.days_count is not None else config.DEFAULT_DAYS_COUNT,
        budget_tier=req.budget_tier if req.budget_tier is not None else config.DEFAULT_BUDGET_TIER,
        categories=req.categories,
    )
    with _lock:
        _put_session(session)
        return session.snapshot()


@router.get("/{session_id}", summary="Trip snapshot")
def get_trip(session_id: str) -> dict:
    with _lock:
        return get_session(session_id).snapshot()


@router.get("/{session_id}/deck", summary="Activities left to swipe")
def get_deck(session_id: str) -> dict:
    with _lock:
        deck = get_session(session_id).remaining_deck()
    return {"session_id": session_id, "count": len(deck), "activities": [a.to_dict() for a in deck]}


@router.post("/{session_id}/swipe", summary="Swipe a card: add, save or pass")
def swipe(session_id: str, req: SwipeRequest) -> dict:
    with _lock:
        session = get_session(session_id)
        handler = {
            "add":  session.swipe_add,
            "save": session.swipe_save,
            "pass": session.swipe_pass,
        }[req.action]
        try:
            handler(req.activity_id)
        except UnknownActivityError as exc:
            raise _activity_404(exc) from exc
        return session.snapshot()


@router.delete("/{session_id}/activities/{activity_id}", summary="Remove an activity from the trip")
def remove_activity(session_id: str, activity_id: str) -> dict:
    with _lock:
        session = get_session(session_id)
        try:
            session.remove_from_trip(activity_id)
        except UnknownActivityError as exc:
            raise _activity_404(exc) from exc
        return session.snapshot()


@router.put("/{session_id}/config", summary="Update days, budget tier or categories")
def update_config(session_id: str, req: TripConfigUpdate) -> dict:
    with _lock:
        session = get_session(session_id)
        if req.budget_tier is not None:
            session.set_budget_tier(req.budget_tier)
        if req.categories is not None:
            wanted = set(req.categories)
            for cat in sorted(wanted ^ session.categories, key=lambda c: c.value):
                session.toggle_category(cat)
        if req.days_count is not None:
            session.set_days_count(req.days_count)
        return session.snapshot()


@router.post("/{session_id}/regenerate", summary="Rebuild the itinerary")
def regenerate(session_id: str) -> dict:
    with _lock:
        session = get_session(session_id)
        session.regenerate()
        return session.snapshot()
