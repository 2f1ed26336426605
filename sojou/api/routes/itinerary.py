"""
api/routes/itinerary.py
------------------------
POST /v1/itinerary/build

Stateless itinerary build: the client sends its selected activities and a
day count, the server answers with days + overflow. Nothing is stored.
"""

from __future__ import annotations

import time as _time_mod

from fastapi import APIRouter

from sojou.api.models import BuildRequest
from sojou.modules.planning import build_itinerary
from sojou.modules.observability.logger import StructuredLogger

router = APIRouter()

_perf_logger = StructuredLogger()


@router.post("/build", summary="Build a multi-day itinerary from selected activities")
def build(req: BuildRequest) -> dict:
    """
    Runs the greedy builder once:
      1. Anchor neighborhoods per day
      2. Priority order
      3. Best day per activity, first preferred block with room
    Activities that fit nowhere come back in ``overflow``.
    """
    t0 = _time_mod.perf_counter()
    activities = [a.to_activity() for a in req.activities]
    result = build_itinerary(activities, req.days_count)
    _perf_logger.log("default", "PERFORMANCE", {
        "component":   "api.itinerary.build",
        "duration_ms": round((_time_mod.perf_counter() - t0) * 1000, 3),
        "selected":    len(activities),
        "days":        req.days_count,
        "overflow":    len(result.overflow),
    })
    return result.to_dict()
