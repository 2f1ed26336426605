"""
modules/planning/itinerary_builder.py
---------------------------------------
Greedy multi-day itinerary builder.

  1. assign_anchors    → one anchor neighborhood per day (most frequent first)
  2. rank_by_priority  → processing order
  3. for each activity: pick_best_day → place_into_day → day or overflow

Single pass, no backtracking: an activity placed early is never moved to make
room for a later one. Same input list and day count always give the same
result.

The builder is total. A non-positive day count yields no days and every
activity in overflow; an activity longer than every block always overflows.
It performs no I/O and keeps no state between calls.
"""

from __future__ import annotations
import logging
from typing import Sequence

from sojou.schemas.activity import Activity
from sojou.schemas.itinerary import Day, ItineraryResult
from sojou.modules.planning.anchor_assigner import anchor_for_day, assign_anchors
from sojou.modules.planning.block_placer import place_into_day
from sojou.modules.planning.day_scorer import pick_best_day
from sojou.modules.planning.priority_ranker import rank_by_priority

logger = logging.getLogger(__name__)


def build_itinerary(selected: Sequence[Activity], days_count: int) -> ItineraryResult:
    """
    Schedule *selected* over *days_count* days.

    Returns an ItineraryResult whose days list has exactly max(0, days_count)
    entries and whose overflow holds, in priority order, every activity that
    could not be placed.
    """
    n_days = max(0, days_count)
    anchors = assign_anchors(selected, n_days)
    days = [Day(day_index=i, anchor_neighborhood=anchor_for_day(anchors, i)) for i in range(n_days)]

    result = ItineraryResult(days=days)
    for activity in rank_by_priority(selected):
        day = pick_best_day(days, activity)
        if day is None or not place_into_day(day, activity):
            result.overflow.append(activity)

    if result.overflow:
        logger.debug(
            "%d of %d activities overflowed across %d day(s): %s",
            len(result.overflow), len(selected), n_days,
            [a.id for a in result.overflow],
        )
    return result
