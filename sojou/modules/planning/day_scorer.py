"""
modules/planning/day_scorer.py
--------------------------------
Chooses which day an activity goes to.

Score of a day for an activity (additive):

  +3    day's anchor neighborhood == activity's neighborhood
  +1    day already holds an activity of the same category
  -100  no preferred block on the day has room for the activity
  +max(0, 10 - used_minutes / 60)   load balance, favours emptier days

The -100 is a penalty, not a filter: a day that cannot take the activity can
still win if every other day is worse, and then placement fails and the
activity overflows.

The highest score wins. Ties go to the lowest day index; a later day only
replaces the current best on a strictly greater score.
"""

from __future__ import annotations
import math
from typing import Optional, Sequence

from sojou.schemas.activity import Activity
from sojou.schemas.itinerary import Day
from sojou.modules.planning.block_placer import preferred_blocks

ANCHOR_MATCH_BONUS: float    = 3.0
SAME_CATEGORY_BONUS: float   = 1.0
NO_CAPACITY_PENALTY: float   = -100.0
LOAD_BALANCE_CEILING: float  = 10.0
MINUTES_PER_LOAD_UNIT: float = 60.0


def can_fit(day: Day, activity: Activity) -> bool:
    """True if at least one preferred block still has room for the full duration."""
    return any(day.remaining_mins[b] >= activity.duration_mins for b in preferred_blocks(activity))


def score_day(day: Day, activity: Activity) -> float:
    score = 0.0

    if day.anchor_neighborhood is not None and day.anchor_neighborhood == activity.neighborhood:
        score += ANCHOR_MATCH_BONUS

    if day.has_category(activity.category):
        score += SAME_CATEGORY_BONUS

    if not can_fit(day, activity):
        score += NO_CAPACITY_PENALTY

    score += max(0.0, LOAD_BALANCE_CEILING - day.used_minutes / MINUTES_PER_LOAD_UNIT)
    return score


def pick_best_day(days: Sequence[Day], activity: Activity) -> Optional[Day]:
    """Best day for *activity*, or None when there are no days at all."""
    best_day: Optional[Day] = None
    best = -math.inf
    for day in days:
        s = score_day(day, activity)
        if s > best:
            best = s
            best_day = day
    return best_day
