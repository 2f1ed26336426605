"""
modules/planning/priority_ranker.py
-------------------------------------
Decides the order in which selected activities claim capacity.

  priority = popularity (50 when unknown)
           + 15 if the activity must be booked ahead
           + duration_mins / 10

Higher priority is placed first. Equal priorities keep input order.
"""

from __future__ import annotations
from typing import Sequence

from sojou.schemas.activity import Activity

DEFAULT_POPULARITY: float = 50.0
MUST_BOOK_BONUS: float    = 15.0
DURATION_DIVISOR: float   = 10.0


def effective_priority(activity: Activity) -> float:
    """Composite priority score; the only place optional fields get defaults."""
    popularity = activity.popularity if activity.popularity is not None else DEFAULT_POPULARITY
    bonus = MUST_BOOK_BONUS if activity.must_book else 0.0
    return popularity + bonus + activity.duration_mins / DURATION_DIVISOR


def rank_by_priority(activities: Sequence[Activity]) -> list[Activity]:
    """Return a new list sorted by descending priority (stable)."""
    return sorted(activities, key=effective_priority, reverse=True)
