"""
modules/planning/block_placer.py
----------------------------------
Places an activity into a time block of an already chosen day.

Block preference comes from the activity's explicit open windows when it has
a non-empty list, otherwise from its category:

  food, night        → evening,   afternoon, morning
  culture            → morning,   afternoon, evening
  nature, shopping   → afternoon, morning,   evening

The first preferred block whose remaining capacity covers the full duration
wins. Activities are never split across blocks.
"""

from __future__ import annotations
import logging

from sojou.schemas.activity import Activity, Category, TimeBlock
from sojou.schemas.itinerary import Day, ScheduledItem

logger = logging.getLogger(__name__)

_M, _A, _E = TimeBlock.morning, TimeBlock.afternoon, TimeBlock.evening

_CATEGORY_BLOCK_ORDER: dict[Category, tuple[TimeBlock, ...]] = {
    Category.food:     (_E, _A, _M),
    Category.night:    (_E, _A, _M),
    Category.culture:  (_M, _A, _E),
    Category.nature:   (_A, _M, _E),
    Category.shopping: (_A, _M, _E),
}
_FALLBACK_BLOCK_ORDER: tuple[TimeBlock, ...] = (_A, _M, _E)


def preferred_blocks(activity: Activity) -> tuple[TimeBlock, ...]:
    """Block priority order for *activity*; explicit open windows win verbatim."""
    if activity.open_windows:
        return tuple(activity.open_windows)
    return _CATEGORY_BLOCK_ORDER.get(activity.category, _FALLBACK_BLOCK_ORDER)


def place_into_day(day: Day, activity: Activity) -> bool:
    """
    Append *activity* to the first preferred block with room for it.

    Mutates day.blocks and day.remaining_mins on success. Returns False and
    leaves the day untouched when no preferred block has enough room.
    """
    for block in preferred_blocks(activity):
        if day.remaining_mins[block] >= activity.duration_mins:
            day.blocks[block].append(ScheduledItem(activity=activity, block=block))
            day.remaining_mins[block] -= activity.duration_mins
            logger.debug(
                "placed %s on day %d %s (%d min left)",
                activity.id, day.day_index, block.value, day.remaining_mins[block],
            )
            return True
    return False
