"""
schemas/itinerary.py
--------------------
Dataclass definitions for the itinerary builder's output.

A Day owns its per-block item lists and remaining capacities; both dicts are
keyed by TimeBlock and always hold all three blocks in BLOCK_ORDER.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Optional

from sojou.schemas.activity import BLOCK_CAPACITY, BLOCK_ORDER, Activity, Category, TimeBlock


@dataclass
class ScheduledItem:
    """An activity placed into one block of one day."""
    activity: Activity
    block: TimeBlock

    def to_dict(self) -> dict[str, Any]:
        return {"activity": self.activity.to_dict(), "block": self.block.value}


def _empty_blocks() -> dict[TimeBlock, list[ScheduledItem]]:
    return {b: [] for b in BLOCK_ORDER}


def _full_capacity() -> dict[TimeBlock, int]:
    return {b: BLOCK_CAPACITY[b] for b in BLOCK_ORDER}


@dataclass
class Day:
    """One day of the trip, filled in place by the block placer."""
    day_index: int
    anchor_neighborhood: Optional[str] = None
    blocks: dict[TimeBlock, list[ScheduledItem]] = field(default_factory=_empty_blocks)
    remaining_mins: dict[TimeBlock, int] = field(default_factory=_full_capacity)

    @property
    def used_minutes(self) -> int:
        """Capacity consumed across all three blocks."""
        return sum(BLOCK_CAPACITY[b] - self.remaining_mins[b] for b in BLOCK_ORDER)

    def items(self) -> list[ScheduledItem]:
        """All scheduled items, morning first, placement order within a block."""
        return [item for b in BLOCK_ORDER for item in self.blocks[b]]

    def has_category(self, category: Category) -> bool:
        return any(item.activity.category == category for item in self.items())

    def to_dict(self) -> dict[str, Any]:
        return {
            "dayIndex":           self.day_index,
            "anchorNeighborhood": self.anchor_neighborhood,
            "blocks": {
                b.value: [item.to_dict() for item in self.blocks[b]] for b in BLOCK_ORDER
            },
            "remainingMins": {b.value: self.remaining_mins[b] for b in BLOCK_ORDER},
        }


@dataclass
class ItineraryResult:
    """
    Top-level output of build_itinerary.

    days     -- exactly days_count entries (empty list for a non-positive count)
    overflow -- activities that fit nowhere, in priority order
    """
    days: list[Day] = field(default_factory=list)
    overflow: list[Activity] = field(default_factory=list)

    def scheduled_ids(self) -> list[str]:
        return [item.activity.id for day in self.days for item in day.items()]

    def to_dict(self) -> dict[str, Any]:
        return {
            "days":     [d.to_dict() for d in self.days],
            "overflow": [a.to_dict() for a in self.overflow],
        }
