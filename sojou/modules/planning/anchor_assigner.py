"""
modules/planning/anchor_assigner.py
-------------------------------------
Picks one "anchor" neighborhood per day so each day has a geographic centre
of gravity.

Neighborhoods are ranked by how many selected activities sit in them; equal
counts keep the order in which the neighborhood first appears in the input.
Day i is anchored to anchors[i]; days past the end of the list get None.
"""

from __future__ import annotations
from typing import Optional, Sequence

from sojou.schemas.activity import Activity


def assign_anchors(activities: Sequence[Activity], days_count: int) -> list[str]:
    """Return at most days_count neighborhood labels, most frequent first."""
    if days_count <= 0:
        return []
    # dict preserves insertion order, which records first appearance
    counts: dict[str, int] = {}
    for a in activities:
        counts[a.neighborhood] = counts.get(a.neighborhood, 0) + 1
    # sorted() is stable, so ties stay in first-appearance order
    ranked = sorted(counts, key=lambda n: counts[n], reverse=True)
    return ranked[:days_count]


def anchor_for_day(anchors: Sequence[str], day_index: int) -> Optional[str]:
    return anchors[day_index] if day_index < len(anchors) else None
