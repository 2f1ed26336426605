"""
schemas/activity.py
-------------------
Activity records as they come out of the swipe deck, plus the two closed
enumerations the planner is keyed on (category and time block).

Activities are frozen: the planner reads them and never writes back.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class Category(str, Enum):
    food = "food"
    culture = "culture"
    nature = "nature"
    night = "night"
    shopping = "shopping"


class TimeBlock(str, Enum):
    morning = "morning"
    afternoon = "afternoon"
    evening = "evening"


# Chronological order; every per-block structure iterates in this order.
BLOCK_ORDER: tuple[TimeBlock, ...] = (TimeBlock.morning, TimeBlock.afternoon, TimeBlock.evening)

# Minutes available in each block of a fresh day (600 per day).
BLOCK_CAPACITY: dict[TimeBlock, int] = {
    TimeBlock.morning:   180,
    TimeBlock.afternoon: 240,
    TimeBlock.evening:   180,
}


@dataclass(frozen=True)
class Activity:
    """
    One swipeable activity.

    Optional fields stay None when the catalog omits them; defaults are
    resolved by the planner (priority_ranker.effective_priority and
    block_placer.preferred_blocks), not here.
    """
    id: str
    name: str
    category: Category
    duration_mins: int
    price_tier: int
    neighborhood: str
    lat: float
    lng: float
    open_windows: Optional[tuple[TimeBlock, ...]] = None
    must_book: Optional[bool] = None
    popularity: Optional[float] = None
    # Display-only fields carried through for the client
    place: Optional[str] = None
    photo_urls: tuple[str, ...] = field(default=(), compare=False)
    tags: tuple[str, ...] = field(default=(), compare=False)

    @classmethod
    def from_dict(cls, record: dict[str, Any]) -> "Activity":
        """
        Build an Activity from a catalog record.

        Accepts the app's camelCase keys (durationMins, priceTier, openWindows,
        mustBook, photoUrls) as well as snake_case. Raises ValueError on an
        unknown category or block name, KeyError on a missing required key.
        """
        def pick(snake: str, camel: str, default: Any = None) -> Any:
            if snake in record:
                return record[snake]
            return record.get(camel, default)

        windows = pick("open_windows", "openWindows")
        return cls(
            id=str(record["id"]),
            name=str(record["name"]),
            category=Category(record["category"]),
            duration_mins=int(pick("duration_mins", "durationMins")),
            price_tier=int(pick("price_tier", "priceTier") or 0),
            neighborhood=str(record["neighborhood"]),
            lat=float(record["lat"]),
            lng=float(record["lng"]),
            open_windows=tuple(TimeBlock(w) for w in windows) if windows is not None else None,
            must_book=pick("must_book", "mustBook"),
            popularity=record.get("popularity"),
            place=record.get("place"),
            photo_urls=tuple(pick("photo_urls", "photoUrls", ()) or ()),
            tags=tuple(record.get("tags") or ()),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialise back to the app's camelCase shape (None fields omitted)."""
        out: dict[str, Any] = {
            "id":           self.id,
            "name":         self.name,
            "category":     self.category.value,
            "durationMins": self.duration_mins,
            "priceTier":    self.price_tier,
            "neighborhood": self.neighborhood,
            "lat":          self.lat,
            "lng":          self.lng,
            "photoUrls":    list(self.photo_urls),
            "tags":         list(self.tags),
        }
        if self.place is not None:
            out["place"] = self.place
        if self.open_windows is not None:
            out["openWindows"] = [b.value for b in self.open_windows]
        if self.must_book is not None:
            out["mustBook"] = self.must_book
        if self.popularity is not None:
            out["popularity"] = self.popularity
        return out
