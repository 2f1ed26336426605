from sojou.schemas.activity import BLOCK_CAPACITY, BLOCK_ORDER, Activity, Category, TimeBlock
from sojou.schemas.itinerary import Day, ItineraryResult, ScheduledItem

__all__ = [
    "Activity",
    "BLOCK_CAPACITY",
    "BLOCK_ORDER",
    "Category",
    "Day",
    "ItineraryResult",
    "ScheduledItem",
    "TimeBlock",
]
