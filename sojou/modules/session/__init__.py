"""
modules/session package: per-trip selection state kept in sync with the itinerary.
"""
from sojou.modules.session.trip_session import (
    TripSession,
    UnknownActivityError,
    clamp_days_count,
)

__all__ = ["TripSession", "UnknownActivityError", "clamp_days_count"]
