"""
modules/planning package: the greedy itinerary builder and its four stages.
"""
from sojou.modules.planning.itinerary_builder import build_itinerary

__all__ = ["build_itinerary"]
