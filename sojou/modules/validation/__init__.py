"""
modules/validation package: data quality guards before a record enters the deck.
"""
from sojou.modules.validation.ingestion_validator import (
    ValidationResult,
    validate_activity,
    filter_valid,
)

__all__ = [
    "ValidationResult",
    "validate_activity",
    "filter_valid",
]
