"""
modules/validation/ingestion_validator.py
------------------------------------------
Data-quality guards applied to raw catalog records before they become
Activity objects and enter the swipe deck.

  Activity record:
    ✓ id, name and neighborhood are non-empty strings
    ✓ Category in {food, culture, nature, night, shopping}
    ✓ Duration is a non-negative integer (minutes)
    ✓ Price tier, if present, is an integer in [0, 3] (absent means free)
    ✓ Latitude in [-90, 90], longitude in [-180, 180]
    ✓ Open windows, if present, is a list of known block names
    ✓ Popularity, if present, is numeric in [0, 100]
    ✓ mustBook, if present, is a boolean

Usage:
    from sojou.modules.validation import validate_activity, filter_valid

    result = validate_activity(record)
    if not result.valid:
        print(result.errors)

    clean_records = filter_valid(records, validate_activity)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

from sojou.schemas.activity import Category, TimeBlock

_CATEGORIES = frozenset(c.value for c in Category)
_BLOCKS = frozenset(b.value for b in TimeBlock)


# ── Result dataclass ───────────────────────────────────────────────────────────

@dataclass
class ValidationResult:
    """
    Outcome of a single validation run.

    Attributes:
        valid:  True iff there are zero errors.
        errors: Human-readable list of failure reasons.
        record: The input record dict (for logging purposes).
    """
    valid: bool
    errors: list[str] = field(default_factory=list)
    record: dict = field(default_factory=dict, repr=False)

    def __bool__(self) -> bool:
        return self.valid


def _pick(record: dict[str, Any], snake: str, camel: str) -> Any:
    return record[snake] if snake in record else record.get(camel)


def _is_int(value: Any) -> bool:
    # bool is an int subclass; True is not a duration
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


# ── Activity validation ────────────────────────────────────────────────────────

def validate_activity(record: dict[str, Any]) -> ValidationResult:
    """Validate one catalog record (camelCase or snake_case keys)."""
    errors: list[str] = []

    # ── Identity ───────────────────────────────────────────────────────────
    for key in ("id", "name", "neighborhood"):
        value = record.get(key)
        if not isinstance(value, str) or not value.strip():
            errors.append(f"{key} must be a non-empty string (got {value!r})")

    category = record.get("category")
    if not isinstance(category, str) or category not in _CATEGORIES:
        errors.append(f"category={category!r} is not one of {sorted(_CATEGORIES)}")

    # ── Duration / price ───────────────────────────────────────────────────
    duration = _pick(record, "duration_mins", "durationMins")
    if not _is_int(duration) or duration < 0:
        errors.append(f"durationMins={duration!r} must be a non-negative integer")

    tier = _pick(record, "price_tier", "priceTier")
    if tier is not None and (not _is_int(tier) or not (0 <= tier <= 3)):
        errors.append(f"priceTier={tier!r} must be an integer in [0, 3]")

    # ── Coordinates ────────────────────────────────────────────────────────
    lat = record.get("lat")
    lng = record.get("lng")
    if not _is_number(lat) or not _is_number(lng):
        errors.append(f"lat/lng must be numeric (got lat={lat!r}, lng={lng!r})")
    else:
        if not (-90.0 <= lat <= 90.0):
            errors.append(f"lat={lat} is outside valid range [-90, 90]")
        if not (-180.0 <= lng <= 180.0):
            errors.append(f"lng={lng} is outside valid range [-180, 180]")

    # ── Optional fields ────────────────────────────────────────────────────
    windows = _pick(record, "open_windows", "openWindows")
    if windows is not None:
        if not isinstance(windows, list):
            errors.append(f"openWindows={windows!r} must be a list")
        else:
            unknown = [w for w in windows if not isinstance(w, str) or w not in _BLOCKS]
            if unknown:
                errors.append(f"openWindows contains unknown blocks {unknown!r}")

    popularity = record.get("popularity")
    if popularity is not None:
        if not _is_number(popularity) or not (0 <= popularity <= 100):
            errors.append(f"popularity={popularity!r} must be numeric in [0, 100]")

    must_book = _pick(record, "must_book", "mustBook")
    if must_book is not None and not isinstance(must_book, bool):
        errors.append(f"mustBook={must_book!r} must be a boolean")

    return ValidationResult(valid=len(errors) == 0, errors=errors, record=record)


# ── Helpers ────────────────────────────────────────────────────────────────────

def filter_valid(
    records: Iterable[dict[str, Any]],
    validator: Callable[[dict[str, Any]], ValidationResult],
) -> list[dict[str, Any]]:
    """Return only the records that pass *validator*, in input order."""
    return [r for r in records if validator(r).valid]
