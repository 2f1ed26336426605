"""
modules/tool_usage/activity_catalog.py
----------------------------------------
Loads the activity deck for a city from a JSON snapshot.

The snapshot is whatever the offline ingestion scripts produced: either a
bare list of activity records or an object with an "activities" list.
Records go through validate_activity() first; invalid ones are dropped with a
warning rather than failing the whole load, so one bad entry never empties
the deck. Duplicate ids keep the first occurrence.

Catalog order is preserved everywhere: it is the order the deck is shown in
and the order selected activities are handed to the itinerary builder.
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, Iterable, Iterator, Optional

from sojou import config
from sojou.schemas.activity import Activity, Category
from sojou.modules.validation import ValidationResult, filter_valid, validate_activity

logger = logging.getLogger(__name__)


class CatalogError(RuntimeError):
    """The catalog file is missing or not a JSON list of records."""


class ActivityCatalog:
    """In-memory, id-indexed activity deck."""

    def __init__(self, activities: Iterable[Activity] = (), city: str = config.DEFAULT_CITY) -> None:
        self.city = city
        self._by_id: dict[str, Activity] = {}
        for a in activities:
            if a.id in self._by_id:
                logger.warning("duplicate activity id %r in %s catalog; keeping the first", a.id, city)
                continue
            self._by_id[a.id] = a

    # ── Factories ─────────────────────────────────────────────────────────────

    @classmethod
    def from_records(cls, records: Iterable[dict[str, Any]], city: str = config.DEFAULT_CITY) -> "ActivityCatalog":
        """Validate and parse raw records; invalid records are logged and skipped."""
        objects: list[dict[str, Any]] = []
        for i, record in enumerate(records):
            if not isinstance(record, dict):
                logger.warning("catalog record #%d is not an object; skipped", i)
                continue
            objects.append(record)
        activities = [Activity.from_dict(r) for r in filter_valid(objects, _validate_or_warn)]
        return cls(activities, city=city)

    @classmethod
    def load(cls, path: Optional[str | Path] = None, city: str = config.DEFAULT_CITY) -> "ActivityCatalog":
        """Read a catalog snapshot from *path* (default: config.CATALOG_PATH)."""
        p = Path(path or config.CATALOG_PATH)
        try:
            with open(p, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError as exc:
            raise CatalogError(f"ERROR_NO_CATALOG: catalog file not found: {p}") from exc
        except json.JSONDecodeError as exc:
            raise CatalogError(f"ERROR_BAD_CATALOG: {p} is not valid JSON: {exc}") from exc

        records = read_records(data, source=str(p))
        catalog = cls.from_records(records, city=city)
        logger.info("loaded %d/%d activities for %s from %s", len(catalog), len(records), city, p)
        return catalog

    # ── Lookups ───────────────────────────────────────────────────────────────

    def get(self, activity_id: str) -> Optional[Activity]:
        return self._by_id.get(activity_id)

    def __contains__(self, activity_id: object) -> bool:
        return activity_id in self._by_id

    def __iter__(self) -> Iterator[Activity]:
        return iter(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)

    def ids(self) -> list[str]:
        return list(self._by_id)

    def filter(self, categories: Iterable[Category], budget_tier: int) -> list[Activity]:
        """Activities in an enabled category and at or below *budget_tier*, catalog order."""
        enabled = set(categories)
        return [a for a in self if a.category in enabled and a.price_tier <= budget_tier]


def read_records(data: Any, source: str = "<data>") -> list[Any]:
    """Unwrap a catalog payload into its list of raw records."""
    if isinstance(data, dict):
        data = data.get("activities")
    if not isinstance(data, list):
        raise CatalogError(
            f"ERROR_BAD_CATALOG: {source} must be a list of activities "
            f"or an object with an 'activities' list"
        )
    return data


def _validate_or_warn(record: dict[str, Any]) -> ValidationResult:
    result = validate_activity(record)
    if not result.valid:
        logger.warning("catalog record id=%r dropped: %s", record.get("id"), "; ".join(result.errors))
    return result
