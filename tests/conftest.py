import os

# Must run before sojou.config is imported anywhere.
os.environ.setdefault("SOJOU_STRUCTURED_LOGGING", "false")

import pytest

from sojou.schemas.activity import Activity, Category, TimeBlock
from sojou.modules.tool_usage.activity_catalog import ActivityCatalog


def _activity(id, name=None, category="culture", duration_mins=90, neighborhood="1st Arr.",
              open_windows=None, must_book=None, popularity=None, price_tier=1):
    return Activity(
        id=id,
        name=name or id,
        category=Category(category),
        duration_mins=duration_mins,
        price_tier=price_tier,
        neighborhood=neighborhood,
        lat=48.86,
        lng=2.34,
        open_windows=tuple(TimeBlock(b) for b in open_windows) if open_windows is not None else None,
        must_book=must_book,
        popularity=popularity,
    )


@pytest.fixture
def make_activity():
    """Factory with the same defaults the app's test helper uses."""
    return _activity


CATALOG_RECORDS = [
    {"id": "louvre", "name": "Louvre", "category": "culture", "durationMins": 180, "priceTier": 2,
     "neighborhood": "1st Arr.", "lat": 48.8606, "lng": 2.3376, "mustBook": True, "popularity": 98},
    {"id": "falafel", "name": "Falafel", "category": "food", "durationMins": 45, "priceTier": 1,
     "neighborhood": "Marais", "lat": 48.8572, "lng": 2.3590, "popularity": 75},
    {"id": "picasso", "name": "Musée Picasso", "category": "culture", "durationMins": 120, "priceTier": 2,
     "neighborhood": "Marais", "lat": 48.8598, "lng": 2.3623},
    {"id": "luxembourg", "name": "Luxembourg Gardens", "category": "nature", "durationMins": 90, "priceTier": 0,
     "neighborhood": "6th Arr.", "lat": 48.8462, "lng": 2.3372},
    {"id": "jazz", "name": "Jazz Cellar", "category": "night", "durationMins": 150, "priceTier": 3,
     "neighborhood": "Montmartre", "lat": 48.8822, "lng": 2.3375},
    {"id": "cruise", "name": "Seine Cruise", "category": "night", "durationMins": 60, "priceTier": 2,
     "neighborhood": "7th Arr.", "lat": 48.8595, "lng": 2.2935, "openWindows": ["evening"]},
]


@pytest.fixture
def catalog_records():
    return [dict(r) for r in CATALOG_RECORDS]


@pytest.fixture
def catalog(catalog_records):
    return ActivityCatalog.from_records(catalog_records, city="Paris")
