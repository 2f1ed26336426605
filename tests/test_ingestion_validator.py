import pytest

from sojou.modules.validation import filter_valid, validate_activity


def _record(**overrides):
    base = {
        "id": "louvre", "name": "Louvre", "category": "culture", "durationMins": 180,
        "priceTier": 2, "neighborhood": "1st Arr.", "lat": 48.86, "lng": 2.33,
    }
    base.update(overrides)
    return base


def test_valid_record_passes():
    result = validate_activity(_record(openWindows=["morning"], mustBook=True, popularity=90))
    assert result.valid
    assert bool(result)
    assert result.errors == []


def test_snake_case_keys_accepted():
    rec = _record()
    rec["duration_mins"] = rec.pop("durationMins")
    rec["price_tier"] = rec.pop("priceTier")
    assert validate_activity(rec).valid


@pytest.mark.parametrize("overrides, fragment", [
    ({"id": ""}, "id must be a non-empty string"),
    ({"name": "   "}, "name must be a non-empty string"),
    ({"neighborhood": None}, "neighborhood must be a non-empty string"),
    ({"category": "sightseeing"}, "category='sightseeing'"),
    ({"durationMins": -5}, "durationMins=-5"),
    ({"durationMins": 90.5}, "durationMins=90.5"),
    ({"durationMins": True}, "durationMins=True"),
    ({"priceTier": 4}, "priceTier=4"),
    ({"lat": 91.0}, "lat=91.0 is outside"),
    ({"lng": -181.0}, "lng=-181.0 is outside"),
    ({"lat": "48.8"}, "lat/lng must be numeric"),
    ({"openWindows": "evening"}, "must be a list"),
    ({"openWindows": ["night"]}, "unknown blocks"),
    ({"popularity": 120}, "popularity=120"),
    ({"mustBook": "yes"}, "mustBook='yes'"),
])
def test_invalid_fields_reported(overrides, fragment):
    result = validate_activity(_record(**overrides))
    assert not result.valid
    assert any(fragment in e for e in result.errors), result.errors


def test_missing_required_key_reported():
    rec = _record()
    del rec["durationMins"]
    result = validate_activity(rec)
    assert not result.valid
    assert any("durationMins=None" in e for e in result.errors)


def test_several_errors_collected():
    result = validate_activity(_record(id="", priceTier=-1, popularity=-3))
    assert len(result.errors) == 3


def test_filter_valid_keeps_order():
    recs = [_record(id="a"), _record(id="b", category="x"), _record(id="c")]
    assert [r["id"] for r in filter_valid(recs, validate_activity)] == ["a", "c"]


@pytest.mark.parametrize("overrides, fragment", [
    ({"category": ["culture"]}, "category=['culture']"),
    ({"id": ["louvre"]}, "id must be a non-empty string"),
    ({"category": {"name": "food"}}, "category={'name': 'food'}"),
    ({"openWindows": [{"block": "evening"}]}, "unknown blocks"),
    ({"openWindows": [["morning"], "evening"]}, "unknown blocks [['morning']]"),
])
def test_unhashable_values_reported_not_raised(overrides, fragment):
    result = validate_activity(_record(**overrides))
    assert not result.valid
    assert any(fragment in e for e in result.errors), result.errors


def test_missing_price_tier_is_free():
    rec = _record()
    del rec["priceTier"]
    assert validate_activity(rec).valid
    assert validate_activity(_record(priceTier=None)).valid
