from concurrent.futures import ThreadPoolExecutor

import pytest
from fastapi.testclient import TestClient

from sojou import config
from sojou.api.server import app
from sojou.api.routes import trips


@pytest.fixture
def client(catalog):
    trips.set_catalog(catalog)
    yield TestClient(app)
    trips.set_catalog(None)
    trips._store.clear()


def _activity(id, **extra):
    body = {
        "id": id, "name": id, "category": "culture", "durationMins": 90,
        "priceTier": 1, "neighborhood": "Marais", "lat": 48.86, "lng": 2.36,
    }
    body.update(extra)
    return body


def test_health(client):
    resp = client.get("/v1/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_build_itinerary(client):
    resp = client.post("/v1/itinerary/build", json={
        "daysCount": 2,
        "activities": [
            _activity("dinner", category="food"),
            _activity("museum"),
            _activity("tour", openWindows=["evening"], mustBook=True),
        ],
    })
    assert resp.status_code == 200
    body = resp.json()
    assert len(body["days"]) == 2
    assert body["overflow"] == []
    day0 = body["days"][0]
    assert day0["anchorNeighborhood"] == "Marais"
    assert [i["activity"]["id"] for i in day0["blocks"]["evening"]] == ["tour", "dinner"]
    assert [i["activity"]["id"] for i in day0["blocks"]["morning"]] == ["museum"]
    assert day0["remainingMins"] == {"morning": 90, "afternoon": 240, "evening": 0}


def test_build_with_zero_days(client):
    resp = client.post("/v1/itinerary/build", json={"days_count": 0, "activities": [_activity("a")]})
    assert resp.status_code == 200
    assert resp.json()["days"] == []
    assert [a["id"] for a in resp.json()["overflow"]] == ["a"]


@pytest.mark.parametrize("bad", [
    {"category": "spa"},
    {"durationMins": -1},
    {"priceTier": 5},
    {"openWindows": ["midnight"]},
    {"neighborhood": ""},
])
def test_build_rejects_bad_activity(client, bad):
    resp = client.post("/v1/itinerary/build", json={"daysCount": 1, "activities": [_activity("a", **bad)]})
    assert resp.status_code == 422


def test_trip_flow(client):
    resp = client.post("/v1/trips", json={"daysCount": 2})
    assert resp.status_code == 201
    sid = resp.json()["session_id"]
    assert len(resp.json()["itinerary"]["days"]) == 2

    resp = client.post(f"/v1/trips/{sid}/swipe", json={"activityId": "falafel", "action": "add"})
    assert resp.status_code == 200
    assert resp.json()["added_ids"] == ["falafel"]
    evening = resp.json()["itinerary"]["days"][0]["blocks"]["evening"]
    assert [i["activity"]["id"] for i in evening] == ["falafel"]

    client.post(f"/v1/trips/{sid}/swipe", json={"activity_id": "jazz", "action": "pass"})
    deck = client.get(f"/v1/trips/{sid}/deck").json()
    deck_ids = [a["id"] for a in deck["activities"]]
    assert "falafel" not in deck_ids and "jazz" not in deck_ids
    assert deck["count"] == len(deck_ids) == 4

    resp = client.put(f"/v1/trips/{sid}/config", json={"daysCount": 10, "budgetTier": 0, "categories": ["nature"]})
    snap = resp.json()
    assert snap["config"]["days_count"] == 4
    assert snap["config"]["budget_tier"] == 0
    assert snap["config"]["categories"] == ["nature"]
    assert len(snap["itinerary"]["days"]) == 4

    resp = client.delete(f"/v1/trips/{sid}/activities/falafel")
    assert resp.json()["added_ids"] == []

    assert client.post(f"/v1/trips/{sid}/regenerate").status_code == 200
    assert client.get(f"/v1/trips/{sid}").json()["session_id"] == sid


def test_unknown_trip_is_404(client):
    assert client.get("/v1/trips/nope").status_code == 404
    assert client.post("/v1/trips/nope/regenerate").status_code == 404


def test_unknown_activity_is_404(client):
    sid = client.post("/v1/trips", json={}).json()["session_id"]
    resp = client.post(f"/v1/trips/{sid}/swipe", json={"activityId": "eiffel", "action": "add"})
    assert resp.status_code == 404
    assert client.delete(f"/v1/trips/{sid}/activities/eiffel").status_code == 404


def test_bad_swipe_action_is_422(client):
    sid = client.post("/v1/trips", json={}).json()["session_id"]
    resp = client.post(f"/v1/trips/{sid}/swipe", json={"activityId": "louvre", "action": "love"})
    assert resp.status_code == 422


@pytest.mark.parametrize("days", [config.MAX_BUILD_DAYS + 1, 3_000_000])
def test_build_rejects_too_many_days(client, days):
    resp = client.post("/v1/itinerary/build", json={"daysCount": days, "activities": [_activity("a")]})
    assert resp.status_code == 422


def test_build_accepts_negative_days_and_max_days(client):
    resp = client.post("/v1/itinerary/build", json={"daysCount": -3, "activities": [_activity("a")]})
    assert resp.status_code == 200
    assert [a["id"] for a in resp.json()["overflow"]] == ["a"]
    resp = client.post("/v1/itinerary/build", json={"daysCount": config.MAX_BUILD_DAYS, "activities": []})
    assert len(resp.json()["days"]) == config.MAX_BUILD_DAYS


def test_build_missing_price_tier_is_free(client):
    absent = _activity("a")
    del absent["priceTier"]
    resp = client.post("/v1/itinerary/build", json={
        "daysCount": 1, "activities": [absent, _activity("b", priceTier=None)],
    })
    assert resp.status_code == 200
    placed = [i["activity"] for b in resp.json()["days"][0]["blocks"].values() for i in b]
    assert sorted((a["id"], a["priceTier"]) for a in placed) == [("a", 0), ("b", 0)]


def test_trip_store_evicts_least_recently_used(client, monkeypatch):
    monkeypatch.setattr(config, "MAX_TRIP_SESSIONS", 2)
    first = client.post("/v1/trips", json={}).json()["session_id"]
    second = client.post("/v1/trips", json={}).json()["session_id"]
    assert client.get(f"/v1/trips/{first}").status_code == 200  # first is now most recent
    third = client.post("/v1/trips", json={}).json()["session_id"]

    assert len(trips._store) == 2
    assert client.get(f"/v1/trips/{second}").status_code == 404
    assert client.get(f"/v1/trips/{first}").status_code == 200
    assert client.get(f"/v1/trips/{third}").status_code == 200


def test_concurrent_swipes_and_reads_stay_consistent(client):
    sid = client.post("/v1/trips", json={"daysCount": 2}).json()["session_id"]
    ids = ["louvre", "falafel", "picasso", "luxembourg"]

    def worker(n):
        local = TestClient(app)
        codes = []
        for i in range(10):
            aid = ids[(n + i) % len(ids)]
            codes.append(local.post(f"/v1/trips/{sid}/swipe", json={"activityId": aid, "action": "add"}).status_code)
            snap = local.get(f"/v1/trips/{sid}").json()
            scheduled = {item["activity"]["id"] for d in snap["itinerary"]["days"]
                         for b in d["blocks"].values() for item in b}
            overflow = {a["id"] for a in snap["itinerary"]["overflow"]}
            codes.append(200 if scheduled | overflow == set(snap["added_ids"]) else 500)
            codes.append(local.delete(f"/v1/trips/{sid}/activities/{aid}").status_code)
        return codes

    with ThreadPoolExecutor(max_workers=4) as pool:
        results = [c for codes in pool.map(worker, range(4)) for c in codes]
    assert set(results) == {200}
