"""FastAPI front: request models and Result -> HTTP mapping."""

import pytest
import requests
from fastapi.testclient import TestClient

from helpers import FakeTransport, ok_body
from mapgate.api import app
from mapgate.client import MapsClient, get_client
from mapgate.config import Settings
from mapgate.core.models import RawResponse, TransportError


@pytest.fixture
def fake():
    transport = FakeTransport()
    client = MapsClient(settings=Settings(api_key="", language="", region=""), transport=transport)
    app.dependency_overrides[get_client] = lambda: client
    yield transport
    app.dependency_overrides.clear()


@pytest.fixture
def http():
    return TestClient(app)


def test_health(http):
    assert http.get("/health").json() == {"status": "ok"}


def test_directions_success(fake, http):
    body = ok_body(routes=[{"summary": "ON-401 E"}])
    fake.outcome = RawResponse(200, body)
    r = http.post(
        "/directions",
        json={
            "origin": "Toronto",
            "destination": [45.5017, -73.5673],
            "waypoints": ["Kingston", "place_id:XYZ"],
            "options": {"mode": "driving", "origin": "ignored"},
        },
    )
    assert r.status_code == 200
    assert r.json() == body
    assert fake.last_params == {
        "origin": "Toronto",
        "destination": "45.5017,-73.5673",
        "mode": "driving",
        "waypoints": "Kingston|place_id:XYZ",
    }


def test_distance(fake, http):
    r = http.post("/distance", json={"origins": ["Paris", "Versailles"], "destinations": ["Lyon"]})
    assert r.status_code == 200
    assert fake.last_endpoint == "distancematrix"
    assert fake.last_params == {"origins": "Paris|Versailles", "destinations": "Lyon"}


@pytest.mark.parametrize(
    "payload, expected",
    [
        ({"latlng": [40.714224, -73.961452]}, {"latlng": "40.714224,-73.961452"}),
        ({"place_id": "ChIJ"}, {"place_id": "ChIJ"}),
        ({"address": "Annegatan", "components": {"country": "FI"}}, {"address": "Annegatan", "components": "country:FI"}),
        ({"components": {"country": "ES"}}, {"components": "country:ES"}),
    ],
)
def test_geocode_forms(fake, http, payload, expected):
    assert http.post("/geocode", json=payload).status_code == 200
    assert fake.last_params == expected


def test_geocode_without_input_is_400(fake, http):
    r = http.post("/geocode", json={})
    assert r.status_code == 400
    assert fake.calls == []


@pytest.mark.parametrize(
    "payload",
    [
        {"latlng": [40.714224, -73.961452], "components": {"country": "US"}},
        {"place_id": "ChIJ", "components": {"country": "US"}},
    ],
)
def test_geocode_components_with_reverse_input_is_400(fake, http, payload):
    r = http.post("/geocode", json=payload)
    assert r.status_code == 400
    assert fake.calls == []


def test_invalid_descriptor_is_400(fake, http):
    r = http.post("/directions", json={"origin": "enc:abc", "destination": "Montreal"})
    assert r.status_code == 400
    assert "polyline" in r.json()["detail"]


def test_status_failure_is_422(fake, http):
    fake.outcome = RawResponse(200, {"status": "OVER_QUERY_LIMIT", "error_message": "slow down"})
    r = http.post("/place/autocomplete", json={"input": "Paris"})
    assert r.status_code == 422
    assert r.json() == {"status": "OVER_QUERY_LIMIT", "error_message": "slow down"}


def test_transport_failure_is_502(fake, http):
    fake.outcome = TransportError(requests.ConnectionError("refused"))
    r = http.post("/place/queryautocomplete", json={"input": "Pizza near Par"})
    assert r.status_code == 502
    assert r.json() == {"error": "ConnectionError: refused"}
    assert fake.last_endpoint == "place/queryautocomplete"


def test_raw_passthrough(fake, http):
    r = http.get("/raw/place/details", params={"place_id": "X", "fields": "name"})
    assert r.status_code == 200
    assert fake.last_endpoint == "place/details"
    assert fake.last_params == {"place_id": "X", "fields": "name"}
