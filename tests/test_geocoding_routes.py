"""Tests for the HTTP geocoding endpoints."""

import time

import pytest
from fastapi.testclient import TestClient

from mapbox_geocoder.api.endpoints.geocoding import _retry_after, get_geocoder
from mapbox_geocoder.core.config import settings
from mapbox_geocoder.core.errors import GeocoderHTTPError
from mapbox_geocoder.main import app
from mapbox_geocoder.services.geocoding import Geocoder
from tests.fakes import ATTRIBUTION, json_responder, load_fixture


@pytest.fixture
def client_with(make_geocoder):
    def _client(responder) -> TestClient:
        geocoder = make_geocoder(responder)
        app.dependency_overrides[get_geocoder] = lambda: geocoder
        return TestClient(app)

    yield _client
    app.dependency_overrides.clear()


def test_health() -> None:
    client = TestClient(app)
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_reverse_route_returns_placemark_summaries(client_with, requests_seen) -> None:
    client = client_with(json_responder(load_fixture("reverse_valid")))

    r = client.get("/geocoding/reverse", params={"latitude": 37.13284, "longitude": -95.78558})

    assert r.status_code == 200
    body = r.json()
    assert body["attribution"] == ATTRIBUTION
    assert len(body["placemarks"]) == 5
    first = body["placemarks"][0]
    assert first["name"] == "Jones Jerry"
    assert first["scope"] == "poi"
    assert first["address"]["city"] == "Independence"
    assert first["address"]["iso_country_code"] == "US"
    assert body["placemarks"][1]["region"]["south_west"]["latitude"] == pytest.approx(
        37.033229992893
    )
    assert requests_seen[0].url.path == "/geocoding/v5/mapbox.places/-95.78558,37.13284.json"


def test_forward_route_passes_filters(client_with, requests_seen) -> None:
    client = client_with(json_responder(load_fixture("forward_valid")))

    r = client.get(
        "/geocoding/geocode",
        params={"query": "1600 Pennsylvania Ave", "types": ["address", "poi"], "limit": 2},
    )

    assert r.status_code == 200
    assert r.json()["placemarks"][0]["name"] == "1600 Pennsylvania Ave NW"
    params = requests_seen[0].url.params
    assert params["types"] == "address,poi"
    assert params["limit"] == "2"


def test_blank_query_is_rejected(client_with, requests_seen) -> None:
    client = client_with(json_responder(load_fixture("forward_valid")))

    r = client.get("/geocoding/geocode", params={"query": "  "})

    assert r.status_code == 400
    assert requests_seen == []


def test_reverse_limit_without_single_type_is_rejected(client_with) -> None:
    client = client_with(json_responder(load_fixture("reverse_valid")))

    r = client.get("/geocoding/reverse", params={"latitude": 1, "longitude": 2, "limit": 2})

    assert r.status_code == 400


def test_upstream_auth_failure_maps_to_bad_gateway(client_with) -> None:
    client = client_with(json_responder({"message": "Not Authorized - Invalid Token"}, 401))

    r = client.get("/geocoding/geocode", params={"query": "paris"})

    assert r.status_code == 502
    assert "access denied" in r.json()["detail"]


def test_upstream_rate_limit_maps_to_429(client_with) -> None:
    client = client_with(
        json_responder(
            {"message": "Too Many Requests"},
            status_code=429,
            headers={
                "X-Rate-Limit-Interval": "60",
                "X-Rate-Limit-Reset": str(int(time.time()) + 30),
            },
        )
    )

    r = client.get("/geocoding/geocode", params={"query": "paris"})

    assert r.status_code == 429
    assert 0 < int(r.headers["Retry-After"]) <= 30


def test_retry_after_counts_down_to_reset() -> None:
    error = GeocoderHTTPError(
        "Too Many Requests", status_code=429, rate_limit_reset=1700000060, rate_limit_interval=60
    )

    assert _retry_after(error, now=1700000015) == 45
    assert _retry_after(error, now=1700000100) == 0


def test_retry_after_falls_back_to_interval_without_reset() -> None:
    error = GeocoderHTTPError("Too Many Requests", status_code=429, rate_limit_interval=60)

    assert _retry_after(error, now=0) == 60


def test_other_upstream_failure_maps_to_bad_gateway(client_with) -> None:
    client = client_with(json_responder({"message": "Query too long"}, 422))

    r = client.get("/geocoding/geocode", params={"query": "paris"})

    assert r.status_code == 502
    assert r.json()["detail"] == "Geocoding failed: Query too long"


def test_missing_token_is_a_server_error(monkeypatch) -> None:
    monkeypatch.setattr(settings, "MAPBOX_ACCESS_TOKEN", None)
    monkeypatch.setattr(Geocoder, "_instance", None)
    client = TestClient(app)

    r = client.get("/geocoding/geocode", params={"query": "paris"})

    assert r.status_code == 500
    assert r.json()["detail"] == "A Mapbox access token is required"
