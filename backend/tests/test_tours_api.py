import random

import pytest
from fastapi.testclient import TestClient

from _helpers import StubTourOperator, make_offer, valid_payload

from app.core.config import Settings
from app.main import create_app
from app.tours.sources import MockTourOperatorClient, TourOperatorUnavailableError


def _settings(tmp_path, **overrides) -> Settings:
    options = {
        "APP_ENV": "test",
        "STATIC_DIR": str(tmp_path / "missing"),
        "SERVICE_NAME": "tour-package-search",
    }
    options.update(overrides)
    return Settings(_env_file=None, **options)


@pytest.fixture()
def source():
    return StubTourOperator(
        [
            make_offer("TOUR-2", price=120_000),
            make_offer("TOUR-1", price=95_000),
            make_offer("TOUR-3", price=95_000, nights=5),
        ]
    )


@pytest.fixture()
def client(tmp_path, source):
    app = create_app(_settings(tmp_path), source=source)
    with TestClient(app) as test_client:
        yield test_client


def test_health(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["service"] == "tour-package-search"
    assert body["timestamp"].endswith("Z")


def test_search_returns_ranked_offers(client, source):
    response = client.post("/api/tours/search", json=valid_payload(limit=1))

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 2
    assert body["limit"] == 1
    assert body["offset"] == 0
    assert [offer["tourId"] for offer in body["results"]] == ["TOUR-1"]
    assert body["criteria"]["departureCity"] == "Москва"
    assert len(source.calls) == 1


def test_validation_error_maps_to_400(client, source):
    payload = valid_payload(guests={"adults": 2, "children": [{"age": 18}]})

    response = client.post("/api/tours/search", json=payload)

    assert response.status_code == 400
    assert response.json() == {
        "error": "ValidationError",
        "message": "guests.children[0].age must be an integer between 0 and 17",
    }
    assert source.calls == []


def test_past_departure_date_is_rejected(client):
    response = client.post("/api/tours/search", json=valid_payload(departureDate="2020-01-01"))

    assert response.status_code == 400
    assert "departureDate" in response.json()["message"]


def test_malformed_json_is_a_validation_error(client):
    response = client.post(
        "/api/tours/search",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "ValidationError"


def test_source_failure_maps_to_500(tmp_path):
    source = StubTourOperator(error=TourOperatorUnavailableError("Tour operator API error: timeout"))
    app = create_app(_settings(tmp_path), source=source)

    with TestClient(app) as client:
        response = client.post("/api/tours/search", json=valid_payload())

    assert response.status_code == 500
    assert response.json() == {
        "error": "InternalServerError",
        "message": "Tour operator API error: timeout",
    }


def test_dev_mode_includes_error_details(tmp_path):
    source = StubTourOperator(error=RuntimeError("boom"))
    app = create_app(_settings(tmp_path, APP_ENV="dev"), source=source)

    with TestClient(app) as client:
        response = client.post("/api/tours/search", json=valid_payload())

    assert response.status_code == 500
    assert response.json()["details"]["type"] == "RuntimeError"


def test_custom_prefix_and_source_closed_on_shutdown(tmp_path, source):
    app = create_app(_settings(tmp_path, API_PREFIX="/v2/"), source=source)

    with TestClient(app) as client:
        assert client.get("/v2/health").status_code == 200
        assert client.get("/api/health").status_code == 404

    assert source.closed is True


def test_root_page_and_static_files(tmp_path, source):
    static_dir = tmp_path / "public"
    static_dir.mkdir()
    (static_dir / "index.html").write_text("<h1>Поиск туров</h1>", encoding="utf-8")
    app = create_app(_settings(tmp_path, STATIC_DIR=str(static_dir)), source=source)

    with TestClient(app) as client:
        root = client.get("/")
        frontend = client.get("/index.html")

    assert "Tour Package Search API" in root.text
    assert "/api/tours/search" in root.text
    assert 'href="/index.html"' in root.text
    assert frontend.status_code == 200
    assert "Поиск туров" in frontend.text


def test_long_stay_on_mock_source_is_not_a_server_error(tmp_path):
    source = MockTourOperatorClient(min_delay=0, max_delay=0, rng=random.Random(11))
    app = create_app(_settings(tmp_path), source=source)

    with TestClient(app) as client:
        response = client.post("/api/tours/search", json=valid_payload(nights=3_000_000))

    assert response.status_code == 200
    body = response.json()
    assert body["total"] >= 5
    assert body["results"][0]["returnDate"] == ""


def test_landing_page_has_no_frontend_link_without_index(client):
    root = client.get("/")

    assert root.status_code == 200
    assert "/index.html" not in root.text
