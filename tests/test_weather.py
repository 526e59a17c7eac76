from __future__ import annotations

from fastapi.testclient import TestClient

from tests.fakes import FakeOpenWeatherClient


def test_weather_by_location(client: TestClient, fake_weather: FakeOpenWeatherClient) -> None:
    resp = client.get("/api/v1/weather", params={"location": "Oslo"})
    assert resp.status_code == 200, resp.text
    body = resp.json()

    assert body["current"]["name"] == "Oslo"
    assert body["current"]["description"] == "broken clouds"
    days = body["daily_forecast"]
    assert [d["date"] for d in days] == [
        "2026-10-20",
        "2026-10-21",
        "2026-10-22",
        "2026-10-23",
        "2026-10-24",
    ]
    assert all(d["temp_max"] >= d["temp_min"] for d in days)
    # Forecast is requested for the coordinates the provider resolved.
    assert fake_weather.forecast_calls == [(59.9139, 10.7522)]


def test_weather_by_coordinates(client: TestClient, fake_weather: FakeOpenWeatherClient) -> None:
    resp = client.get("/api/v1/weather", params={"lat": 51.5, "lon": -0.12})
    assert resp.status_code == 200, resp.text
    assert fake_weather.current_calls[-1] == {"location": None, "lat": 51.5, "lon": -0.12}
    assert len(resp.json()["daily_forecast"]) == 5


def test_location_takes_priority_over_coordinates(
    client: TestClient, fake_weather: FakeOpenWeatherClient
) -> None:
    resp = client.get("/api/v1/weather", params={"location": "Paris", "lat": 1, "lon": 2})
    assert resp.status_code == 200, resp.text
    assert resp.json()["current"]["name"] == "Paris"
    assert fake_weather.current_calls[-1]["location"] == "Paris"


def test_missing_location_and_coordinates(
    client: TestClient, fake_weather: FakeOpenWeatherClient
) -> None:
    for params in ({}, {"location": "   "}, {"lat": 10.0}):
        resp = client.get("/api/v1/weather", params=params)
        assert resp.status_code == 400, params
        assert resp.json()["detail"] == "Missing location or coordinates."
    assert fake_weather.current_calls == []


def test_out_of_range_coordinates_rejected(client: TestClient) -> None:
    resp = client.get("/api/v1/weather", params={"lat": 123.0, "lon": 10.0})
    assert resp.status_code == 422


def test_unknown_location_is_404(client: TestClient, fake_weather: FakeOpenWeatherClient) -> None:
    resp = client.get("/api/v1/weather", params={"location": "Atlantis"})
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Location not found"
    assert fake_weather.forecast_calls == []


def test_provider_failure_is_503_without_internals(
    client: TestClient, fake_weather: FakeOpenWeatherClient
) -> None:
    fake_weather.fail = True
    resp = client.get("/api/v1/weather", params={"location": "Oslo"})
    assert resp.status_code == 503
    assert resp.json() == {"detail": "Weather provider unavailable"}


def test_root_and_health(client: TestClient) -> None:
    root = client.get("/")
    assert root.status_code == 200
    assert root.json()["status"] == "ok"
    assert root.headers["x-content-type-options"] == "nosniff"

    health = client.get("/api/v1/health")
    assert health.status_code == 200
    assert health.json() == {"status": "ok"}
