from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.api import deps
from app.core.config import Settings
from app.factory import create_app
from tests.fakes import FakeOpenWeatherClient


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        _env_file=None,
        env="test",
        debug=True,
        docs_enabled=False,
        log_level="DEBUG",
        secret_key="test_secret_key_must_be_32_chars_minimum",
        cors_origins=["http://localhost"],
        trusted_hosts=["testserver", "localhost"],
        database_url="sqlite://",
        openweather_api_key="test-api-key",
        openweather_base_url="http://openweather.test/data/2.5",
        weather_timeout_seconds=1.0,
        forecast_days=5,
        queries_fetch_weather=True,
    )


@pytest.fixture()
def fake_weather() -> FakeOpenWeatherClient:
    return FakeOpenWeatherClient()


@pytest.fixture()
def client(settings: Settings, fake_weather: FakeOpenWeatherClient) -> TestClient:
    app = create_app(settings)
    app.dependency_overrides[deps.get_weather_client] = lambda: fake_weather
    with TestClient(app) as client:
        yield client
