from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from sqlalchemy.exc import OperationalError

from app.clients.openweather import LocationNotFoundError, WeatherProviderError
from app.models.query import WeatherQueryRecord
from app.models.weather import CurrentConditions, ForecastSample

FORECAST_START = datetime(2026, 10, 19, 9, 0, 0)

KNOWN_PLACES: dict[str, tuple[float, float]] = {
    "Oslo": (59.9139, 10.7522),
    "Bergen": (60.3930, 5.3242),
    "Paris": (48.8534, 2.3488),
}


def make_samples(
    *,
    start: datetime = FORECAST_START,
    count: int = 40,
    step_hours: int = 3,
    base_temp: float = 10.0,
) -> list[ForecastSample]:
    samples: list[ForecastSample] = []
    for i in range(count):
        samples.append(
            ForecastSample(
                timestamp=start + timedelta(hours=i * step_hours),
                temperature=base_temp + (i % 8),
                condition_code=800 if i % 2 == 0 else 500,
                description="clear sky" if i % 2 == 0 else "light rain",
                icon="01d" if i % 2 == 0 else "10d",
            )
        )
    return samples


class FakeOpenWeatherClient:
    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.current_calls: list[dict[str, object]] = []
        self.forecast_calls: list[tuple[float, float]] = []

    def close(self) -> None:
        return None

    def fetch_current(
        self,
        *,
        location: str | None = None,
        lat: float | None = None,
        lon: float | None = None,
    ) -> CurrentConditions:
        self.current_calls.append({"location": location, "lat": lat, "lon": lon})
        if self.fail:
            raise WeatherProviderError("Weather provider unreachable")

        if location:
            if location not in KNOWN_PLACES:
                raise LocationNotFoundError("city not found")
            name = location
            lat, lon = KNOWN_PLACES[location]
        else:
            name = "Current location"

        return CurrentConditions(
            name=name,
            lat=float(lat),
            lon=float(lon),
            timestamp=datetime(2026, 10, 19, 8, 0, tzinfo=timezone.utc),
            temperature=11.6,
            feels_like=10.2,
            humidity=81.0,
            wind_speed=3.6,
            condition_code=803,
            description="broken clouds",
            icon="04d",
        )

    def fetch_forecast(self, *, lat: float, lon: float) -> list[ForecastSample]:
        self.forecast_calls.append((lat, lon))
        if self.fail:
            raise WeatherProviderError("Weather provider unreachable")
        return make_samples()


class FailingQueryRepository:
    """Query store whose every call fails the way an unreachable database does."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def _fail(self, name: str) -> OperationalError:
        self.calls.append(name)
        return OperationalError("SELECT 1", {}, Exception("database is down"))

    def ping(self) -> None:
        raise self._fail("ping")

    def create(self, **fields: Any) -> WeatherQueryRecord:
        raise self._fail("create")

    def list(self, *, limit: int, offset: int = 0) -> list[WeatherQueryRecord]:
        raise self._fail("list")

    def get(self, query_id: int) -> WeatherQueryRecord | None:
        raise self._fail("get")

    def update(self, query_id: int, **fields: Any) -> WeatherQueryRecord | None:
        raise self._fail("update")

    def delete(self, query_id: int) -> bool:
        raise self._fail("delete")
