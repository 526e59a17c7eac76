from __future__ import annotations

import logging

from app.clients.openweather import OpenWeatherClient
from app.models.weather import WeatherReport
from app.services.aggregation import FORECAST_DAYS, aggregate_daily_forecast

logger = logging.getLogger(__name__)


def has_location(location: str | None) -> bool:
    return bool(location and location.strip())


def has_coordinates(lat: float | None, lon: float | None) -> bool:
    return lat is not None and lon is not None


class WeatherService:
    def __init__(self, *, client: OpenWeatherClient, forecast_days: int = FORECAST_DAYS) -> None:
        self._client = client
        self._forecast_days = forecast_days

    def lookup(
        self,
        *,
        location: str | None = None,
        lat: float | None = None,
        lon: float | None = None,
    ) -> WeatherReport:
        """Fetch current conditions and the daily forecast for a place.

        A non-blank ``location`` takes priority over coordinates. The forecast
        is requested for the coordinates the provider resolved, so both calls
        describe the same place. Provider errors propagate unchanged.
        """
        if has_location(location):
            current = self._client.fetch_current(location=location)
        elif has_coordinates(lat, lon):
            current = self._client.fetch_current(lat=lat, lon=lon)
        else:
            raise ValueError("A location or a coordinate pair is required")

        samples = self._client.fetch_forecast(lat=current.lat, lon=current.lon)
        daily = aggregate_daily_forecast(samples, days=self._forecast_days)
        logger.debug(
            "Weather for %s: %d samples folded into %d days",
            current.name,
            len(samples),
            len(daily),
        )
        return WeatherReport(current=current, daily_forecast=daily)
