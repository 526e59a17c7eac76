from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Any

import httpx

from app.models.weather import CurrentConditions, ForecastSample

logger = logging.getLogger(__name__)

OPENWEATHER_BASE_URL = "https://api.openweathermap.org/data/2.5"
FORECAST_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


class WeatherProviderError(Exception):
    """The weather provider could not be reached or answered unexpectedly."""


class LocationNotFoundError(WeatherProviderError):
    """The provider does not know the requested location."""


def _parse_forecast_time(value: str) -> datetime:
    # Example: "2026-01-30 21:00:00"
    return datetime.strptime(value, FORECAST_TIME_FORMAT)


class OpenWeatherClient:
    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: float,
        base_url: str = OPENWEATHER_BASE_URL,
        units: str = "metric",
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._units = units
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            timeout=timeout_seconds,
            headers={"Accept": "application/json"},
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def fetch_current(
        self,
        *,
        location: str | None = None,
        lat: float | None = None,
        lon: float | None = None,
    ) -> CurrentConditions:
        if location and location.strip():
            params: dict[str, Any] = {"q": location.strip()}
        elif lat is not None and lon is not None:
            params = {"lat": lat, "lon": lon}
        else:
            raise ValueError("A location or a coordinate pair is required")

        payload = self._get("/weather", params)
        try:
            main: dict[str, Any] = payload["main"]
            coord: dict[str, Any] = payload["coord"]
            condition = _first_condition(payload)
            wind: dict[str, Any] = payload.get("wind") or {}
            observed_at = payload.get("dt")
            return CurrentConditions(
                name=str(payload.get("name") or location or ""),
                lat=float(coord["lat"]),
                lon=float(coord["lon"]),
                timestamp=(
                    datetime.fromtimestamp(int(observed_at), tz=timezone.utc)
                    if observed_at is not None
                    else datetime.now(tz=timezone.utc)
                ),
                temperature=_temperature(main["temp"]),
                feels_like=_float_or_none(main.get("feels_like")),
                humidity=_float_or_none(main.get("humidity")),
                wind_speed=_float_or_none(wind.get("speed")),
                condition_code=int(condition["id"]),
                description=str(condition["description"]),
                icon=str(condition["icon"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise WeatherProviderError("Unexpected current weather response shape") from e

    def fetch_forecast(self, *, lat: float, lon: float) -> list[ForecastSample]:
        payload = self._get("/forecast", {"lat": lat, "lon": lon})
        entries = payload.get("list")
        if not isinstance(entries, list):
            raise WeatherProviderError("Forecast response contained no sample list")
        return [self._parse_sample(entry) for entry in entries]

    def _get(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        query = {**params, "appid": self._api_key, "units": self._units}
        try:
            resp = self._client.get(path, params=query)
        except httpx.HTTPError as e:
            logger.warning("OpenWeather request to %s failed: %s", path, e)
            raise WeatherProviderError("Weather provider unreachable") from e

        if resp.status_code == httpx.codes.NOT_FOUND:
            raise LocationNotFoundError(_error_message(resp))
        if resp.is_error:
            logger.warning(
                "OpenWeather %s answered %s: %s", path, resp.status_code, _error_message(resp)
            )
            raise WeatherProviderError(f"Weather provider answered {resp.status_code}")

        try:
            payload = resp.json()
        except ValueError as e:
            raise WeatherProviderError("Weather provider returned invalid JSON") from e
        if not isinstance(payload, dict):
            raise WeatherProviderError("Unexpected weather response shape")

        # The body code is an int on /weather and a string on /forecast.
        cod = str(payload.get("cod", "200"))
        if cod == "404":
            raise LocationNotFoundError(str(payload.get("message") or "Location not found"))
        if cod != "200":
            logger.warning("OpenWeather %s returned cod=%s", path, cod)
            raise WeatherProviderError(f"Weather provider returned cod={cod}")
        return payload

    @staticmethod
    def _parse_sample(entry: Any) -> ForecastSample:
        try:
            condition = _first_condition(entry)
            return ForecastSample(
                timestamp=_parse_forecast_time(entry["dt_txt"]),
                temperature=_temperature(entry["main"]["temp"]),
                condition_code=int(condition["id"]),
                description=str(condition["description"]),
                icon=str(condition["icon"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise WeatherProviderError("Unexpected forecast entry shape") from e


def _first_condition(entry: dict[str, Any]) -> dict[str, Any]:
    conditions = entry["weather"]
    if not isinstance(conditions, list) or not conditions:
        raise ValueError("Entry has no weather conditions")
    return conditions[0]


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.reason_phrase or "error"
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return resp.reason_phrase or "error"


def _temperature(v: Any) -> float:
    temp = float(v)
    if not math.isfinite(temp):
        raise ValueError(f"Non-finite temperature: {v!r}")
    return temp


def _float_or_none(v: Any) -> float | None:
    try:
        if v is None:
            return None
        return float(v)
    except (TypeError, ValueError):
        return None
