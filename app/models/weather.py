from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime


@dataclass(frozen=True)
class ForecastSample:
    timestamp: datetime
    temperature: float
    condition_code: int
    description: str
    icon: str


@dataclass(frozen=True)
class DailySummary:
    date: date
    temp_max: float
    temp_min: float
    description: str
    icon: str


@dataclass(frozen=True)
class CurrentConditions:
    name: str
    lat: float
    lon: float
    timestamp: datetime
    temperature: float
    feels_like: float | None = None
    humidity: float | None = None
    wind_speed: float | None = None
    condition_code: int | None = None
    description: str | None = None
    icon: str | None = None


@dataclass(frozen=True)
class WeatherReport:
    current: CurrentConditions
    daily_forecast: list[DailySummary] = field(default_factory=list)
