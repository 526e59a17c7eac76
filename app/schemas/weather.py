from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


class CurrentWeatherRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

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


class DailyForecastRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: date
    temp_max: float
    temp_min: float
    description: str
    icon: str


class WeatherReportRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    current: CurrentWeatherRead
    daily_forecast: list[DailyForecastRead] = Field(default_factory=list, max_length=5)
