from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any


@dataclass(frozen=True)
class WeatherQueryRecord:
    id: int
    location_name: str
    start_date: date
    end_date: date
    created_at: datetime
    latitude: float | None = None
    longitude: float | None = None
    retrieved_data: dict[str, Any] | None = None
