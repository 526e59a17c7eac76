from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from app.models.weather import DailySummary, ForecastSample

FORECAST_DAYS = 5


@dataclass
class _DayAccumulator:
    description: str
    icon: str
    temp_max: float = -math.inf
    temp_min: float = math.inf


def day_key(sample: ForecastSample) -> date:
    # Provider clock; no timezone conversion.
    return sample.timestamp.date()


def aggregate_daily_forecast(
    samples: Iterable[ForecastSample], *, days: int = FORECAST_DAYS
) -> list[DailySummary]:
    """Fold 3-hourly samples into one summary per calendar day.

    Days keep the order in which they first appear. The first day is treated
    as "today" and dropped, and at most ``days`` summaries are returned. The
    description and icon of a day come from its first sample.
    """
    by_day: dict[date, _DayAccumulator] = {}
    for sample in samples:
        key = day_key(sample)
        acc = by_day.get(key)
        if acc is None:
            acc = by_day[key] = _DayAccumulator(
                description=sample.description, icon=sample.icon
            )
        acc.temp_max = max(acc.temp_max, sample.temperature)
        acc.temp_min = min(acc.temp_min, sample.temperature)

    summaries = [
        DailySummary(
            date=key,
            temp_max=acc.temp_max,
            temp_min=acc.temp_min,
            description=acc.description,
            icon=acc.icon,
        )
        for key, acc in by_day.items()
    ]
    return summaries[1 : 1 + max(int(days), 0)]
