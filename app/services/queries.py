from __future__ import annotations

import logging
from datetime import date
from typing import Any

from app.models.query import WeatherQueryRecord
from app.models.weather import WeatherReport
from app.repositories.base import QueryRepository
from app.schemas.queries import QueryWrite
from app.schemas.weather import WeatherReportRead
from app.services.weather import WeatherService

logger = logging.getLogger(__name__)


def build_snapshot(
    report: WeatherReport, *, start_date: date, end_date: date
) -> dict[str, Any]:
    """JSON payload stored with a query: current conditions plus the forecast days in range."""
    body = WeatherReportRead.model_validate(report, from_attributes=True)
    in_range = [d for d in body.daily_forecast if start_date <= d.date <= end_date]
    return {
        "location": report.current.name,
        "current": body.current.model_dump(mode="json"),
        "daily_forecast": [d.model_dump(mode="json") for d in in_range],
    }


class QueryService:
    def __init__(
        self,
        repo: QueryRepository,
        *,
        weather: WeatherService | None = None,
    ) -> None:
        self._repo = repo
        self._weather = weather

    def create(self, payload: QueryWrite) -> WeatherQueryRecord:
        fields = self._resolve(payload)
        record = self._repo.create(**fields)
        logger.info("Saved query %s for %r", record.id, record.location_name)
        return record

    def list(self, *, limit: int = 100, offset: int = 0) -> list[WeatherQueryRecord]:
        return self._repo.list(limit=limit, offset=offset)

    def get(self, query_id: int) -> WeatherQueryRecord | None:
        return self._repo.get(query_id)

    def update(self, query_id: int, payload: QueryWrite) -> WeatherQueryRecord | None:
        if self._repo.get(query_id) is None:
            return None
        fields = self._resolve(payload)
        return self._repo.update(query_id, **fields)

    def delete(self, query_id: int) -> bool:
        deleted = self._repo.delete(query_id)
        if deleted:
            logger.info("Deleted query %s", query_id)
        return deleted

    def _resolve(self, payload: QueryWrite) -> dict[str, Any]:
        fields: dict[str, Any] = {
            "location_name": payload.location_name,
            "start_date": payload.start_date,
            "end_date": payload.end_date,
            "latitude": None,
            "longitude": None,
            "retrieved_data": payload.retrieved_data,
        }
        if payload.retrieved_data is not None or self._weather is None:
            return fields

        # Raises LocationNotFoundError for unknown places before anything is stored.
        report = self._weather.lookup(location=payload.location_name)
        fields["latitude"] = report.current.lat
        fields["longitude"] = report.current.lon
        fields["retrieved_data"] = build_snapshot(
            report, start_date=payload.start_date, end_date=payload.end_date
        )
        return fields
