from __future__ import annotations

from datetime import date
from typing import Any, Protocol

from app.models.query import WeatherQueryRecord


class QueryRepository(Protocol):
    def ping(self) -> None: ...

    def create(
        self,
        *,
        location_name: str,
        start_date: date,
        end_date: date,
        latitude: float | None = None,
        longitude: float | None = None,
        retrieved_data: dict[str, Any] | None = None,
    ) -> WeatherQueryRecord: ...

    def list(self, *, limit: int, offset: int = 0) -> list[WeatherQueryRecord]: ...

    def get(self, query_id: int) -> WeatherQueryRecord | None: ...

    def update(
        self,
        query_id: int,
        *,
        location_name: str,
        start_date: date,
        end_date: date,
        latitude: float | None = None,
        longitude: float | None = None,
        retrieved_data: dict[str, Any] | None = None,
    ) -> WeatherQueryRecord | None: ...

    def delete(self, query_id: int) -> bool: ...
