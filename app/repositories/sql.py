from __future__ import annotations

import builtins
from datetime import date
from typing import Any

from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.db.tables import WeatherQueryRow
from app.models.query import WeatherQueryRecord


def _to_record(row: WeatherQueryRow) -> WeatherQueryRecord:
    return WeatherQueryRecord(
        id=row.id,
        location_name=row.location_name,
        latitude=row.latitude,
        longitude=row.longitude,
        start_date=row.start_date,
        end_date=row.end_date,
        retrieved_data=row.retrieved_data,
        created_at=row.created_at,
    )


class SqlQueryRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def ping(self) -> None:
        self._session.execute(text("SELECT 1"))

    def create(
        self,
        *,
        location_name: str,
        start_date: date,
        end_date: date,
        latitude: float | None = None,
        longitude: float | None = None,
        retrieved_data: dict[str, Any] | None = None,
    ) -> WeatherQueryRecord:
        row = WeatherQueryRow(
            location_name=location_name,
            latitude=latitude,
            longitude=longitude,
            start_date=start_date,
            end_date=end_date,
            retrieved_data=retrieved_data,
        )
        self._session.add(row)
        self._commit()
        self._session.refresh(row)
        return _to_record(row)

    def list(self, *, limit: int, offset: int = 0) -> builtins.list[WeatherQueryRecord]:
        stmt = (
            select(WeatherQueryRow)
            .order_by(WeatherQueryRow.created_at.desc(), WeatherQueryRow.id.desc())
            .limit(limit)
            .offset(offset)
        )
        return [_to_record(row) for row in self._session.scalars(stmt)]

    def get(self, query_id: int) -> WeatherQueryRecord | None:
        row = self._session.get(WeatherQueryRow, query_id)
        return _to_record(row) if row is not None else None

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
    ) -> WeatherQueryRecord | None:
        row = self._session.get(WeatherQueryRow, query_id)
        if row is None:
            return None
        row.location_name = location_name
        row.latitude = latitude
        row.longitude = longitude
        row.start_date = start_date
        row.end_date = end_date
        row.retrieved_data = retrieved_data
        self._commit()
        self._session.refresh(row)
        return _to_record(row)

    def delete(self, query_id: int) -> bool:
        row = self._session.get(WeatherQueryRow, query_id)
        if row is None:
            return False
        self._session.delete(row)
        self._commit()
        return True

    def _commit(self) -> None:
        try:
            self._session.commit()
        except SQLAlchemyError:
            self._session.rollback()
            raise
