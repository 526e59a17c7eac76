from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class QueryWrite(BaseModel):
    location_name: str = Field(min_length=1, max_length=255)
    start_date: date
    end_date: date
    retrieved_data: dict[str, Any] | None = None

    @field_validator("location_name")
    @classmethod
    def _strip_location(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Location must not be empty.")
        return v

    @model_validator(mode="after")
    def _check_date_range(self) -> QueryWrite:
        if self.start_date > self.end_date:
            raise ValueError("Start date must not be after the end date.")
        return self


class QueryCreate(QueryWrite):
    pass


class QueryUpdate(QueryWrite):
    pass


class QuerySummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    location_name: str
    start_date: date
    end_date: date
    created_at: datetime


class QueryRead(QuerySummary):
    latitude: float | None = None
    longitude: float | None = None
    retrieved_data: dict[str, Any] | None = None


class QueryDeleteResponse(BaseModel):
    message: str
