from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from app.api.deps import get_query_service
from app.clients.openweather import LocationNotFoundError, WeatherProviderError
from app.models.query import WeatherQueryRecord
from app.schemas.queries import (
    QueryCreate,
    QueryDeleteResponse,
    QueryRead,
    QuerySummary,
    QueryUpdate,
)
from app.services.queries import QueryService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/queries")

QueryId = Annotated[int, Path(ge=1)]


def _storage_unavailable(e: Exception, action: str) -> HTTPException:
    logger.exception("Database error during %s", action, exc_info=e)
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Database unavailable",
    )


def _not_found(query_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Query {query_id} not found",
    )


def _weather_failure(e: WeatherProviderError) -> HTTPException:
    if isinstance(e, LocationNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Location not found")
    logger.warning("Weather lookup for saved query failed: %s", e)
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Weather provider unavailable",
    )


@router.post("", response_model=QueryRead, status_code=status.HTTP_201_CREATED)
def create_query(
    payload: QueryCreate,
    service: Annotated[QueryService, Depends(get_query_service)],
) -> QueryRead:
    try:
        record = service.create(payload)
    except WeatherProviderError as e:
        raise _weather_failure(e) from e
    except Exception as e:  # noqa: BLE001 - normalize storage failures
        raise _storage_unavailable(e, "create") from e
    return QueryRead.model_validate(record)


@router.get("", response_model=list[QuerySummary])
def list_queries(
    service: Annotated[QueryService, Depends(get_query_service)],
    limit: Annotated[int, Query(ge=1, le=1000)] = 100,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> list[QuerySummary]:
    try:
        records = service.list(limit=limit, offset=offset)
    except Exception as e:  # noqa: BLE001 - normalize storage failures
        raise _storage_unavailable(e, "list") from e
    return [QuerySummary.model_validate(r) for r in records]


@router.get("/{query_id}", response_model=QueryRead)
def read_query(
    query_id: QueryId,
    service: Annotated[QueryService, Depends(get_query_service)],
) -> QueryRead:
    try:
        record: WeatherQueryRecord | None = service.get(query_id)
    except Exception as e:  # noqa: BLE001 - normalize storage failures
        raise _storage_unavailable(e, "read") from e
    if record is None:
        raise _not_found(query_id)
    return QueryRead.model_validate(record)


@router.put("/{query_id}", response_model=QueryRead)
def update_query(
    query_id: QueryId,
    payload: QueryUpdate,
    service: Annotated[QueryService, Depends(get_query_service)],
) -> QueryRead:
    try:
        record = service.update(query_id, payload)
    except WeatherProviderError as e:
        raise _weather_failure(e) from e
    except Exception as e:  # noqa: BLE001 - normalize storage failures
        raise _storage_unavailable(e, "update") from e
    if record is None:
        raise _not_found(query_id)
    return QueryRead.model_validate(record)


@router.delete("/{query_id}", response_model=QueryDeleteResponse)
def delete_query(
    query_id: QueryId,
    service: Annotated[QueryService, Depends(get_query_service)],
) -> QueryDeleteResponse:
    try:
        deleted = service.delete(query_id)
    except Exception as e:  # noqa: BLE001 - normalize storage failures
        raise _storage_unavailable(e, "delete") from e
    if not deleted:
        raise _not_found(query_id)
    return QueryDeleteResponse(message=f"Query {query_id} deleted.")
