from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.deps import get_weather_service
from app.clients.openweather import LocationNotFoundError, WeatherProviderError
from app.schemas.weather import WeatherReportRead
from app.services.weather import WeatherService, has_coordinates, has_location

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/weather")


@router.get("", response_model=WeatherReportRead)
def get_weather(
    service: Annotated[WeatherService, Depends(get_weather_service)],
    location: Annotated[str | None, Query(max_length=255)] = None,
    lat: Annotated[float | None, Query(ge=-90, le=90)] = None,
    lon: Annotated[float | None, Query(ge=-180, le=180)] = None,
) -> WeatherReportRead:
    if not has_location(location) and not has_coordinates(lat, lon):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing location or coordinates.",
        )
    try:
        report = service.lookup(location=location, lat=lat, lon=lon)
    except LocationNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Location not found",
        ) from e
    except WeatherProviderError as e:
        logger.warning("Weather lookup failed: %s", e)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Weather provider unavailable",
        ) from e
    return WeatherReportRead.model_validate(report)
