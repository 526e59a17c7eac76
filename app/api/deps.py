from __future__ import annotations

from collections.abc import Iterator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.clients.openweather import OpenWeatherClient
from app.core.config import Settings
from app.repositories.base import QueryRepository
from app.repositories.sql import SqlQueryRepository
from app.services.queries import QueryService
from app.services.weather import WeatherService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db_session(request: Request) -> Iterator[Session]:
    session: Session = request.app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


def get_query_repository(
    session: Annotated[Session, Depends(get_db_session)],
) -> QueryRepository:
    return SqlQueryRepository(session)


def get_weather_client(request: Request) -> OpenWeatherClient:
    return request.app.state.weather_client


def get_weather_service(
    client: Annotated[OpenWeatherClient, Depends(get_weather_client)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> WeatherService:
    return WeatherService(client=client, forecast_days=settings.forecast_days)


def get_query_service(
    repo: Annotated[QueryRepository, Depends(get_query_repository)],
    weather: Annotated[WeatherService, Depends(get_weather_service)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> QueryService:
    return QueryService(repo, weather=weather if settings.queries_fetch_weather else None)
