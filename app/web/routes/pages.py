from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import asdict
from datetime import date
from typing import Annotated, Any
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Form, HTTPException, Path, Query, Request, status
from fastapi.responses import RedirectResponse
from pydantic import ValidationError

from app.api.deps import get_query_service, get_weather_service
from app.clients.openweather import LocationNotFoundError, WeatherProviderError
from app.models.query import WeatherQueryRecord
from app.schemas.queries import QueryCreate, QueryUpdate
from app.services.queries import QueryService
from app.services.weather import WeatherService, has_coordinates, has_location
from app.web.deps import csrf_protect, ensure_csrf_token
from app.web.templates import templates

logger = logging.getLogger(__name__)

router = APIRouter()

NOT_FOUND_MESSAGE = "Could not find that location. Please check the spelling."
PROVIDER_MESSAGE = "Weather provider unavailable."
DATABASE_MESSAGE = "Database unavailable."


def _forecast_cards(days: Iterable[Any]) -> list[dict[str, Any]]:
    cards: list[dict[str, Any]] = []
    for day in days:
        if isinstance(day, dict):
            day_date = date.fromisoformat(str(day["date"]))
            values = day
        else:
            day_date = day.date
            values = asdict(day)
        cards.append(
            {
                "weekday": day_date.strftime("%a %d %b"),
                "icon": values["icon"],
                "description": values["description"],
                "temp_max": values["temp_max"],
                "temp_min": values["temp_min"],
            }
        )
    return cards


def _redirect(url: str, *, message: str | None = None) -> RedirectResponse:
    if message:
        url = f"{url}?{urlencode({'message': message})}"
    return RedirectResponse(url, status_code=303)


def _validation_message(e: ValidationError) -> str:
    errors = e.errors()
    if not errors:
        return "Invalid input."
    first = errors[0]
    msg = str(first.get("msg", "Invalid input.")).removeprefix("Value error, ")
    loc = [str(part) for part in first.get("loc", ()) if part != "__root__"]
    if loc and first.get("type") != "value_error":
        return f"{loc[-1].replace('_', ' ').capitalize()}: {msg}"
    return msg


def _submit_error(e: Exception) -> tuple[str, int]:
    if isinstance(e, LocationNotFoundError):
        return NOT_FOUND_MESSAGE, status.HTTP_404_NOT_FOUND
    if isinstance(e, WeatherProviderError):
        return PROVIDER_MESSAGE, status.HTTP_503_SERVICE_UNAVAILABLE
    logger.exception("Database error while saving query", exc_info=e)
    return "Could not save the query (database unavailable).", status.HTTP_503_SERVICE_UNAVAILABLE


def _render_queries(
    *,
    request: Request,
    service: QueryService,
    form: dict[str, str] | None = None,
    message: str | None = None,
    error: str | None = None,
    status_code: int = 200,
):
    csrf_token = ensure_csrf_token(request)
    records: list[WeatherQueryRecord] = []
    try:
        records = service.list(limit=100)
    except Exception:  # noqa: BLE001 - page still renders without history
        logger.exception("Database error while listing queries")
        error = error or DATABASE_MESSAGE
    return templates.TemplateResponse(
        request,
        "queries.html",
        {
            "request": request,
            "title": "Saved queries",
            "csrf_token": csrf_token,
            "records": records,
            "form": form or {},
            "message": message,
            "error": error,
        },
        status_code=status_code,
    )


def _render_detail(
    *,
    request: Request,
    record: WeatherQueryRecord,
    form: dict[str, str] | None = None,
    message: str | None = None,
    error: str | None = None,
    status_code: int = 200,
):
    csrf_token = ensure_csrf_token(request)
    return templates.TemplateResponse(
        request,
        "query_detail.html",
        {
            "request": request,
            "title": record.location_name,
            "csrf_token": csrf_token,
            "record": record,
            "snapshot": record.retrieved_data or {},
            "days": _forecast_cards((record.retrieved_data or {}).get("daily_forecast") or []),
            "form": form
            or {
                "location_name": record.location_name,
                "start_date": record.start_date.isoformat(),
                "end_date": record.end_date.isoformat(),
            },
            "message": message,
            "error": error,
        },
        status_code=status_code,
    )


def _load_record(service: QueryService, query_id: int) -> WeatherQueryRecord:
    try:
        record = service.get(query_id)
    except Exception as e:  # noqa: BLE001
        logger.exception("Database error while reading query %s", query_id)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=DATABASE_MESSAGE,
        ) from e
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Query not found")
    return record


@router.get("/", include_in_schema=False)
def ui_index():
    return RedirectResponse("/ui/weather", status_code=303)


@router.get("/weather", include_in_schema=False)
def weather_page(
    request: Request,
    service: Annotated[WeatherService, Depends(get_weather_service)],
    location: Annotated[str | None, Query(max_length=255)] = None,
    lat: Annotated[float | None, Query(ge=-90, le=90)] = None,
    lon: Annotated[float | None, Query(ge=-180, le=180)] = None,
):
    report = None
    error: str | None = None
    searched = location is not None or lat is not None or lon is not None
    if searched:
        if has_location(location) or has_coordinates(lat, lon):
            try:
                report = service.lookup(location=location, lat=lat, lon=lon)
            except LocationNotFoundError:
                error = NOT_FOUND_MESSAGE
            except WeatherProviderError as e:
                logger.warning("Weather lookup failed: %s", e)
                error = PROVIDER_MESSAGE
        elif location is not None:
            error = "Location input cannot be empty."
        else:
            error = "Both latitude and longitude are required."

    return templates.TemplateResponse(
        request,
        "weather.html",
        {
            "request": request,
            "title": "Weather",
            "location": (location or "").strip(),
            "report": report,
            "days": _forecast_cards(report.daily_forecast) if report else [],
            "error": error,
        },
    )


@router.get("/queries", include_in_schema=False)
def queries_page(
    request: Request,
    service: Annotated[QueryService, Depends(get_query_service)],
    message: Annotated[str | None, Query(max_length=200)] = None,
):
    return _render_queries(request=request, service=service, message=message)


@router.post("/queries", include_in_schema=False, dependencies=[Depends(csrf_protect)])
def create_query(
    request: Request,
    service: Annotated[QueryService, Depends(get_query_service)],
    location_name: Annotated[str, Form(max_length=255)] = "",
    start_date: Annotated[str, Form(max_length=10)] = "",
    end_date: Annotated[str, Form(max_length=10)] = "",
):
    form = {"location_name": location_name, "start_date": start_date, "end_date": end_date}
    try:
        payload = QueryCreate.model_validate(form)
    except ValidationError as e:
        return _render_queries(
            request=request,
            service=service,
            form=form,
            error=_validation_message(e),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    try:
        record = service.create(payload)
    except Exception as e:  # noqa: BLE001
        error, status_code = _submit_error(e)
        return _render_queries(
            request=request, service=service, form=form, error=error, status_code=status_code
        )
    return _redirect(f"/ui/queries/{record.id}", message="Query saved.")


@router.get("/queries/{query_id}", include_in_schema=False)
def query_detail(
    request: Request,
    query_id: Annotated[int, Path(ge=1)],
    service: Annotated[QueryService, Depends(get_query_service)],
    message: Annotated[str | None, Query(max_length=200)] = None,
):
    record = _load_record(service, query_id)
    return _render_detail(request=request, record=record, message=message)


@router.post(
    "/queries/{query_id}",
    include_in_schema=False,
    dependencies=[Depends(csrf_protect)],
)
def update_query(
    request: Request,
    query_id: Annotated[int, Path(ge=1)],
    service: Annotated[QueryService, Depends(get_query_service)],
    location_name: Annotated[str, Form(max_length=255)] = "",
    start_date: Annotated[str, Form(max_length=10)] = "",
    end_date: Annotated[str, Form(max_length=10)] = "",
):
    record = _load_record(service, query_id)
    form = {"location_name": location_name, "start_date": start_date, "end_date": end_date}
    error: str | None = None
    status_code = status.HTTP_400_BAD_REQUEST
    updated: WeatherQueryRecord | None = None
    try:
        payload = QueryUpdate.model_validate(form)
    except ValidationError as e:
        error = _validation_message(e)
    else:
        try:
            updated = service.update(query_id, payload)
        except Exception as e:  # noqa: BLE001
            error, status_code = _submit_error(e)

    if error is not None:
        return _render_detail(
            request=request, record=record, form=form, error=error, status_code=status_code
        )
    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Query not found")
    return _redirect(f"/ui/queries/{query_id}", message="Query updated.")


@router.post(
    "/queries/{query_id}/delete",
    include_in_schema=False,
    dependencies=[Depends(csrf_protect)],
)
def delete_query(
    query_id: Annotated[int, Path(ge=1)],
    service: Annotated[QueryService, Depends(get_query_service)],
):
    try:
        deleted = service.delete(query_id)
    except Exception as e:  # noqa: BLE001
        logger.exception("Database error while deleting query %s", query_id)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=DATABASE_MESSAGE,
        ) from e
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Query not found")
    return _redirect("/ui/queries", message=f"Query {query_id} deleted.")
