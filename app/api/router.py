from fastapi import APIRouter

from app.api.routes import health, queries, weather

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(health.router)
api_router.include_router(weather.router, tags=["weather"])
api_router.include_router(queries.router, tags=["queries"])
