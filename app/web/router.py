from fastapi import APIRouter

from app.web.routes import pages

ui_router = APIRouter(prefix="/ui", include_in_schema=False, tags=["ui"])
ui_router.include_router(pages.router)
