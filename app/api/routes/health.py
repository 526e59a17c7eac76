from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.deps import get_query_repository
from app.repositories.base import QueryRepository

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health", tags=["meta"])
def health(
    repo: Annotated[QueryRepository, Depends(get_query_repository)],
) -> dict[str, str]:
    try:
        repo.ping()
    except Exception as e:  # noqa: BLE001 - expose as 503 without leaking internals
        logger.exception("Health check could not reach the database")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database unavailable",
        ) from e
    return {"status": "ok"}
