"""CSRF tokens for the HTML forms, kept in the signed session cookie."""

from __future__ import annotations

import secrets
from typing import Annotated

from fastapi import Form, HTTPException, Request, status

CSRF_SESSION_KEY = "csrf_token"


def ensure_csrf_token(request: Request) -> str:
    token = request.session.get(CSRF_SESSION_KEY)
    if isinstance(token, str) and token:
        return token
    token = secrets.token_urlsafe(32)
    request.session[CSRF_SESSION_KEY] = token
    return token


def csrf_protect(
    request: Request,
    csrf_token: Annotated[str, Form(max_length=128)],
) -> None:
    expected = request.session.get(CSRF_SESSION_KEY)
    if not isinstance(expected, str) or not secrets.compare_digest(expected, csrf_token):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid CSRF token")
