"""Durable client-side session storage and profile lookup.

The session file holds ``{"token": ..., "user": {...}}`` as written after login.
Its presence is what gates scouting; token validity is not checked here.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

import httpx
import structlog
from pydantic import ValidationError as PydanticValidationError

from gymfinder.core.config import Settings, get_settings
from gymfinder.core.exceptions import NetworkError, ParseError
from gymfinder.schemas.session import AuthSession, UserProfile
from gymfinder.services.http_utils import request_json

logger = structlog.get_logger(__name__)


def load_session(path: str | os.PathLike) -> AuthSession | None:
    """Read the stored session; None when absent or unreadable."""

    file = Path(path)
    if not file.is_file():
        return None
    try:
        raw = json.loads(file.read_text(encoding="utf-8"))
        return AuthSession.model_validate(raw)
    except (OSError, ValueError, PydanticValidationError) as exc:
        logger.warning("session_file_invalid", path=str(file), error=str(exc))
        return None


def save_session(path: str | os.PathLike, session: AuthSession) -> None:
    file = Path(path)
    file.parent.mkdir(parents=True, exist_ok=True)
    file.write_text(session.model_dump_json(), encoding="utf-8")
    logger.info("session_saved", path=str(file))


def clear_session(path: str | os.PathLike) -> None:
    file = Path(path)
    file.unlink(missing_ok=True)
    logger.info("session_cleared", path=str(file))


async def fetch_profile(
    session: AuthSession | None,
    settings: Settings | None = None,
    *,
    client: httpx.AsyncClient | None = None,
) -> UserProfile | None:
    """``GET /api/auth/me`` for the stored session; None on any failure."""

    if session is None:
        return None
    settings = settings or get_settings()

    async def _get(http: httpx.AsyncClient) -> object:
        return await request_json(
            http,
            "GET",
            f"{settings.api_url.rstrip('/')}/api/auth/me",
            provider="profile",
            headers=session.auth_headers(),
            timeout=settings.http_timeout_s,
            retries=1,
        )

    try:
        if client is not None:
            body = await _get(client)
        else:
            async with httpx.AsyncClient() as http:
                body = await _get(http)
        data = body.get("data") if isinstance(body, dict) else None
        if data is None:
            raise ParseError("profile response has no data")
        return UserProfile.model_validate(data)
    except (NetworkError, ParseError, PydanticValidationError) as exc:
        logger.warning("profile_fetch_failed", error=str(exc))
        return None
