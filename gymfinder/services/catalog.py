"""Client for the primary backend's gym catalog."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import httpx
import structlog
from pydantic import ValidationError as PydanticValidationError

from gymfinder.core.config import Settings, get_settings
from gymfinder.core.exceptions import NetworkError, ParseError, SubmissionError
from gymfinder.schemas.gym import ScoutSubmission, VerifiedGym
from gymfinder.schemas.session import AuthSession
from gymfinder.services.http_utils import decode_json, request_json, send_with_retries

logger = structlog.get_logger(__name__)

GYMS_PATH = "/api/gyms"

T = TypeVar("T")


def _backend_error(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, str) and error.strip():
            return error.strip()
    return None


class CatalogClient:
    provider = "catalog"

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._client = client

    @property
    def gyms_url(self) -> str:
        return f"{self._settings.api_url.rstrip('/')}{GYMS_PATH}"

    async def _call(self, fn: Callable[[httpx.AsyncClient], Awaitable[T]]) -> T:
        if self._client is not None:
            return await fn(self._client)
        async with httpx.AsyncClient() as client:
            return await fn(client)

    async def list_gyms(self) -> list[VerifiedGym]:
        """``GET /api/gyms``.

        Records that fail validation are skipped; a response without a ``data``
        array is a ParseError.

        Raises:
            NetworkError: transport failure or non-success status.
            ParseError: the body is not the expected envelope.
        """

        async def _get(client: httpx.AsyncClient) -> Any:
            return await request_json(
                client,
                "GET",
                self.gyms_url,
                provider=self.provider,
                timeout=self._settings.http_timeout_s,
                retries=self._settings.http_retries,
            )

        body = await self._call(_get)
        records = body.get("data") if isinstance(body, dict) else None
        if not isinstance(records, list):
            raise ParseError("catalog response has no data array")

        gyms: list[VerifiedGym] = []
        for record in records:
            try:
                gyms.append(VerifiedGym.model_validate(record))
            except PydanticValidationError as exc:
                logger.warning("catalog_record_skipped", error_count=exc.error_count())
        logger.info("catalog_loaded", gyms=len(gyms))
        return gyms

    async def create_gym(self, submission: ScoutSubmission, session: AuthSession) -> VerifiedGym:
        """``POST /api/gyms`` with the session's bearer token.

        Raises:
            SubmissionError: with the backend's ``error`` text when it sent one.
        """

        payload = submission.to_payload(owner_id=session.owner_id)

        async def _post(client: httpx.AsyncClient) -> httpx.Response:
            return await send_with_retries(
                client,
                "POST",
                self.gyms_url,
                provider=self.provider,
                headers=session.auth_headers(),
                json=payload,
                timeout=self._settings.http_timeout_s,
                retries=1,
            )

        try:
            response = await self._call(_post)
        except NetworkError as exc:
            logger.warning("scout_submit_failed", error=str(exc))
            raise SubmissionError() from exc

        if not response.is_success:
            message = _backend_error(response)
            logger.warning("scout_submit_rejected", status=response.status_code, error=message)
            raise SubmissionError(message, status_code=response.status_code)

        try:
            body = decode_json(response, provider=self.provider)
            gym = VerifiedGym.model_validate(body.get("data") if isinstance(body, dict) else None)
        except (ParseError, PydanticValidationError) as exc:
            logger.warning("scout_submit_unreadable", error=str(exc))
            raise SubmissionError(status_code=response.status_code) from exc

        logger.info("scout_submitted", gym_id=gym.id, name=gym.name)
        return gym
