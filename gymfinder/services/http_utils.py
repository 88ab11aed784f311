"""Shared HTTP helpers for the catalog backend and the POI index."""

from __future__ import annotations

import asyncio
from typing import Any

import httpx
import structlog

from gymfinder.core.exceptions import NetworkError, ParseError

logger = structlog.get_logger(__name__)

DEFAULT_TIMEOUT = 10.0
RETRY_ATTEMPTS = 3
RETRY_STATUSES = frozenset({429, 502, 503, 504})
_BACKOFF_BASE = 0.5


async def send_with_retries(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    provider: str,
    headers: dict[str, str] | None = None,
    content: str | bytes | None = None,
    json: Any = None,
    timeout: float = DEFAULT_TIMEOUT,
    retries: int = RETRY_ATTEMPTS,
) -> httpx.Response:
    """Send a request, retrying transport failures and throttling statuses.

    Args:
        client: HTTP client to use
        method: HTTP method
        url: absolute URL, or a path relative to the client's base_url
        provider: short name used in log events
        retries: total attempts; 1 disables retrying

    Returns:
        The last response received. Non-retryable statuses are returned as-is.

    Raises:
        NetworkError: if every attempt failed at the transport level.
    """
    last_error: Exception | None = None
    response: httpx.Response | None = None
    for attempt in range(1, retries + 1):
        try:
            response = await client.request(
                method,
                url,
                headers=headers,
                content=content,
                json=json,
                timeout=timeout,
            )
        except httpx.HTTPError as exc:
            last_error = exc
            logger.warning(
                "http_request_failed",
                provider=provider,
                attempt=attempt,
                retries=retries,
                url=url,
                error=str(exc),
            )
        else:
            if response.status_code not in RETRY_STATUSES or attempt == retries:
                return response
            logger.warning(
                "http_request_throttled",
                provider=provider,
                attempt=attempt,
                retries=retries,
                status=response.status_code,
            )
        if attempt < retries:
            await asyncio.sleep(_BACKOFF_BASE * attempt)

    if response is not None:
        return response
    raise NetworkError(f"{provider} request failed: {last_error}") from last_error


def decode_json(response: httpx.Response, *, provider: str) -> Any:
    """Decode a response body as JSON, raising ParseError on garbage."""
    try:
        return response.json()
    except ValueError as exc:
        logger.warning("http_response_not_json", provider=provider, status=response.status_code)
        raise ParseError(f"{provider} returned a non-JSON body") from exc


async def request_json(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    provider: str,
    headers: dict[str, str] | None = None,
    content: str | bytes | None = None,
    json: Any = None,
    timeout: float = DEFAULT_TIMEOUT,
    retries: int = RETRY_ATTEMPTS,
) -> Any:
    """Send a request and return its decoded JSON body.

    Raises:
        NetworkError: transport failure or a non-success status.
        ParseError: the body is not JSON.
    """
    response = await send_with_retries(
        client,
        method,
        url,
        provider=provider,
        headers=headers,
        content=content,
        json=json,
        timeout=timeout,
        retries=retries,
    )
    if not response.is_success:
        logger.warning("http_request_status", provider=provider, status=response.status_code)
        raise NetworkError(f"{provider} request failed with status {response.status_code}")
    return decode_json(response, provider=provider)
