# tests/conftest.py
from __future__ import annotations

import asyncio
import os
from collections.abc import Callable

import httpx
import pytest
from dotenv import load_dotenv
from httpx import ASGITransport, AsyncClient

# Load .env.test if available; tests never talk to real endpoints.
load_dotenv(".env.test", override=False)
os.environ.setdefault("APP_ENV", "test")

from gymfinder.core.config import Settings  # noqa: E402
from gymfinder.services import http_utils  # noqa: E402

API_URL = "http://backend.test"
OVERPASS_URL = "http://overpass.test/api/interpreter"

_real_sleep = asyncio.sleep


@pytest.fixture(autouse=True)
def _no_sleep(monkeypatch: pytest.MonkeyPatch) -> None:
    async def _sleep(_: float) -> None:
        # Skip backoff delays but still yield to the loop.
        await _real_sleep(0)

    monkeypatch.setattr(http_utils.asyncio, "sleep", _sleep)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        api_url=API_URL,
        overpass_url=OVERPASS_URL,
        session_file=tmp_path / "session.json",
        http_retries=2,
        discovery_timeout_s=1.0,
    )


@pytest.fixture
def mock_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.AsyncClient]:
    """Build an AsyncClient whose requests are answered by ``handler``."""

    def _build(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _build


@pytest.fixture
async def app_client():
    from gymfinder.main import create_app

    app = create_app()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac, app
