from __future__ import annotations

import json

import httpx
import pytest

from gymfinder.core.exceptions import NetworkError, ParseError, SubmissionError
from gymfinder.schemas.gym import Coordinate, ScoutSubmission
from gymfinder.schemas.session import AuthSession, AuthUser
from gymfinder.services.catalog import CatalogClient
from tests.factories import verified_record

SESSION = AuthSession(token="secret-token", user=AuthUser(id="owner-1"))
SUBMISSION = ScoutSubmission(
    name="Iron Paradise",
    description="fitness",
    day_pass_price=15,
    has_squat_rack=True,
    website="https://iron.example",
    coordinate=Coordinate(lat=32.7157, lng=-117.1611),
)


async def test_list_gyms_parses_catalog_envelope(settings, mock_client):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200, json={"data": [verified_record("a1", "Metro Flex"), verified_record("a2", "Equinox")]}
        )

    async with mock_client(handler) as client:
        gyms = await CatalogClient(settings, client=client).list_gyms()

    assert [g.id for g in gyms] == ["a1", "a2"]
    assert gyms[0].kind == "verified"
    assert gyms[0].coordinate == Coordinate(lat=32.72, lng=-117.15)
    assert gyms[0].equipment.has_squat_rack is True
    assert gyms[0].equipment.max_dumbbell_weight == 120
    assert gyms[0].amenities.has_showers is True
    assert seen[0].method == "GET"
    assert str(seen[0].url) == "http://backend.test/api/gyms"


async def test_list_gyms_skips_invalid_records(settings, mock_client):
    bad_price = {**verified_record("b1", "Bad"), "dayPassPrice": -5}
    no_location = {"_id": "b2", "name": "Nowhere"}
    body = {"data": [bad_price, no_location, verified_record("ok", "Good")]}

    async with mock_client(lambda request: httpx.Response(200, json=body)) as client:
        gyms = await CatalogClient(settings, client=client).list_gyms()

    assert [g.id for g in gyms] == ["ok"]


async def test_list_gyms_without_data_array_is_parse_error(settings, mock_client):
    async with mock_client(lambda request: httpx.Response(200, json={"ok": True})) as client:
        with pytest.raises(ParseError):
            await CatalogClient(settings, client=client).list_gyms()


async def test_list_gyms_network_failure(settings, mock_client):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    async with mock_client(handler) as client:
        with pytest.raises(NetworkError):
            await CatalogClient(settings, client=client).list_gyms()


async def test_list_gyms_error_status(settings, mock_client):
    async with mock_client(lambda request: httpx.Response(404, json={"error": "nope"})) as client:
        with pytest.raises(NetworkError):
            await CatalogClient(settings, client=client).list_gyms()


async def test_create_gym_posts_geojson_payload_with_bearer_token(settings, mock_client):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, json={"data": verified_record("new-1", "Iron Paradise")})

    async with mock_client(handler) as client:
        gym = await CatalogClient(settings, client=client).create_gym(SUBMISSION, SESSION)

    assert gym.id == "new-1"
    request = seen[0]
    assert request.method == "POST"
    assert request.headers["authorization"] == "Bearer secret-token"
    body = json.loads(request.content)
    assert body["location"] == {
        "type": "Point",
        "coordinates": [-117.1611, 32.7157],
        "formattedAddress": "Scouted Location",
    }
    assert body["equipment"] == {
        "hasSquatRack": True,
        "hasDeadliftPlatform": False,
        "maxDumbbellWeight": 0,
    }
    assert body["amenities"] == {"hasAC": False, "hasShowers": False}
    assert body["dayPassPrice"] == 15
    assert body["owner"] == "owner-1"
    assert body["website"] == "https://iron.example"
    assert "phone" not in body


async def test_create_gym_is_not_retried(settings, mock_client):
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(503, json={"error": "busy"})

    async with mock_client(handler) as client:
        with pytest.raises(SubmissionError):
            await CatalogClient(settings, client=client).create_gym(SUBMISSION, SESSION)

    assert len(calls) == 1


async def test_create_gym_surfaces_backend_error_message(settings, mock_client):
    response = httpx.Response(400, json={"success": False, "error": "Duplicate gym name"})

    async with mock_client(lambda request: response) as client:
        with pytest.raises(SubmissionError) as excinfo:
            await CatalogClient(settings, client=client).create_gym(SUBMISSION, SESSION)

    assert excinfo.value.message == "Duplicate gym name"
    assert excinfo.value.status_code == 400


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, text="Internal Server Error"),
        httpx.Response(401, json={"success": False}),
        httpx.Response(201, json={"data": {"name": "missing id"}}),
    ],
)
async def test_create_gym_falls_back_to_generic_message(settings, mock_client, response):
    async with mock_client(lambda request: response) as client:
        with pytest.raises(SubmissionError) as excinfo:
            await CatalogClient(settings, client=client).create_gym(SUBMISSION, SESSION)

    assert excinfo.value.message == "Failed to save gym."


async def test_create_gym_transport_failure(settings, mock_client):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    async with mock_client(handler) as client:
        with pytest.raises(SubmissionError) as excinfo:
            await CatalogClient(settings, client=client).create_gym(SUBMISSION, SESSION)

    assert excinfo.value.message == "Failed to save gym."
