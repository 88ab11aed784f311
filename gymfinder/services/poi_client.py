"""Shadow gym discovery against an Overpass-style POI index."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import httpx
import structlog

from gymfinder.core.config import Settings, get_settings
from gymfinder.core.exceptions import NetworkError, ParseError
from gymfinder.schemas.gym import Coordinate, ShadowGym
from gymfinder.services.http_utils import request_json

logger = structlog.get_logger(__name__)

SHADOW_ID_PREFIX = "osm-"

# (key, value) pairs a fitness POI may carry; each is queried as node and way.
_FITNESS_FILTERS = (
    ("leisure", "fitness_centre"),
    ("sport", "fitness"),
)
_GEOMETRIES = ("node", "way")


def build_query(center: Coordinate, radius_m: float, *, limit: int = 20) -> str:
    """Compose the Overpass QL payload for fitness POIs around ``center``."""

    around = f"(around:{radius_m:.0f},{center.lat},{center.lng})"
    selectors = [
        f'  {geometry}["{key}"="{value}"]{around};'
        for key, value in _FITNESS_FILTERS
        for geometry in _GEOMETRIES
    ]
    return "\n".join(["[out:json];", "(", *selectors, ");", f"out center {limit};"])


def shadow_id(native_id: Any) -> str:
    return f"{SHADOW_ID_PREFIX}{native_id}"


def _clean_tags(raw: Any) -> dict[str, str]:
    if not isinstance(raw, Mapping):
        return {}
    return {str(key): value for key, value in raw.items() if isinstance(value, str)}


def _element_coordinate(element: Mapping[str, Any]) -> Coordinate:
    # Ways carry a computed ``center``; nodes carry lat/lon directly.
    center = element.get("center")
    if isinstance(center, Mapping):
        lat, lon = center.get("lat"), center.get("lon")
    else:
        lat, lon = element.get("lat"), element.get("lon")
    if lat is None or lon is None:
        raise ParseError(f"element {element.get('id')!r} has no geometry")
    try:
        return Coordinate(lat=float(lat), lng=float(lon))
    except (TypeError, ValueError) as exc:
        raise ParseError(f"element {element.get('id')!r} has invalid geometry") from exc


def parse_element(element: Any) -> ShadowGym | None:
    """Map one raw element to a ShadowGym.

    Returns None for unnamed elements. Raises ParseError when the element is
    malformed (no id, no usable geometry).
    """

    if not isinstance(element, Mapping):
        raise ParseError("element is not an object")
    native_id = element.get("id")
    if native_id is None:
        raise ParseError("element has no id")

    tags = _clean_tags(element.get("tags"))
    name = (tags.get("name") or "").strip()
    if not name:
        return None

    return ShadowGym(
        id=shadow_id(native_id),
        name=name,
        coordinate=_element_coordinate(element),
        tags=tags,
    )


def normalize_elements(elements: Iterable[Any]) -> list[ShadowGym]:
    """Parse a batch, skipping malformed and unnamed elements individually."""

    gyms: list[ShadowGym] = []
    for element in elements:
        try:
            gym = parse_element(element)
        except ParseError as exc:
            logger.info("poi_element_skipped", reason=str(exc))
            continue
        if gym is None:
            logger.debug("poi_element_unnamed", element_id=element.get("id"))
            continue
        gyms.append(gym)
    return gyms


def _extract_elements(payload: Any) -> list[Any]:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, Mapping):
        elements = payload.get("elements")
        if isinstance(elements, list):
            return elements
    raise ParseError("overpass payload has no elements array")


class PoiClient:
    """Queries the POI index. Never raises past ``discover``."""

    provider = "overpass"

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._client = client

    async def discover(self, center: Coordinate, radius_m: float | None = None) -> list[ShadowGym]:
        """Return shadow gyms around ``center``; an empty list on any failure."""

        radius = radius_m if radius_m is not None else self._settings.discovery_radius_m
        query = build_query(center, radius, limit=self._settings.discovery_limit)
        logger.info("overpass_search", lat=center.lat, lng=center.lng, radius_m=radius)
        try:
            payload = await self._post(query)
            elements = _extract_elements(payload)
        except (NetworkError, ParseError) as exc:
            logger.warning("overpass_search_failed", error=str(exc))
            return []

        gyms = normalize_elements(elements)
        logger.info("overpass_search_done", elements=len(elements), shadow_gyms=len(gyms))
        return gyms

    async def _post(self, query: str) -> Any:
        kwargs = dict(
            provider=self.provider,
            headers={"Content-Type": "text/plain", "User-Agent": self._settings.user_agent},
            content=query,
            timeout=self._settings.http_timeout_s,
            retries=self._settings.http_retries,
        )
        if self._client is not None:
            return await request_json(self._client, "POST", self._settings.overpass_url, **kwargs)
        async with httpx.AsyncClient() as client:
            return await request_json(client, "POST", self._settings.overpass_url, **kwargs)
