from __future__ import annotations

from typing import Protocol

import structlog

from gymfinder.schemas.gym import Coordinate
from gymfinder.schemas.selection import FlyTo

logger = structlog.get_logger(__name__)


class MapSurface(Protocol):
    """The slice of a map SDK the camera needs."""

    def fly_to(self, *, center: list[float], zoom: float, duration: int) -> None: ...


class CameraController:
    """Fire-and-forget camera moves. Failures are logged, never raised."""

    def __init__(self, surface: MapSurface | None = None) -> None:
        self._surface = surface

    def attach(self, surface: MapSurface | None) -> None:
        self._surface = surface

    def fly_to(self, coordinate: Coordinate, zoom: float, duration_ms: int) -> None:
        if self._surface is None:
            logger.debug("camera_fly_to_skipped", reason="map_not_mounted")
            return
        try:
            self._surface.fly_to(center=coordinate.as_lng_lat(), zoom=zoom, duration=duration_ms)
        except Exception as exc:  # noqa: BLE001 - cosmetic, must not block selection
            logger.warning("camera_fly_to_failed", error=str(exc))

    def run(self, command: FlyTo) -> None:
        self.fly_to(command.coordinate, command.zoom, command.duration_ms)
