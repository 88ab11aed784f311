from __future__ import annotations

from gymfinder.schemas.gym import Coordinate
from gymfinder.schemas.selection import FlyTo
from gymfinder.services.camera import CameraController


class RecordingSurface:
    def __init__(self) -> None:
        self.calls: list[dict] = []

    def fly_to(self, *, center, zoom, duration) -> None:
        self.calls.append({"center": center, "zoom": zoom, "duration": duration})


class BrokenSurface:
    def fly_to(self, **kwargs) -> None:
        raise RuntimeError("map style not loaded")


def test_fly_to_passes_lng_lat_order():
    surface = RecordingSurface()

    CameraController(surface).fly_to(Coordinate(lat=32.7, lng=-117.1), 14, 1500)

    assert surface.calls == [{"center": [-117.1, 32.7], "zoom": 14, "duration": 1500}]


def test_fly_to_without_mounted_map_is_a_no_op():
    CameraController().fly_to(Coordinate(lat=0, lng=0), 14, 1500)


def test_fly_to_failures_are_swallowed():
    CameraController(BrokenSurface()).run(FlyTo(Coordinate(lat=0, lng=0), 14, 1500))


def test_attach_swaps_surface():
    camera = CameraController()
    surface = RecordingSurface()

    camera.attach(surface)
    camera.run(FlyTo(Coordinate(lat=1, lng=2), 12, 500))

    assert surface.calls == [{"center": [2, 1], "zoom": 12, "duration": 500}]
