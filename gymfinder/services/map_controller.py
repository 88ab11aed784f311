"""The map screen's controller: loading, selection and scouting.

One controller owns the reconciled gym list and the single ``SelectionState``.
Everything runs on one event loop; the only rule after an ``await`` is to check
the liveness flag captured before it, so results that land after teardown are
dropped instead of applied.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass

import structlog

from gymfinder.core.config import Settings, get_settings
from gymfinder.core.exceptions import NetworkError, ParseError, SubmissionError
from gymfinder.schemas.gym import Coordinate, ScoutSubmission, ShadowGym, VerifiedGym
from gymfinder.schemas.selection import (
    Activate,
    Authenticated,
    ClearSelection,
    CloseScout,
    DismissAuthGate,
    ScoutAdded,
    SelectionEvent,
    SelectionState,
    SheetDragReleased,
    StartScout,
    ToggleSheet,
)
from gymfinder.schemas.session import AuthSession
from gymfinder.services.camera import CameraController
from gymfinder.services.catalog import CatalogClient
from gymfinder.services.poi_client import PoiClient
from gymfinder.services.reconcile import reconcile
from gymfinder.services.selection import INITIAL_STATE, camera_command, reduce
from gymfinder.services.session import load_session

logger = structlog.get_logger(__name__)

LOGIN_REQUIRED_MESSAGE = "You must be logged in to scout a gym!"


class Liveness:
    """Captured at the start of async work, checked before applying its result."""

    def __init__(self) -> None:
        self.alive = True

    def kill(self) -> None:
        self.alive = False


async def _load_verified(catalog: CatalogClient) -> list[VerifiedGym]:
    try:
        return await catalog.list_gyms()
    except (NetworkError, ParseError) as exc:
        logger.error("catalog_load_failed", error=str(exc))
        return []


async def _discover(
    poi: PoiClient, center: Coordinate, radius_m: float, timeout: float
) -> list[ShadowGym]:
    try:
        return await asyncio.wait_for(poi.discover(center, radius_m), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning("overpass_search_timeout", timeout_s=timeout)
        return []


async def load_reconciled(
    catalog: CatalogClient,
    poi: PoiClient,
    center: Coordinate,
    radius_m: float,
    *,
    discovery_timeout_s: float,
) -> list[VerifiedGym | ShadowGym]:
    """Fetch the catalog and discover shadow gyms concurrently, then merge."""

    verified, shadow = await asyncio.gather(
        _load_verified(catalog),
        _discover(poi, center, radius_m, discovery_timeout_s),
    )
    return reconcile(verified, shadow)


@dataclass(frozen=True)
class ScoutResult:
    ok: bool
    gym: VerifiedGym | None = None
    message: str | None = None


class GymMapController:
    def __init__(
        self,
        catalog: CatalogClient,
        poi: PoiClient,
        *,
        camera: CameraController | None = None,
        session: AuthSession | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.catalog = catalog
        self.poi = poi
        self.camera = camera or CameraController()
        self.session = session
        self.state: SelectionState = INITIAL_STATE
        self.gyms: list[VerifiedGym | ShadowGym] = []
        self._liveness = Liveness()

    @classmethod
    def from_settings(
        cls, settings: Settings | None = None, *, camera: CameraController | None = None
    ) -> GymMapController:
        """Build a controller with the session read from durable storage."""

        settings = settings or get_settings()
        return cls(
            CatalogClient(settings),
            PoiClient(settings),
            camera=camera,
            session=load_session(settings.session_file),
            settings=settings,
        )

    @property
    def authenticated(self) -> bool:
        return self.session is not None

    @property
    def alive(self) -> bool:
        return self._liveness.alive

    @property
    def visible_gyms(self) -> Sequence[VerifiedGym | ShadowGym]:
        """The sheet lists only the active gym while one is selected."""

        if self.state.active_gym is not None:
            return [self.state.active_gym]
        return self.gyms

    def mount(self) -> None:
        self._liveness = Liveness()

    def teardown(self) -> None:
        self._liveness.kill()
        logger.debug("map_controller_teardown")

    async def load(self, center: Coordinate | None = None, radius_m: float | None = None) -> bool:
        """Populate ``gyms``. Returns False when the result was discarded."""

        liveness = self._liveness
        center = center or Coordinate(
            lat=self.settings.default_center_lat, lng=self.settings.default_center_lng
        )
        radius = radius_m if radius_m is not None else self.settings.discovery_radius_m
        gyms = await load_reconciled(
            self.catalog,
            self.poi,
            center,
            radius,
            discovery_timeout_s=self.settings.discovery_timeout_s,
        )
        if not liveness.alive:
            logger.info("map_load_discarded", gyms=len(gyms))
            return False
        self.gyms = gyms
        logger.info("map_loaded", gyms=len(gyms))
        return True

    def dispatch(self, event: SelectionEvent) -> SelectionState:
        previous = self.state.phase
        self.state = reduce(self.state, event, self.settings)
        command = camera_command(event, self.settings)
        if command is not None:
            self.camera.run(command)
        if self.state.phase is not previous:
            logger.debug(
                "selection_transition",
                event_type=type(event).__name__,
                from_phase=previous.value,
                to_phase=self.state.phase.value,
            )
        return self.state

    def activate(self, gym: VerifiedGym | ShadowGym) -> SelectionState:
        return self.dispatch(Activate(gym=gym, authenticated=self.authenticated))

    def start_scout(self, coordinate: Coordinate) -> SelectionState:
        return self.dispatch(StartScout(coordinate=coordinate, authenticated=self.authenticated))

    def clear_selection(self) -> SelectionState:
        return self.dispatch(ClearSelection())

    def toggle_sheet(self) -> SelectionState:
        return self.dispatch(ToggleSheet())

    def close_sheet_by_gesture(self, drag_offset: float) -> SelectionState:
        return self.dispatch(SheetDragReleased(offset=drag_offset))

    def close_scout(self) -> SelectionState:
        return self.dispatch(CloseScout())

    def dismiss_auth_gate(self) -> SelectionState:
        return self.dispatch(DismissAuthGate())

    def sign_in(self, session: AuthSession) -> SelectionState:
        self.session = session
        return self.dispatch(Authenticated())

    def sign_out(self) -> None:
        self.session = None

    def on_scout_added(self, gym: VerifiedGym) -> SelectionState:
        # Already deduplicated by the backend at submission time.
        self.gyms.append(gym)
        return self.dispatch(ScoutAdded(gym=gym))

    async def submit_scout(self, submission: ScoutSubmission) -> ScoutResult:
        """Submit the scout form. On failure the modal and its prefill stay put."""

        if self.session is None:
            return ScoutResult(ok=False, message=LOGIN_REQUIRED_MESSAGE)

        liveness = self._liveness
        try:
            gym = await self.catalog.create_gym(submission, self.session)
        except SubmissionError as exc:
            return ScoutResult(ok=False, message=exc.message)

        if not liveness.alive:
            logger.info("scout_result_discarded", gym_id=gym.id)
            return ScoutResult(ok=True, gym=gym)
        self.on_scout_added(gym)
        return ScoutResult(ok=True, gym=gym)
