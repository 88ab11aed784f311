"""Selection state and the events that drive it."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from gymfinder.schemas.gym import Coordinate, PrefillPayload, ShadowGym, VerifiedGym


class Phase(str, Enum):
    IDLE = "idle"
    PREVIEWING = "previewing"
    AUTH_GATE = "auth_gate"
    SCOUTING = "scouting"


@dataclass(frozen=True)
class SelectionState:
    active_gym: VerifiedGym | ShadowGym | None = None
    sheet_open: bool = False
    scout_modal_open: bool = False
    scout_prefill: PrefillPayload | None = None
    auth_prompt_open: bool = False

    @property
    def phase(self) -> Phase:
        # Modal layers sit above the sheet, so they win.
        if self.auth_prompt_open:
            return Phase.AUTH_GATE
        if self.scout_modal_open:
            return Phase.SCOUTING
        if self.active_gym is not None:
            return Phase.PREVIEWING
        return Phase.IDLE


@dataclass(frozen=True)
class Activate:
    """A map pin or list entry was tapped."""

    gym: VerifiedGym | ShadowGym
    authenticated: bool = False


@dataclass(frozen=True)
class StartScout:
    """The user asked to scout a gym at ``coordinate`` without a shadow candidate."""

    coordinate: Coordinate
    authenticated: bool = False


@dataclass(frozen=True)
class ClearSelection:
    pass


@dataclass(frozen=True)
class ToggleSheet:
    pass


@dataclass(frozen=True)
class SheetDragReleased:
    offset: float  # positive = downward


@dataclass(frozen=True)
class ScoutAdded:
    gym: VerifiedGym


@dataclass(frozen=True)
class CloseScout:
    pass


@dataclass(frozen=True)
class DismissAuthGate:
    pass


@dataclass(frozen=True)
class Authenticated:
    """Login finished. The dropped scouting intent is not resumed."""


SelectionEvent = (
    Activate
    | StartScout
    | ClearSelection
    | ToggleSheet
    | SheetDragReleased
    | ScoutAdded
    | CloseScout
    | DismissAuthGate
    | Authenticated
)


@dataclass(frozen=True)
class FlyTo:
    """Camera command emitted alongside a transition."""

    coordinate: Coordinate
    zoom: float
    duration_ms: int
