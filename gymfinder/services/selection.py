"""Selection state machine as a pure reducer.

``reduce(state, event)`` returns the next ``SelectionState``; ``camera_command``
derives the fly-to (if any) a transition should trigger. Neither touches I/O,
so the transition table can be tested directly.

Activation table:

    verified, any session  -> Previewing: active gym set, sheet opens, camera moves
    shadow,   no session   -> AuthGate: auth prompt opens, nothing remembered
    shadow,   session      -> Scouting: prefill from tags, scout modal opens
"""

from __future__ import annotations

from dataclasses import replace

from gymfinder.core.config import Settings
from gymfinder.schemas.gym import PrefillPayload, ShadowGym, VerifiedGym
from gymfinder.schemas.selection import (
    Activate,
    Authenticated,
    ClearSelection,
    CloseScout,
    DismissAuthGate,
    FlyTo,
    ScoutAdded,
    SelectionEvent,
    SelectionState,
    SheetDragReleased,
    StartScout,
    ToggleSheet,
)
from gymfinder.services.prefill import extract_prefill

INITIAL_STATE = SelectionState()


def _open_scout(
    state: SelectionState, prefill: PrefillPayload, authenticated: bool
) -> SelectionState:
    if not authenticated:
        return replace(state, auth_prompt_open=True)
    return replace(state, scout_modal_open=True, scout_prefill=prefill)


def _activate(state: SelectionState, event: Activate) -> SelectionState:
    gym = event.gym
    if isinstance(gym, VerifiedGym):
        return replace(state, active_gym=gym, sheet_open=True)
    if isinstance(gym, ShadowGym):
        return _open_scout(state, extract_prefill(gym), event.authenticated)
    raise TypeError(f"unsupported gym variant: {type(gym).__name__}")


def _drag(state: SelectionState, offset: float, settings: Settings) -> SelectionState:
    if offset > settings.sheet_close_drag_threshold:
        return replace(state, sheet_open=False)
    if offset < -settings.sheet_open_drag_threshold:
        return replace(state, sheet_open=True)
    return state


def reduce(state: SelectionState, event: SelectionEvent, settings: Settings) -> SelectionState:
    if isinstance(event, Activate):
        return _activate(state, event)
    if isinstance(event, StartScout):
        prefill = PrefillPayload(name="", coordinate=event.coordinate)
        return _open_scout(state, prefill, event.authenticated)
    if isinstance(event, ClearSelection):
        return replace(state, active_gym=None)
    if isinstance(event, ToggleSheet):
        return replace(state, sheet_open=not state.sheet_open)
    if isinstance(event, SheetDragReleased):
        return _drag(state, event.offset, settings)
    if isinstance(event, ScoutAdded | CloseScout):
        return replace(state, scout_modal_open=False, scout_prefill=None)
    if isinstance(event, DismissAuthGate | Authenticated):
        return replace(state, auth_prompt_open=False)
    raise TypeError(f"unsupported selection event: {type(event).__name__}")


def camera_command(event: SelectionEvent, settings: Settings) -> FlyTo | None:
    """Only verified activations move the camera."""

    if isinstance(event, Activate) and isinstance(event.gym, VerifiedGym):
        return FlyTo(
            coordinate=event.gym.coordinate,
            zoom=settings.fly_to_zoom,
            duration_ms=settings.fly_to_duration_ms,
        )
    return None
