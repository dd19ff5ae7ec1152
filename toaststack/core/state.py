from __future__ import annotations

from enum import Enum


class ToastState(Enum):
    """Lifecycle state of a single toast."""

    HIDDEN = "hidden"  # Outside the overflow window
    PENDING = "pending"  # Admitted, waiting for layout to settle
    VISIBLE = "visible"  # Appearing/visible, countdown may be running
    PAUSED = "paused"  # Hovered
    REMOVING = "removing"  # Exit animation playing
    REMOVED = "removed"  # Detached from the container


class ToastFlag(Enum):
    """Visual-state flags the rendering layer maps to presentation."""

    APPEARING = "appearing"
    VISIBLE = "visible"
    PAUSED = "paused"
    REMOVING = "removing"
    HIDDEN = "hidden"


VALID_TRANSITIONS: dict[ToastState, frozenset[ToastState]] = {
    ToastState.HIDDEN: frozenset({ToastState.PENDING, ToastState.REMOVED}),
    ToastState.PENDING: frozenset({ToastState.VISIBLE, ToastState.HIDDEN}),
    ToastState.VISIBLE: frozenset(
        {ToastState.PAUSED, ToastState.REMOVING, ToastState.HIDDEN}
    ),
    ToastState.PAUSED: frozenset(
        {ToastState.VISIBLE, ToastState.HIDDEN}
    ),
    # Pausing during the exit animation undoes the removal.
    ToastState.REMOVING: frozenset({ToastState.PAUSED, ToastState.REMOVED}),
    ToastState.REMOVED: frozenset(),  # terminal state
}

# States counted against the overflow window.
SHOWN_STATES: frozenset[ToastState] = frozenset(
    {ToastState.PENDING, ToastState.VISIBLE, ToastState.PAUSED}
)

# States that no longer take part in ordering or overflow.
LEAVING_STATES: frozenset[ToastState] = frozenset(
    {ToastState.REMOVING, ToastState.REMOVED}
)

_STATE_FLAGS: dict[ToastState, frozenset[ToastFlag]] = {
    ToastState.HIDDEN: frozenset({ToastFlag.HIDDEN}),
    ToastState.PENDING: frozenset(),
    ToastState.VISIBLE: frozenset({ToastFlag.APPEARING, ToastFlag.VISIBLE}),
    ToastState.PAUSED: frozenset(
        {ToastFlag.APPEARING, ToastFlag.VISIBLE, ToastFlag.PAUSED}
    ),
    ToastState.REMOVING: frozenset({ToastFlag.APPEARING, ToastFlag.REMOVING}),
    ToastState.REMOVED: frozenset(),
}


def is_valid_transition(current: ToastState, target: ToastState) -> bool:
    """Check whether a ToastState transition is allowed."""
    return target in VALID_TRANSITIONS.get(current, frozenset())


def compute_flags(state: ToastState) -> frozenset[ToastFlag]:
    """Derive the visual flags for *state*."""
    return _STATE_FLAGS.get(state, frozenset())
