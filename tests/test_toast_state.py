from __future__ import annotations

from toaststack.core.state import (
    LEAVING_STATES,
    SHOWN_STATES,
    VALID_TRANSITIONS,
    ToastFlag,
    ToastState,
    compute_flags,
    is_valid_transition,
)


# ------------------------------------------------------------------
# Transitions
# ------------------------------------------------------------------


def test_hidden_can_go_to_pending() -> None:
    assert is_valid_transition(ToastState.HIDDEN, ToastState.PENDING)


def test_hidden_cannot_go_to_visible() -> None:
    assert not is_valid_transition(ToastState.HIDDEN, ToastState.VISIBLE)


def test_hidden_can_be_removed_without_animation() -> None:
    assert is_valid_transition(ToastState.HIDDEN, ToastState.REMOVED)


def test_pending_can_go_to_visible() -> None:
    assert is_valid_transition(ToastState.PENDING, ToastState.VISIBLE)


def test_pending_cannot_start_removing() -> None:
    assert not is_valid_transition(ToastState.PENDING, ToastState.REMOVING)


def test_visible_can_pause_and_remove() -> None:
    assert is_valid_transition(ToastState.VISIBLE, ToastState.PAUSED)
    assert is_valid_transition(ToastState.VISIBLE, ToastState.REMOVING)


def test_paused_cannot_go_straight_to_removing() -> None:
    assert not is_valid_transition(ToastState.PAUSED, ToastState.REMOVING)


def test_removing_can_revert_to_paused() -> None:
    assert is_valid_transition(ToastState.REMOVING, ToastState.PAUSED)


def test_removing_cannot_be_hidden() -> None:
    assert not is_valid_transition(ToastState.REMOVING, ToastState.HIDDEN)


def test_removed_is_terminal() -> None:
    for target in ToastState:
        assert not is_valid_transition(ToastState.REMOVED, target)


def test_self_transitions_invalid() -> None:
    for state in ToastState:
        assert not is_valid_transition(state, state)


def test_all_states_have_transition_entry() -> None:
    for state in ToastState:
        assert state in VALID_TRANSITIONS


# ------------------------------------------------------------------
# Flags
# ------------------------------------------------------------------


def test_hidden_flag() -> None:
    assert compute_flags(ToastState.HIDDEN) == frozenset({ToastFlag.HIDDEN})


def test_paused_keeps_visible_flags() -> None:
    flags = compute_flags(ToastState.PAUSED)
    assert ToastFlag.PAUSED in flags
    assert ToastFlag.VISIBLE in flags


def test_removing_drops_visible_flag() -> None:
    flags = compute_flags(ToastState.REMOVING)
    assert ToastFlag.REMOVING in flags
    assert ToastFlag.VISIBLE not in flags


def test_shown_and_leaving_states_are_disjoint() -> None:
    assert not SHOWN_STATES & LEAVING_STATES
    assert ToastState.HIDDEN not in SHOWN_STATES
