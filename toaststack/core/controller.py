from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from toaststack.config.toasts import POLL_INTERVAL_MS, SETTLE_DELAY_MS, DismissMode

from .clock import Clock, TimerHandle, cancel_handle
from .state import ToastState, is_valid_transition
from .toast import Toast

if TYPE_CHECKING:
    from .stack import ToastStack

log = logging.getLogger(__name__)


class ToastController:
    """Drives one toast through its lifecycle.

    The controller owns the toast's timers. Every timer callback re-checks
    the toast's state before acting, so a late callback for a toast that has
    since been paused, hidden or removed does nothing.
    """

    def __init__(
        self,
        toast: Toast,
        clock: Clock,
        stack: ToastStack | None = None,
        settle_delay_ms: int = SETTLE_DELAY_MS,
        poll_interval_ms: int = POLL_INTERVAL_MS,
    ) -> None:
        self.toast = toast
        self._clock = clock
        self._stack = stack
        self._settle_delay_ms = settle_delay_ms
        self._poll_interval_ms = poll_interval_ms
        self._settle_handle: TimerHandle | None = None
        self._removal_handle: TimerHandle | None = None
        self._poll_handle: TimerHandle | None = None

    def __repr__(self) -> str:
        return f"<ToastController {self.toast.id[:8]} {self.toast.state.value}>"

    @property
    def is_waiting(self) -> bool:
        """Whether the toast is blocked waiting for its turn to remove."""
        if self._poll_handle is not None:
            return True
        return self._stack is not None and self._stack.coordinator.is_waiting(self)

    @property
    def has_countdown(self) -> bool:
        return self._removal_handle is not None

    # ------------------------------------------------------------------
    # Appearance
    # ------------------------------------------------------------------

    def reveal(self) -> None:
        """Admit a hidden toast into the overflow window."""
        toast = self.toast
        if toast.state is not ToastState.HIDDEN:
            return
        self._cancel_timers()
        self._stop_waiting()
        toast.remaining_ms = toast.display_duration_ms
        toast.animation_started_at = None
        if not self._set_state(ToastState.PENDING):
            return
        # Wait a paint tick plus the settling delay so the entry animation
        # starts from a committed frame.
        self._settle_handle = self._clock.call_soon(self._settle)

    def _settle(self) -> None:
        self._settle_handle = None
        if self.toast.state is not ToastState.PENDING:
            return
        self._settle_handle = self._clock.call_later(self._settle_delay_ms, self._appear)

    def _appear(self) -> None:
        self._settle_handle = None
        toast = self.toast
        if toast.state is not ToastState.PENDING:
            log.debug("Toast %s left PENDING before appearing", toast.id)
            return
        self._set_state(ToastState.VISIBLE)
        if toast.manually_dismissed:
            self.start_removal()
            return
        self._arm(toast.display_duration_ms)

    def hide(self) -> None:
        """Push a shown toast back out of the overflow window."""
        toast = self.toast
        if not toast.is_shown:
            return
        self._cancel_timers()
        self._stop_waiting()
        toast.animation_started_at = None
        self._set_state(ToastState.HIDDEN)

    # ------------------------------------------------------------------
    # Countdown
    # ------------------------------------------------------------------

    def _arm(self, duration_ms: int) -> None:
        toast = self.toast
        cancel_handle(self._removal_handle)
        self._removal_handle = None
        toast.animation_started_at = self._clock.now()
        if not toast.auto_removes:
            return
        toast.remaining_ms = duration_ms
        self._removal_handle = self._clock.call_later(duration_ms, self._on_countdown)

    def _on_countdown(self) -> None:
        self._removal_handle = None
        if self.toast.state is not ToastState.VISIBLE:
            log.debug(
                "Ignoring stale countdown for toast %s in %s",
                self.toast.id, self.toast.state.value,
            )
            return
        self.start_removal()

    def pause(self) -> None:
        toast = self.toast
        if toast.state is ToastState.PAUSED:
            return
        if toast.manually_dismissed or not toast.auto_removes:
            return
        if toast.state not in (ToastState.VISIBLE, ToastState.REMOVING):
            return

        was_removing = toast.state is ToastState.REMOVING
        floor = toast.minimum_remaining_ms
        if toast.animation_started_at is not None:
            elapsed = self._clock.now() - toast.animation_started_at
            toast.remaining_ms = max(floor, toast.remaining_ms - elapsed)
        elif was_removing:
            toast.remaining_ms = floor
        else:
            toast.remaining_ms = toast.display_duration_ms
        toast.animation_started_at = None

        cancel_handle(self._removal_handle)
        self._removal_handle = None
        self._stop_waiting()

        if was_removing:
            log.debug("Toast %s hovered during removal, reverting", toast.id)
            if self._stack is not None:
                self._stack.coordinator.release(toast)
        self._set_state(ToastState.PAUSED)
        if was_removing and self._stack is not None:
            # Back in the window: re-balance and free the removal slot.
            self._stack.enforce()

    def resume(self) -> None:
        toast = self.toast
        if toast.state is not ToastState.PAUSED or toast.manually_dismissed:
            return
        self._set_state(ToastState.VISIBLE)
        self._arm(max(toast.minimum_remaining_ms, toast.remaining_ms))
        # Later toasts may have been held back by this pause.
        if self._stack is not None:
            self._stack.coordinator.wake()

    # ------------------------------------------------------------------
    # Removal
    # ------------------------------------------------------------------

    def may_start_removing(self) -> bool:
        if self._stack is None:
            return True
        return self._stack.coordinator.may_start_removing(self.toast)

    def start_removal(self) -> None:
        state = self.toast.state
        if state in (ToastState.REMOVING, ToastState.REMOVED):
            return
        if state is not ToastState.VISIBLE:
            log.debug("Toast %s can't start removing from %s", self.toast.id, state.value)
            return
        if not self.may_start_removing():
            self._wait_for_turn()
            return
        self._begin_removing()

    def _wait_for_turn(self) -> None:
        if self._stack is not None:
            self._stack.coordinator.wait(self)
        if self._poll_handle is None:
            self._poll_handle = self._clock.call_later(self._poll_interval_ms, self._poll)

    def _poll(self) -> None:
        self._poll_handle = None
        if self.toast.state is not ToastState.VISIBLE:
            self._stop_waiting()
            return
        if self.may_start_removing():
            self._stop_waiting()
            self._begin_removing()
            return
        self._poll_handle = self._clock.call_later(self._poll_interval_ms, self._poll)

    def _stop_waiting(self) -> None:
        cancel_handle(self._poll_handle)
        self._poll_handle = None
        if self._stack is not None:
            self._stack.coordinator.leave(self)

    def _begin_removing(self) -> None:
        toast = self.toast
        cancel_handle(self._removal_handle)
        self._removal_handle = None
        self._stop_waiting()
        if self._stack is None:
            self._set_state(ToastState.REMOVING)
            return
        self._stack.coordinator.claim(toast)
        if not self._set_state(ToastState.REMOVING):
            self._stack.coordinator.release(toast)
            return
        # A removing toast frees its overflow slot.
        self._stack.enforce()

    def animation_finished(self) -> None:
        """Exit animation completed; detach the toast."""
        if self.toast.state is not ToastState.REMOVING:
            log.debug("Ignoring exit animation end for toast %s", self.toast.id)
            return
        self._finalize()

    def _finalize(self) -> None:
        toast = self.toast
        self._cancel_timers()
        self._stop_waiting()
        if self._stack is not None:
            self._stack.coordinator.release(toast)
        if not self._set_state(ToastState.REMOVED):
            return
        if self._stack is not None:
            self._stack.detach(toast)

    def dismiss(self) -> None:
        """Manual dismissal. Still waits its turn behind another removal."""
        toast = self.toast
        toast.manually_dismissed = True
        state = toast.state
        if state in (ToastState.REMOVING, ToastState.REMOVED):
            return

        cancel_handle(self._removal_handle)
        self._removal_handle = None
        self._stop_waiting()

        if state is ToastState.HIDDEN:
            # Never shown, so there is no exit animation to wait for.
            self._finalize()
            return
        if state is ToastState.PENDING:
            # _appear() picks the dismissal up.
            return
        if state is ToastState.PAUSED:
            self._set_state(ToastState.VISIBLE)
        self.start_removal()

    def click(self, on_control: bool = False) -> None:
        if self.toast.dismiss_mode is DismissMode.CLICK and not on_control:
            self.dismiss()

    def destroy(self) -> None:
        """Drop every timer and queue slot. Safe to call more than once."""
        self._cancel_timers()
        self._stop_waiting()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _cancel_timers(self) -> None:
        for handle in (self._settle_handle, self._removal_handle, self._poll_handle):
            cancel_handle(handle)
        self._settle_handle = None
        self._removal_handle = None
        self._poll_handle = None

    def _set_state(self, target: ToastState) -> bool:
        toast = self.toast
        current = toast.state
        if current is target:
            return False
        if not is_valid_transition(current, target):
            log.warning(
                "Refused toast %s transition %s -> %s",
                toast.id, current.value, target.value,
            )
            return False
        toast.state = target
        log.debug("Toast %s: %s -> %s", toast.id, current.value, target.value)
        if self._stack is not None:
            self._stack.notify(toast, current)
        return True
