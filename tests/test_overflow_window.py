from __future__ import annotations

import pytest

from toaststack.config.toasts import ConfigError, ToastConfig
from toaststack.core.clock import ManualClock
from toaststack.core.stack import ToastStack
from toaststack.core.state import ToastState
from toaststack.core.toast import Toast
from toaststack.messages.models import FlashMessage

SETTLE_MS = 100
DURATION_MS = 4400


def _make_stack(limit: int) -> tuple[ToastStack, ManualClock]:
    clock = ManualClock()
    return ToastStack(clock, ToastConfig(limit=limit, duration=4)), clock


def _states(stack: ToastStack) -> list[ToastState]:
    return [toast.state for toast in stack]


class TestRender:
    def test_five_toasts_with_limit_three(self) -> None:
        stack, clock = _make_stack(limit=3)
        controllers = stack.render(FlashMessage("notice", f"m{i}") for i in range(5))
        toasts = [c.toast for c in controllers]

        assert _states(stack) == [ToastState.PENDING] * 3 + [ToastState.HIDDEN] * 2

        clock.advance(SETTLE_MS)
        assert _states(stack) == [ToastState.VISIBLE] * 3 + [ToastState.HIDDEN] * 2
        assert not controllers[3].has_countdown

        clock.advance(DURATION_MS)
        assert toasts[0].state is ToastState.REMOVING
        # The removing toast gives up its slot straight away.
        assert toasts[3].state is ToastState.PENDING
        assert toasts[4].state is ToastState.HIDDEN

        controllers[0].animation_finished()
        assert toasts[0] not in stack
        assert stack.members[0] is toasts[1]
        # Its countdown already fired, so it takes over the removal slot.
        assert toasts[1].state is ToastState.REMOVING

        clock.advance(SETTLE_MS)
        assert toasts[3].state is ToastState.VISIBLE
        assert toasts[3].animation_started_at == clock.now()
        assert toasts[3].remaining_ms == DURATION_MS

    def test_removal_promotes_next_hidden_toast(self) -> None:
        stack, clock = _make_stack(limit=3)
        controllers = stack.render(FlashMessage("notice", f"m{i}") for i in range(5))
        toasts = [c.toast for c in controllers]
        clock.advance(SETTLE_MS + 1000)

        controllers[0].dismiss()
        controllers[0].animation_finished()

        assert stack.order_index(toasts[1]) == 0
        assert toasts[1].state is ToastState.VISIBLE
        assert toasts[3].state is ToastState.PENDING
        clock.advance(SETTLE_MS)
        assert toasts[3].state is ToastState.VISIBLE
        assert [stack.order_index(t) for t in toasts[1:]] == [0, 1, 2, 3]

    def test_initial_hidden_decision(self) -> None:
        stack, _clock = _make_stack(limit=2)
        assert not stack.overflow.initial_hidden(0)
        assert not stack.overflow.initial_hidden(1)
        assert stack.overflow.initial_hidden(2)

    def test_unlimited_shows_everything(self) -> None:
        stack, _clock = _make_stack(limit=0)
        stack.render(FlashMessage("notice", f"m{i}") for i in range(6))

        assert stack.hidden() == []
        assert len(stack.shown()) == 6


class TestLimitChanges:
    def test_lowering_limit_hides_newest(self) -> None:
        stack, clock = _make_stack(limit=0)
        controllers = [stack.push("notice", f"m{i}") for i in range(4)]
        clock.advance(SETTLE_MS)

        stack.max_visible = 2

        assert _states(stack) == [
            ToastState.VISIBLE,
            ToastState.VISIBLE,
            ToastState.HIDDEN,
            ToastState.HIDDEN,
        ]
        assert not controllers[2].has_countdown
        clock.advance(DURATION_MS * 3)
        assert controllers[3].toast.state is ToastState.HIDDEN

    def test_raising_limit_restarts_countdown(self) -> None:
        stack, clock = _make_stack(limit=1)
        first = stack.push("notice", "one")
        second = stack.push("notice", "two")
        clock.advance(SETTLE_MS + 1000)

        stack.max_visible = 2
        assert second.toast.state is ToastState.PENDING
        clock.advance(SETTLE_MS)

        assert second.toast.state is ToastState.VISIBLE
        assert second.toast.animation_started_at == clock.now()
        assert first.toast.animation_started_at == SETTLE_MS

    def test_hiding_paused_toast(self) -> None:
        stack, clock = _make_stack(limit=2)
        stack.push("notice", "one")
        second = stack.push("notice", "two")
        clock.advance(SETTLE_MS)
        second.pause()

        stack.max_visible = 1

        assert second.toast.state is ToastState.HIDDEN
        second.resume()
        assert second.toast.state is ToastState.HIDDEN

    def test_hidden_before_appearing_never_appears(self) -> None:
        stack, clock = _make_stack(limit=2)
        first = stack.push("notice", "one")
        second = stack.push("notice", "two")

        stack.max_visible = 1
        clock.advance(SETTLE_MS)

        assert first.toast.state is ToastState.VISIBLE
        assert second.toast.state is ToastState.HIDDEN

    def test_zero_limit_reveals_everything(self) -> None:
        stack, _clock = _make_stack(limit=1)
        for i in range(3):
            stack.push("notice", f"m{i}")

        stack.max_visible = 0

        assert stack.hidden() == []

    def test_negative_limit_rejected(self) -> None:
        stack, _clock = _make_stack(limit=1)
        with pytest.raises(ConfigError):
            stack.max_visible = -1
        assert stack.max_visible == 1


def test_attach_picks_up_late_siblings() -> None:
    stack, clock = _make_stack(limit=2)
    stack.attach()
    # A sibling registered without going through add().
    late = Toast("notice", "late", display_duration_ms=DURATION_MS)
    stack._register(late)
    assert late.state is ToastState.HIDDEN

    clock.run_pending()

    assert late.state is ToastState.PENDING


def test_close_cancels_late_enforcement() -> None:
    stack, clock = _make_stack(limit=2)
    stack.attach()

    stack.close()

    assert clock.pending == 0
