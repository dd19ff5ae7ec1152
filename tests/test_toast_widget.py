"""Pilot tests for the Textual toast widgets: pointer events, close control, fade."""
from __future__ import annotations

from typing import Callable

import pytest
from textual.app import App, ComposeResult
from textual.widgets import Button, Static

from toaststack.config.toasts import ToastConfig
from toaststack.core.state import ToastState
from toaststack.ui.widgets import ToastRack, ToastWidget


class RackApp(App):
    CSS = """
    Screen {
        layers: base overlay;
    }

    #filler {
        width: 1fr;
        height: 1fr;
    }
    """

    def __init__(self, config: ToastConfig) -> None:
        super().__init__()
        self._config = config

    def compose(self) -> ComposeResult:
        yield Static("filler", id="filler")
        yield ToastRack(self._config)


def _config(**overrides: object) -> ToastConfig:
    settings: dict = {"duration": {"default": 4, "pinned": 0}, "exit_animation_ms": 100}
    settings.update(overrides)
    return ToastConfig(**settings)


async def _wait_for(pilot, predicate: Callable[[], bool], timeout: float = 3.0) -> None:
    for _ in range(int(timeout / 0.05)):
        if predicate():
            return
        await pilot.pause(0.05)
    assert predicate()


async def _shown_widget(pilot, rack: ToastRack, flash_type: str = "notice", **kwargs):
    controller = rack.push(flash_type, "hello", **kwargs)
    await _wait_for(pilot, lambda: controller.toast.state is ToastState.VISIBLE)
    widget = rack.widget_for(controller.toast)
    assert widget is not None
    await _wait_for(pilot, lambda: widget.is_mounted)
    await pilot.pause()
    return controller, widget


@pytest.mark.asyncio
async def test_hover_pauses_and_leaving_resumes() -> None:
    app = RackApp(_config())
    async with app.run_test(size=(100, 30)) as pilot:
        rack = app.query_one(ToastRack)
        controller, widget = await _shown_widget(pilot, rack)

        await pilot.hover(widget)
        await pilot.pause()
        assert controller.toast.state is ToastState.PAUSED
        assert widget.has_class("-paused")
        assert not controller.has_countdown

        await pilot.hover("#filler")
        await pilot.pause()
        assert controller.toast.state is ToastState.VISIBLE
        assert not widget.has_class("-paused")
        assert controller.has_countdown


@pytest.mark.asyncio
async def test_fade_completion_removes_widget() -> None:
    app = RackApp(_config())
    async with app.run_test(size=(100, 30)) as pilot:
        rack = app.query_one(ToastRack)
        controller, widget = await _shown_widget(pilot, rack)

        controller.dismiss()
        assert controller.toast.state is ToastState.REMOVING

        await _wait_for(pilot, lambda: controller.toast.state is ToastState.REMOVED)
        await _wait_for(pilot, lambda: len(app.query(ToastWidget)) == 0)
        assert controller.toast not in rack.stack
        assert rack.widget_for(controller.toast) is None


@pytest.mark.asyncio
async def test_hover_during_fade_restores_toast() -> None:
    app = RackApp(_config(exit_animation_ms=600))
    async with app.run_test(size=(100, 30)) as pilot:
        rack = app.query_one(ToastRack)
        controller, widget = await _shown_widget(pilot, rack)

        controller.start_removal()
        await pilot.pause(0.1)
        assert controller.toast.state is ToastState.REMOVING

        controller.pause()
        assert controller.toast.state is ToastState.PAUSED

        # Well past the end of the fade.
        await pilot.pause(1.0)
        assert controller.toast.state is ToastState.PAUSED
        assert controller.toast in rack.stack
        assert widget.styles.opacity == 1.0
        assert not widget.has_class("-removing")


@pytest.mark.asyncio
async def test_close_button_follows_per_message_mode() -> None:
    app = RackApp(_config(dismiss="click"))
    async with app.run_test(size=(100, 30)) as pilot:
        rack = app.query_one(ToastRack)
        controller, widget = await _shown_widget(pilot, rack, "pinned", dismiss_mode="button")

        buttons = widget.query(Button)
        assert len(buttons) == 1

        await pilot.click(widget)
        await pilot.pause()
        assert not controller.toast.manually_dismissed

        await pilot.click(buttons.first())
        await pilot.pause()
        assert controller.toast.manually_dismissed
        await _wait_for(pilot, lambda: controller.toast.state is ToastState.REMOVED)


@pytest.mark.asyncio
async def test_body_click_dismisses_in_click_mode() -> None:
    app = RackApp(_config(dismiss="click"))
    async with app.run_test(size=(100, 30)) as pilot:
        rack = app.query_one(ToastRack)
        controller, widget = await _shown_widget(pilot, rack, "pinned")

        assert len(widget.query(Button)) == 0

        await pilot.click(widget)
        await pilot.pause()
        assert controller.toast.manually_dismissed
        await _wait_for(pilot, lambda: len(app.query(ToastWidget)) == 0)
