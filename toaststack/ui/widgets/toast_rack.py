from __future__ import annotations

import logging
from typing import Iterable

from textual.containers import Vertical

from toaststack.config.toasts import ToastConfig
from toaststack.core.clock import TextualClock
from toaststack.core.controller import ToastController
from toaststack.core.stack import ToastStack
from toaststack.core.state import ToastState
from toaststack.core.toast import Toast
from toaststack.messages.models import FlashMessage
from toaststack.ui.events import ToastRequested, ToastStateChanged

from .toast_widget import ToastWidget

log = logging.getLogger(__name__)


class ToastRack(Vertical):
    """Container hosting a stack of toasts in the corner of the screen."""

    DEFAULT_CSS = """
    ToastRack {
        layer: overlay;
        dock: right;
        width: 48;
        height: auto;
        max-height: 100%;
        margin: 1 2;
        background: transparent;
    }
    """

    def __init__(self, config: ToastConfig | None = None, id: str = "toast-rack") -> None:
        super().__init__(id=id)
        self._config = config or ToastConfig()
        self._widgets: dict[str, ToastWidget] = {}
        self._stack = ToastStack(TextualClock(self), self._config)
        self._stack.add_listener(self._on_toast_state)

    @property
    def stack(self) -> ToastStack:
        return self._stack

    def on_mount(self) -> None:
        self._stack.attach()

    def on_unmount(self) -> None:
        self._stack.close()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def push(
        self, flash_type: str, text: str, dismiss_mode: str | None = None
    ) -> ToastController:
        controller = self.stack.push(flash_type, text, dismiss_mode)
        self._ensure_widget(controller)
        return controller

    def render_messages(self, messages: Iterable[FlashMessage]) -> list[ToastController]:
        controllers = self.stack.render(messages)
        for controller in controllers:
            self._ensure_widget(controller)
        return controllers

    def set_limit(self, limit: int) -> None:
        self.stack.max_visible = limit

    def dismiss_oldest(self) -> bool:
        for toast in self.stack.ordered():
            controller = self.stack.controller_for(toast)
            if controller is not None and not toast.manually_dismissed:
                controller.dismiss()
                return True
        return False

    def widget_for(self, toast: Toast) -> ToastWidget | None:
        return self._widgets.get(toast.id)

    def on_toast_requested(self, message: ToastRequested) -> None:
        message.stop()
        self.push(message.flash_type, message.text, message.dismiss_mode)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _ensure_widget(self, controller: ToastController) -> ToastWidget:
        toast = controller.toast
        widget = self._widgets.get(toast.id)
        if widget is None:
            widget = ToastWidget(
                controller,
                show_close_button=toast.needs_close_button,
                exit_animation_ms=self._config.exit_animation_ms,
            )
            self._widgets[toast.id] = widget
            self.mount(widget)
        return widget

    def _on_toast_state(self, toast: Toast, previous: ToastState) -> None:
        self.post_message(
            ToastStateChanged(toast.id, previous.value, toast.state.value)
        )
        if toast.state is ToastState.REMOVED:
            widget = self._widgets.pop(toast.id, None)
            if widget is not None:
                widget.remove()
            return

        controller = self.stack.controller_for(toast)
        if controller is None:
            return
        widget = self._ensure_widget(controller)
        if widget.is_mounted:
            widget.sync_flags(previous)
