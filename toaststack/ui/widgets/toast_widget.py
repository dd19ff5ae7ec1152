from __future__ import annotations

import logging

from rich.text import Text
from textual import events
from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widgets import Button, Static

from toaststack.core.controller import ToastController
from toaststack.core.state import ToastFlag, ToastState
from toaststack.core.toast import Toast

log = logging.getLogger(__name__)

FLASH_STYLES: dict[str, str] = {
    "notice": "bold green",
    "alert": "bold red",
}


class ToastWidget(Horizontal):
    """One toast in the rack.

    Mirrors the toast's flags onto ``-appearing``/``-visible``/``-paused``/
    ``-removing``/``-hidden`` classes and turns pointer events into
    controller calls. The fade-out on removal is the exit animation; its
    completion finalizes the toast.
    """

    DEFAULT_CSS = """
    ToastWidget {
        width: 100%;
        height: auto;
        margin: 0 0 1 0;
        padding: 0 1;
        background: $surface;
        border: tall $primary;
        opacity: 0;
    }

    ToastWidget.-hidden {
        display: none;
    }

    ToastWidget.-appearing {
        opacity: 1;
    }

    ToastWidget.-paused {
        border: tall $warning;
    }

    ToastWidget.-removing {
        border: tall $error;
    }

    ToastWidget .toast--text {
        width: 1fr;
        height: auto;
    }

    ToastWidget .toast--close {
        width: 5;
        min-width: 5;
        height: 3;
    }
    """

    def __init__(
        self,
        controller: ToastController,
        show_close_button: bool = False,
        exit_animation_ms: int = 300,
    ) -> None:
        super().__init__(id=f"toast-{controller.toast.id}")
        self.controller = controller
        self._show_close_button = show_close_button
        self._exit_duration = exit_animation_ms / 1000
        self._exit_generation = 0

    @property
    def toast(self) -> Toast:
        return self.controller.toast

    def compose(self) -> ComposeResult:
        style = FLASH_STYLES.get(self.toast.flash_type, "bold")
        label = Text.assemble((f"{self.toast.flash_type.upper()} ", style), self.toast.text)
        yield Static(label, classes="toast--text")
        if self._show_close_button:
            yield Button("✕", classes="toast--close", id="close")

    def on_mount(self) -> None:
        self.sync_flags()

    def sync_flags(self, previous: ToastState | None = None) -> None:
        """Apply the toast's current flags; start or cancel the exit fade."""
        flags = self.toast.flags
        for flag in ToastFlag:
            self.set_class(flag in flags, f"-{flag.value}")

        state = self.toast.state
        if state is ToastState.REMOVING:
            self._start_exit()
        elif previous is ToastState.REMOVING and state is ToastState.PAUSED:
            self._exit_generation += 1
            self.call_later(self._restore_opacity)

    def _start_exit(self) -> None:
        self._exit_generation += 1
        generation = self._exit_generation

        def finished() -> None:
            if generation == self._exit_generation:
                self.controller.animation_finished()

        self.styles.animate(
            "opacity", value=0.0, duration=self._exit_duration, on_complete=finished
        )

    async def _restore_opacity(self) -> None:
        # styles.animate() registers the fade against the styles object.
        await self.app.animator.stop_animation(self.styles, "opacity", complete=False)
        self.styles.opacity = 1.0

    # ------------------------------------------------------------------
    # Pointer events
    # ------------------------------------------------------------------

    def on_enter(self, event: events.Enter) -> None:
        self.controller.pause()

    def on_leave(self, event: events.Leave) -> None:
        # Moving onto a child widget is not leaving the toast.
        if self.is_mouse_over:
            return
        self.controller.resume()

    def on_click(self, event: events.Click) -> None:
        self.controller.click(on_control=isinstance(event.widget, Button))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "close":
            event.stop()
            self.controller.dismiss()
