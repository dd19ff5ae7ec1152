from __future__ import annotations

import logging
from typing import Iterable

from textual import events
from textual.app import App, ComposeResult
from textual.widgets import Static

from toaststack.config.manager import ConfigManager
from toaststack.config.toasts import ToastConfig
from toaststack.messages.models import FlashMessage
from toaststack.ui.events import ToastStateChanged
from toaststack.ui.keys import KeybindManager
from toaststack.ui.widgets import StatusBar, ToastRack
from toaststack.utils.logger import setup_logging

log = logging.getLogger("toaststack.app")

DEMO_TEXT: dict[str, str] = {
    "notice": "Saved successfully",
    "alert": "Something needs your attention",
    "pinned": "This one stays until dismissed",
}


class ToastStackApp(App):
    CSS = """
    Screen {
        layers: base overlay;
        background: #1e1e1e;
        color: #d4d4d4;
    }

    #main-content {
        height: 1fr;
        width: 1fr;
        content-align: center middle;
    }
    """

    def __init__(
        self,
        config_path: str | None = None,
        limit: int | None = None,
        dismiss: str | None = None,
        messages: Iterable[FlashMessage] = (),
        verbose: bool = False,
    ) -> None:
        super().__init__()
        self._config_manager = ConfigManager(config_path)
        cfg = self._config_manager.config

        log_level = "DEBUG" if verbose else str(cfg.get("general", {}).get("log_level", "INFO"))
        log_file = str(cfg.get("general", {}).get("log_file", ""))
        setup_logging(log_file=log_file, log_level=log_level, devtools=verbose)

        toasts_cfg = dict(cfg.get("toasts", {}))
        if limit is not None:
            toasts_cfg["limit"] = limit
        if dismiss is not None:
            toasts_cfg["dismiss"] = dismiss
        # Invalid values raise ConfigError here, before anything is shown.
        self._toast_config = ToastConfig.from_dict({**cfg, "toasts": toasts_cfg})

        self._keybind_manager = KeybindManager(cfg.get("keybindings"))
        self._initial_messages = list(messages)
        self._counter = 0

    @property
    def toast_config(self) -> ToastConfig:
        return self._toast_config

    def compose(self) -> ComposeResult:
        yield Static("toaststack", id="main-content")
        yield ToastRack(self._toast_config)
        yield StatusBar(self._keybind_manager.hints())

    def on_mount(self) -> None:
        rack = self.query_one(ToastRack)
        if self._initial_messages:
            rack.render_messages(self._initial_messages)
        self._update_status_bar()
        log.info("toaststack started (limit=%d)", self._toast_config.limit)

    # ------------------------------------------------------------------
    # Message handlers
    # ------------------------------------------------------------------

    def on_toast_state_changed(self, event: ToastStateChanged) -> None:
        log.debug("Toast %s %s -> %s", event.toast_id, event.old_state, event.new_state)
        self._update_status_bar()

    async def on_key(self, event: events.Key) -> None:
        action = self._keybind_manager.get_action(event.key)
        if action is None:
            return
        event.stop()
        await self.run_action(action)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def action_push_notice(self) -> None:
        self._push("notice")

    def action_push_alert(self) -> None:
        self._push("alert")

    def action_push_sticky(self) -> None:
        self._push("pinned")

    def action_dismiss_oldest(self) -> None:
        if not self.query_one(ToastRack).dismiss_oldest():
            self.bell()

    def action_raise_limit(self) -> None:
        rack = self.query_one(ToastRack)
        rack.set_limit(rack.stack.max_visible + 1)
        self._update_status_bar()

    def action_lower_limit(self) -> None:
        rack = self.query_one(ToastRack)
        if rack.stack.max_visible == 0:
            self.bell()
            return
        rack.set_limit(rack.stack.max_visible - 1)
        self._update_status_bar()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _push(self, flash_type: str) -> None:
        self._counter += 1
        text = f"{DEMO_TEXT.get(flash_type, flash_type)} (#{self._counter})"
        self.query_one(ToastRack).push(flash_type, text)
        self._update_status_bar()

    def _update_status_bar(self) -> None:
        rack = self.query_one(ToastRack)
        stack = rack.stack
        self.query_one(StatusBar).update_stats(
            shown=len(stack.shown()),
            hidden=len(stack.hidden()),
            removing=len(stack.removing()),
            limit=stack.max_visible,
        )
