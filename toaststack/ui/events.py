from __future__ import annotations

from textual.message import Message


class ToastStateChanged(Message):
    """A toast in the rack moved to a new lifecycle state."""

    def __init__(self, toast_id: str, old_state: str, new_state: str) -> None:
        super().__init__()
        self.toast_id = toast_id
        self.old_state = old_state
        self.new_state = new_state


class ToastRequested(Message):
    """Request to show a toast in the rack."""

    def __init__(
        self, flash_type: str, text: str, dismiss_mode: str | None = None
    ) -> None:
        super().__init__()
        self.flash_type = flash_type
        self.text = text
        self.dismiss_mode = dismiss_mode
