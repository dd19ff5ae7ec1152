from __future__ import annotations

import uuid
from dataclasses import dataclass, field

from toaststack.config.toasts import MINIMUM_REMAINING_MS, DismissMode

from .state import LEAVING_STATES, SHOWN_STATES, ToastFlag, ToastState, compute_flags


@dataclass
class Toast:
    flash_type: str
    text: str
    display_duration_ms: int  # 0 = manual dismissal only
    dismiss_mode: DismissMode = DismissMode.BUTTON
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    state: ToastState = ToastState.HIDDEN
    remaining_ms: int = 0
    animation_started_at: int | None = None  # clock ms of the current countdown
    manually_dismissed: bool = False

    def __post_init__(self) -> None:
        if self.display_duration_ms < 0:
            raise ValueError("display_duration_ms must be >= 0")
        if not self.remaining_ms:
            self.remaining_ms = self.display_duration_ms

    @property
    def flags(self) -> frozenset[ToastFlag]:
        return compute_flags(self.state)

    @property
    def auto_removes(self) -> bool:
        return self.display_duration_ms > 0

    @property
    def needs_close_button(self) -> bool:
        """Manual-only toast that a body click won't dismiss."""
        return not self.auto_removes and self.dismiss_mode is DismissMode.BUTTON

    @property
    def minimum_remaining_ms(self) -> int:
        """Floor for any countdown so near-zero timers can't starve siblings."""
        return max(MINIMUM_REMAINING_MS, self.display_duration_ms // 10)

    @property
    def is_shown(self) -> bool:
        return self.state in SHOWN_STATES

    @property
    def is_leaving(self) -> bool:
        return self.state in LEAVING_STATES
