from __future__ import annotations

from dataclasses import dataclass

from toaststack.config.toasts import DismissMode


@dataclass
class FlashMessage:
    flash_type: str
    text: str
    dismiss_mode: DismissMode | None = None  # None = configured default

    def __post_init__(self) -> None:
        if self.dismiss_mode is not None:
            self.dismiss_mode = DismissMode.parse(self.dismiss_mode)
