from __future__ import annotations

from .models import FlashMessage
from .preparator import FlashBag, FlashPreparator, UnknownScheduleError, to_flash_messages

__all__ = [
    "FlashBag",
    "FlashMessage",
    "FlashPreparator",
    "UnknownScheduleError",
    "to_flash_messages",
]
