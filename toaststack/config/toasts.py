from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

log = logging.getLogger(__name__)

DEFAULT_DURATION_SECONDS = 4
DEFAULT_LIMIT = 0
ENTRY_ANIMATION_MS = 400
SETTLE_DELAY_MS = 100
POLL_INTERVAL_MS = 50
EXIT_ANIMATION_MS = 300
MINIMUM_REMAINING_MS = 100


class ConfigError(ValueError):
    """Raised when the toast configuration is invalid."""


class DismissMode(Enum):
    BUTTON = "button"
    CLICK = "click"

    @classmethod
    def parse(cls, value: str | DismissMode) -> DismissMode:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(mode.value for mode in cls)
            raise ConfigError(f"dismiss must be one of: {valid}") from None


def normalize_duration(value: int | dict[str, int]) -> dict[str, int]:
    """Return a ``{flash_type: seconds}`` mapping that always has ``default``."""
    if isinstance(value, dict):
        durations = {str(key): _check_seconds(key, secs) for key, secs in value.items()}
        durations.setdefault("default", DEFAULT_DURATION_SECONDS)
        return durations
    return {"default": _check_seconds("default", value)}


def _check_seconds(key: object, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigError(
            f"duration for {key!r} must be a non-negative integer, got {value!r}"
        )
    return value


def display_duration_ms(seconds: int, entry_animation_ms: int = ENTRY_ANIMATION_MS) -> int:
    """Total visible time for a toast; 0 means never auto-remove."""
    if seconds == 0:
        return 0
    return entry_animation_ms + seconds * 1000


@dataclass
class ToastConfig:
    limit: int = DEFAULT_LIMIT
    duration: dict[str, int] = field(
        default_factory=lambda: {"default": DEFAULT_DURATION_SECONDS}
    )
    dismiss: DismissMode = DismissMode.BUTTON
    entry_animation_ms: int = ENTRY_ANIMATION_MS
    settle_delay_ms: int = SETTLE_DELAY_MS
    poll_interval_ms: int = POLL_INTERVAL_MS
    exit_animation_ms: int = EXIT_ANIMATION_MS

    def __post_init__(self) -> None:
        if isinstance(self.limit, bool) or not isinstance(self.limit, int) or self.limit < 0:
            raise ConfigError(f"limit must be a non-negative integer, got {self.limit!r}")
        self.duration = normalize_duration(self.duration)
        self.dismiss = DismissMode.parse(self.dismiss)
        for name in (
            "entry_animation_ms",
            "settle_delay_ms",
            "poll_interval_ms",
            "exit_animation_ms",
        ):
            value = getattr(self, name)
            if not isinstance(value, int) or value < 0:
                raise ConfigError(f"{name} must be a non-negative integer, got {value!r}")
        if self.poll_interval_ms == 0:
            raise ConfigError("poll_interval_ms must be positive")

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> ToastConfig:
        """Build from the ``toasts`` and ``timing`` config sections."""
        toasts_cfg = config.get("toasts", {})
        timing_cfg = config.get("timing", {})
        return cls(
            limit=toasts_cfg.get("limit", DEFAULT_LIMIT),
            duration=toasts_cfg.get("duration", DEFAULT_DURATION_SECONDS),
            dismiss=toasts_cfg.get("dismiss", DismissMode.BUTTON.value),
            entry_animation_ms=timing_cfg.get("entry_animation_ms", ENTRY_ANIMATION_MS),
            settle_delay_ms=timing_cfg.get("settle_delay_ms", SETTLE_DELAY_MS),
            poll_interval_ms=timing_cfg.get("poll_interval_ms", POLL_INTERVAL_MS),
            exit_animation_ms=timing_cfg.get("exit_animation_ms", EXIT_ANIMATION_MS),
        )

    def duration_for(self, flash_type: str) -> int:
        """Configured seconds for *flash_type*, falling back to ``default``."""
        return self.duration.get(str(flash_type), self.duration["default"])

    def display_duration_ms_for(self, flash_type: str) -> int:
        return display_duration_ms(self.duration_for(flash_type), self.entry_animation_ms)

    def show_close_button(
        self, flash_type: str, dismiss_mode: DismissMode | str | None = None
    ) -> bool:
        """Whether a toast of *flash_type* needs an explicit close control.

        *dismiss_mode* overrides the configured mode for a single message.
        """
        mode = self.dismiss if dismiss_mode is None else DismissMode.parse(dismiss_mode)
        return self.duration_for(flash_type) == 0 and mode is DismissMode.BUTTON
