from __future__ import annotations

import logging
from typing import Callable, Iterable, Iterator

from toaststack.config.toasts import ConfigError, ToastConfig
from toaststack.messages.models import FlashMessage

from .clock import Clock, TimerHandle, cancel_handle
from .controller import ToastController
from .coordinator import RemovalCoordinator
from .overflow import OverflowWindow
from .registry import ControllerRegistry
from .state import ToastState
from .toast import Toast

log = logging.getLogger(__name__)

# toast, previous state
StateListener = Callable[[Toast, ToastState], None]

# Re-run overflow enforcement after attach to pick up late siblings.
LATE_ENFORCE_DELAYS_MS: tuple[int, ...] = (200, 500)


class ToastStack:
    """Ordered container of sibling toasts, oldest first."""

    def __init__(
        self,
        clock: Clock,
        config: ToastConfig | None = None,
        registry: ControllerRegistry | None = None,
        max_visible: int | None = None,
    ) -> None:
        self._clock = clock
        self._config = config or ToastConfig()
        self._max_visible = _check_limit(
            self._config.limit if max_visible is None else max_visible
        )
        self._members: list[Toast] = []
        self.registry = registry if registry is not None else ControllerRegistry()
        self.overflow = OverflowWindow(self)
        self.coordinator = RemovalCoordinator(self)
        self._listeners: list[StateListener] = []
        self._attach_handles: list[TimerHandle] = []

    # ------------------------------------------------------------------
    # Membership
    # ------------------------------------------------------------------

    @property
    def config(self) -> ToastConfig:
        return self._config

    @property
    def members(self) -> list[Toast]:
        return list(self._members)

    def __contains__(self, toast: object) -> bool:
        return any(member is toast for member in self._members)

    def __iter__(self) -> Iterator[Toast]:
        return iter(list(self._members))

    def __len__(self) -> int:
        return len(self._members)

    @property
    def max_visible(self) -> int:
        return self._max_visible

    @max_visible.setter
    def max_visible(self, value: int) -> None:
        value = _check_limit(value)
        if value == self._max_visible:
            return
        log.info("Toast limit changed %d -> %d", self._max_visible, value)
        self._max_visible = value
        self.enforce()

    def add(self, toast: Toast) -> ToastController:
        controller = self._register(toast)
        self.enforce()
        return controller

    def push(
        self, flash_type: str, text: str, dismiss_mode: str | None = None
    ) -> ToastController:
        """Create a toast from the configured duration for *flash_type*."""
        return self.add(self._build(FlashMessage(flash_type, text, dismiss_mode)))

    def render(self, messages: Iterable[FlashMessage]) -> list[ToastController]:
        """Add a batch of messages in order, deciding visibility up front."""
        offset = len(self.ordered())
        controllers = []
        for index, message in enumerate(messages):
            controller = self._register(self._build(message))
            if not self.overflow.initial_hidden(offset + index):
                controller.reveal()
            controllers.append(controller)
        self.enforce()
        return controllers

    def detach(self, toast: Toast) -> None:
        """Drop a removed toast and let the queue advance."""
        controller = self.registry.get(toast)
        if controller is not None:
            controller.destroy()
        self.registry.unregister(toast)
        self._members = [member for member in self._members if member is not toast]
        self.enforce()

    def attach(self) -> None:
        """Container is on screen; enforce now and again for late siblings."""
        self.enforce()
        self._attach_handles.append(self._clock.call_soon(self.enforce))
        for delay in LATE_ENFORCE_DELAYS_MS:
            self._attach_handles.append(self._clock.call_later(delay, self.enforce))

    def close(self) -> None:
        for handle in self._attach_handles:
            cancel_handle(handle)
        self._attach_handles.clear()
        for controller in self.registry:
            controller.destroy()

    def enforce(self) -> None:
        self.overflow.enforce()
        self.coordinator.wake()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def controller_for(self, toast: Toast) -> ToastController | None:
        return self.registry.get(toast)

    def ordered(self) -> list[Toast]:
        """Members not yet removing, in presentation order."""
        return [toast for toast in self._members if not toast.is_leaving]

    def order_index(self, toast: Toast) -> int | None:
        for index, member in enumerate(self.ordered()):
            if member is toast:
                return index
        return None

    def position(self, toast: Toast) -> int:
        for index, member in enumerate(self._members):
            if member is toast:
                return index
        return -1

    def has_paused_before(self, toast: Toast) -> bool:
        for member in self._members:
            if member is toast:
                return False
            if member.state is ToastState.PAUSED:
                return True
        return False

    def shown(self) -> list[Toast]:
        return [toast for toast in self._members if toast.is_shown]

    def hidden(self) -> list[Toast]:
        return [toast for toast in self._members if toast.state is ToastState.HIDDEN]

    def removing(self) -> list[Toast]:
        return [toast for toast in self._members if toast.state is ToastState.REMOVING]

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def add_listener(self, listener: StateListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: StateListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def notify(self, toast: Toast, previous: ToastState) -> None:
        for listener in list(self._listeners):
            try:
                listener(toast, previous)
            except Exception:
                log.exception("Toast listener failed for %s", toast.id)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _register(self, toast: Toast) -> ToastController:
        controller = ToastController(
            toast,
            self._clock,
            stack=self,
            settle_delay_ms=self._config.settle_delay_ms,
            poll_interval_ms=self._config.poll_interval_ms,
        )
        self._members.append(toast)
        self.registry.register(controller)
        log.debug("Added toast %s (%s)", toast.id, toast.flash_type)
        return controller

    def _build(self, message: FlashMessage) -> Toast:
        mode = message.dismiss_mode or self._config.dismiss
        return Toast(
            flash_type=message.flash_type,
            text=message.text,
            display_duration_ms=self._config.display_duration_ms_for(message.flash_type),
            dismiss_mode=mode,
        )


def _check_limit(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigError(f"limit must be a non-negative integer, got {value!r}")
    return value
