from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .state import ToastState

if TYPE_CHECKING:
    from .controller import ToastController
    from .stack import ToastStack
    from .toast import Toast

log = logging.getLogger(__name__)


class RemovalCoordinator:
    """Serializes removals across the toasts of one stack.

    A toast may start removing only when no sibling is already removing and
    no earlier sibling is paused. Controllers that are refused join an
    ordered waiter queue and are started by :meth:`wake` once the head of the
    queue becomes eligible.
    """

    def __init__(self, stack: ToastStack) -> None:
        self._stack = stack
        self._active: Toast | None = None
        self._waiters: list[ToastController] = []

    @property
    def active(self) -> Toast | None:
        """The toast currently removing, re-validated against live state."""
        toast = self._active
        if toast is not None and (
            toast.state is not ToastState.REMOVING or toast not in self._stack
        ):
            log.debug("Dropping stale active remover %s", toast.id)
            self._active = None
        return self._active

    @property
    def waiters(self) -> list[ToastController]:
        return sorted(self._waiters, key=lambda c: self._stack.position(c.toast))

    def may_start_removing(self, toast: Toast) -> bool:
        if toast not in self._stack:
            # Detached toast: nothing to coordinate with, let it go.
            return True
        if self.active is not None:
            return False
        return not self._stack.has_paused_before(toast)

    def claim(self, toast: Toast) -> None:
        self._active = toast

    def release(self, toast: Toast) -> None:
        if self._active is toast:
            self._active = None

    def wait(self, controller: ToastController) -> None:
        if controller not in self._waiters:
            self._waiters.append(controller)
            log.debug("Toast %s queued for removal", controller.toast.id)

    def leave(self, controller: ToastController) -> None:
        if controller in self._waiters:
            self._waiters.remove(controller)

    def is_waiting(self, controller: ToastController) -> bool:
        return controller in self._waiters

    def wake(self) -> None:
        """Start the first queued toast that may now remove."""
        for controller in self.waiters:
            if controller.toast not in self._stack:
                self.leave(controller)
                continue
            if not self.may_start_removing(controller.toast):
                continue
            self.leave(controller)
            controller.start_removal()
            if self.active is not None:
                return
