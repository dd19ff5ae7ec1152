from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .state import ToastState

if TYPE_CHECKING:
    from .stack import ToastStack

log = logging.getLogger(__name__)


class OverflowWindow:
    """Keeps at most ``max_visible`` toasts of a stack on screen."""

    def __init__(self, stack: ToastStack) -> None:
        self._stack = stack

    def initial_hidden(self, order_index: int) -> bool:
        """Render-time decision for a toast created at *order_index*."""
        limit = self._stack.max_visible
        return limit > 0 and order_index >= limit

    def enforce(self) -> None:
        limit = self._stack.max_visible
        ordered = self._stack.ordered()
        if limit > 0:
            inside, outside = ordered[:limit], ordered[limit:]
        else:
            inside, outside = ordered, []

        # Newest first so the oldest toasts keep their slots.
        for toast in reversed(outside):
            if toast.state is ToastState.HIDDEN:
                continue
            controller = self._stack.registry.get(toast)
            if controller is not None:
                log.debug("Hiding toast %s (limit %d)", toast.id, limit)
                controller.hide()

        for toast in inside:
            if toast.state is not ToastState.HIDDEN:
                continue
            controller = self._stack.registry.get(toast)
            if controller is not None:
                log.debug("Revealing toast %s", toast.id)
                controller.reveal()
