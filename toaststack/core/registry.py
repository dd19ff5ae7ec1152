from __future__ import annotations

from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from .controller import ToastController
    from .toast import Toast


class ControllerRegistry:
    """Maps toast identity to the controller driving it."""

    def __init__(self) -> None:
        self._controllers: dict[str, ToastController] = {}

    def register(self, controller: ToastController) -> None:
        self._controllers[controller.toast.id] = controller

    def unregister(self, toast: Toast) -> None:
        self._controllers.pop(toast.id, None)

    def get(self, toast: Toast) -> ToastController | None:
        return self._controllers.get(toast.id)

    def __contains__(self, toast: object) -> bool:
        return getattr(toast, "id", None) in self._controllers

    def __iter__(self) -> Iterator[ToastController]:
        return iter(list(self._controllers.values()))

    def __len__(self) -> int:
        return len(self._controllers)
