from __future__ import annotations

from .status_bar import StatusBar
from .toast_rack import ToastRack
from .toast_widget import ToastWidget

__all__ = [
    "StatusBar",
    "ToastRack",
    "ToastWidget",
]
