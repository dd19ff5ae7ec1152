from __future__ import annotations

from .state import ToastFlag, ToastState
from .clock import AsyncioClock, Clock, ManualClock, TextualClock
from .toast import Toast
from .controller import ToastController
from .coordinator import RemovalCoordinator
from .overflow import OverflowWindow
from .registry import ControllerRegistry
from .stack import ToastStack

__all__ = [
    "AsyncioClock",
    "Clock",
    "ControllerRegistry",
    "ManualClock",
    "OverflowWindow",
    "RemovalCoordinator",
    "TextualClock",
    "Toast",
    "ToastController",
    "ToastFlag",
    "ToastStack",
    "ToastState",
]
