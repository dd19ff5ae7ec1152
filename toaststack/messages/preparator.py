from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from toaststack.config.toasts import ToastConfig

from .models import FlashMessage

log = logging.getLogger(__name__)

DEFAULT_FLASH_TYPES: tuple[str, ...] = ("notice", "alert")

SCHEDULES: frozenset[str] = frozenset({"now", "later"})


class UnknownScheduleError(ValueError):
    """Raised for a schedule other than ``now`` or ``later``."""


class FlashBag:
    """Per-request message store.

    ``now`` messages belong to the current request; ``later`` messages are
    carried over to the next one by :meth:`rotate`.
    """

    def __init__(self) -> None:
        self._stores: dict[str, dict[str, list[str]]] = {"now": {}, "later": {}}

    def store(self, schedule: str) -> dict[str, list[str]]:
        if schedule not in SCHEDULES:
            raise UnknownScheduleError(f"Unknown schedule: {schedule}")
        return self._stores[schedule]

    def rotate(self) -> None:
        """Start the next request: scheduled messages become current."""
        self._stores = {"now": self._stores["later"], "later": {}}

    def drain(self) -> list[tuple[str, str]]:
        """Pop the current request's ``(flash_type, text)`` pairs in order."""
        current = self._stores["now"]
        self._stores["now"] = {}
        return [(flash_type, text) for flash_type, texts in current.items() for text in texts]

    def __len__(self) -> int:
        return sum(len(texts) for texts in self._stores["now"].values())


class FlashPreparator:
    """Turns strings and record-like objects into flash messages.

    A record-like object is anything with an ``errors`` mapping of field name
    to a list of messages; its messages are flattened into the flash, except
    for fields named in ``exceptions``.
    """

    def __init__(
        self,
        schedule: str,
        bag: FlashBag,
        flash_types: Iterable[str] = DEFAULT_FLASH_TYPES,
    ) -> None:
        if schedule not in SCHEDULES:
            raise UnknownScheduleError(f"Unknown schedule: {schedule}")
        self._schedule = schedule
        self._bag = bag
        self._flash_types = tuple(flash_types)

    @property
    def flash_types(self) -> tuple[str, ...]:
        return self._flash_types

    def add(self, flash_type: str, *messages: Any, exceptions: Iterable[str] = ()) -> None:
        extracted: list[str] = []
        for message in messages:
            if message is None:
                continue
            extracted.extend(_extract(message, set(exceptions)))
        extracted = [text for text in extracted if text and str(text).strip()]
        if not extracted:
            return

        store = self._bag.store(self._schedule)
        store.setdefault(str(flash_type), []).extend(str(text) for text in extracted)

    def process(self, **options: Any) -> None:
        """Pick ``<type>=`` and ``<type>_exceptions=`` keywords out of *options*."""
        for flash_type in self._flash_types:
            value = options.get(flash_type)
            if value is None or value == "" or value == []:
                continue
            exceptions = options.get(f"{flash_type}_exceptions", ())
            if isinstance(exceptions, str):
                exceptions = (exceptions,)
            messages = value if isinstance(value, (list, tuple)) else [value]
            self.add(flash_type, *messages, exceptions=exceptions)


def _extract(message: Any, exceptions: set[str]) -> list[str]:
    errors = getattr(message, "errors", None)
    if isinstance(errors, Mapping):
        texts: list[str] = []
        for field_name, field_errors in errors.items():
            if str(field_name) in exceptions:
                continue
            if isinstance(field_errors, str):
                texts.append(field_errors)
            else:
                texts.extend(str(error) for error in field_errors)
        return texts
    return [message]


def to_flash_messages(bag: FlashBag, config: ToastConfig) -> list[FlashMessage]:
    """Drain *bag* into messages carrying the configured dismiss mode."""
    messages = [
        FlashMessage(flash_type, text, config.dismiss) for flash_type, text in bag.drain()
    ]
    log.debug("Prepared %d flash messages", len(messages))
    return messages
