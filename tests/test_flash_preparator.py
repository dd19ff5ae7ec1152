from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from toaststack.config.toasts import DismissMode, ToastConfig
from toaststack.core.clock import ManualClock
from toaststack.core.stack import ToastStack
from toaststack.core.state import ToastState
from toaststack.messages.models import FlashMessage
from toaststack.messages.preparator import (
    FlashBag,
    FlashPreparator,
    UnknownScheduleError,
    to_flash_messages,
)


@dataclass
class _Record:
    errors: dict[str, list[str]] = field(default_factory=dict)


class TestFlashPreparator:
    def test_strings_are_collected_in_order(self) -> None:
        bag = FlashBag()
        FlashPreparator("now", bag).add("notice", "one", "two")

        assert bag.drain() == [("notice", "one"), ("notice", "two")]

    def test_record_errors_are_flattened(self) -> None:
        bag = FlashBag()
        record = _Record({"email": ["Email is taken"], "name": ["Name is blank", "Name is short"]})

        FlashPreparator("now", bag).add("alert", record, "Extra")

        assert [text for _, text in bag.drain()] == [
            "Email is taken",
            "Name is blank",
            "Name is short",
            "Extra",
        ]

    def test_exceptions_skip_fields(self) -> None:
        bag = FlashBag()
        record = _Record({"email": ["Email is taken"], "name": ["Name is blank"]})

        FlashPreparator("now", bag).add("alert", record, exceptions=["email"])

        assert bag.drain() == [("alert", "Name is blank")]

    def test_record_without_errors_adds_nothing(self) -> None:
        bag = FlashBag()
        FlashPreparator("now", bag).add("alert", _Record(), None, "  ")

        assert len(bag) == 0

    def test_later_messages_wait_for_next_request(self) -> None:
        bag = FlashBag()
        FlashPreparator("later", bag).add("notice", "Saved!")
        assert bag.drain() == []

        bag.rotate()

        assert bag.drain() == [("notice", "Saved!")]

    def test_process_reads_known_flash_types(self) -> None:
        bag = FlashBag()
        record = _Record({"email": ["Email is taken"], "name": ["Name is blank"]})

        FlashPreparator("now", bag).process(
            notice="Created!",
            alert=record,
            alert_exceptions="email",
            warning="ignored",
        )

        assert bag.drain() == [("notice", "Created!"), ("alert", "Name is blank")]

    def test_custom_flash_types(self) -> None:
        bag = FlashBag()
        FlashPreparator("now", bag, flash_types=("success",)).process(success=["a", "b"])

        assert bag.drain() == [("success", "a"), ("success", "b")]

    def test_unknown_schedule(self) -> None:
        with pytest.raises(UnknownScheduleError, match="Unknown schedule: soon"):
            FlashPreparator("soon", FlashBag())


def test_prepared_messages_render_into_stack() -> None:
    bag = FlashBag()
    FlashPreparator("now", bag).process(notice="Saved", alert="Careful")
    config = ToastConfig(limit=1, duration={"default": 4, "alert": 0}, dismiss="click")  # type: ignore[arg-type]
    messages = to_flash_messages(bag, config)

    assert messages == [
        FlashMessage("notice", "Saved", DismissMode.CLICK),
        FlashMessage("alert", "Careful", DismissMode.CLICK),
    ]

    stack = ToastStack(ManualClock(), config)
    notice, alert = stack.render(messages)

    assert notice.toast.display_duration_ms == 4400
    assert notice.toast.state is ToastState.PENDING
    assert alert.toast.display_duration_ms == 0
    assert alert.toast.dismiss_mode is DismissMode.CLICK
    assert alert.toast.state is ToastState.HIDDEN
