from __future__ import annotations

from textual.widgets import Static


class StatusBar(Static):
    """Bottom bar showing the rack's counts and key hints."""

    DEFAULT_CSS = """
    StatusBar {
        height: 1;
        dock: bottom;
        background: $primary-background;
        color: $text;
        padding: 0 1;
        content-align: center middle;
    }
    """

    def __init__(self, key_hints: str = "") -> None:
        super().__init__("", id="status-bar")
        self._shown: int = 0
        self._hidden: int = 0
        self._removing: int = 0
        self._limit: int = 0
        self._key_hints = key_hints
        self._refresh_display()

    def update_stats(self, shown: int, hidden: int, removing: int, limit: int) -> None:
        self._shown = shown
        self._hidden = hidden
        self._removing = removing
        self._limit = limit
        self._refresh_display()

    @property
    def text(self) -> str:
        limit = str(self._limit) if self._limit else "∞"
        stats = (
            f"Shown: {self._shown} | Queued: {self._hidden} | "
            f"Removing: {self._removing} | Limit: {limit}"
        )
        if self._key_hints:
            return f"{stats}  {self._key_hints}"
        return stats

    def _refresh_display(self) -> None:
        self.update(self.text)
