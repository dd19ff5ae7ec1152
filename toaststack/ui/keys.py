from __future__ import annotations

import logging

log = logging.getLogger("toaststack.keys")

DEFAULT_KEYBINDINGS: dict[str, str] = {
    "push_notice": "n",
    "push_alert": "a",
    "push_sticky": "s",
    "dismiss_oldest": "d",
    "raise_limit": "plus",
    "lower_limit": "minus",
    "quit": "q",
}

_HINT_LABELS: dict[str, str] = {
    "push_notice": "Notice",
    "push_alert": "Alert",
    "push_sticky": "Sticky",
    "dismiss_oldest": "Dismiss",
    "raise_limit": "Limit+",
    "lower_limit": "Limit-",
    "quit": "Quit",
}

_KEY_DISPLAY: dict[str, str] = {
    "plus": "+",
    "minus": "-",
}


class KeybindManager:
    """Maps Textual key names to app actions.

    Only actions in ``DEFAULT_KEYBINDINGS`` can be rebound. When two actions
    share a key the one listed first keeps it and the clash is reported in
    :attr:`conflicts`.
    """

    def __init__(self, user_bindings: dict[str, str] | None = None) -> None:
        self._bindings = dict(DEFAULT_KEYBINDINGS)
        for action, key in (user_bindings or {}).items():
            if action not in self._bindings:
                log.warning("Unknown keybinding action %r", action)
                continue
            self._bindings[action] = key

        self._by_key: dict[str, str] = {}
        self._conflicts: list[str] = []
        for action, key in self._bindings.items():
            owner = self._by_key.setdefault(key, action)
            if owner != action:
                msg = f"Key '{key}' bound to multiple actions: {owner}, {action}"
                self._conflicts.append(msg)
                log.warning(msg)

    @property
    def conflicts(self) -> list[str]:
        return list(self._conflicts)

    def get_key(self, action: str) -> str | None:
        return self._bindings.get(action)

    def get_action(self, key: str) -> str | None:
        return self._by_key.get(key)

    def hints(self) -> str:
        """Short ``key label`` summary for the status bar."""
        return " | ".join(
            f"{_KEY_DISPLAY.get(key, key)} {_HINT_LABELS.get(action, action)}"
            for action, key in self._bindings.items()
        )
