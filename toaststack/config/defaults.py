from __future__ import annotations

DEFAULT_CONFIG: dict = {
    "general": {
        "log_file": "~/.local/share/toaststack/toaststack.log",
        "log_level": "INFO",
    },
    "toasts": {
        # Maximum toasts shown at once; 0 shows all of them.
        "limit": 0,
        # Seconds per flash type; 0 means the toast waits for manual dismissal.
        "duration": {
            "default": 4,
            "pinned": 0,
        },
        "dismiss": "button",
    },
    "timing": {
        "entry_animation_ms": 400,
        "settle_delay_ms": 100,
        "poll_interval_ms": 50,
        "exit_animation_ms": 300,
    },
    "keybindings": {
        "push_notice": "n",
        "push_alert": "a",
        "push_sticky": "s",
        "dismiss_oldest": "d",
        "raise_limit": "plus",
        "lower_limit": "minus",
        "quit": "q",
    },
}
