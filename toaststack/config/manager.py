from __future__ import annotations

import copy
import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from toaststack.config.defaults import DEFAULT_CONFIG
from toaststack.config.toasts import ToastConfig

log = logging.getLogger(__name__)

HEADER = "# toaststack configuration. Delete a key to fall back to its default.\n"


def default_config_path() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME", "~/.config")
    return Path(xdg).expanduser() / "toaststack" / "config.toml"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return *base* updated with *override*, merging nested tables."""
    result = dict(base)
    for key, value in override.items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = deep_merge(current, value)
        else:
            result[key] = value
    return result


def dump_toml(config: dict[str, Any]) -> str:
    """Serialize a config shaped like ``DEFAULT_CONFIG``.

    Only tables, strings, integers and booleans are supported.
    """
    chunks = [HEADER]
    for name, table in config.items():
        if not isinstance(table, dict):
            raise TypeError(f"top-level config key {name!r} must be a table")
        chunks.extend(_dump_table(name, table))
    return "\n".join(chunks)


def _dump_table(name: str, table: dict[str, Any]) -> list[str]:
    scalars = [f"{key} = {_format_value(value)}" for key, value in table.items()
               if not isinstance(value, dict)]
    chunks = [f"[{name}]\n" + "".join(line + "\n" for line in scalars)]
    for key, value in table.items():
        if isinstance(value, dict):
            chunks.extend(_dump_table(f"{name}.{key}", value))
    return chunks


def _format_value(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    raise TypeError(f"unsupported config value {value!r}")


class ConfigManager:
    """Loads ``config.toml`` over the built-in defaults.

    A missing file is created from the defaults. Toast settings are
    validated as part of :meth:`load`, so a bad value surfaces as a
    ``ConfigError`` before anything is shown.
    """

    def __init__(self, config_path: str | None = None) -> None:
        if config_path is not None:
            self._config_path = Path(config_path).expanduser()
        else:
            self._config_path = default_config_path()
        self._config: dict[str, Any] = {}
        self._toast_config: ToastConfig | None = None

    @property
    def path(self) -> Path:
        return self._config_path

    @property
    def config(self) -> dict[str, Any]:
        if not self._config:
            self.load()
        return self._config

    def load(self) -> dict[str, Any]:
        config = copy.deepcopy(DEFAULT_CONFIG)
        if self._config_path.exists():
            with open(self._config_path, "rb") as f:
                config = deep_merge(config, tomllib.load(f))
        else:
            log.debug("No config at %s, writing defaults", self._config_path)
            self._write_defaults()

        self._toast_config = ToastConfig.from_dict(config)
        self._config = config
        return config

    def toast_config(self) -> ToastConfig:
        """Validated toast settings; raises ConfigError on bad values."""
        if self._toast_config is None:
            self.load()
        assert self._toast_config is not None
        return self._toast_config

    def get(self, key_path: str, default: object = None) -> object:
        current: object = self.config
        for key in key_path.split("."):
            if not isinstance(current, dict) or key not in current:
                return default
            current = current[key]
        return current

    def _write_defaults(self) -> None:
        self._config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._config_path, "w") as f:
            f.write(dump_toml(DEFAULT_CONFIG))
