"""XDG base directory lookups and the optional settings file.

The settings file only carries the default log level::

    # $XDG_CONFIG_HOME/ton-wallet-switcher/settings.toml
    [log]
    level = "DEBUG"
"""

from __future__ import annotations

import os
import pathlib
import tomllib
from typing import Any

APP_DIR_NAME = "ton-wallet-switcher"

DEFAULT_LOG_LEVEL = "INFO"


# ---------------------------------------------------------------------------
# XDG base directories
# ---------------------------------------------------------------------------

def _env_path(var: str, fallback: pathlib.Path) -> pathlib.Path:
    value = os.environ.get(var)
    if value and os.path.isabs(value):
        return pathlib.Path(value)
    return fallback


def _env_paths(var: str, fallback: list[str]) -> list[pathlib.Path]:
    value = os.environ.get(var)
    entries = value.split(os.pathsep) if value else fallback
    return [pathlib.Path(p) for p in entries if p and os.path.isabs(p)]


def config_home() -> pathlib.Path:
    """Return $XDG_CONFIG_HOME (or ~/.config)."""
    return _env_path("XDG_CONFIG_HOME", pathlib.Path.home() / ".config")


def config_dirs() -> list[pathlib.Path]:
    """Return $XDG_CONFIG_DIRS (or /etc/xdg)."""
    return _env_paths("XDG_CONFIG_DIRS", ["/etc/xdg"])


def data_home() -> pathlib.Path:
    """Return $XDG_DATA_HOME (or ~/.local/share)."""
    return _env_path(
        "XDG_DATA_HOME", pathlib.Path.home() / ".local" / "share"
    )


def data_dirs() -> list[pathlib.Path]:
    """Return $XDG_DATA_DIRS (or /usr/local/share:/usr/share)."""
    return _env_paths("XDG_DATA_DIRS", ["/usr/local/share", "/usr/share"])


# ---------------------------------------------------------------------------
# Settings file
# ---------------------------------------------------------------------------

def settings_path() -> pathlib.Path:
    """Return the path of the user settings file."""
    return config_home() / APP_DIR_NAME / "settings.toml"


def _load_toml(path: pathlib.Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        return tomllib.loads(path.read_text())
    except (OSError, tomllib.TOMLDecodeError):
        return {}


def log_level() -> str:
    """Return ``[log] level`` from the settings file, or the default."""
    section = _load_toml(settings_path()).get("log", {})
    if not isinstance(section, dict):
        return DEFAULT_LOG_LEVEL
    level = section.get("level")
    return level if isinstance(level, str) and level else DEFAULT_LOG_LEVEL
