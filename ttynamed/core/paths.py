"""Centralized path constants for ttynamed."""

from __future__ import annotations

import os
from pathlib import Path

APP_NAME = "ttynamed"

STORE_FILENAME = "ttys.json"
SETTINGS_FILENAME = "settings.txt"

# Kernel view of tty class devices; entries with a bound driver are real ports
SYSFS_TTY_CLASS_DIR = Path("/sys/class/tty")


def user_config_dir() -> Path:
    """Return the per-user configuration directory.

    ``TTYNAMED_CONFIG_DIR`` wins, then ``$XDG_CONFIG_HOME/ttynamed``, then
    ``~/.config/ttynamed``.
    """
    override = os.environ.get("TTYNAMED_CONFIG_DIR")
    if override:
        return Path(override).expanduser()
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg).expanduser() if xdg else Path.home() / ".config"
    return base / APP_NAME


def default_store_path() -> Path:
    return user_config_dir() / STORE_FILENAME


def default_settings_path() -> Path:
    override = os.environ.get("TTYNAMED_SETTINGS")
    if override:
        return Path(override).expanduser()
    return user_config_dir() / SETTINGS_FILENAME


__all__ = [
    "APP_NAME",
    "SETTINGS_FILENAME",
    "STORE_FILENAME",
    "SYSFS_TTY_CLASS_DIR",
    "default_settings_path",
    "default_store_path",
    "user_config_dir",
]
