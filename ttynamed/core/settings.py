"""Program settings with environment overrides.

Settings live in a plain ``key = value`` text file next to the alias
store. Every key may be overridden with ``TTYNAMED_<KEY>`` in the
environment. Bad values are logged and replaced by their defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from ttynamed.core.logging_config import LOG_LEVELS
from ttynamed.core.logging_utils import get_module_logger
from ttynamed.core.paths import default_settings_path

logger = get_module_logger("Settings")

ENV_PREFIX = "TTYNAMED_"

DISCOVERY_BACKENDS = ("sysfs", "pyserial")
COLOR_MODES = ("auto", "always", "never")


@dataclass
class Settings:
    discovery: str = "sysfs"
    udevadm: str = "udevadm"
    query_timeout: float = 5.0
    strict_enumeration: bool = False
    color: str = "auto"
    log_level: str = "warning"


def parse_config_lines(lines: Iterable[str]) -> Dict[str, str]:
    config: Dict[str, str] = {}

    for raw_line in lines:
        line = raw_line.strip()
        if not line or line.startswith('#'):
            continue
        if '=' not in line:
            continue

        key, value = line.split('=', 1)
        key = key.strip()
        value = value.strip()

        if '#' in value:
            value = value.split('#')[0].strip()

        if (value.startswith('"') and value.endswith('"')) or (value.startswith("'") and value.endswith("'")):
            value = value[1:-1]

        config[key] = value

    return config


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ('true', '1', 'yes', 'on'):
        return True
    if lowered in ('false', '0', 'no', 'off'):
        return False
    raise ValueError(f"not a boolean: {value!r}")


def _positive_float(value: str) -> float:
    parsed = float(value)
    if parsed <= 0:
        raise ValueError("must be positive")
    return parsed


def _choice(options: Iterable[str]) -> Callable[[str], str]:
    allowed = tuple(options)

    def convert(value: str) -> str:
        lowered = value.strip().lower()
        if lowered not in allowed:
            raise ValueError(f"expected one of {', '.join(allowed)}")
        return lowered

    return convert


def _non_empty(value: str) -> str:
    text = value.strip()
    if not text:
        raise ValueError("must not be empty")
    return text


_CONVERTERS: Dict[str, Callable[[str], Any]] = {
    "discovery": _choice(DISCOVERY_BACKENDS),
    "udevadm": _non_empty,
    "query_timeout": _positive_float,
    "strict_enumeration": _parse_bool,
    "color": _choice(COLOR_MODES),
    "log_level": _choice(LOG_LEVELS),
}


def _apply(settings: Settings, raw: Mapping[str, str], source: str) -> None:
    known = {f.name for f in fields(Settings)}
    for key, value in raw.items():
        name = key.strip().lower()
        if name not in known:
            logger.warning("Ignoring unknown setting %r from %s", key, source)
            continue
        try:
            setattr(settings, name, _CONVERTERS[name](value))
        except (TypeError, ValueError) as exc:
            logger.warning(
                "Invalid value for %s from %s: %r (%s); using %r",
                name, source, value, exc, getattr(settings, name),
            )


def _env_overrides(environ: Mapping[str, str]) -> Dict[str, str]:
    overrides: Dict[str, str] = {}
    for f in fields(Settings):
        value = environ.get(f"{ENV_PREFIX}{f.name.upper()}")
        if value is not None:
            overrides[f.name] = value
    return overrides


def load_settings(
    path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Load settings from ``path`` (default location if None) plus environment.

    A missing or unreadable settings file only costs the file's overrides;
    it never aborts the command.
    """
    settings = Settings()
    settings_path = Path(path) if path is not None else default_settings_path()

    if settings_path.exists():
        try:
            with open(settings_path, 'r', encoding='utf-8') as fh:
                _apply(settings, parse_config_lines(fh), str(settings_path))
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Failed to read settings %s: %s", settings_path, exc)
    else:
        logger.debug("No settings file at %s; using defaults", settings_path)

    env = os.environ if environ is None else environ
    _apply(settings, _env_overrides(env), "environment")
    return settings


__all__ = [
    "COLOR_MODES",
    "DISCOVERY_BACKENDS",
    "Settings",
    "load_settings",
    "parse_config_lines",
]
