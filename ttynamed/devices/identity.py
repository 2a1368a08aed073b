"""
TTY identity types.

A ``TtyIdentity`` is what stays constant about a USB serial adapter when it
moves between ``/dev/ttyUSB0`` and ``/dev/ttyUSB3``: its manufacturer, model
and serial strings as reported by udev. ``PresentTty`` pairs an identity
with the device node it occupies right now.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

# udev escapes unsafe bytes in *_ENC properties as \xHH
_ESCAPE_RE = re.compile(r"\\x([0-9A-Za-z]{2})")

IDENTITY_FIELDS = ("manufacturer", "model", "serial")


def _replace_escape(match: "re.Match[str]") -> str:
    try:
        return chr(int(match.group(1), 16))
    except ValueError:
        return "?"


def decode_udev_escapes(raw: str) -> str:
    """Convert strings with embedded hex escapes to plain text.

    ``"hello\\x20world"`` becomes ``"hello world"``. An escape whose two
    characters are not hexadecimal decodes to ``?``. Strings without any
    escape are returned as-is (same object).
    """
    if "\\x" not in raw:
        return raw
    return _ESCAPE_RE.sub(_replace_escape, raw)


@dataclass(frozen=True)
class TtyIdentity:
    """Information inherent to the device; notably not its /dev node."""

    manufacturer: Optional[str] = None
    model: Optional[str] = None
    serial: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        """True when all three identifying fields are known."""
        return None not in (self.manufacturer, self.model, self.serial)

    def to_dict(self) -> Dict[str, str]:
        """Serialize, omitting absent fields."""
        data: Dict[str, str] = {}
        for name in IDENTITY_FIELDS:
            value = getattr(self, name)
            if value is not None:
                data[name] = value
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TtyIdentity":
        """Build from a mapping; raises ValueError on unexpected keys or types."""
        unknown = set(data) - set(IDENTITY_FIELDS)
        if unknown:
            raise ValueError(f"unexpected field(s): {', '.join(sorted(unknown))}")
        values: Dict[str, Optional[str]] = {}
        for name in IDENTITY_FIELDS:
            value = data.get(name)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"field '{name}' must be a string, got {type(value).__name__}")
            values[name] = value
        return cls(**values)


@dataclass(frozen=True)
class PresentTty:
    """A connected device: its identity plus the node it currently holds."""

    identity: TtyIdentity
    device: str


__all__ = [
    "IDENTITY_FIELDS",
    "PresentTty",
    "TtyIdentity",
    "decode_udev_escapes",
]
