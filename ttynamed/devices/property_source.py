"""
Device property source.

Reads udev's property database for one tty device at a time. The
``PropertyQuerier`` protocol is the seam tests replace with fixtures; the
default implementation shells out to ``udevadm``.
"""

from __future__ import annotations

import re
import subprocess
from typing import Dict, Iterable, Protocol

from ttynamed.core.errors import EnumerationError, PropertyQueryError
from ttynamed.core.logging_utils import get_module_logger

logger = get_module_logger("PropertySource")

# udevadm --export prints KEY='value'
_PROPERTY_RE = re.compile(r"^([A-Za-z0-9_.]+)='(.*)'$")

DEFAULT_QUERY_TIMEOUT = 5.0


class PropertyQuerier(Protocol):
    def query(self, target: str) -> str:
        """Return the raw ``KEY='value'`` property text for ``target``.

        Raises:
            PropertyQueryError: the device could not be queried.
            EnumerationError: the property source itself is unavailable.
        """
        ...


def parse_udev_properties(lines: Iterable[str]) -> Dict[str, str]:
    """Parse ``KEY='value'`` lines into a mapping.

    Lines that do not match are ignored, as are empty values.
    """
    fields: Dict[str, str] = {}
    for raw_line in lines:
        match = _PROPERTY_RE.match(raw_line.strip())
        if match and match.group(2):
            fields[match.group(1)] = match.group(2)
    return fields


class UdevadmPropertyQuerier:
    """Query device properties with ``udevadm info``."""

    def __init__(self, executable: str = "udevadm", timeout: float = DEFAULT_QUERY_TIMEOUT):
        self.executable = executable
        self.timeout = timeout

    def command(self, target: str) -> list[str]:
        return [
            self.executable, "info",
            "--query=property", "--export",
            f"--path={target}",
        ]

    def query(self, target: str) -> str:
        cmd = self.command(target)
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as exc:
            raise EnumerationError(
                f"Could not run {self.executable!r}; is udev installed? ({exc})"
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise PropertyQueryError(
                f"udevadm timed out after {self.timeout:g}s for {target}"
            ) from exc
        except OSError as exc:
            raise PropertyQueryError(f"Failed to execute udevadm for {target}: {exc}") from exc

        if result.returncode != 0:
            detail = result.stderr.strip() or f"exit status {result.returncode}"
            raise PropertyQueryError(f"udevadm failed for {target}: {detail}")

        logger.debug("udevadm returned %d bytes for %s", len(result.stdout), target)
        return result.stdout


__all__ = [
    "DEFAULT_QUERY_TIMEOUT",
    "PropertyQuerier",
    "UdevadmPropertyQuerier",
    "parse_udev_properties",
]
