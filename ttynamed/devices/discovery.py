"""
Candidate tty discovery.

Both backends return sysfs class paths (``/sys/class/tty/ttyUSB0``) which
the property source can query directly. Only ports with a bound driver
are real hardware; virtual consoles and unconfigured 8250 slots are left
out by the sysfs backend.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Protocol

import serial.tools.list_ports

from ttynamed.core.logging_utils import get_module_logger
from ttynamed.core.paths import SYSFS_TTY_CLASS_DIR

logger = get_module_logger("TtyDiscovery")


class TtyDiscovery(Protocol):
    def discover(self) -> List[str]:
        """Return sysfs class paths of candidate serial devices."""
        ...


class SysfsTtyDiscovery:
    """List ``/sys/class/tty/*/device/driver`` and map hits to their class dir."""

    def __init__(self, class_dir: Optional[Path] = None):
        self.class_dir = Path(class_dir) if class_dir is not None else SYSFS_TTY_CLASS_DIR

    def discover(self) -> List[str]:
        if not self.class_dir.exists():
            logger.debug("No tty class directory at %s", self.class_dir)
            return []

        candidates = []
        for driver_link in self.class_dir.glob("*/device/driver"):
            # .../tty/ttyUSB0/device/driver -> .../tty/ttyUSB0
            candidates.append(str(driver_link.parent.parent))

        candidates.sort()
        logger.debug("Found %d driver-bound tty entries", len(candidates))
        return candidates


class PySerialTtyDiscovery:
    """Use pyserial's port listing and map each port to its sysfs class dir."""

    def __init__(self, class_dir: Optional[Path] = None):
        self.class_dir = Path(class_dir) if class_dir is not None else SYSFS_TTY_CLASS_DIR

    def discover(self) -> List[str]:
        candidates = set()
        for port_info in serial.tools.list_ports.comports():
            name = Path(port_info.device).name
            if name:
                candidates.add(str(self.class_dir / name))

        logger.debug("pyserial reported %d ports", len(candidates))
        return sorted(candidates)


def create_discovery(backend: str, class_dir: Optional[Path] = None) -> TtyDiscovery:
    """Build the discovery backend named in settings."""
    if backend == "sysfs":
        return SysfsTtyDiscovery(class_dir)
    if backend == "pyserial":
        return PySerialTtyDiscovery(class_dir)
    raise ValueError(f"Unknown discovery backend '{backend}'")


__all__ = [
    "PySerialTtyDiscovery",
    "SysfsTtyDiscovery",
    "TtyDiscovery",
    "create_discovery",
]
