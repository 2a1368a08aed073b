"""
USB tty discovery and identification.

- identity: TtyIdentity / PresentTty value types and the udev escape decoder
- property_source: udevadm property queries
- discovery: candidate tty listing (sysfs or pyserial)
- enumerator: turns candidates into PresentTty values
"""

from .discovery import PySerialTtyDiscovery, SysfsTtyDiscovery, TtyDiscovery, create_discovery
from .enumerator import (
    EnumerationFailure,
    EnumerationResult,
    TtyEnumerator,
    identity_from_properties,
)
from .identity import PresentTty, TtyIdentity, decode_udev_escapes
from .property_source import PropertyQuerier, UdevadmPropertyQuerier, parse_udev_properties

__all__ = [
    "EnumerationFailure",
    "EnumerationResult",
    "PresentTty",
    "PropertyQuerier",
    "PySerialTtyDiscovery",
    "SysfsTtyDiscovery",
    "TtyDiscovery",
    "TtyEnumerator",
    "TtyIdentity",
    "UdevadmPropertyQuerier",
    "create_discovery",
    "decode_udev_escapes",
    "identity_from_properties",
    "parse_udev_properties",
]
