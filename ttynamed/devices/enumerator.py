"""
USB tty enumeration.

Walks the discovered candidates one at a time, reads their udev
properties, and keeps only USB devices with a device node. A candidate
whose properties cannot be read is recorded in
``EnumerationResult.failures`` and the walk carries on; whether that
should fail the command is the caller's decision.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ttynamed.core.errors import EnumerationError, PropertyQueryError
from ttynamed.core.logging_utils import get_module_logger
from .discovery import TtyDiscovery
from .identity import PresentTty, TtyIdentity, decode_udev_escapes
from .property_source import PropertyQuerier, parse_udev_properties

logger = get_module_logger("TtyEnumerator")

BUS_PROPERTY = "ID_BUS"
DEVNAME_PROPERTY = "DEVNAME"
MANUFACTURER_PROPERTY = "ID_VENDOR_ENC"
MODEL_PROPERTY = "ID_MODEL_ENC"
SERIAL_PROPERTY = "ID_SERIAL_SHORT"


@dataclass(frozen=True)
class EnumerationFailure:
    target: str
    reason: str


@dataclass
class EnumerationResult:
    devices: List[PresentTty] = field(default_factory=list)
    failures: List[EnumerationFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def raise_for_failures(self) -> None:
        """Escalate recorded per-device failures into one EnumerationError."""
        if not self.failures:
            return
        details = "; ".join(f"{f.target}: {f.reason}" for f in self.failures)
        raise EnumerationError(
            f"Could not read {len(self.failures)} device(s): {details}"
        )


def identity_from_properties(fields: Dict[str, str]) -> Optional[PresentTty]:
    """Build a PresentTty from parsed udev properties.

    Returns None for anything that is not a USB device or has no
    device node.
    """
    if fields.get(BUS_PROPERTY) != "usb":
        return None

    def extract(name: str) -> Optional[str]:
        raw = fields.get(name)
        return decode_udev_escapes(raw) if raw is not None else None

    devname = extract(DEVNAME_PROPERTY)
    if devname is None:
        return None

    return PresentTty(
        identity=TtyIdentity(
            manufacturer=extract(MANUFACTURER_PROPERTY),
            model=extract(MODEL_PROPERTY),
            serial=extract(SERIAL_PROPERTY),
        ),
        device=devname,
    )


class TtyEnumerator:
    """Produce the USB ttys currently attached to the host."""

    def __init__(self, discovery: TtyDiscovery, querier: PropertyQuerier):
        self.discovery = discovery
        self.querier = querier

    def enumerate(self) -> EnumerationResult:
        result = EnumerationResult()

        # TODO: collapse multiple tty nodes that belong to one physical device
        for target in self.discovery.discover():
            try:
                raw = self.querier.query(target)
            except PropertyQueryError as exc:
                logger.warning("Skipping %s: %s", target, exc)
                result.failures.append(EnumerationFailure(target, str(exc)))
                continue

            present = identity_from_properties(parse_udev_properties(raw.splitlines()))
            if present is None:
                logger.debug("Ignoring %s (not a USB tty with a device node)", target)
                continue

            logger.debug("Found %s at %s", present.identity, present.device)
            result.devices.append(present)

        logger.info(
            "Enumerated %d USB tty(s), %d failure(s)",
            len(result.devices), len(result.failures),
        )
        return result


__all__ = [
    "EnumerationFailure",
    "EnumerationResult",
    "TtyEnumerator",
    "identity_from_properties",
]
