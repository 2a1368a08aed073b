"""
Alias reconciliation.

Cross-references the alias store with a fresh enumeration. A device and
an alias match when their identities are exactly equal, absent fields
included. Nothing here touches the disk: callers save the store after a
mutating call returns, so a failed call never persists anything.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

from ttynamed.core.errors import (
    AmbiguousMatchError,
    DeviceNotPresentError,
    UnknownAliasError,
)
from ttynamed.core.logging_utils import get_module_logger
from ttynamed.devices.identity import PresentTty, TtyIdentity
from .names import validate_alias_name
from .store import AliasStore

logger = get_module_logger("Reconciler")


@dataclass(frozen=True)
class KnownPresent:
    name: str
    present: PresentTty
    # the alias matches more than one connected device
    ambiguous: bool = False


@dataclass(frozen=True)
class KnownMissing:
    name: str
    identity: TtyIdentity


@dataclass
class ListReport:
    known_present: List[KnownPresent] = field(default_factory=list)
    unknown_present: List[PresentTty] = field(default_factory=list)
    known_missing: List[KnownMissing] = field(default_factory=list)


@dataclass(frozen=True)
class AddOutcome:
    name: str
    present: PresentTty
    # aliases that pointed at the same device (or the same name) and were dropped
    replaced: Tuple[str, ...] = ()
    created: bool = True

    @property
    def summary(self) -> str:
        if self.created and not self.replaced:
            return f"Added {self.name} -> {self.present.device}"
        others = [n for n in self.replaced if n != self.name]
        if others:
            return (
                f"Assigned {self.name} -> {self.present.device} "
                f"(replaced {', '.join(others)})"
            )
        return f"Updated {self.name} -> {self.present.device}"


def _device_sort_key(present: PresentTty) -> Tuple[str, str, str, str]:
    identity = present.identity
    return (
        present.device,
        identity.manufacturer or "",
        identity.model or "",
        identity.serial or "",
    )


class AliasReconciler:
    """Decision logic for resolve / add / delete / list."""

    def __init__(self, store: AliasStore, devices: Iterable[PresentTty]):
        self.store = store
        self.devices = sorted(devices, key=_device_sort_key)

    def matches(self, identity: TtyIdentity) -> List[PresentTty]:
        return [present for present in self.devices if present.identity == identity]

    def resolve(self, name: str) -> str:
        """Return the current device node of alias ``name``.

        Raises:
            UnknownAliasError: no such alias.
            DeviceNotPresentError: the aliased device is not connected.
            AmbiguousMatchError: several connected devices share the identity.
        """
        identity = self.store.get(name)
        if identity is None:
            raise UnknownAliasError(f"{name} isn't a known friendly name.")

        candidates = self.matches(identity)
        if not candidates:
            raise DeviceNotPresentError(f"{name} doesn't appear to be present.")
        if len(candidates) > 1:
            devices = ", ".join(c.device for c in candidates)
            raise AmbiguousMatchError(
                f"Found multiple devices that could be {name}: {devices}"
            )

        logger.debug("Resolved %s to %s", name, candidates[0].device)
        return candidates[0].device

    def add(self, device: str, name: str) -> AddOutcome:
        """Bind ``name`` to the device currently at ``device``.

        Every alias already bound to that device's identity is removed
        first, so one physical device never carries two aliases.
        """
        validate_alias_name(name)

        candidates = [present for present in self.devices if present.device == device]
        if not candidates:
            raise DeviceNotPresentError(
                f"{device} doesn't seem to be a connected USB TTY."
            )
        if len(candidates) > 1:
            raise AmbiguousMatchError(f"Somehow, multiple USB TTYs use {device}!?")
        target = candidates[0]

        created = name not in self.store
        replaced = self.store.names_for(target.identity)
        for old_name in replaced:
            self.store.remove(old_name)
        if not created and name not in replaced:
            replaced.append(name)
        self.store.set(name, target.identity)

        outcome = AddOutcome(
            name=name,
            present=target,
            replaced=tuple(sorted(replaced)),
            created=created,
        )
        logger.info("%s", outcome.summary)
        return outcome

    def delete(self, name: str) -> TtyIdentity:
        if name not in self.store:
            raise UnknownAliasError(
                f"{name} is not a current friendly name, so was not deleted."
            )
        identity = self.store.remove(name)
        logger.info("Deleted alias %s", name)
        return identity

    def classify(self) -> ListReport:
        """Partition every device and every alias into one bucket each."""
        report = ListReport()
        matched_devices = set()

        for name, identity in self.store.items():
            candidates = self.matches(identity)
            if not candidates:
                report.known_missing.append(KnownMissing(name, identity))
                continue
            ambiguous = len(candidates) > 1
            for present in candidates:
                matched_devices.add(present)
                report.known_present.append(KnownPresent(name, present, ambiguous))

        for present in self.devices:
            if present not in matched_devices:
                report.unknown_present.append(present)

        report.known_present.sort(key=lambda row: (row.name, _device_sort_key(row.present)))
        return report


__all__ = [
    "AddOutcome",
    "AliasReconciler",
    "KnownMissing",
    "KnownPresent",
    "ListReport",
]
