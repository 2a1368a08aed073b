"""Alias storage and reconciliation against connected devices."""

from .names import RESERVED_NAMES, validate_alias_name
from .reconcile import AddOutcome, AliasReconciler, KnownMissing, KnownPresent, ListReport
from .store import AliasStore

__all__ = [
    "AddOutcome",
    "AliasReconciler",
    "AliasStore",
    "KnownMissing",
    "KnownPresent",
    "ListReport",
    "RESERVED_NAMES",
    "validate_alias_name",
]
