"""Exception hierarchy shared by ttynamed components.

Every error carries the message shown to the user; the CLI prints
``str(exc)`` and exits non-zero. An empty message means the failure has
already been reported.
"""

from __future__ import annotations


class TtyNamedError(Exception):
    """Base class for all user-facing ttynamed failures."""


class ConfigLoadError(TtyNamedError):
    """The alias store exists but cannot be read or parsed."""


class ConfigSaveError(TtyNamedError):
    """The alias store could not be encoded or written."""


class UnknownAliasError(TtyNamedError, KeyError):
    """The requested alias is not in the store."""

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return TtyNamedError.__str__(self)


class DeviceNotPresentError(TtyNamedError):
    """No connected device satisfies the request."""


class AmbiguousMatchError(TtyNamedError):
    """More than one connected device satisfies a request expecting one."""


class InvalidNameError(TtyNamedError, ValueError):
    """An alias name breaks the naming rules or is a reserved keyword."""


class EnumerationError(TtyNamedError):
    """Device enumeration could not be completed."""


class PropertyQueryError(TtyNamedError):
    """Querying the properties of a single device failed."""


__all__ = [
    "AmbiguousMatchError",
    "ConfigLoadError",
    "ConfigSaveError",
    "DeviceNotPresentError",
    "EnumerationError",
    "InvalidNameError",
    "PropertyQueryError",
    "TtyNamedError",
    "UnknownAliasError",
]
