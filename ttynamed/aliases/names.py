"""Alias name validation."""

from __future__ import annotations

import re

from ttynamed.core.errors import InvalidNameError

# Subcommand words; an alias with one of these names could never be resolved
# with the ``ttynamed NAME`` shorthand.
RESERVED_NAMES = frozenset({"add", "delete", "help", "list", "resolve"})

# Letters, digits, underscore and hyphen; no leading hyphen so a name never
# parses as an option.
_NAME_RE = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_-]*$")


def validate_alias_name(name: str) -> str:
    """Return ``name`` unchanged if it is usable as an alias, else raise."""
    if not name:
        raise InvalidNameError("Alias names must not be empty.")
    if not _NAME_RE.match(name):
        raise InvalidNameError(
            f"'{name}' is not a valid alias name: use letters, digits, '_' and '-', "
            "and do not start with '-'."
        )
    if name.lower() in RESERVED_NAMES:
        raise InvalidNameError(f"'{name}' is a reserved command name and cannot be an alias.")
    return name


__all__ = ["RESERVED_NAMES", "validate_alias_name"]
