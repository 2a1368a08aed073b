"""
Alias store persistence.

The store maps friendly names to ``TtyIdentity`` values and lives in one
JSON document::

    {
      "ttys": {
        "gps": {"manufacturer": "u-blox AG", "model": "u-blox 7", "serial": "A1B2"}
      }
    }

Absent identity fields are omitted. Saving replaces the file atomically;
a failed save leaves the previous file untouched.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Iterator, Mapping, Optional, Tuple, Union

from ttynamed.core.errors import ConfigLoadError, ConfigSaveError
from ttynamed.core.file_sync_utils import atomic_write_text
from ttynamed.core.logging_utils import get_module_logger
from ttynamed.devices.identity import TtyIdentity

logger = get_module_logger("AliasStore")

STORE_KEY = "ttys"


class AliasStore:
    """In-memory alias table bound to the file it was loaded from."""

    def __init__(
        self,
        path: Union[str, Path],
        aliases: Optional[Mapping[str, TtyIdentity]] = None,
    ):
        self.path = Path(path)
        self._aliases: Dict[str, TtyIdentity] = dict(aliases or {})

    # ------------------------------------------------------------------
    # Mapping-like access

    def __contains__(self, name: object) -> bool:
        return name in self._aliases

    def __len__(self) -> int:
        return len(self._aliases)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._aliases))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AliasStore):
            return NotImplemented
        return self._aliases == other._aliases

    def get(self, name: str) -> Optional[TtyIdentity]:
        return self._aliases.get(name)

    def items(self) -> Iterator[Tuple[str, TtyIdentity]]:
        for name in sorted(self._aliases):
            yield name, self._aliases[name]

    # ------------------------------------------------------------------
    # Mutation

    def set(self, name: str, identity: TtyIdentity) -> None:
        self._aliases[name] = identity

    def remove(self, name: str) -> TtyIdentity:
        return self._aliases.pop(name)

    def names_for(self, identity: TtyIdentity) -> list[str]:
        """Return every alias bound to ``identity``, sorted."""
        return sorted(name for name, known in self._aliases.items() if known == identity)

    # ------------------------------------------------------------------
    # Persistence

    @classmethod
    def load(cls, path: Union[str, Path]) -> "AliasStore":
        """Load the store at ``path``; a missing file yields an empty store.

        Raises:
            ConfigLoadError: the file exists but cannot be read or parsed.
        """
        store_path = Path(path)
        if not store_path.exists():
            logger.debug("No alias store at %s; starting empty", store_path)
            return cls(store_path)

        try:
            text = store_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigLoadError(f"Error reading config file {store_path}: {exc}") from exc

        try:
            document = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigLoadError(f"Error parsing {store_path}: {exc}") from exc

        try:
            aliases = cls._decode(document)
        except ValueError as exc:
            raise ConfigLoadError(f"Error parsing {store_path}: {exc}") from exc

        logger.info("Loaded %d alias(es) from %s", len(aliases), store_path)
        return cls(store_path, aliases)

    @staticmethod
    def _decode(document: object) -> Dict[str, TtyIdentity]:
        if not isinstance(document, dict):
            raise ValueError("top level must be an object")
        unknown = set(document) - {STORE_KEY}
        if unknown:
            raise ValueError(f"unexpected key(s): {', '.join(sorted(unknown))}")
        if STORE_KEY not in document:
            raise ValueError(f"missing '{STORE_KEY}' table")
        table = document[STORE_KEY]
        if not isinstance(table, dict):
            raise ValueError(f"'{STORE_KEY}' must be an object")

        aliases: Dict[str, TtyIdentity] = {}
        for name, entry in table.items():
            if not isinstance(entry, dict):
                raise ValueError(f"alias '{name}' must be an object")
            try:
                aliases[name] = TtyIdentity.from_dict(entry)
            except ValueError as exc:
                raise ValueError(f"alias '{name}': {exc}") from exc
        return aliases

    def encode(self) -> str:
        document = {
            STORE_KEY: {name: identity.to_dict() for name, identity in self.items()}
        }
        return json.dumps(document, indent=2, ensure_ascii=False) + "\n"

    def save(self, path: Optional[Union[str, Path]] = None) -> None:
        """Write the whole store, replacing the previous file atomically.

        Raises:
            ConfigSaveError: encoding or writing failed; the previous file
                is unchanged.
        """
        target = Path(path) if path is not None else self.path
        try:
            payload = self.encode()
        except (TypeError, ValueError) as exc:
            raise ConfigSaveError(f"Failed to encode configuration: {exc}") from exc

        try:
            atomic_write_text(target, payload)
        except OSError as exc:
            raise ConfigSaveError(f"Failed to write configuration file {target}: {exc}") from exc

        logger.info("Saved %d alias(es) to %s", len(self), target)


__all__ = ["AliasStore", "STORE_KEY"]
