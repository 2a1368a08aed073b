"""Find USB serial devices by friendly name instead of /dev path."""

from __future__ import annotations

from importlib import metadata

try:
    __version__ = metadata.version("ttynamed")
except metadata.PackageNotFoundError:  # pragma: no cover - local dev
    __version__ = "0.0.0"

from .cli.main import main, run  # noqa: E402

__all__ = ["__version__", "main", "run"]
