"""Command line entry point and listing renderer."""

from .main import main, run

__all__ = ["main", "run"]
