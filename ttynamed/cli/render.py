"""
Tabular rendering of alias/device listings.

Rows are tab separated: name, device, manufacturer, model, serial. Colour
is applied per row with plain ANSI escapes and only when the caller asks
for it; the output sink is always passed in explicitly.
"""

from __future__ import annotations

from typing import Iterable, Optional, TextIO

from ttynamed.aliases.reconcile import ListReport
from ttynamed.devices.identity import PresentTty, TtyIdentity

GREEN = "\033[32m"
YELLOW = "\033[33m"
RED = "\033[31m"
RESET = "\033[0m"

NOT_PRESENT = "(Not present)"


def show(value: Optional[str]) -> str:
    return value if value is not None else "None"


def _identity_columns(identity: TtyIdentity) -> list[str]:
    return [show(identity.manufacturer), show(identity.model), show(identity.serial)]


def _write_row(out: TextIO, columns: list[str], colour: Optional[str], use_color: bool) -> None:
    line = "\t".join(columns)
    if use_color and colour:
        line = f"{colour}{line}{RESET}"
    out.write(line + "\n")


def stream_supports_color(stream: TextIO, mode: str) -> bool:
    """Decide whether to colour output for ``mode`` (auto/always/never)."""
    if mode == "always":
        return True
    if mode == "never":
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def render_list(report: ListReport, out: TextIO, *, color: bool = False) -> None:
    """Print known-present, unknown-present then known-missing rows."""
    for row in report.known_present:
        _write_row(
            out,
            [row.name, row.present.device, *_identity_columns(row.present.identity)],
            YELLOW if row.ambiguous else GREEN,
            color,
        )

    for present in report.unknown_present:
        # incomplete identities make for fragile aliases
        _write_row(
            out,
            ["", present.device, *_identity_columns(present.identity)],
            None if present.identity.is_complete else YELLOW,
            color,
        )

    for missing in report.known_missing:
        _write_row(
            out,
            [missing.name, NOT_PRESENT, *_identity_columns(missing.identity)],
            RED,
            color,
        )


def render_devices(devices: Iterable[PresentTty], out: TextIO) -> None:
    """Print connected devices without alias information."""
    for present in devices:
        _write_row(out, [present.device, *_identity_columns(present.identity)], None, False)


__all__ = ["render_devices", "render_list", "show", "stream_supports_color"]
