"""
ttynamed command line.

    ttynamed NAME                 print the /dev node of alias NAME
    ttynamed resolve NAME         same as above
    ttynamed list                 show aliases and connected USB ttys
    ttynamed add DEVICE NAME      alias the device currently at DEVICE
    ttynamed delete NAME          forget alias NAME

Exit status is 0 on success and 1 on failure, with the reason on stderr.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Protocol, Sequence, TextIO

from ttynamed.aliases.names import validate_alias_name
from ttynamed.aliases.reconcile import AliasReconciler
from ttynamed.aliases.store import AliasStore
from ttynamed.core.errors import ConfigLoadError, TtyNamedError
from ttynamed.core.logging_config import LOG_LEVELS, configure_logging
from ttynamed.core.logging_utils import get_module_logger
from ttynamed.core.paths import default_store_path
from ttynamed.core.settings import COLOR_MODES, Settings, load_settings
from ttynamed.devices.discovery import create_discovery
from ttynamed.devices.enumerator import EnumerationResult, TtyEnumerator
from ttynamed.devices.identity import PresentTty
from ttynamed.devices.property_source import UdevadmPropertyQuerier
from .render import render_devices, render_list, stream_supports_color

logger = get_module_logger("CLI")

COMMANDS = ("resolve", "list", "add", "delete")

# Global options that consume the following argv token
_VALUE_OPTIONS = {"--config", "--settings", "--log-level", "--log-file", "--color"}


class Enumerator(Protocol):
    def enumerate(self) -> EnumerationResult:
        ...


@dataclass
class CommandContext:
    args: argparse.Namespace
    settings: Settings
    store_path: Path
    enumerator: Enumerator
    stdout: TextIO
    stderr: TextIO

    def present_devices(self) -> List[PresentTty]:
        result = self.enumerator.enumerate()
        if self.settings.strict_enumeration:
            result.raise_for_failures()
        elif result.failures:
            logger.warning(
                "%d device(s) could not be read and were skipped",
                len(result.failures),
            )
        return result.devices


def build_parser() -> argparse.ArgumentParser:
    from ttynamed import __version__

    parser = argparse.ArgumentParser(
        prog="ttynamed",
        description="ttynamed - finds TTY devices by friendly name",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Alias file to use (default: ttys.json in the per-user config directory)",
    )
    parser.add_argument(
        "--settings",
        type=Path,
        default=None,
        help="Settings file to use instead of the per-user default",
    )
    parser.add_argument(
        "--log-level",
        choices=sorted(LOG_LEVELS.keys()),
        default=None,
        help="Logging verbosity (default: from settings, usually 'warning')",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Optional path to also write logs to",
    )
    parser.add_argument(
        "--color",
        choices=COLOR_MODES,
        default=None,
        help="Colourise 'list' output (default: from settings, usually 'auto')",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    resolve = subparsers.add_parser("resolve", help="Print the device node of a friendly name")
    resolve.add_argument("name", help="Friendly name of the TTY")

    subparsers.add_parser("list", help="Shows available TTYs and aliases")

    add = subparsers.add_parser("add", help="Add or modify a tty device alias")
    add.add_argument("device", help="/dev entry that the device is currently allocated to")
    add.add_argument("name", help="Friendly name for the new alias")

    delete = subparsers.add_parser("delete", help="Delete a tty device alias")
    delete.add_argument("name", help="Friendly name of the device to be deleted")

    return parser


def normalize_argv(argv: Sequence[str]) -> List[str]:
    """Rewrite ``ttynamed [opts] NAME`` into ``ttynamed [opts] resolve NAME``."""
    args = list(argv)
    index = 0
    while index < len(args):
        token = args[index]
        if token == "--":
            if index + 1 < len(args) and args[index + 1] not in COMMANDS:
                args.insert(index + 1, "resolve")
            return args
        if token.startswith("-"):
            if token in _VALUE_OPTIONS:
                index += 1
            index += 1
            continue
        if token not in COMMANDS:
            args.insert(index, "resolve")
        return args
    return args


def build_enumerator(settings: Settings) -> TtyEnumerator:
    return TtyEnumerator(
        discovery=create_discovery(settings.discovery),
        querier=UdevadmPropertyQuerier(settings.udevadm, settings.query_timeout),
    )


# ----------------------------------------------------------------------
# Commands


def cmd_resolve(ctx: CommandContext) -> None:
    store = AliasStore.load(ctx.store_path)
    reconciler = AliasReconciler(store, ctx.present_devices())
    print(reconciler.resolve(ctx.args.name), file=ctx.stdout)


def cmd_add(ctx: CommandContext) -> None:
    validate_alias_name(ctx.args.name)
    store = AliasStore.load(ctx.store_path)
    reconciler = AliasReconciler(store, ctx.present_devices())
    outcome = reconciler.add(ctx.args.device, ctx.args.name)
    store.save()
    print(outcome.summary, file=ctx.stdout)


def cmd_delete(ctx: CommandContext) -> None:
    store = AliasStore.load(ctx.store_path)
    # deleting never consults connected hardware
    AliasReconciler(store, []).delete(ctx.args.name)
    store.save()
    print(f"{ctx.args.name} was removed successfully!", file=ctx.stdout)


def cmd_list(ctx: CommandContext) -> None:
    mode = ctx.args.color or ctx.settings.color
    try:
        store = AliasStore.load(ctx.store_path)
    except ConfigLoadError as exc:
        # Still show what is connected, then fail without repeating the error
        print(str(exc), file=ctx.stderr)
        print("", file=ctx.stdout)
        render_devices(ctx.present_devices(), ctx.stdout)
        raise TtyNamedError("") from exc

    reconciler = AliasReconciler(store, ctx.present_devices())
    render_list(
        reconciler.classify(),
        ctx.stdout,
        color=stream_supports_color(ctx.stdout, mode),
    )


COMMAND_HANDLERS: Dict[str, Callable[[CommandContext], None]] = {
    "resolve": cmd_resolve,
    "list": cmd_list,
    "add": cmd_add,
    "delete": cmd_delete,
}


def run(
    argv: Optional[Sequence[str]] = None,
    *,
    enumerator: Optional[Enumerator] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
    configure_logs: bool = True,
) -> int:
    """Parse ``argv``, run one command and return the exit status."""
    out = stdout if stdout is not None else sys.stdout
    err = stderr if stderr is not None else sys.stderr
    raw_args = list(sys.argv[1:] if argv is None else argv)

    parser = build_parser()
    if not raw_args:
        parser.print_help(err)
        return 1
    args = parser.parse_args(normalize_argv(raw_args))
    if args.command is None:
        parser.print_help(err)
        return 1

    settings = load_settings(args.settings)
    if configure_logs:
        configure_logging(
            args.log_level or settings.log_level,
            stream=err,
            log_file=args.log_file,
        )

    ctx = CommandContext(
        args=args,
        settings=settings,
        store_path=args.config if args.config is not None else default_store_path(),
        enumerator=enumerator if enumerator is not None else build_enumerator(settings),
        stdout=out,
        stderr=err,
    )
    logger.debug("Running %s with store %s", args.command, ctx.store_path)

    try:
        COMMAND_HANDLERS[args.command](ctx)
    except TtyNamedError as exc:
        logger.debug("%s failed", args.command, exc_info=True)
        message = str(exc)
        if message:
            print(message, file=err)
        return 1
    return 0


def main(argv: Optional[Sequence[str]] = None) -> None:
    sys.exit(run(argv))


__all__ = [
    "COMMANDS",
    "build_enumerator",
    "build_parser",
    "main",
    "normalize_argv",
    "run",
]
