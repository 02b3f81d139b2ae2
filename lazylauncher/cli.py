"""Command-line front door for lazylauncher.

Loads config and a live-state snapshot, builds the entry catalog, then runs
the interactive overlay on the controlling tty. The selected action is
printed to stdout as one JSON line so callers can capture it.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path

from .catalog import CatalogSources, build_catalog
from .commands import expanded_commands
from .config import (
    load_config,
    load_disable_default_key_bindings,
    load_key_bindings,
    load_launch_menu,
    load_launcher_flags,
    load_title,
)
from .dispatch import JsonActionSink
from .flags import LauncherFlags, parse_flags
from .hooks import load_format_hook
from .keymap import resolve_key_bindings
from .live_state import SnapshotLiveState
from .session import run_launcher
from .terminal import TerminalController


def _flags_arg(value: str) -> LauncherFlags:
    """argparse type for comma or pipe separated flag names."""
    try:
        return parse_flags(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Pick a domain, tab, workspace, command or shortcut from a fuzzy launcher menu."
    )
    parser.add_argument("--state", type=Path, default=None, help="JSON snapshot of domains, tabs and workspaces.")
    parser.add_argument(
        "--flags",
        type=_flags_arg,
        default=None,
        help="Entry sources, e.g. 'domains,tabs,commands,keys,workspaces,launch_menu'.",
    )
    parser.add_argument("--fuzzy", action="store_true", help="Start with the fuzzy filter active.")
    parser.add_argument("--title", default=None, help="Terminal title while the launcher is shown.")
    parser.add_argument("--window-id", type=int, default=0, help="Window whose tabs are listed.")
    parser.add_argument("--pane-id", type=int, default=0, help="Pane the action is dispatched for.")
    parser.add_argument("--config", type=Path, default=None, help="Config file path.")
    parser.add_argument("--format-hook", default=None, metavar="MODULE:FUNC", help="Label formatting hook.")
    parser.add_argument("--list", action="store_true", help="Print entry labels and exit.")
    parser.add_argument("--log-file", type=Path, default=None, help="Write debug logs to this file.")
    return parser


def _configure_logging(log_file: Path | None) -> None:
    if log_file is None:
        logging.getLogger().addHandler(logging.NullHandler())
        return
    logging.basicConfig(
        filename=str(log_file),
        level=logging.DEBUG,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, build the catalog, and run the launcher.

    Returns ``0`` when an action was selected (or ``--list`` ran) and ``1``
    when the launcher was cancelled.
    """
    args = _build_parser().parse_args(argv)
    _configure_logging(args.log_file)

    config = load_config(args.config)
    flags = args.flags if args.flags is not None else load_launcher_flags(config)
    if args.fuzzy:
        flags |= LauncherFlags.FUZZY
    title = args.title or load_title(config)

    if args.state is not None:
        try:
            live_state = SnapshotLiveState.from_path(args.state)
        except (OSError, ValueError) as exc:
            raise SystemExit(f"Cannot read state snapshot: {exc}") from exc
    else:
        live_state = SnapshotLiveState()

    format_label = None
    if args.format_hook:
        try:
            format_label = load_format_hook(args.format_hook)
        except (ValueError, ImportError, AttributeError) as exc:
            raise SystemExit(f"Cannot load format hook: {exc}") from exc

    key_bindings = resolve_key_bindings(
        load_key_bindings(config),
        include_defaults=not load_disable_default_key_bindings(config),
    )
    sources = CatalogSources(
        live_state=live_state,
        window_id=args.window_id,
        key_bindings=key_bindings,
        commands=expanded_commands(key_bindings),
        launch_menu=load_launch_menu(config),
    )
    catalog = asyncio.run(build_catalog(sources, flags, format_label))

    if args.list:
        for entry in catalog:
            sys.stdout.write(f"{entry.label}\n")
        return 0

    try:
        tty_fd = os.open("/dev/tty", os.O_RDWR)
    except OSError as exc:
        raise SystemExit(f"No controlling terminal: {exc}") from exc
    try:
        terminal = TerminalController(tty_fd, tty_fd)
        action = run_launcher(
            catalog,
            terminal,
            JsonActionSink(sys.stdout),
            flags=flags,
            pane_id=args.pane_id,
            title=title,
        )
    finally:
        os.close(tty_fd)
    return 0 if action is not None else 1
