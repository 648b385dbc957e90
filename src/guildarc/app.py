"""Application entry point for guildarc."""

from __future__ import annotations

import argparse
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Callable, Optional

from art import tprint
from rich.console import Console
from rich.table import Table

from guildarc.adapters.json_directory import JsonDirectoryProvider
from guildarc.adapters.json_storage import JsonStateStorage
from guildarc.adapters.sidebar_formatting import format_profile_label, format_sidebar, format_switch_message
from guildarc.core.errors import PersistenceError, ProfileError
from guildarc.core.session import ProfileSession
from guildarc.settings import ConfigError, Settings, load_settings

NAME = "GUILDARC"
FONT = "tarty-1"

LOGGER = logging.getLogger(__name__)


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


def _configure_logging(settings: Settings) -> None:
    config = settings.logging or {}
    if not config.get("enabled", False):
        return

    level_name = str(config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(fmt=fmt, datefmt=datefmt)

    handlers: list[logging.Handler] = []

    if config.get("console", True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        path = Path(file_cfg.get("path", "logs/guildarc.log")).expanduser()
        if not path.is_absolute():
            path = settings.base_dir / path
        path.parent.mkdir(parents=True, exist_ok=True)

        max_bytes = int(file_cfg.get("max_bytes", 5 * 1024 * 1024))
        backup_count = int(file_cfg.get("backup_count", 5))
        file_handler = RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if not handlers:
        return

    logging.basicConfig(level=level, handlers=handlers)


def build_session(
    settings: Settings,
    on_persist_error: Optional[Callable[[PersistenceError], None]] = None,
) -> ProfileSession:
    """Wire the JSON adapters into a ProfileSession."""

    return ProfileSession(
        persistence=JsonStateStorage(settings.state_path),
        directory=JsonDirectoryProvider(settings.directory_path),
        on_persist_error=on_persist_error,
    )


def _print_profiles(session: ProfileSession, console: Console) -> None:
    table = Table(title="Profiles")
    table.add_column("#", justify="right")
    table.add_column("id")
    table.add_column("profile")
    table.add_column("active")
    for summary in session.summaries():
        table.add_row(
            str(summary.index),
            summary.profile_id,
            format_profile_label(summary),
            "*" if summary.is_active else "",
        )
    console.print(table)


def _switch(session: ProfileSession, target: str) -> None:
    if target == "next":
        profile = session.switch_next()
    elif target == "prev":
        profile = session.switch_prev()
    elif target.isdigit():
        profile = session.switch_to_number(int(target))
    else:
        profile = session.switch(target)
    print(format_switch_message(profile))


def _assignment(session: ProfileSession, args: argparse.Namespace, assign: bool) -> None:
    if args.server:
        if assign:
            session.add_server(args.profile_id, args.server)
        else:
            session.remove_server(args.profile_id, args.server)
    else:
        if assign:
            session.add_folder(args.profile_id, args.folder)
        else:
            session.remove_folder(args.profile_id, args.folder)


def _run_tui(settings: Settings) -> None:
    # Imported lazily so scripted commands do not pay for Textual start-up.
    from guildarc.frontend.app import ArcPanelApp

    _print_banner()
    panel = ArcPanelApp(settings=settings)
    try:
        panel.run()
    finally:
        panel.session.close()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="guildarc")
    parser.add_argument("--config", help="Path to config.json")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("tui", help="Launch the profile TUI (default)")
    subparsers.add_parser("list", help="List profiles")
    subparsers.add_parser("show", help="Show what the active profile makes visible")

    switch = subparsers.add_parser("switch", help="Switch the active profile")
    switch.add_argument("target", help="Profile id, 'next', 'prev', or a 1-based number")

    create = subparsers.add_parser("create", help="Create a profile")
    create.add_argument("name")
    create.add_argument("--emoji")

    rename = subparsers.add_parser("rename", help="Rename a profile")
    rename.add_argument("profile_id")
    rename.add_argument("name")

    emoji = subparsers.add_parser("emoji", help="Change a profile's emoji")
    emoji.add_argument("profile_id")
    emoji.add_argument("emoji")

    delete = subparsers.add_parser("delete", help="Delete a profile")
    delete.add_argument("profile_id")

    for name, help_text in (("assign", "Add a server or folder"), ("unassign", "Remove a server or folder")):
        sub = subparsers.add_parser(name, help=f"{help_text} to a profile")
        sub.add_argument("profile_id")
        target = sub.add_mutually_exclusive_group(required=True)
        target.add_argument("--server")
        target.add_argument("--folder")

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    command = args.command or "tui"

    try:
        settings = load_settings(args.config)
    except ConfigError as exc:
        print(f"config error: {exc}", file=sys.stderr)
        return 1
    _configure_logging(settings)

    if command == "tui":
        try:
            _run_tui(settings)
        except ProfileError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1
        return 0

    failures: list[PersistenceError] = []
    try:
        session = build_session(settings, on_persist_error=failures.append)
        if command == "list":
            _print_profiles(session, Console())
        elif command == "show":
            header = format_profile_label(session.active_profile)
            print(format_sidebar(session.resolution(), session.snapshot, header=header))
        elif command == "switch":
            _switch(session, args.target)
        elif command == "create":
            profile_id = session.create(args.name, args.emoji)
            print(profile_id)
        elif command == "rename":
            session.rename(args.profile_id, args.name)
        elif command == "emoji":
            session.set_emoji(args.profile_id, args.emoji)
        elif command == "delete":
            session.delete(args.profile_id)
        elif command in {"assign", "unassign"}:
            _assignment(session, args, assign=command == "assign")
    except ProfileError as exc:
        LOGGER.debug("Command %s failed", command, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    if failures:
        print(f"error: {failures[-1]}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
