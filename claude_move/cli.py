"""
Command line entry point for moving a Claude Code session.

Usage:
    claude-move                              # sessions of the current directory
    claude-move ~/old/project                # sessions of another directory
    claude-move --from /old --to /new        # ask only which session to move
    claude-move --session 3f2a --to /new -y  # fully non-interactive
    claude-move --to /new --dry-run          # show what would be changed

Prints the ``cd <dir> && claude --resume <id>`` command for the chosen
session, after migrating it when a new directory was given.
"""

from __future__ import annotations

import argparse
import logging
import os
import shlex
import sys
from collections.abc import Callable
from pathlib import Path

from . import __version__
from .config import MoveConfig, load_config
from .exceptions import MigrationError, MoveError
from .history.store import HistoryStore
from .logging_utils import configure_logging, get_move_logger
from .migration.migrator import SessionMigrator
from .migration.types import MigrationPlan
from .paths import normalize_path
from .sessions.index import Session, find_session_by_prefix, find_sessions
from .sessions.selection import PromptSelector, format_timestamp, select_session

logger = get_move_logger("cli")

EXIT_OK = 0
EXIT_FAILURE = 1


class Console:
    """Operator-facing output; colours are dropped when stdout is not a tty."""

    def __init__(self, stream=None):
        self.stream = stream or sys.stdout
        self.colour = hasattr(self.stream, "isatty") and self.stream.isatty()

    def _emit(self, code: str, symbol: str, text: str) -> None:
        line = f"{symbol} {text}"
        if self.colour:
            line = f"\033[{code}m{line}\033[0m"
        print(line, file=self.stream)

    def print(self, text: str = "") -> None:
        print(text, file=self.stream)

    def info(self, text: str) -> None:
        self._emit("34", "ℹ", text)

    def success(self, text: str) -> None:
        self._emit("32", "✓", text)

    def warn(self, text: str) -> None:
        self._emit("33", "⚠", text)

    def error(self, text: str) -> None:
        self._emit("31", "✗", text)

    def box(self, title: str, body: str) -> None:
        self.print(f"── {title} " + "─" * max(0, 40 - len(title)))
        for line in body.splitlines():
            self.print(f"  {line}")
        self.print("─" * 44)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="claude-move",
        description="Move a Claude Code session to a new working directory.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        help="Project path to find sessions in (default: current directory)",
    )
    parser.add_argument("--from", dest="from_path", help="Same as PATH")
    parser.add_argument("--to", dest="to_path", help="New directory to move the session to")
    parser.add_argument("--session", "-s", help="Session id or unique id prefix")
    parser.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation")
    parser.add_argument("--dry-run", "-n", action="store_true", help="Show what would change")
    parser.add_argument("--settings", type=Path, help="Path to settings.yaml")
    parser.add_argument("--verbose", "-v", action="count", default=0, help="More log output")
    parser.add_argument("--log-json", action="store_true", help="Log as JSON lines")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def resume_command(directory: str, session_id: str, command: str = "claude") -> str:
    """Shell command resuming a session from its working directory."""
    return f"cd {shlex.quote(directory)} && {command} --resume {shlex.quote(session_id)}"


def confirm(prompt: str, input_fn: Callable[[str], str]) -> bool:
    """Ask a yes/no question; an empty answer means yes."""
    try:
        answer = input_fn(f"{prompt} (Y/n): ").strip().lower()
    except EOFError:
        return False
    return answer in ("", "y", "yes")


def prompt_path(prompt: str, input_fn: Callable[[str], str]) -> str:
    try:
        return input_fn(f"{prompt}: ").strip()
    except EOFError:
        return ""


def _session_details(session: Session, current: str) -> str:
    return (
        f"ID:       {session.id}\n"
        f"Messages: {session.message_count}\n"
        f"Started:  {format_timestamp(session.first_timestamp)}\n"
        f"Last:     {format_timestamp(session.last_timestamp)}\n"
        f"Current:  {current}"
    )


def _show_plan(console: Console, plan: MigrationPlan) -> None:
    console.box(
        "Dry Run",
        f"History records: {plan.history_records}\n"
        f"Source dir:      {plan.source_dir}"
        + ("" if plan.source_exists else "  (missing)")
        + f"\nTarget dir:      {plan.target_dir}\n"
        + "Files:\n"
        + ("\n".join(f"  {name}" for name in plan.files) or "  (none)"),
    )


def _report_failure(console: Console, error: MigrationError, backup: Path) -> None:
    console.error(f"Migration failed: {error.reason}")
    if error.partial:
        console.warn(
            "History was already updated but session files were not fully copied. "
            f"The previous history is saved in {backup}; "
            "the original session files are untouched."
        )


def main(
    argv: list[str] | None = None,
    *,
    config: MoveConfig | None = None,
    input_fn: Callable[[str], str] = input,
    console: Console | None = None,
) -> int:
    args = build_parser().parse_args(argv)
    console = console or Console()

    level = logging.WARNING - 10 * min(args.verbose, 2)
    configure_logging(level, json_format=args.log_json)

    config = config or load_config(args.settings)
    logger.debug(f"Using history {config.history_file}, projects {config.projects_dir}")
    source = normalize_path(args.path or args.from_path or os.getcwd())

    console.info(f"Looking for sessions in: {source}")

    history = HistoryStore(config.history_file, config.backup_file)
    try:
        records = history.load_all()
    except MoveError as e:
        console.error(f"Failed to load history: {e}")
        return EXIT_FAILURE

    sessions = find_sessions(records, source)
    if not sessions:
        console.warn(f"No sessions found for path: {source}")
        return EXIT_OK

    console.success(f"Found {len(sessions)} session(s)")
    console.print()

    if args.session:
        try:
            session = find_session_by_prefix(sessions, args.session)
        except MoveError as e:
            console.error(str(e))
            return EXIT_FAILURE
    else:
        session = select_session(sessions, PromptSelector(input_fn, console.print))
        if session is None:
            console.info("Cancelled")
            return EXIT_OK

    console.box("Session Details", _session_details(session, source))

    target = args.to_path
    if target is None:
        target = prompt_path(
            "Enter NEW directory path (or press Enter to just get resume command)", input_fn
        )

    resume_dir = source
    if target:
        target = normalize_path(target)
        if target == source:
            console.warn("Session is already in that directory")
        else:
            migrator = SessionMigrator.from_config(config)
            console.box("Migration Plan", f"From: {source}\n  To: {target}")

            if args.dry_run:
                _show_plan(console, migrator.plan(session, source, target))
                return EXIT_OK

            if not args.yes and not confirm("Migrate session to new directory?", input_fn):
                console.info("Cancelled")
                return EXIT_OK

            console.info("Migrating session...")
            result = migrator.migrate_session(session, source, target)
            try:
                result.raise_for_status()
            except MigrationError as e:
                _report_failure(console, e, history.backup_path)
                return EXIT_FAILURE

            copied = len(result.transcripts.copied) if result.transcripts else 0
            console.success(
                f"Session migrated ({result.history_records} history records, {copied} files)"
            )
            resume_dir = target

    command = resume_command(resume_dir, session.id, config.resume_command)
    console.box("Resume Session", f"Run this:\n\n  {command}")
    return EXIT_OK


def run() -> None:
    """Console script entry point."""
    sys.exit(main())
