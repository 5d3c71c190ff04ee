"""
Interactive session selection.

Selection is split in two:
- ``select_session`` maps a selector's answer onto a session. It is pure
  and knows nothing about terminals.
- A ``Selector`` turns a list of option strings into an index or None
  (cancelled). ``PromptSelector`` is the numbered-list terminal adapter;
  tests and other front ends supply their own.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Protocol

from .index import Session, first_messages, last_messages

PREVIEW_COUNT = 3
CONTEXT_MAX_CHARS = 150
CONTEXT_SEPARATOR = " → "
SHORT_ID_THRESHOLD = 20

CANCEL_INPUTS = ("", "q", "quit")


class Selector(Protocol):
    """Chooses one option, or returns None when the operator cancels."""

    def choose(self, options: list[str]) -> int | None: ...


def format_timestamp(timestamp_ms: int) -> str:
    """Format epoch milliseconds as local ``YYYY-MM-DD HH:MM``."""
    return datetime.fromtimestamp(timestamp_ms // 1000).strftime("%Y-%m-%d %H:%M")


def shorten_id(session_id: str) -> str:
    if len(session_id) > SHORT_ID_THRESHOLD:
        return f"{session_id[:8]}...{session_id[-8:]}"
    return session_id


def _context(messages: list[str]) -> str:
    text = CONTEXT_SEPARATOR.join(messages)
    if len(text) > CONTEXT_MAX_CHARS:
        text = text[: CONTEXT_MAX_CHARS - 3] + "..."
    return text


def format_session_option(position: int, session: Session) -> str:
    """Render one session as a (multi-line) selection option.

    Args:
        position: 1-based position shown to the operator
        session: Session to describe
    """
    first_context = _context(first_messages(session, PREVIEW_COUNT))
    last_context = _context(last_messages(session, PREVIEW_COUNT))
    return (
        f"[{position}] {shorten_id(session.id)} | {session.message_count} msgs | "
        f"{format_timestamp(session.first_timestamp)} → {format_timestamp(session.last_timestamp)}\n"
        f"    Start: {first_context}\n"
        f"    Last:  {last_context}"
    )


def session_options(sessions: list[Session]) -> list[str]:
    return [format_session_option(i, s) for i, s in enumerate(sessions, start=1)]


def select_session(sessions: list[Session], selector: Selector) -> Session | None:
    """Let a selector pick one of the sessions.

    Returns:
        The chosen session, or None if the selector cancelled

    Raises:
        ValueError: If the selector returns an index outside the options
    """
    if not sessions:
        return None

    choice = selector.choose(session_options(sessions))
    if choice is None:
        return None
    if not 0 <= choice < len(sessions):
        raise ValueError(f"Selection {choice} out of range for {len(sessions)} sessions")
    return sessions[choice]


class PromptSelector:
    """Numbered-list selector reading the choice from a line of input."""

    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
        prompt: str = "Choose a session to migrate [1-{count}, Enter to cancel]: ",
    ):
        self.input_fn = input_fn
        self.output_fn = output_fn
        self.prompt = prompt

    def choose(self, options: list[str]) -> int | None:
        if not options:
            return None

        for option in options:
            self.output_fn(option)
            self.output_fn("")

        while True:
            try:
                raw = self.input_fn(self.prompt.format(count=len(options)))
            except EOFError:
                return None

            answer = raw.strip().lower()
            if answer in CANCEL_INPUTS:
                return None
            if answer.isdigit() and 1 <= int(answer) <= len(options):
                return int(answer) - 1

            self.output_fn(f"Please enter a number between 1 and {len(options)}.")
