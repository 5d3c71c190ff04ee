"""
Session index and selection.

Sessions are derived from metadata log records on each run; selection turns
them into operator-facing options and maps the choice back.
"""

from .index import (
    Session,
    find_session_by_prefix,
    find_sessions,
    first_messages,
    last_messages,
)
from .selection import (
    PromptSelector,
    Selector,
    format_session_option,
    format_timestamp,
    select_session,
    session_options,
)

__all__ = [
    "Session",
    "find_sessions",
    "find_session_by_prefix",
    "first_messages",
    "last_messages",
    "Selector",
    "PromptSelector",
    "select_session",
    "session_options",
    "format_session_option",
    "format_timestamp",
]
