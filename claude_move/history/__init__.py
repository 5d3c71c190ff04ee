"""
Metadata log access.

The metadata log (``~/.claude/history.jsonl``) holds one record per prompt,
tagged with the project path and session id it belongs to.
"""

from .store import HistoryStore, parse_history_line
from .types import HistoryRecord

__all__ = [
    "HistoryRecord",
    "HistoryStore",
    "parse_history_line",
]
