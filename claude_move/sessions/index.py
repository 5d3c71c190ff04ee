"""
Session index built from metadata log records.

A Session is a view over the history records of one project that share a
session id. It is rebuilt on every run and never written anywhere.

Ordering on equal timestamps is explicit: records keep the order in which
they were discovered in the log, and sessions with the same last activity
keep the order in which their first record was discovered.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from ..exceptions import AmbiguousSessionError, SessionNotFoundError
from ..history.types import HistoryRecord

PREVIEW_MAX_CHARS = 80
PREVIEW_ELLIPSIS = "..."


@dataclass
class Session:
    """A logical conversation assembled from history records."""

    id: str
    message_count: int = 0
    first_timestamp: int = 0
    first_display: str = ""
    last_timestamp: int = 0
    last_display: str = ""

    # Contributing records in discovery order
    records: list[HistoryRecord] = field(default_factory=list)

    def add(self, record: HistoryRecord) -> None:
        """Add a record, updating the count and timestamp bounds."""
        if not self.records or record.timestamp < self.first_timestamp:
            self.first_timestamp = record.timestamp
            self.first_display = record.display
        if not self.records or record.timestamp >= self.last_timestamp:
            self.last_timestamp = record.timestamp
            self.last_display = record.display

        self.records.append(record)
        self.message_count += 1

    def first_messages(self, count: int) -> list[str]:
        return first_messages(self, count)

    def last_messages(self, count: int) -> list[str]:
        return last_messages(self, count)


def find_sessions(records: Iterable[HistoryRecord], project_path: str) -> list[Session]:
    """Group the records of one project into sessions.

    Matching on ``project`` is an exact string comparison; callers normalize
    the path beforehand. Records without a session id are ignored.

    Args:
        records: Records in log order
        project_path: Project path to select

    Returns:
        Sessions ordered by last activity, most recent first
    """
    by_id: dict[str, Session] = {}

    for record in records:
        if record.project != project_path or not record.session_id:
            continue

        session = by_id.get(record.session_id)
        if session is None:
            session = Session(id=record.session_id)
            by_id[record.session_id] = session
        session.add(record)

    # dict preserves discovery order and sorted() is stable
    return sorted(by_id.values(), key=lambda s: s.last_timestamp, reverse=True)


def _preview(text: str) -> str:
    text = text.strip()
    if len(text) > PREVIEW_MAX_CHARS:
        text = text[: PREVIEW_MAX_CHARS - len(PREVIEW_ELLIPSIS)] + PREVIEW_ELLIPSIS
    return text


def _previews(records: Iterable[HistoryRecord]) -> list[str]:
    # Empty displays count towards ``count`` but produce no preview
    return [p for p in (_preview(r.display) for r in records) if p]


def first_messages(session: Session, count: int) -> list[str]:
    """Previews of the ``count`` earliest records, oldest first."""
    ordered = sorted(session.records, key=lambda r: r.timestamp)
    return _previews(ordered[: max(count, 0)])


def last_messages(session: Session, count: int) -> list[str]:
    """Previews of the ``count`` latest records, in chronological order."""
    indexed = list(enumerate(session.records))
    # Newest first; among equal timestamps the later-discovered record is newer
    indexed.sort(key=lambda pair: (pair[1].timestamp, pair[0]), reverse=True)
    latest = [record for _, record in indexed[: max(count, 0)]]
    latest.reverse()
    return _previews(latest)


def find_session_by_prefix(sessions: list[Session], partial_id: str) -> Session:
    """Find a session by exact id or unique id prefix.

    Raises:
        SessionNotFoundError: If no session matches
        AmbiguousSessionError: If several sessions share the prefix
    """
    partial_id = partial_id.strip()
    if not partial_id:
        raise SessionNotFoundError(partial_id)

    for session in sessions:
        if session.id == partial_id:
            return session

    matches = [s for s in sessions if s.id.startswith(partial_id)]
    if not matches:
        raise SessionNotFoundError(partial_id)
    if len(matches) > 1:
        raise AmbiguousSessionError(partial_id, [s.id for s in matches])
    return matches[0]
