"""
Access to the Claude Code metadata log (history.jsonl).

The log is append-only and shared with other tooling, so this store is
tolerant on read and conservative on write:
- Lines that do not parse as a history record are skipped by ``load_all``
  and passed through byte-for-byte by ``rewrite_project_path``. This keeps
  records written by newer or foreign tools intact.
- Every rewrite is preceded by a verbatim backup at ``<log>.backup``.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..exceptions import HistoryNotFoundError
from ..local.file_ops import (
    iter_lines,
    join_lines,
    parse_json_object,
    read_text,
    split_lines,
    write_backup,
    write_text,
)
from .types import HistoryRecord

logger = logging.getLogger(__name__)


def parse_history_line(line: str) -> HistoryRecord | None:
    """Parse one log line, returning None if it is not a history record."""
    obj = parse_json_object(line)
    if obj is None:
        return None
    try:
        return HistoryRecord.from_dict(obj)
    except ValueError:
        return None


class HistoryStore:
    """
    Reads and rewrites the metadata log.

    Contract:
    - Inputs: path of history.jsonl (backup lives next to it)
    - Outputs: parsed HistoryRecords; count of rewritten records
    - Side Effects: ``rewrite_project_path`` writes the backup, then the log
    - No rollback: if the final write fails the backup is the recovery copy
    """

    def __init__(self, history_file: Path, backup_file: Path | None = None):
        """Initialize with the metadata log location.

        Args:
            history_file: Path to history.jsonl
            backup_file: Backup location. Defaults to ``<history_file>.backup``.
        """
        self.history_file = Path(history_file)
        self._backup_file = Path(backup_file) if backup_file else None

    @property
    def backup_path(self) -> Path:
        if self._backup_file is not None:
            return self._backup_file
        return self.history_file.with_name(self.history_file.name + ".backup")

    def _require_log(self) -> None:
        if not self.history_file.exists():
            raise HistoryNotFoundError(str(self.history_file))

    def load_all(self) -> list[HistoryRecord]:
        """Load every parseable record in file order.

        Blank and malformed lines are skipped without being reported.

        Returns:
            Parsed history records

        Raises:
            HistoryNotFoundError: If the log does not exist
            StorageIOError: If the log cannot be read
        """
        self._require_log()

        records: list[HistoryRecord] = []
        skipped = 0
        for line in iter_lines(self.history_file):
            if not line.strip():
                continue
            record = parse_history_line(line)
            if record is None:
                skipped += 1
                continue
            records.append(record)

        logger.debug(
            f"Loaded {len(records)} history records from {self.history_file}"
            + (f" ({skipped} unrecognized lines skipped)" if skipped else "")
        )
        return records

    def load_session(self, session_id: str) -> list[HistoryRecord]:
        """Load the records belonging to one session."""
        return [r for r in self.load_all() if r.session_id == session_id]

    def count_records(self, session_id: str) -> int:
        """Count the records a rewrite of ``session_id`` would touch."""
        return len(self.load_session(session_id))

    def rewrite_project_path(self, session_id: str, new_path: str) -> int:
        """Point every record of a session at a new project path.

        Matching lines are re-serialized with only ``project`` changed; all
        other lines, parseable or not, are written back unchanged. The
        complete pre-rewrite content is written to ``backup_path`` first.

        Args:
            session_id: Session whose records are rewritten
            new_path: New value for ``project``

        Returns:
            Number of records rewritten

        Raises:
            HistoryNotFoundError: If the log does not exist
            StorageIOError: If reading, the backup write or the final write fails
        """
        self._require_log()

        original = read_text(self.history_file)
        lines = split_lines(original)

        rewritten = 0
        updated: list[str] = []
        for line in lines:
            record = parse_history_line(line)
            if record is None or record.session_id != session_id:
                updated.append(line)
                continue

            updated.append(record.with_project(new_path).to_json())
            rewritten += 1

        write_backup(original, self.backup_path)
        logger.debug(f"Backed up {self.history_file} to {self.backup_path}")

        write_text(self.history_file, join_lines(updated))
        logger.info(f"Rewrote {rewritten} history records of session {session_id} to {new_path}")
        return rewritten
