"""
Migration types and data structures.

Defines the results reported when a session is moved from one project
path to another.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

from ..exceptions import MigrationError


class MigrationStatus(Enum):
    """Status of a migration operation."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class TranscriptCopyResult:
    """Outcome of copying a session's transcript files.

    ``skipped`` lists source files that could not be read; they are left
    out of the copy without failing it.
    """

    source_dir: Path
    target_dir: Path
    copied: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    cwd_rewrites: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "source_dir": str(self.source_dir),
            "target_dir": str(self.target_dir),
            "copied": list(self.copied),
            "skipped": list(self.skipped),
            "cwd_rewrites": self.cwd_rewrites,
        }


@dataclass
class MigrationPlan:
    """What a migration would do, computed without writing anything."""

    session_id: str
    old_path: str
    new_path: str
    source_dir: Path
    target_dir: Path
    source_exists: bool
    files: list[str] = field(default_factory=list)
    history_records: int = 0

    @property
    def can_migrate(self) -> bool:
        return self.source_exists and bool(self.files) and self.source_dir != self.target_dir

    def to_dict(self) -> dict[str, Any]:
        return {
            "session_id": self.session_id,
            "old_path": self.old_path,
            "new_path": self.new_path,
            "source_dir": str(self.source_dir),
            "target_dir": str(self.target_dir),
            "source_exists": self.source_exists,
            "files": list(self.files),
            "history_records": self.history_records,
        }


@dataclass
class MigrationResult:
    """Result of migrating a single session.

    When ``history_updated`` is True but the status is FAILED, the metadata
    log already points at the new path while the transcripts were not
    (fully) copied. The history backup and the untouched originals are the
    recovery material.
    """

    session_id: str
    old_path: str
    new_path: str
    status: MigrationStatus = MigrationStatus.PENDING

    history_updated: bool = False
    history_records: int = 0
    transcripts: TranscriptCopyResult | None = None

    # Timing
    started_at: datetime | None = None
    completed_at: datetime | None = None

    # Error info (if failed)
    error_message: str | None = None
    error_details: dict[str, Any] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return self.status == MigrationStatus.COMPLETED

    @property
    def partial(self) -> bool:
        """True if the log was rewritten but the transcript copy failed."""
        return self.status == MigrationStatus.FAILED and self.history_updated

    def raise_for_status(self) -> None:
        """Raise MigrationError unless the migration completed."""
        if not self.succeeded:
            raise MigrationError(
                self.session_id,
                self.error_message or f"migration {self.status.value}",
                partial=self.partial,
            )

    @property
    def duration_seconds(self) -> float | None:
        """Calculate migration duration."""
        if self.started_at and self.completed_at:
            return (self.completed_at - self.started_at).total_seconds()
        return None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "session_id": self.session_id,
            "old_path": self.old_path,
            "new_path": self.new_path,
            "status": self.status.value,
            "history_updated": self.history_updated,
            "history_records": self.history_records,
            "transcripts": self.transcripts.to_dict() if self.transcripts else None,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "duration_seconds": self.duration_seconds,
            "partial": self.partial,
            "error_message": self.error_message,
            "error_details": self.error_details,
        }
