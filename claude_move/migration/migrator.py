"""
Session migrator moving a session to a new working directory.

Sequences the two halves of a move:
1. Rewrite the metadata log so the session's records point at the new path
2. Copy the transcript files into the new project directory

The log is rewritten first. If the copy then fails, the run ends in a
partial state that is reported but not rolled back: the log backup and the
untouched source transcripts are enough to recover by hand, and re-running
the migration is safe.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from ..config import MoveConfig
from ..exceptions import MoveError, SameProjectDirectoryError
from ..history.store import HistoryStore
from ..logging_utils import SessionLoggerAdapter
from ..sessions.index import Session
from .transcripts import TranscriptMigrator
from .types import MigrationPlan, MigrationResult, MigrationStatus

logger = logging.getLogger(__name__)


class SessionMigrator:
    """Moves sessions between project paths.

    Combines the metadata log rewrite and the transcript copy into one
    operation with a single result.
    """

    def __init__(self, history: HistoryStore, transcripts: TranscriptMigrator) -> None:
        """Initialize the migrator.

        Args:
            history: Store for the metadata log
            transcripts: Migrator for transcript files
        """
        self.history = history
        self.transcripts = transcripts

    @classmethod
    def from_config(cls, config: MoveConfig) -> SessionMigrator:
        return cls(
            HistoryStore(config.history_file, config.backup_file),
            TranscriptMigrator(config.projects_dir),
        )

    def plan(self, session: Session, old_path: str, new_path: str) -> MigrationPlan:
        """Describe a migration without performing it."""
        source_dir = self.transcripts.project_dir(old_path)
        return MigrationPlan(
            session_id=session.id,
            old_path=old_path,
            new_path=new_path,
            source_dir=source_dir,
            target_dir=self.transcripts.project_dir(new_path),
            source_exists=source_dir.is_dir(),
            files=[p.name for p in self.transcripts.discover_files(session.id, old_path)],
            history_records=self.history.count_records(session.id),
        )

    def migrate_session(self, session: Session, old_path: str, new_path: str) -> MigrationResult:
        """Migrate a session to a new project path.

        Args:
            session: Session to migrate
            old_path: Project path the session is recorded under
            new_path: Project path to move it to

        Returns:
            Migration result; check ``succeeded`` and ``partial``. Paths that
            share one project directory fail before anything is written.
        """
        log = SessionLoggerAdapter(logger, {"session_id": session.id})
        result = MigrationResult(session_id=session.id, old_path=old_path, new_path=new_path)
        result.started_at = datetime.now(UTC)
        result.status = MigrationStatus.IN_PROGRESS

        # 0. The copy must never land on its own source
        source_dir = self.transcripts.project_dir(old_path)
        if source_dir == self.transcripts.project_dir(new_path):
            error = SameProjectDirectoryError(old_path, new_path, str(source_dir))
            log.error(f"Refusing to migrate: {error}")
            return self._fail(result, "check_paths", error)

        # 1. Metadata log
        try:
            result.history_records = self.history.rewrite_project_path(session.id, new_path)
            result.history_updated = True
        except MoveError as e:
            log.error(f"Failed to update history: {e}")
            return self._fail(result, "update_history", e)

        # 2. Transcript files
        try:
            result.transcripts = self.transcripts.migrate(session, old_path, new_path)
        except MoveError as e:
            log.error(
                f"Failed to copy session files after history was updated: {e}. "
                f"Previous history is in {self.history.backup_path}"
            )
            return self._fail(result, "copy_session_files", e)

        result.status = MigrationStatus.COMPLETED
        result.completed_at = datetime.now(UTC)
        log.info(f"Migrated session {session.id} from {old_path} to {new_path}")
        return result

    def _fail(self, result: MigrationResult, step: str, error: MoveError) -> MigrationResult:
        result.status = MigrationStatus.FAILED
        result.completed_at = datetime.now(UTC)
        result.error_message = str(error)
        result.error_details = {"step": step, "type": type(error).__name__, **error.details}
        if result.history_updated:
            result.error_details["history_backup"] = str(self.history.backup_path)
        return result
