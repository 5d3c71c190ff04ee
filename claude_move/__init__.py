"""
claude-move

Moves a Claude Code session to a new working directory so it can be resumed
from there.

Provides:
- Metadata log access with verbatim backup before every rewrite
- Session index over the metadata log (grouping, previews, prefix lookup)
- Transcript copy with ``cwd`` rewriting; originals are never modified
- An orchestrator reporting complete, failed and partial migrations

Usage:

    >>> from claude_move import MoveConfig, HistoryStore, SessionMigrator, find_sessions
    >>> config = MoveConfig.from_env()
    >>> records = HistoryStore(config.history_file).load_all()
    >>> session = find_sessions(records, "/Users/me/old-project")[0]
    >>> result = SessionMigrator.from_config(config).migrate_session(
    ...     session, "/Users/me/old-project", "/Users/me/new-project"
    ... )
    >>> result.succeeded
    True
"""

__version__ = "0.1.0"

from .config import MoveConfig, load_config  # noqa: E402

# Exceptions
from .exceptions import (  # noqa: E402
    AmbiguousSessionError,
    HistoryNotFoundError,
    MigrationError,
    MoveError,
    NoTranscriptFilesError,
    ProjectDirectoryNotFoundError,
    SameProjectDirectoryError,
    SessionNotFoundError,
    StorageIOError,
)
from .history import HistoryRecord, HistoryStore  # noqa: E402
from .migration import (  # noqa: E402
    MigrationPlan,
    MigrationResult,
    MigrationStatus,
    SessionMigrator,
    TranscriptCopyResult,
    TranscriptMigrator,
)
from .paths import encode_project_path, normalize_path  # noqa: E402
from .sessions import (  # noqa: E402
    PromptSelector,
    Session,
    find_session_by_prefix,
    find_sessions,
    first_messages,
    last_messages,
    select_session,
)

__all__ = [
    # Configuration
    "MoveConfig",
    "load_config",
    # Path codec
    "encode_project_path",
    "normalize_path",
    # History
    "HistoryRecord",
    "HistoryStore",
    # Sessions
    "Session",
    "find_sessions",
    "find_session_by_prefix",
    "first_messages",
    "last_messages",
    "select_session",
    "PromptSelector",
    # Migration
    "SessionMigrator",
    "TranscriptMigrator",
    "MigrationPlan",
    "MigrationResult",
    "MigrationStatus",
    "TranscriptCopyResult",
    # Exceptions
    "MoveError",
    "HistoryNotFoundError",
    "ProjectDirectoryNotFoundError",
    "SameProjectDirectoryError",
    "NoTranscriptFilesError",
    "SessionNotFoundError",
    "AmbiguousSessionError",
    "StorageIOError",
    "MigrationError",
]
