"""
Session migration.

Moves a session recorded under one working directory to another: the
metadata log is repointed and the transcript files are copied with their
``cwd`` fields rewritten.
"""

from .migrator import SessionMigrator
from .transcripts import TranscriptMigrator, rewrite_cwd
from .types import MigrationPlan, MigrationResult, MigrationStatus, TranscriptCopyResult

__all__ = [
    "MigrationPlan",
    "MigrationResult",
    "MigrationStatus",
    "SessionMigrator",
    "TranscriptCopyResult",
    "TranscriptMigrator",
    "rewrite_cwd",
]
