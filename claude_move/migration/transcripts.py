"""
Transcript file migration.

Copies a session's transcript files from the project directory of one
working directory to that of another, rewriting the ``cwd`` field of every
structured line on the way. Files are discovered by naming convention:

    <projects_dir>/<encoded project>/<session_id>*.jsonl
    <projects_dir>/<encoded project>/agent-*.jsonl

Agent files carry no on-disk link to the session that spawned them, so all
of them are copied along with any session.

The source directory is only ever read. Re-running a migration overwrites
the destination copies with identical content.
"""

from __future__ import annotations

import glob
import logging
from pathlib import Path

from ..exceptions import (
    NoTranscriptFilesError,
    ProjectDirectoryNotFoundError,
    SameProjectDirectoryError,
    StorageIOError,
)
from ..local.file_ops import (
    JsonPairs,
    dump_json_pairs,
    ensure_directory,
    join_lines,
    parse_json_pairs,
    read_text,
    split_lines,
    write_text,
)
from ..paths import encode_project_path
from ..sessions.index import Session
from .types import TranscriptCopyResult

logger = logging.getLogger(__name__)

CWD_KEY = "cwd"
AGENT_FILE_PATTERN = "agent-*.jsonl"


def rewrite_cwd(content: str, new_path: str) -> tuple[str, int]:
    """Point the ``cwd`` field of every JSON object line at ``new_path``.

    Lines that are blank, not JSON, not an object, have no ``cwd`` or
    already carry ``new_path`` are returned exactly as they were. On a
    rewritten line, numbers keep their literal text and repeated keys stay
    (every top-level ``cwd`` is replaced).

    Args:
        content: Whole transcript file content
        new_path: Replacement working directory

    Returns:
        Tuple of (new content, number of lines changed)
    """
    changed = 0
    lines: list[str] = []
    for line in split_lines(content):
        obj = parse_json_pairs(line)
        if obj is None or not _has_stale_cwd(obj, new_path):
            lines.append(line)
            continue

        updated = JsonPairs((k, new_path if k == CWD_KEY else v) for k, v in obj)
        lines.append(dump_json_pairs(updated))
        changed += 1

    return join_lines(lines), changed


def _has_stale_cwd(obj: JsonPairs, new_path: str) -> bool:
    # type() check: a JsonNumber is a str subclass holding number text
    return any(k == CWD_KEY and not (type(v) is str and v == new_path) for k, v in obj)


class TranscriptMigrator:
    """Copies session transcripts between encoded project directories."""

    def __init__(self, projects_dir: Path):
        """Initialize the migrator.

        Args:
            projects_dir: Root holding one directory per encoded project path
        """
        self.projects_dir = Path(projects_dir)

    def project_dir(self, project_path: str) -> Path:
        """Directory holding the transcripts of a project path."""
        return self.projects_dir / encode_project_path(project_path)

    def discover_files(self, session_id: str, project_path: str) -> list[Path]:
        """Find the transcript and agent files of a session.

        Args:
            session_id: Session whose files are wanted
            project_path: Project path the files currently live under

        Returns:
            Matching files sorted by name; empty if the directory is missing
        """
        directory = self.project_dir(project_path)
        if not directory.is_dir():
            return []

        session_pattern = glob.escape(session_id) + "*.jsonl"
        found = {p for p in directory.glob(session_pattern) if p.is_file()}
        found.update(p for p in directory.glob(AGENT_FILE_PATTERN) if p.is_file())
        return sorted(found, key=lambda p: p.name)

    def migrate(
        self,
        session: Session,
        old_project_path: str,
        new_project_path: str,
    ) -> TranscriptCopyResult:
        """Copy a session's files to the new project directory.

        Args:
            session: Session being migrated
            old_project_path: Project path the files live under now
            new_project_path: Project path to copy them to

        Returns:
            Copy result listing copied and unreadable files

        Raises:
            SameProjectDirectoryError: If both paths encode to the same
                directory (nothing is written)
            ProjectDirectoryNotFoundError: If the old project directory is
                missing (nothing is written)
            NoTranscriptFilesError: If no files match (the new directory has
                already been created and is left in place)
            StorageIOError: If creating the new directory or writing a copy
                fails; files copied before the failure stay in place
        """
        source_dir = self.project_dir(old_project_path)
        target_dir = self.project_dir(new_project_path)

        if source_dir == target_dir:
            raise SameProjectDirectoryError(old_project_path, new_project_path, str(source_dir))
        if not source_dir.is_dir():
            raise ProjectDirectoryNotFoundError(str(source_dir))

        ensure_directory(target_dir)

        files = self.discover_files(session.id, old_project_path)
        if not files:
            raise NoTranscriptFilesError(session.id, str(source_dir))

        result = TranscriptCopyResult(source_dir=source_dir, target_dir=target_dir)
        for source in files:
            try:
                content = read_text(source)
            except StorageIOError as e:
                logger.warning(f"Skipping unreadable transcript {source}: {e.cause}")
                result.skipped.append(source.name)
                continue

            updated, changed = rewrite_cwd(content, new_project_path)
            write_text(target_dir / source.name, updated)

            result.copied.append(source.name)
            result.cwd_rewrites += changed
            logger.debug(f"Copied {source.name} ({changed} cwd fields rewritten)")

        logger.info(
            f"Copied {len(result.copied)} files for session {session.id} "
            f"from {source_dir} to {target_dir}"
        )
        return result
