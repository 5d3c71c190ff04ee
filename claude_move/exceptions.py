"""
Custom exceptions for session relocation.

Every failure raised by the history store, the transcript migrator and the
orchestrator derives from MoveError so callers can handle them uniformly.
Malformed log or transcript lines are never reported through these; they
are tolerated where they are read.
"""


class MoveError(Exception):
    """Base exception for all session relocation errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class HistoryNotFoundError(MoveError):
    """Raised when the metadata log does not exist."""

    def __init__(self, path: str):
        super().__init__(f"History file not found: {path}", {"path": path})
        self.path = path


class ProjectDirectoryNotFoundError(MoveError):
    """Raised when the encoded project directory for a path is missing."""

    def __init__(self, path: str):
        super().__init__(f"Project directory not found: {path}", {"path": path})
        self.path = path


class NoTranscriptFilesError(MoveError):
    """Raised when a session has no transcript or agent files on disk."""

    def __init__(self, session_id: str, directory: str):
        super().__init__(
            f"No session files found for {session_id} in {directory}",
            {"session_id": session_id, "directory": directory},
        )
        self.session_id = session_id
        self.directory = directory


class SameProjectDirectoryError(MoveError):
    """Raised when the old and new path share one encoded project directory.

    Copying would overwrite the source transcripts. Distinct paths can
    collide, e.g. ``/a.b`` and ``/a/b`` both encode to ``-a-b``.
    """

    def __init__(self, old_path: str, new_path: str, directory: str):
        super().__init__(
            f"{old_path} and {new_path} share the project directory {directory}",
            {"old_path": old_path, "new_path": new_path, "directory": directory},
        )
        self.old_path = old_path
        self.new_path = new_path
        self.directory = directory


class SessionNotFoundError(MoveError):
    """Raised when no session matches a requested id."""

    def __init__(self, session_id: str, project_path: str | None = None):
        details = {"session_id": session_id}
        if project_path:
            details["project_path"] = project_path
        super().__init__(f"Session not found: {session_id}", details)
        self.session_id = session_id
        self.project_path = project_path


class AmbiguousSessionError(MoveError):
    """Raised when a partial session id matches more than one session."""

    def __init__(self, partial_id: str, matches: list[str]):
        shown = ", ".join(m[:12] + "..." for m in matches[:3])
        if len(matches) > 3:
            shown += f" and {len(matches) - 3} more"
        super().__init__(
            f"Ambiguous session ID '{partial_id}' matches {len(matches)} sessions: {shown}",
            {"partial_id": partial_id, "matches": list(matches)},
        )
        self.partial_id = partial_id
        self.matches = list(matches)


class StorageIOError(MoveError):
    """Raised when reading or writing a file fails."""

    def __init__(self, operation: str, path: str | None = None, cause: Exception | None = None):
        details = {"operation": operation}
        if path:
            details["path"] = path
        if cause:
            details["cause"] = str(cause)
        message = f"Storage I/O error during {operation}"
        if path:
            message += f": {path}"
        if cause:
            message += f" ({cause})"
        super().__init__(message, details)
        self.operation = operation
        self.path = path
        self.cause = cause


class MigrationError(MoveError):
    """Raised when a session migration did not complete.

    ``partial`` is True when the metadata log was already rewritten but the
    transcript copy failed. Nothing is rolled back in that case.
    """

    def __init__(self, session_id: str, reason: str, partial: bool = False):
        details = {"session_id": session_id, "reason": reason, "partial": partial}
        super().__init__(f"Migration failed for session {session_id}: {reason}", details)
        self.session_id = session_id
        self.reason = reason
        self.partial = partial
