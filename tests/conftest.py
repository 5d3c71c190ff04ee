"""
Shared test configuration and fixtures.

Builds a throwaway Claude Code home directory per test:

    <tmp>/claude/history.jsonl
    <tmp>/claude/projects/<encoded project>/<session files>
"""

import json
from pathlib import Path

import pytest

from claude_move.config import MoveConfig
from claude_move.paths import encode_project_path


def _history_line(
    session_id: str | None,
    project: str,
    timestamp: int,
    display: str = "",
    **extra,
) -> str:
    """Serialize a history record the way Claude Code writes it."""
    record = {"display": display, "pastedContents": {}, "timestamp": timestamp, "project": project}
    if session_id is not None:
        record["sessionId"] = session_id
    record.update(extra)
    return json.dumps(record, separators=(",", ":"))


@pytest.fixture
def history_line():
    """Factory for serialized history records."""
    return _history_line


@pytest.fixture
def config(tmp_path: Path) -> MoveConfig:
    """MoveConfig rooted in a temporary claude directory."""
    claude_dir = tmp_path / "claude"
    (claude_dir / "projects").mkdir(parents=True)
    return MoveConfig(claude_dir=claude_dir)


@pytest.fixture
def write_history(config: MoveConfig):
    """Write raw lines to the history file, newline-terminated."""

    def _write(*lines: str) -> Path:
        config.history_file.write_text("".join(line + "\n" for line in lines), encoding="utf-8")
        return config.history_file

    return _write


@pytest.fixture
def project_dir(config: MoveConfig):
    """Create (if needed) and return the encoded project directory of a path."""

    def _project_dir(project_path: str) -> Path:
        directory = config.projects_dir / encode_project_path(project_path)
        directory.mkdir(parents=True, exist_ok=True)
        return directory

    return _project_dir
