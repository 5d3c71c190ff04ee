"""
Configuration for session relocation.

Resolves where Claude Code keeps its metadata log and transcript
directories. Paths are resolved once here and handed to the components that
need them, so tests can point everything at a temporary directory.

Optional settings in ~/.claude-move/settings.yaml:

```yaml
claude_move:
  claude_dir: "~/.claude"
  history_file: "~/.claude/history.jsonl"   # Optional, derived from claude_dir
  projects_dir: "~/.claude/projects"        # Optional, derived from claude_dir
  resume_command: "claude"
```

Environment variables override the settings file:
- CLAUDE_CONFIG_DIR
- CLAUDE_MOVE_HISTORY_FILE
- CLAUDE_MOVE_PROJECTS_DIR
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = Path.home() / ".claude-move" / "settings.yaml"
SETTINGS_SECTION = "claude_move"


@dataclass
class MoveConfig:
    """Filesystem locations used by the history store and transcript migrator."""

    claude_dir: Path
    history_file: Path | None = None
    projects_dir: Path | None = None
    resume_command: str = "claude"

    def __post_init__(self) -> None:
        self.claude_dir = Path(self.claude_dir).expanduser()
        if self.history_file is None:
            self.history_file = self.claude_dir / "history.jsonl"
        if self.projects_dir is None:
            self.projects_dir = self.claude_dir / "projects"
        self.history_file = Path(self.history_file).expanduser()
        self.projects_dir = Path(self.projects_dir).expanduser()

    @property
    def backup_file(self) -> Path:
        """Sibling path holding the verbatim copy taken before each rewrite."""
        return self.history_file.with_name(self.history_file.name + ".backup")

    @classmethod
    def default(cls) -> MoveConfig:
        return cls(claude_dir=Path.home() / ".claude")

    @classmethod
    def from_env(cls) -> MoveConfig:
        """Create config from environment variables."""
        return _apply_env(cls.default(), os.environ)

    @classmethod
    def from_settings(cls, settings: dict[str, Any]) -> MoveConfig:
        """Create config from the ``claude_move`` settings section."""
        claude_dir = settings.get("claude_dir") or Path.home() / ".claude"
        return cls(
            claude_dir=Path(claude_dir),
            history_file=_optional_path(settings.get("history_file")),
            projects_dir=_optional_path(settings.get("projects_dir")),
            resume_command=settings.get("resume_command") or "claude",
        )


def load_config(
    settings_path: Path | None = None,
    environ: dict[str, str] | None = None,
) -> MoveConfig:
    """Load config from the YAML settings file, then apply env overrides.

    A missing or unreadable settings file is not an error; defaults are used.
    """
    settings = _load_settings(settings_path or DEFAULT_SETTINGS_PATH)
    config = MoveConfig.from_settings(settings)
    return _apply_env(config, os.environ if environ is None else environ)


def _load_settings(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}

    try:
        content = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Ignoring unreadable settings file {path}: {e}")
        return {}

    if not isinstance(content, dict):
        logger.warning(f"Ignoring settings file {path}: expected a mapping")
        return {}

    section = content.get(SETTINGS_SECTION, {})
    return section if isinstance(section, dict) else {}


def _apply_env(config: MoveConfig, environ: Any) -> MoveConfig:
    claude_dir = environ.get("CLAUDE_CONFIG_DIR")
    history_file = environ.get("CLAUDE_MOVE_HISTORY_FILE")
    projects_dir = environ.get("CLAUDE_MOVE_PROJECTS_DIR")

    if not (claude_dir or history_file or projects_dir):
        return config

    if claude_dir:
        # A new claude_dir re-derives any path that was not set explicitly
        return MoveConfig(
            claude_dir=Path(claude_dir),
            history_file=_optional_path(history_file),
            projects_dir=_optional_path(projects_dir),
            resume_command=config.resume_command,
        )

    return MoveConfig(
        claude_dir=config.claude_dir,
        history_file=_optional_path(history_file) or config.history_file,
        projects_dir=_optional_path(projects_dir) or config.projects_dir,
        resume_command=config.resume_command,
    )


def _optional_path(value: Any) -> Path | None:
    return Path(value) if value else None
