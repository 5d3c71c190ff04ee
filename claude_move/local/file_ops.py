"""
Text and JSONL file operations for the local Claude Code store.

Metadata and transcript files are rewritten line by line, so the helpers
here work on raw text rather than parsed objects:
- Reads keep undecodable bytes (surrogateescape) so they are written back unchanged
- JSONL lines are split and joined on "\\n" only, preserving the trailing newline
- Backups are full verbatim copies written before a destructive write
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from ..exceptions import StorageIOError

ENCODING = "utf-8"
ERRORS = "surrogateescape"


def ensure_directory(path: Path) -> None:
    """Ensure directory exists, creating parents if necessary.

    Args:
        path: Directory path to ensure exists
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StorageIOError("create_directory", str(path), e) from e


def read_text(path: Path) -> str:
    """Read a whole file as text.

    Args:
        path: File to read

    Returns:
        File content
    """
    try:
        with open(path, encoding=ENCODING, errors=ERRORS, newline="") as f:
            return f.read()
    except OSError as e:
        raise StorageIOError("read", str(path), e) from e


def write_text(path: Path, content: str) -> None:
    """Write text to a file, replacing any existing content.

    Args:
        path: Target file
        content: Content to write
    """
    try:
        with open(path, "w", encoding=ENCODING, errors=ERRORS, newline="") as f:
            f.write(content)
    except OSError as e:
        raise StorageIOError("write", str(path), e) from e


def write_backup(content: str, backup_path: Path) -> Path:
    """Write a verbatim backup of content about to be replaced.

    The backup is overwritten on every call; it is not versioned.

    Args:
        content: Pre-write content of the live file
        backup_path: Where the backup goes

    Returns:
        Path to backup file
    """
    try:
        with open(backup_path, "w", encoding=ENCODING, errors=ERRORS, newline="") as f:
            f.write(content)
        return backup_path
    except OSError as e:
        raise StorageIOError("backup", str(backup_path), e) from e


def split_lines(content: str) -> list[str]:
    """Split JSONL content into lines; ``join_lines`` is the exact inverse."""
    return content.split("\n")


def join_lines(lines: list[str]) -> str:
    return "\n".join(lines)


def iter_lines(path: Path) -> Iterator[str]:
    """Iterate over the lines of a text file without loading it whole.

    Args:
        path: File to read

    Yields:
        Lines with their line terminator removed
    """
    try:
        with open(path, encoding=ENCODING, errors=ERRORS) as f:
            for line in f:
                yield line.rstrip("\r\n")
    except OSError as e:
        raise StorageIOError("read", str(path), e) from e


def parse_json_object(line: str) -> dict[str, Any] | None:
    """Parse a JSONL line into a dict.

    Returns None for blank lines, invalid JSON and JSON that is not an
    object. Callers treat None as "pass the line through untouched".
    """
    if not line.strip():
        return None
    try:
        obj = json.loads(line)
    except ValueError:
        return None
    return obj if isinstance(obj, dict) else None


def dump_json_line(obj: dict[str, Any]) -> str:
    """Serialize one JSONL record compactly, keeping key order and non-ASCII text."""
    return json.dumps(obj, ensure_ascii=False, separators=(",", ":"))


class JsonNumber(str):
    """A number (or NaN/Infinity) literal kept as its source text."""


class JsonPairs(list):
    """A JSON object as its (key, value) pairs, duplicates and order included."""


def parse_json_pairs(line: str) -> JsonPairs | None:
    """Parse a JSONL line so that ``dump_json_pairs`` can re-emit it exactly.

    Numbers are not converted to int or float and repeated keys are kept,
    so re-serializing changes nothing but whitespace and string escapes.
    Returns None where ``parse_json_object`` would.
    """
    if not line.strip():
        return None
    try:
        obj = json.loads(
            line,
            object_pairs_hook=JsonPairs,
            parse_int=JsonNumber,
            parse_float=JsonNumber,
            parse_constant=JsonNumber,
        )
    except ValueError:
        return None
    return obj if isinstance(obj, JsonPairs) else None


def dump_json_pairs(value: Any) -> str:
    """Serialize a value from ``parse_json_pairs`` compactly."""
    if isinstance(value, JsonNumber):
        return str(value)
    if isinstance(value, JsonPairs):
        members = (f"{dump_json_pairs(k)}:{dump_json_pairs(v)}" for k, v in value)
        return "{" + ",".join(members) + "}"
    if isinstance(value, list):
        return "[" + ",".join(dump_json_pairs(v) for v in value) + "]"
    return json.dumps(value, ensure_ascii=False)
