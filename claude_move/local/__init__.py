"""
Local file operations for the Claude Code store.

Raw-text helpers shared by the history store and the transcript migrator:
line-preserving reads and writes, verbatim backups, and tolerant JSONL
line parsing.
"""

from .file_ops import (
    JsonNumber,
    JsonPairs,
    dump_json_line,
    dump_json_pairs,
    ensure_directory,
    iter_lines,
    join_lines,
    parse_json_object,
    parse_json_pairs,
    read_text,
    split_lines,
    write_backup,
    write_text,
)

__all__ = [
    "read_text",
    "write_text",
    "write_backup",
    "iter_lines",
    "split_lines",
    "join_lines",
    "parse_json_object",
    "dump_json_line",
    "parse_json_pairs",
    "dump_json_pairs",
    "JsonNumber",
    "JsonPairs",
    "ensure_directory",
]
