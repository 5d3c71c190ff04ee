"""
Metadata log record type.

One line of ``~/.claude/history.jsonl``:

    {"display": "...", "pastedContents": {}, "timestamp": 1730000000000,
     "project": "/Users/me/app", "sessionId": "..."}

Fields this package does not know about are kept, in their original order,
so a rewritten line differs from the original only in ``project``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..local.file_ops import dump_json_line

DISPLAY_KEY = "display"
TIMESTAMP_KEY = "timestamp"
PROJECT_KEY = "project"
SESSION_ID_KEY = "sessionId"
PASTED_CONTENTS_KEY = "pastedContents"

KNOWN_KEYS = (DISPLAY_KEY, TIMESTAMP_KEY, PROJECT_KEY, SESSION_ID_KEY, PASTED_CONTENTS_KEY)


def _expect(data: dict[str, Any], key: str, types: type | tuple[type, ...]) -> Any:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, types):
        raise ValueError(f"Field {key!r} has unexpected type {type(value).__name__}")
    return value


@dataclass
class HistoryRecord:
    """A parsed metadata log line.

    ``session_id`` is None for records written before session ids existed;
    such records never join a session.
    """

    display: str = ""
    timestamp: int = 0
    project: str = ""
    session_id: str | None = None
    pasted_contents: Any = None

    # Unrecognized fields, in file order
    extra: dict[str, Any] = field(default_factory=dict)

    # Key order of the source line, used to re-serialize it faithfully
    key_order: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> HistoryRecord:
        """Build a record from a decoded JSON value.

        Raises:
            ValueError: If data is not an object or a recognized field has
                the wrong type
        """
        if not isinstance(data, dict):
            raise ValueError("History record must be a JSON object")

        return cls(
            display=_expect(data, DISPLAY_KEY, str) or "",
            timestamp=_expect(data, TIMESTAMP_KEY, int) or 0,
            project=_expect(data, PROJECT_KEY, str) or "",
            session_id=_expect(data, SESSION_ID_KEY, str) or None,
            pasted_contents=data.get(PASTED_CONTENTS_KEY),
            extra={k: v for k, v in data.items() if k not in KNOWN_KEYS},
            key_order=tuple(data.keys()),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dict with the source line's key order.

        A parsed record emits exactly the keys of its source line, plus
        ``project`` if the source lacked it. A record built in code emits its
        recognized fields that carry a value. A recognized field that was
        ``null`` in the source comes back as its default (``""`` or ``0``).
        """
        known = {
            DISPLAY_KEY: self.display,
            TIMESTAMP_KEY: self.timestamp,
            PROJECT_KEY: self.project,
            SESSION_ID_KEY: self.session_id,
            PASTED_CONTENTS_KEY: self.pasted_contents,
        }

        result: dict[str, Any] = {}
        if self.key_order:
            for key in self.key_order:
                if key in known:
                    result[key] = known[key]
                elif key in self.extra:
                    result[key] = self.extra[key]
            result.setdefault(PROJECT_KEY, self.project)
        else:
            result = {k: v for k, v in known.items() if v is not None}

        for key, value in self.extra.items():
            result.setdefault(key, value)

        return result

    def to_json(self) -> str:
        """Serialize as one compact JSONL line (no trailing newline)."""
        return dump_json_line(self.to_dict())

    def with_project(self, project: str) -> HistoryRecord:
        """Return a copy pointing at another project path."""
        return HistoryRecord(
            display=self.display,
            timestamp=self.timestamp,
            project=project,
            session_id=self.session_id,
            pasted_contents=self.pasted_contents,
            extra=dict(self.extra),
            key_order=self.key_order,
        )
