"""
Tests for the metadata log store.

Covers the tolerant read policy, the record round trip of unknown fields,
and the backup-then-rewrite contract of rewrite_project_path.
"""

import json

import pytest

from claude_move.exceptions import HistoryNotFoundError, StorageIOError
from claude_move.history import HistoryRecord, HistoryStore, parse_history_line


class TestHistoryRecord:
    """Tests for HistoryRecord parsing and serialization."""

    def test_from_dict_recognized_fields(self):
        """Recognized fields are mapped onto attributes."""
        record = HistoryRecord.from_dict(
            {
                "display": "hi",
                "pastedContents": {"1": "x"},
                "timestamp": 100,
                "project": "/p1",
                "sessionId": "A",
            }
        )
        assert record.display == "hi"
        assert record.timestamp == 100
        assert record.project == "/p1"
        assert record.session_id == "A"
        assert record.pasted_contents == {"1": "x"}
        assert record.extra == {}

    def test_missing_fields_default(self):
        """Absent fields fall back to empty values."""
        record = HistoryRecord.from_dict({"project": "/p1"})
        assert record.display == ""
        assert record.timestamp == 0
        assert record.session_id is None

    def test_empty_session_id_is_absent(self):
        """An empty sessionId counts as no session."""
        assert HistoryRecord.from_dict({"sessionId": ""}).session_id is None

    @pytest.mark.parametrize(
        "data",
        [
            ["not", "an", "object"],
            {"timestamp": "100"},
            {"timestamp": 1.5},
            {"timestamp": True},
            {"project": 42},
            {"display": ["x"]},
            {"sessionId": 7},
        ],
    )
    def test_wrong_shapes_rejected(self, data):
        """Non-objects and mistyped recognized fields raise ValueError."""
        with pytest.raises(ValueError):
            HistoryRecord.from_dict(data)

    def test_unknown_fields_round_trip_in_order(self):
        """Unknown fields survive serialization at their original position."""
        line = '{"display":"hi","zeta":1,"timestamp":5,"project":"/p","alpha":{"k":[1,2]},"sessionId":"A"}'
        record = parse_history_line(line)
        assert record.extra == {"zeta": 1, "alpha": {"k": [1, 2]}}
        assert record.to_json() == line

    def test_with_project_changes_only_project(self):
        """with_project returns a copy differing only in project."""
        line = '{"display":"hé","pastedContents":{},"timestamp":5,"project":"/p1","sessionId":"A","x":true}'
        record = parse_history_line(line)
        moved = record.with_project("/p2")
        assert record.project == "/p1"
        assert moved.to_json() == line.replace('"/p1"', '"/p2"')

    def test_built_record_serializes_known_fields(self):
        """A record built in code emits its set fields."""
        record = HistoryRecord(display="d", timestamp=1, project="/p", session_id="S")
        assert json.loads(record.to_json()) == {
            "display": "d",
            "timestamp": 1,
            "project": "/p",
            "sessionId": "S",
        }


class TestParseHistoryLine:
    """Tests for parse_history_line."""

    @pytest.mark.parametrize("line", ["", "   ", "not json", "[1, 2]", '"text"', "{broken"])
    def test_unparseable_lines(self, line):
        """Blank, invalid and non-object lines yield None."""
        assert parse_history_line(line) is None

    def test_valid_line(self, history_line):
        """A well-formed line yields a record."""
        record = parse_history_line(history_line("A", "/p1", 100, "hi"))
        assert record is not None
        assert record.session_id == "A"


class TestLoadAll:
    """Tests for HistoryStore.load_all."""

    def test_missing_log_raises(self, config):
        """A missing history file is a not-found condition."""
        store = HistoryStore(config.history_file)
        with pytest.raises(HistoryNotFoundError):
            store.load_all()

    def test_loads_records_in_order(self, config, write_history, history_line):
        """Records come back in file order."""
        write_history(
            history_line("A", "/p1", 100, "hi"),
            history_line("B", "/p2", 50, "other"),
            history_line(None, "/p1", 10, "no session"),
        )
        records = HistoryStore(config.history_file).load_all()
        assert [r.display for r in records] == ["hi", "other", "no session"]

    def test_malformed_lines_skipped(self, config, write_history, history_line):
        """Malformed and blank lines are skipped silently."""
        write_history(
            history_line("A", "/p1", 100, "hi"),
            "{not json",
            "",
            '{"timestamp": "yesterday", "project": "/p1"}',
            history_line("A", "/p1", 200, "bye"),
        )
        records = HistoryStore(config.history_file).load_all()
        assert [r.timestamp for r in records] == [100, 200]

    def test_load_session(self, config, write_history, history_line):
        """load_session filters by session id."""
        write_history(
            history_line("A", "/p1", 100),
            history_line("B", "/p1", 150),
            history_line("A", "/p1", 200),
        )
        store = HistoryStore(config.history_file)
        assert [r.timestamp for r in store.load_session("A")] == [100, 200]
        assert store.count_records("B") == 1
        assert store.count_records("missing") == 0


class TestRewriteProjectPath:
    """Tests for HistoryStore.rewrite_project_path."""

    def test_rewrites_matching_session(self, config, write_history, history_line):
        """All records of the session point at the new path afterwards."""
        write_history(
            history_line("A", "/p1", 100, "hi"),
            history_line("A", "/p1", 200, "bye"),
        )
        store = HistoryStore(config.history_file)

        assert store.rewrite_project_path("A", "/p2") == 2

        records = store.load_all()
        assert [r.project for r in records] == ["/p2", "/p2"]
        assert [r.session_id for r in records] == ["A", "A"]

    def test_other_lines_byte_identical(self, config, write_history, history_line):
        """Non-matching and malformed lines are written back unchanged."""
        other = '{"display": "spaced out",  "timestamp": 1, "project": "/p1", "sessionId": "B"}'
        legacy = history_line(None, "/p1", 2, "legacy")
        garbage = "{this is not json"
        write_history(other, history_line("A", "/p1", 3, "mine"), garbage, legacy)

        HistoryStore(config.history_file).rewrite_project_path("A", "/p2")

        lines = config.history_file.read_text(encoding="utf-8").split("\n")
        assert lines[0] == other
        assert json.loads(lines[1])["project"] == "/p2"
        assert lines[2] == garbage
        assert lines[3] == legacy
        assert lines[4] == ""

    def test_unknown_fields_preserved(self, config, write_history, history_line):
        """Unknown fields of rewritten records survive."""
        write_history(history_line("A", "/p1", 3, "mine", model="opus", tags=["x"]))

        HistoryStore(config.history_file).rewrite_project_path("A", "/p2")

        record = json.loads(config.history_file.read_text(encoding="utf-8").strip())
        assert record["model"] == "opus"
        assert record["tags"] == ["x"]
        assert record["project"] == "/p2"

    def test_backup_holds_pre_rewrite_content(self, config, write_history, history_line):
        """The backup is a verbatim copy of the log before the rewrite."""
        write_history(history_line("A", "/p1", 100, "hi"), "garbage line")
        before = config.history_file.read_bytes()
        store = HistoryStore(config.history_file)

        store.rewrite_project_path("A", "/p2")

        assert store.backup_path == config.backup_file
        assert config.backup_file.read_bytes() == before
        assert config.history_file.read_bytes() != before

    def test_backup_overwritten_each_run(self, config, write_history, history_line):
        """A second rewrite replaces the backup with the then-current log."""
        write_history(history_line("A", "/p1", 100))
        store = HistoryStore(config.history_file)

        store.rewrite_project_path("A", "/p2")
        after_first = config.history_file.read_bytes()
        store.rewrite_project_path("A", "/p3")

        assert config.backup_file.read_bytes() == after_first

    def test_rerun_is_stable(self, config, write_history, history_line):
        """Rewriting to the same path again leaves the log unchanged."""
        write_history(history_line("A", "/p1", 100), history_line("B", "/p1", 5))
        store = HistoryStore(config.history_file)

        store.rewrite_project_path("A", "/p2")
        once = config.history_file.read_bytes()
        store.rewrite_project_path("A", "/p2")

        assert config.history_file.read_bytes() == once

    def test_no_trailing_newline_kept(self, config, history_line):
        """A log without a final newline is written back without one."""
        config.history_file.write_text(history_line("A", "/p1", 1), encoding="utf-8")

        HistoryStore(config.history_file).rewrite_project_path("A", "/p2")

        assert not config.history_file.read_text(encoding="utf-8").endswith("\n")

    def test_unknown_session_rewrites_nothing(self, config, write_history, history_line):
        """A session id with no records leaves the content as it was."""
        write_history(history_line("A", "/p1", 1))
        before = config.history_file.read_bytes()

        assert HistoryStore(config.history_file).rewrite_project_path("Z", "/p2") == 0
        assert config.history_file.read_bytes() == before

    def test_missing_log_raises(self, config):
        """Rewriting a missing log fails without creating a backup."""
        store = HistoryStore(config.history_file)
        with pytest.raises(HistoryNotFoundError):
            store.rewrite_project_path("A", "/p2")
        assert not config.backup_file.exists()

    def test_backup_failure_leaves_log_untouched(self, config, write_history, history_line):
        """If the backup cannot be written, the log is not rewritten."""
        write_history(history_line("A", "/p1", 1))
        before = config.history_file.read_bytes()
        store = HistoryStore(
            config.history_file, backup_file=config.claude_dir / "missing" / "h.backup"
        )

        with pytest.raises(StorageIOError) as exc_info:
            store.rewrite_project_path("A", "/p2")

        assert exc_info.value.operation == "backup"
        assert config.history_file.read_bytes() == before
