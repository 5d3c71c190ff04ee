"""Tests for project path encoding and normalization."""

from pathlib import Path

import pytest

from claude_move.paths import encode_project_path, normalize_path


class TestEncodeProjectPath:
    """Tests for encode_project_path."""

    def test_simple_path(self):
        """Separators become dashes and a dash is prepended."""
        assert encode_project_path("/Users/me/project") == "-Users-me-project"

    def test_dots_replaced(self):
        """Dots are replaced like separators."""
        assert encode_project_path("/home/me/my.app/.config") == "-home-me-my-app--config"

    def test_root(self):
        """The root directory encodes to a single dash."""
        assert encode_project_path("/") == "-"

    def test_only_one_leading_separator_stripped(self):
        """A doubled leading separator keeps one dash of its own."""
        assert encode_project_path("//srv") == "--srv"

    def test_existing_dashes_kept(self):
        """Dashes in directory names pass through unchanged."""
        assert encode_project_path("/a/gpu-photo-pipeline") == "-a-gpu-photo-pipeline"

    def test_not_injective(self):
        """Dot and separator at the same position collide."""
        assert encode_project_path("/a/b.c") == encode_project_path("/a/b/c")

    @pytest.mark.parametrize(
        "path",
        ["/Users/me/project", "/a.b/c.d/e", "/x/y/", "/tmp/.hidden/dir.v2"],
    )
    def test_token_shape(self, path):
        """Tokens start with a dash and contain no separators or dots."""
        encoded = encode_project_path(path)
        assert encoded.startswith("-")
        assert "/" not in encoded
        assert "." not in encoded
        assert encode_project_path(path) == encoded


class TestNormalizePath:
    """Tests for normalize_path."""

    def test_expands_home(self):
        """A leading ~/ expands to the home directory."""
        assert normalize_path("~/work") == str(Path.home() / "work")

    def test_relative_made_absolute(self, tmp_path, monkeypatch):
        """Relative paths resolve against the current directory."""
        monkeypatch.chdir(tmp_path)
        assert normalize_path("sub") == str(tmp_path / "sub")

    def test_trailing_separator_removed(self):
        """Trailing separators are dropped."""
        assert normalize_path("/a/b/") == "/a/b"
