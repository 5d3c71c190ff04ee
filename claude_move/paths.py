"""Project path encoding.

Claude Code keeps the transcripts of a working directory under
``~/.claude/projects/<token>/`` where the token is a flattened form of the
absolute path. The mapping is one-way: it is only ever used to locate a
directory, never to recover a path from a directory name.
"""

from __future__ import annotations

import os
from pathlib import Path


def encode_project_path(path: str) -> str:
    """Encode an absolute directory path into its project directory token.

    Strips one leading separator, replaces every ``/`` and ``.`` with ``-``
    and prepends a ``-``::

        /Users/me/my.app  ->  -Users-me-my-app

    Paths that differ only by ``/`` versus ``.`` at the same position map to
    the same token.
    """
    encoded = path[1:] if path.startswith("/") else path
    encoded = encoded.replace("/", "-").replace(".", "-")
    return "-" + encoded


def normalize_path(path: str) -> str:
    """Expand a leading ``~`` and make the path absolute."""
    if path == "~" or path.startswith("~/"):
        path = str(Path.home()) + path[1:]
    return os.path.abspath(path)
