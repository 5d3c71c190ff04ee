"""Allow ``python -m claude_move``."""

from .cli import run

run()
