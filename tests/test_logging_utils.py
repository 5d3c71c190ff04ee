"""Tests for logging configuration."""

import io
import json
import logging

from claude_move.logging_utils import (
    SessionLoggerAdapter,
    configure_logging,
    get_move_logger,
)


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_plain_format(self):
        """Plain records carry level and message."""
        stream = io.StringIO()
        configure_logging(logging.INFO, stream=stream)

        get_move_logger("cli").info("hello")

        assert stream.getvalue() == "INFO  hello\n"

    def test_level_filters(self):
        """Records below the configured level are dropped."""
        stream = io.StringIO()
        configure_logging(logging.WARNING, stream=stream)

        get_move_logger("cli").info("quiet")

        assert stream.getvalue() == ""

    def test_repeated_calls_do_not_stack_handlers(self):
        """Reconfiguring replaces the previous handler."""
        configure_logging(stream=io.StringIO())
        logger = configure_logging(stream=io.StringIO())
        assert len(logger.handlers) == 1

    def test_json_format_with_session_context(self):
        """JSON records include the session attached by the adapter."""
        stream = io.StringIO()
        configure_logging(logging.INFO, json_format=True, stream=stream)

        log = SessionLoggerAdapter(get_move_logger("migration"), {"session_id": "A"})
        log.info("moved")

        record = json.loads(stream.getvalue())
        assert record["message"] == "moved"
        assert record["level"] == "INFO"
        assert record["logger"] == "claude_move.migration"
        assert record["session_id"] == "A"

    def test_cli_logger_in_package_hierarchy(self):
        """The CLI logs through the configured package logger."""
        from claude_move import cli

        stream = io.StringIO()
        configure_logging(logging.DEBUG, stream=stream)

        cli.logger.debug("from cli")

        assert cli.logger.name == "claude_move.cli"
        assert stream.getvalue() == "DEBUG  from cli\n"
