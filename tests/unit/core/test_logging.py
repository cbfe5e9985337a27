# tests/unit/core/test_logging.py
"""Tests for structured logging configuration."""

import json
import logging

import pytest


class TestConfigureLogging:
    def test_json_output_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        from flowschema.core.logging import configure_logging, get_logger

        configure_logging(json_output=True, level="INFO")
        get_logger("flowschema.test").info("schema_generated", vars_count=2)

        captured = capsys.readouterr()
        assert captured.out == ""
        record = json.loads(captured.err.strip().splitlines()[-1])
        assert record["event"] == "schema_generated"
        assert record["vars_count"] == 2
        assert record["level"] == "info"
        assert "_record" not in record
        assert "_from_structlog" not in record

    def test_level_filters(self, capsys: pytest.CaptureFixture[str]) -> None:
        from flowschema.core.logging import configure_logging, get_logger

        configure_logging(json_output=True, level="WARNING")
        get_logger("flowschema.test").info("hidden_event")

        assert "hidden_event" not in capsys.readouterr().err

    def test_stdlib_records_share_format(self, capsys: pytest.CaptureFixture[str]) -> None:
        from flowschema.core.logging import configure_logging

        configure_logging(json_output=True, level="INFO")
        logging.getLogger("some.library").warning("plain message")

        record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert record["event"] == "plain message"
        assert record["level"] == "warning"

    def test_noisy_loggers_raised_to_warning(self) -> None:
        from flowschema.core.logging import configure_logging

        configure_logging(level="DEBUG")

        assert logging.getLogger("dynaconf").level == logging.WARNING
        assert logging.getLogger("networkx").level == logging.WARNING

    def test_explicit_stream(self) -> None:
        import io

        from flowschema.core.logging import configure_logging, get_logger

        stream = io.StringIO()
        configure_logging(json_output=True, level="debug", stream=stream)
        get_logger("flowschema.test").debug("traversal_complete", visited_count=3)

        record = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert record["event"] == "traversal_complete"
        assert record["visited_count"] == 3

    def test_console_output_has_no_ansi_codes(self) -> None:
        import io

        from flowschema.core.logging import configure_logging, get_logger

        stream = io.StringIO()
        configure_logging(level="INFO", stream=stream)
        get_logger("flowschema.test").warning("generation_failed", code="BAD_INPUT")

        output = stream.getvalue()
        assert "generation_failed" in output
        assert "code=BAD_INPUT" in output
        assert "\x1b[" not in output

    def test_unknown_level_rejected(self) -> None:
        from flowschema.core.logging import configure_logging

        with pytest.raises(ValueError, match="Unknown log level 'LOUD'"):
            configure_logging(level="LOUD")

    def test_reconfigure_replaces_handler(self) -> None:
        from flowschema.core.logging import configure_logging

        configure_logging(level="INFO")
        configure_logging(level="INFO")

        assert len(logging.getLogger().handlers) == 1
