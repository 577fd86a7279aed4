"""Tests for structured logging."""
import io
import json
import logging

from core.services.metrics.logger import (
    LOGGER_NAMESPACE,
    StructuredFormatter,
    StructuredLogger,
    configure_logging,
)


class TestStructuredFormatter:

    def test_formats_extra_fields_as_json(self):
        record = logging.LogRecord("gherkin_testgen.parsing", logging.WARNING, __file__, 1,
                                   "row_rejected", None, None)
        record.row_number = 4
        record.reason = "Then result is required"

        data = json.loads(StructuredFormatter().format(record))

        assert data["event"] == "row_rejected"
        assert data["level"] == "WARNING"
        assert data["row_number"] == 4
        assert data["reason"] == "Then result is required"

    def test_unserializable_values_are_stringified(self):
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "event", None, None)
        record.payload = object()

        data = json.loads(StructuredFormatter().format(record))

        assert data["payload"].startswith("<object object")


class TestConfigureLogging:

    def test_json_output(self):
        stream = io.StringIO()
        configure_logging(level="DEBUG", json_format=True, stream=stream)

        StructuredLogger("parsing").log_parsing(
            total_rows=3, valid_rows=2, error_count=1, duration_ms=1.234, success=False
        )

        data = json.loads(stream.getvalue().strip())
        assert data["event"] == "parsing_completed"
        assert data["logger"] == f"{LOGGER_NAMESPACE}.parsing"
        assert data["valid_rows"] == 2
        assert data["duration_ms"] == 1.23

    def test_single_handler_and_level(self):
        stream = io.StringIO()
        configure_logging(level="WARNING", json_format=False, stream=stream)
        configure_logging(level="WARNING", json_format=False, stream=stream)

        logger = StructuredLogger("providers")
        logger.info("hidden")
        logger.error("provider_call_failed", provider="openai")

        assert len(logging.getLogger(LOGGER_NAMESPACE).handlers) == 1
        output = stream.getvalue()
        assert "hidden" not in output
        assert "provider_call_failed" in output
