"""
Structured logging for parsing and generation events.

Provides JSON-formatted logs with timestamps and structured fields. Library
modules only obtain loggers; handlers are attached by ``configure_logging``.
"""
import json
import logging
import sys
from datetime import datetime
from typing import Any, Optional

LOGGER_NAMESPACE = "gherkin_testgen"


class StructuredFormatter(logging.Formatter):
    """JSON structured log formatter."""

    EXCLUDED_ATTRS = {
        'name', 'msg', 'args', 'levelname', 'levelno',
        'pathname', 'filename', 'module', 'exc_info',
        'exc_text', 'stack_info', 'lineno', 'funcName',
        'created', 'msecs', 'relativeCreated', 'thread',
        'threadName', 'processName', 'process', 'message',
        'asctime', 'taskName'
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON formatted string
        """
        log_data = {
            "timestamp": datetime.now().isoformat(),
            "level": record.levelname,
            "event": record.getMessage(),
            "logger": record.name,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Extra fields
        for key, value in record.__dict__.items():
            if key not in self.EXCLUDED_ATTRS:
                try:
                    json.dumps(value)
                    log_data[key] = value
                except (TypeError, ValueError):
                    log_data[key] = str(value)

        return json.dumps(log_data)


def configure_logging(level: str = "INFO", json_format: bool = True, stream=None) -> logging.Logger:
    """Attach a single handler to the package logger namespace.

    Args:
        level: Logging level name
        json_format: Use StructuredFormatter when True, plain text otherwise
        stream: Output stream (defaults to stderr)

    Returns:
        The configured namespace logger
    """
    root = logging.getLogger(LOGGER_NAMESPACE)
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    root.handlers = []

    handler = logging.StreamHandler(stream or sys.stderr)
    if json_format:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root.addHandler(handler)
    root.propagate = False
    return root


class StructuredLogger:
    """Structured logger wrapper with convenience methods."""

    def __init__(self, name: str = "metrics"):
        """Initialize structured logger.

        Args:
            name: Logger name below the package namespace
        """
        self._logger = logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def info(self, event: str, **kwargs: Any) -> None:
        self._logger.info(event, extra=kwargs)

    def warning(self, event: str, **kwargs: Any) -> None:
        self._logger.warning(event, extra=kwargs)

    def error(self, event: str, **kwargs: Any) -> None:
        self._logger.error(event, extra=kwargs)

    def debug(self, event: str, **kwargs: Any) -> None:
        self._logger.debug(event, extra=kwargs)

    def log_generation(
        self,
        provider: str,
        model: str,
        duration_ms: float,
        num_test_cases: int,
        num_stories: int,
        success: bool = True,
        error: Optional[str] = None
    ) -> None:
        """Log a test case generation request.

        Args:
            provider: Provider name
            model: Model name
            duration_ms: Request duration in milliseconds
            num_test_cases: Number of test cases returned
            num_stories: Number of stories in the request
            success: Whether the request succeeded
            error: First error message if failed
        """
        level = logging.INFO if success else logging.ERROR
        self._logger.log(
            level,
            "llm_generation",
            extra={
                "provider": provider,
                "model": model,
                "duration_ms": round(duration_ms, 2),
                "num_test_cases": num_test_cases,
                "num_stories": num_stories,
                "success": success,
                "error": error
            }
        )

    def log_parsing(
        self,
        total_rows: int,
        valid_rows: int,
        error_count: int,
        duration_ms: float,
        success: bool
    ) -> None:
        """Log a sheet parsing operation.

        Args:
            total_rows: Data rows in the sheet
            valid_rows: Rows that produced a story
            error_count: Rows rejected plus fatal errors
            duration_ms: Duration in milliseconds
            success: Whether the sheet parsed without errors
        """
        self._logger.info(
            "parsing_completed",
            extra={
                "total_rows": total_rows,
                "valid_rows": valid_rows,
                "error_count": error_count,
                "duration_ms": round(duration_ms, 2),
                "success": success
            }
        )
