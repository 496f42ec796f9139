"""
Logging setup for datamod.

Provides:
- Structured logging with JSON format
- Scenario correlation ID carried in a context variable, so every log line
  emitted while a scenario runs can be grouped together

Usage:
    from datamod.core.observability import configure_logging, scenario_context

    configure_logging("DEBUG", structured=True)
    with scenario_context("login-with-disabled-user"):
        ...
"""

import json
import logging
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, datetime

# Correlation ID - links all logs for a single scenario
_scenario_id_ctx: ContextVar[str] = ContextVar("scenario_id", default="")

_RESERVED_RECORD_KEYS = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "getMessage",
        "message",
        "asctime",
        "exc_info",
        "exc_text",
        "stack_info",
    }
)


def get_scenario_id() -> str:
    """Get the current scenario ID from context."""
    return _scenario_id_ctx.get()


def set_scenario_id(scenario_id: str) -> None:
    """Set the scenario ID for the current context."""
    _scenario_id_ctx.set(scenario_id)


@contextmanager
def scenario_context(scenario_id: str | None = None) -> Iterator[str]:
    """Bind a scenario ID for the duration of the block.

    A random ID is generated when none is given.
    """
    token = _scenario_id_ctx.set(scenario_id or str(uuid.uuid4()))
    try:
        yield _scenario_id_ctx.get()
    finally:
        _scenario_id_ctx.reset(token)


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs logs as JSON with standard fields:
    - timestamp: ISO 8601 format
    - level: Log level
    - logger: Logger name
    - message: Log message
    - scenario_id: Scenario correlation ID (if set)
    - exception: Exception type and message (if any)
    - extra: Any additional context from logging.extra
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        scenario_id = get_scenario_id()
        if scenario_id:
            log_entry["scenario_id"] = scenario_id

        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
            }

        log_entry["function"] = record.funcName
        log_entry["line"] = record.lineno

        extra_keys = {
            k: v for k, v in record.__dict__.items() if k not in _RESERVED_RECORD_KEYS
        }
        if extra_keys:
            log_entry["extra"] = extra_keys

        return json.dumps(log_entry, default=str)


def configure_logging(level: str = "INFO", structured: bool = False) -> None:
    """
    Configure the ``datamod`` logger.

    Only the library's own logger is touched so the host test runner keeps
    control of the root logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        structured: Emit JSON lines instead of plain text
    """
    package_logger = logging.getLogger("datamod")
    package_logger.handlers.clear()
    package_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler()
    if structured:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
    package_logger.addHandler(handler)


def configure_logging_from_settings() -> None:
    """Apply DATAMOD_LOG_LEVEL / DATAMOD_STRUCTURED_LOGS."""
    from datamod.core.config import get_settings

    settings = get_settings()
    configure_logging(settings.log_level, structured=settings.structured_logs)
