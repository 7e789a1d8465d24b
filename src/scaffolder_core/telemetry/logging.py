"""Scaffolder component logging - JSON log lines with trace context.

Usage:
    from scaffolder_core.telemetry.logging import get_logger

    logger = get_logger("engine")
    logger.info("Starting task", template="service-template", steps=3)

Keyword arguments other than the standard logging ones become fields of the
JSON line.
"""

import json
import logging
import sys
from collections.abc import MutableMapping
from datetime import UTC, datetime
from typing import Any

from opentelemetry import trace

# Attributes every LogRecord carries; anything else on a record came from `extra`
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

# Keyword arguments understood by Logger.log itself
_LOGGING_KWARGS = frozenset({"exc_info", "stack_info", "stacklevel", "extra"})


def _trace_fields() -> dict[str, str]:
    span = trace.get_current_span()
    if not span.is_recording():
        return {}
    ctx = span.get_span_context()
    if not ctx.is_valid:
        return {}
    return {
        "trace_id": format(ctx.trace_id, "032x"),
        "span_id": format(ctx.span_id, "016x"),
    }


class StructuredLogFormatter(logging.Formatter):
    """Render a record as one JSON object.

    Fields: timestamp, level, component, message, trace_id/span_id while a span
    is recording, every extra attribute, and the formatted exception if any.
    """

    def format(self, record: logging.LogRecord) -> str:
        line: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "component": record.name,
            "message": record.getMessage(),
            **_trace_fields(),
        }
        line.update(
            (key, value) for key, value in vars(record).items() if key not in _RECORD_ATTRS
        )
        if record.exc_info:
            line["exception"] = self.formatException(record.exc_info)
        return json.dumps(line, default=str)


class ScaffolderLogger(logging.LoggerAdapter):
    """Adapter over a `scaffolder.<name>` logger taking fields as keyword arguments."""

    def __init__(self, name: str, level: int = logging.INFO):
        """Initialize logger.

        Args:
            name: Component name
            level: Logging level
        """
        logger = logging.getLogger(f"scaffolder.{name}")
        logger.setLevel(level)
        if not logger.handlers:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(StructuredLogFormatter())
            logger.addHandler(handler)
        super().__init__(logger, {})

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        fields = {key: kwargs.pop(key) for key in list(kwargs) if key not in _LOGGING_KWARGS}
        kwargs["extra"] = {**kwargs.get("extra", {}), **fields}
        return msg, kwargs


_loggers: dict[str, ScaffolderLogger] = {}


def get_logger(name: str, level: int = logging.INFO) -> ScaffolderLogger:
    """Return the cached logger for a component, creating it on first use."""
    if name not in _loggers:
        _loggers[name] = ScaffolderLogger(name, level)
    return _loggers[name]


def reset_loggers() -> None:
    """Forget cached loggers (for testing)."""
    _loggers.clear()
