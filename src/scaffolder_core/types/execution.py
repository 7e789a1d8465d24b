"""Shared execution types for the scaffolder."""

from typing import Any, Protocol

# Structured values flowing through templates, inputs and outputs.
JsonValue = None | bool | int | float | str | list[Any] | dict[str, Any]
JsonObject = dict[str, Any]


class LogEmitter(Protocol):
    """Anything that accepts task log lines.

    Used by:
    - ScaffoldingTracker (lifecycle lines)
    - TaskLogStream (lines written by step loggers)
    """

    async def emit_log(self, message: str, metadata: JsonObject | None = None) -> None:
        """Emit a log line with optional structured metadata."""
        ...
