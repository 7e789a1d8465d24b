"""Step-scoped loggers that stream their lines back into the task log."""

import asyncio
import concurrent.futures
import io
import logging
import os
import threading
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from scaffolder_core.telemetry.logging import StructuredLogFormatter
from scaffolder_core.types import JsonObject, LogEmitter, LogFormat, LogLevel

# ANSI colors (256-color palette)
RESET = "\033[0m"
GREEN = "\033[38;5;82m"
RED = "\033[38;5;196m"
YELLOW = "\033[38;5;226m"
LIGHT_BLUE = "\033[38;5;153m"

LEVEL_COLORS = {
    logging.DEBUG: LIGHT_BLUE,
    logging.INFO: GREEN,
    logging.WARNING: YELLOW,
    logging.ERROR: RED,
    logging.CRITICAL: RED,
}

_PY_LEVELS = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


@dataclass
class LogConfig:
    """Step logger configuration."""

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.COLORED

    def resolve_level(self) -> int:
        """Python logging level, honouring the LOG_LEVEL environment variable."""
        override = os.environ.get("LOG_LEVEL")
        if override:
            name = override.strip().upper()
            if name == "WARNING":
                name = "WARN"
            try:
                return _PY_LEVELS[LogLevel(name)]
            except ValueError:
                pass
        return _PY_LEVELS[self.level]


class ColoredStepFormatter(logging.Formatter):
    """Format records as `<timestamp> <level>: <message>` with a colored level."""

    def format(self, record: logging.LogRecord) -> str:
        color = LEVEL_COLORS.get(record.levelno, RESET)
        timestamp = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        line = f"{timestamp} {color}{record.levelname.lower()}{RESET}: {record.getMessage()}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class TaskLogStream(io.TextIOBase):
    """Writable text stream that forwards complete lines to the task log.

    Each line longer than one character is emitted with the step's metadata.
    Writes may come from the event loop thread or from worker threads; call
    ``drain()`` to wait until every pending line has been emitted.
    """

    def __init__(self, emitter: LogEmitter, metadata: JsonObject):
        super().__init__()
        self._emitter = emitter
        self._metadata = metadata
        self._buffer = ""
        self._lock = threading.Lock()
        self._loop = asyncio.get_running_loop()
        self._loop_thread = threading.get_ident()
        self._pending: list[asyncio.Future[Any] | concurrent.futures.Future[Any]] = []

    @property
    def metadata(self) -> JsonObject:
        return dict(self._metadata)

    def writable(self) -> bool:
        return True

    def write(self, text: str) -> int:
        with self._lock:
            self._buffer += text
            *lines, self._buffer = self._buffer.split("\n")
        for line in lines:
            self._emit(line)
        return len(text)

    def _emit(self, line: str) -> None:
        message = line.strip()
        if len(message) <= 1:
            return
        coro = self._emitter.emit_log(message, dict(self._metadata))
        if threading.get_ident() == self._loop_thread:
            self._pending.append(self._loop.create_task(coro))
        else:
            self._pending.append(asyncio.run_coroutine_threadsafe(coro, self._loop))

    async def drain(self) -> None:
        """Emit any trailing partial line and wait for all pending emits."""
        with self._lock:
            remainder, self._buffer = self._buffer, ""
        if remainder:
            self._emit(remainder)
        pending, self._pending = self._pending, []
        if pending:
            await asyncio.gather(
                *(
                    future if isinstance(future, asyncio.Future) else asyncio.wrap_future(future)
                    for future in pending
                )
            )


@dataclass
class StepLogger:
    """Logger handed to a step's action together with the stream behind it."""

    logger: logging.Logger
    stream: TaskLogStream

    async def close(self) -> None:
        """Flush the logger and wait for every line to reach the task log."""
        for handler in self.logger.handlers:
            handler.flush()
        await self.stream.drain()
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()


def create_step_logger(
    task: LogEmitter,
    step_id: str,
    config: LogConfig | None = None,
) -> StepLogger:
    """Create a logger whose output is streamed into the task log.

    The logger is private to one step run and not registered with the global
    logging manager, so concurrent tasks never share handlers.

    Args:
        task: Task receiving the log lines
        step_id: Step identifier attached to every line
        config: Logger configuration

    Returns:
        StepLogger with the logger and its stream
    """
    config = config or LogConfig()
    stream = TaskLogStream(task, {"stepId": step_id})

    handler = logging.StreamHandler(stream)
    if config.format == LogFormat.JSON:
        handler.setFormatter(StructuredLogFormatter())
    else:
        handler.setFormatter(ColoredStepFormatter())

    logger = logging.Logger(f"scaffolder.step.{step_id}", level=config.resolve_level())
    logger.propagate = False
    logger.addHandler(handler)

    return StepLogger(logger=logger, stream=stream)
