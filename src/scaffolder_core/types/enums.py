"""Shared enumerations for the scaffolder."""

from enum import Enum


class LogLevel(str, Enum):
    """Log verbosity level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


class LogFormat(str, Enum):
    """Log output format."""

    COLORED = "colored"
    JSON = "json"


class StepStatus(str, Enum):
    """Status reported in step log metadata."""

    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"
    SKIPPED = "skipped"


class RunResult(str, Enum):
    """Result label recorded on duration histograms."""

    OK = "ok"
    FAILED = "failed"
