"""Shared types for the scaffolder.

Import from here rather than submodules:
    from scaffolder_core.types import LogLevel, StepStatus, JsonValue
"""

from .enums import LogFormat, LogLevel, RunResult, StepStatus
from .execution import JsonObject, JsonValue, LogEmitter

__all__ = [
    # Enums
    "LogLevel",
    "LogFormat",
    "StepStatus",
    "RunResult",
    # Execution
    "JsonValue",
    "JsonObject",
    "LogEmitter",
]
