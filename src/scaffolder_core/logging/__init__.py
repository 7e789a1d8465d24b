"""Scaffolder logging - Step-scoped loggers streaming into the task log."""

from .logger import (
    ColoredStepFormatter,
    LogConfig,
    StepLogger,
    TaskLogStream,
    create_step_logger,
)

__all__ = [
    "LogConfig",
    "StepLogger",
    "TaskLogStream",
    "ColoredStepFormatter",
    "create_step_logger",
]
