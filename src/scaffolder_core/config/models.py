"""Scaffolder configuration data models."""

import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from scaffolder_core.logging import LogConfig
from scaffolder_core.telemetry import TelemetryConfig


def _default_working_directory() -> str:
    return str(Path(tempfile.gettempdir()) / "scaffolder")


@dataclass
class RunnerConfig:
    """Workflow runner configuration.

    Attributes:
        working_directory: Directory under which task workspaces are created
        log: Step logger configuration
        telemetry: Metrics configuration
    """

    working_directory: str = field(default_factory=_default_working_directory)
    log: LogConfig = field(default_factory=LogConfig)
    telemetry: TelemetryConfig = field(default_factory=TelemetryConfig)
