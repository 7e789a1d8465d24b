"""Scaffolder telemetry - OpenTelemetry-based observability."""

from .logging import (
    ScaffolderLogger,
    StructuredLogFormatter,
    get_logger,
    reset_loggers,
)
from .metrics import MetricLabels, ScaffolderMetrics
from .setup import (
    Telemetry,
    TelemetryConfig,
    get_telemetry,
    reset_telemetry,
    setup_telemetry,
)

__all__ = [
    # Metrics
    "ScaffolderMetrics",
    "MetricLabels",
    # Setup
    "Telemetry",
    "TelemetryConfig",
    "setup_telemetry",
    "get_telemetry",
    "reset_telemetry",
    # Logging
    "ScaffolderLogger",
    "StructuredLogFormatter",
    "get_logger",
    "reset_loggers",
]
