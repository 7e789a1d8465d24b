"""Process-wide telemetry: an OpenTelemetry MeterProvider exposing Prometheus metrics."""

from dataclasses import dataclass, field

from opentelemetry.exporter.prometheus import PrometheusMetricReader
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource

from .metrics import ScaffolderMetrics


@dataclass
class TelemetryConfig:
    """Telemetry configuration.

    Attributes:
        enabled: Whether metrics are recorded at all
        service_name: Service name resource attribute
        service_version: Service version resource attribute
        metrics_enabled: Whether the Prometheus reader is installed
        attributes: Additional resource attributes
    """

    enabled: bool = True
    service_name: str = "scaffolder"
    service_version: str = "1.0.0"
    metrics_enabled: bool = True
    attributes: dict[str, str] = field(default_factory=dict)


@dataclass
class Telemetry:
    """Telemetry handles owned by the process.

    ``metrics`` is what gets injected into the workflow runner; it is None when
    telemetry is disabled.
    """

    config: TelemetryConfig
    meter_provider: MeterProvider | None = None
    metrics: ScaffolderMetrics | None = None

    @property
    def enabled(self) -> bool:
        return self.metrics is not None

    def shutdown(self) -> None:
        """Flush and stop the meter provider."""
        if self.meter_provider is not None:
            self.meter_provider.shutdown()


_telemetry: Telemetry | None = None


def setup_telemetry(config: TelemetryConfig | None = None) -> Telemetry:
    """Configure telemetry once per process.

    Later calls return the first result regardless of their config.

    Args:
        config: Telemetry configuration (defaults if None)

    Returns:
        Telemetry with the meter provider and ScaffolderMetrics
    """
    global _telemetry

    if _telemetry is not None:
        return _telemetry

    config = config or TelemetryConfig()
    if not config.enabled:
        _telemetry = Telemetry(config=config)
        return _telemetry

    resource = Resource.create(
        {
            SERVICE_NAME: config.service_name,
            SERVICE_VERSION: config.service_version,
            **config.attributes,
        }
    )
    readers = [PrometheusMetricReader()] if config.metrics_enabled else []
    provider = MeterProvider(metric_readers=readers, resource=resource)
    meter = provider.get_meter(config.service_name, config.service_version)

    _telemetry = Telemetry(
        config=config,
        meter_provider=provider,
        metrics=ScaffolderMetrics(meter),
    )
    return _telemetry


def get_telemetry() -> Telemetry | None:
    """Current telemetry, or None before setup_telemetry()."""
    return _telemetry


def reset_telemetry() -> None:
    """Shut down and forget telemetry (for testing)."""
    global _telemetry
    if _telemetry is not None:
        _telemetry.shutdown()
    _telemetry = None
