"""Scaffolder metrics schema - OpenTelemetry conventions.

Defines the metrics recorded while running scaffolder tasks.

Metrics:
- Counters: task/step successes and errors
- Histograms: task/step durations

Labels/Attributes:
- template: Name of the template entity the task was created from
- invoker: Name of the user entity that started the task
- name: Step display name
- result: Run result (ok, failed)

All metrics use the 'scaffolder_' prefix.
"""

from opentelemetry import metrics
from opentelemetry.metrics import Counter, Histogram

from scaffolder_core.types import RunResult

# Metric prefix for all scaffolder metrics
METRIC_PREFIX = "scaffolder"


class MetricLabels:
    """Standard metric labels/attributes."""

    TEMPLATE = "template"
    INVOKER = "invoker"
    STEP_NAME = "name"
    RESULT = "result"

    # Result values
    RESULT_OK = RunResult.OK.value
    RESULT_FAILED = RunResult.FAILED.value


class ScaffolderMetrics:
    """Scaffolder metrics collection.

    Created once per process from a Meter and injected into the workflow
    runner. OpenTelemetry instruments accumulate for the lifetime of the
    process and are safe to update from concurrently running tasks.
    """

    def __init__(self, meter: metrics.Meter):
        """Initialize metrics.

        Args:
            meter: OpenTelemetry Meter instance
        """
        self._meter = meter
        self._setup_counters()
        self._setup_histograms()

    def _setup_counters(self) -> None:
        """Set up counter metrics."""
        self.task_success_count: Counter = self._meter.create_counter(
            name=f"{METRIC_PREFIX}_task_success_count",
            description="Count of successful task runs",
            unit="1",
        )
        self.task_error_count: Counter = self._meter.create_counter(
            name=f"{METRIC_PREFIX}_task_error_count",
            description="Count of failed task runs",
            unit="1",
        )
        self.step_success_count: Counter = self._meter.create_counter(
            name=f"{METRIC_PREFIX}_step_success_count",
            description="Count of successful step runs",
            unit="1",
        )
        self.step_error_count: Counter = self._meter.create_counter(
            name=f"{METRIC_PREFIX}_step_error_count",
            description="Count of failed step runs",
            unit="1",
        )

    def _setup_histograms(self) -> None:
        """Set up histogram metrics."""
        self.task_duration: Histogram = self._meter.create_histogram(
            name=f"{METRIC_PREFIX}_task_duration",
            description="Duration of a task run",
            unit="s",
        )
        self.step_duration: Histogram = self._meter.create_histogram(
            name=f"{METRIC_PREFIX}_step_duration",
            description="Duration of a step run",
            unit="s",
        )

    # Convenience methods for recording metrics

    def record_task_end(
        self,
        template: str,
        invoker: str,
        duration_seconds: float,
        result: RunResult,
    ) -> None:
        """Record task completion.

        Args:
            template: Template entity name
            invoker: Invoking user entity name
            duration_seconds: Task duration
            result: Whether the task succeeded
        """
        counter = self.task_success_count if result == RunResult.OK else self.task_error_count
        counter.add(1, {MetricLabels.TEMPLATE: template, MetricLabels.INVOKER: invoker})
        self.task_duration.record(
            duration_seconds,
            {MetricLabels.TEMPLATE: template, MetricLabels.RESULT: result.value},
        )

    def record_step_end(
        self,
        step_name: str,
        duration_seconds: float,
        result: RunResult,
    ) -> None:
        """Record step completion.

        Args:
            step_name: Step display name
            duration_seconds: Step duration
            result: Whether the step succeeded
        """
        counter = self.step_success_count if result == RunResult.OK else self.step_error_count
        counter.add(1, {MetricLabels.STEP_NAME: step_name})
        self.step_duration.record(
            duration_seconds,
            {MetricLabels.STEP_NAME: step_name, MetricLabels.RESULT: result.value},
        )
