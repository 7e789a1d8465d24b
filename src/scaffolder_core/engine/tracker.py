"""Progress tracking for task and step runs.

Emits lifecycle lines into the task log and records counters and durations.
"""

import time
import traceback
from collections.abc import Mapping

from scaffolder_core.actions import TemplateAction
from scaffolder_core.telemetry import ScaffolderMetrics
from scaffolder_core.types import RunResult, StepStatus
from scaffolder_core.workflow import TaskStep

from .types import TaskContext

REDACTED = "***"


class TaskTrack:
    """Tracks one task run from start to its terminal outcome."""

    def __init__(self, task: TaskContext, metrics: ScaffolderMetrics | None):
        self._task = task
        self._metrics = metrics
        self._template = task.spec.template_name
        self._invoker = task.spec.invoker_name
        self._started = time.perf_counter()
        self._finished = False

    async def skip_dry_run(self, step: TaskStep, action: TemplateAction) -> None:
        await self._task.emit_log(
            f"Skipping because {action.id} does not support dry-run",
            {"stepId": step.id, "status": StepStatus.SKIPPED.value},
        )

    def mark_successful(self) -> None:
        self._finish(RunResult.OK)

    def mark_rejected(self) -> None:
        """Record a task that failed before any step ran."""
        self._finish(RunResult.FAILED)

    async def mark_failed(self, step: TaskStep, error: BaseException) -> None:
        """Emit the full error through the task log and record the failure."""
        await self._task.emit_log(
            _redact("".join(traceback.format_exception(error)).rstrip(), self._task.secrets),
            {"stepId": step.id, "status": StepStatus.FAILED.value},
        )
        self._finish(RunResult.FAILED)

    def _finish(self, result: RunResult) -> None:
        if self._finished:
            return
        self._finished = True
        if self._metrics:
            self._metrics.record_task_end(
                template=self._template,
                invoker=self._invoker,
                duration_seconds=time.perf_counter() - self._started,
                result=result,
            )


class StepTrack:
    """Tracks one step run from start to its terminal outcome."""

    def __init__(self, task: TaskContext, step: TaskStep, metrics: ScaffolderMetrics | None):
        self._task = task
        self._step = step
        self._metrics = metrics
        self._started = time.perf_counter()
        self._finished = False

    async def mark_successful(self) -> None:
        await self._task.emit_log(
            f"Finished step {self._step.name}",
            {"stepId": self._step.id, "status": StepStatus.COMPLETED.value},
        )
        self._finish(RunResult.OK)

    def mark_failed(self) -> None:
        self._finish(RunResult.FAILED)

    async def skip_falsy(self) -> None:
        await self._task.emit_log(
            f"Skipping step {self._step.id} because its if condition was false",
            {"stepId": self._step.id, "status": StepStatus.SKIPPED.value},
        )
        self._finished = True

    def _finish(self, result: RunResult) -> None:
        if self._finished:
            return
        self._finished = True
        if self._metrics:
            self._metrics.record_step_end(
                step_name=self._step.name,
                duration_seconds=time.perf_counter() - self._started,
                result=result,
            )


class ScaffoldingTracker:
    """Starts task and step tracking handles.

    Holds no state of its own beyond the injected metrics.
    """

    def __init__(self, metrics: ScaffolderMetrics | None = None):
        """Initialize tracker.

        Args:
            metrics: Metrics to record into; None records log lines only
        """
        self._metrics = metrics

    async def task_start(self, task: TaskContext) -> TaskTrack:
        await task.emit_log(f"Starting up task with {len(task.spec.steps)} steps")
        return TaskTrack(task, self._metrics)

    async def step_start(self, task: TaskContext, step: TaskStep) -> StepTrack:
        await task.emit_log(
            f"Beginning step {step.name}",
            {"stepId": step.id, "status": StepStatus.PROCESSING.value},
        )
        return StepTrack(task, step, self._metrics)

    def task_rejected(self, task: TaskContext) -> None:
        """Count a task that was refused before it started."""
        TaskTrack(task, self._metrics).mark_rejected()


def _redact(text: str, secrets: Mapping[str, str] | None) -> str:
    """Mask every secret value that appears in text."""
    for value in (secrets or {}).values():
        if value:
            text = text.replace(str(value), REDACTED)
    return text
