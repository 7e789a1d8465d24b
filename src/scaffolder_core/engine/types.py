"""Types for the workflow runner."""

from dataclasses import dataclass
from typing import Protocol

from scaffolder_core.types import JsonObject, JsonValue
from scaffolder_core.workflow import TaskSpec


class TaskContext(Protocol):
    """A task as handed to the workflow runner by its scheduler.

    The runner only reads from it, apart from emitting log lines.
    """

    @property
    def spec(self) -> TaskSpec:
        """The task specification to execute."""
        ...

    @property
    def secrets(self) -> dict[str, str] | None:
        """Secrets available while rendering step input. Never logged."""
        ...

    @property
    def is_dry_run(self) -> bool:
        """Whether actions without dry-run support should be skipped."""
        ...

    async def get_workspace_name(self) -> str:
        """Name of the workspace directory for this task."""
        ...

    async def emit_log(self, message: str, metadata: JsonObject | None = None) -> None:
        """Emit a task log line with optional structured metadata."""
        ...


@dataclass
class WorkflowResponse:
    """Result of a task execution: the rendered task output."""

    output: JsonValue
