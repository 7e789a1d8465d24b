"""MockTaskContext - In-memory task handed to the workflow runner in tests.

Collects every emitted log line so tests can assert on lifecycle messages
and step metadata.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from scaffolder_core.workflow import TaskSpec, parse_task_spec


@dataclass
class LogEntry:
    """One emitted task log line."""

    message: str
    metadata: dict[str, Any] | None = None

    @property
    def step_id(self) -> str | None:
        return (self.metadata or {}).get("stepId")

    @property
    def status(self) -> str | None:
        return (self.metadata or {}).get("status")


@dataclass
class MockTaskContext:
    """Task stand-in implementing the TaskContext protocol.

    Example:
        task = MockTaskContext.from_dict({"apiVersion": ..., "steps": [...]})
        await runner.execute(task)
        assert task.messages()[0] == "Starting up task with 1 steps"
    """

    spec: TaskSpec
    secrets: dict[str, str] | None = None
    is_dry_run: bool = False
    workspace_name: str = "task-1"
    logs: list[LogEntry] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any], **kwargs: Any) -> MockTaskContext:
        """Build a mock task from a task specification mapping."""
        return cls(spec=parse_task_spec(data), **kwargs)

    async def get_workspace_name(self) -> str:
        return self.workspace_name

    async def emit_log(self, message: str, metadata: dict[str, Any] | None = None) -> None:
        self.logs.append(LogEntry(message=message, metadata=metadata))

    def messages(self) -> list[str]:
        """All emitted messages in order."""
        return [entry.message for entry in self.logs]

    def logs_for_step(self, step_id: str) -> list[LogEntry]:
        """Log lines tagged with the given step id."""
        return [entry for entry in self.logs if entry.step_id == step_id]
