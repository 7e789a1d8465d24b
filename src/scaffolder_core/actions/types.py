"""Template action types."""

import logging
import tempfile
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TextIO

from scaffolder_core.types import JsonObject, JsonValue
from scaffolder_core.workflow.types import TemplateInfo


class StepOutputBuilder:
    """Collects the outputs an action records for one step.

    Later writes to the same name overwrite earlier ones.
    """

    def __init__(self) -> None:
        self._outputs: dict[str, JsonValue] = {}

    def set(self, name: str, value: JsonValue) -> None:
        self._outputs[name] = value

    def build(self) -> dict[str, JsonValue]:
        """Return a snapshot of the recorded outputs."""
        return dict(self._outputs)


@dataclass
class ActionContext:
    """Everything an action handler receives for one step run.

    Access pattern in handlers:
        ctx.input["url"]
        ctx.output("remoteUrl", url)
        tmp = await ctx.create_temporary_directory()
    """

    step_id: str
    input: JsonObject
    secrets: dict[str, str]
    logger: logging.Logger
    log_stream: TextIO
    workspace_path: Path
    template_info: TemplateInfo | None = None
    is_dry_run: bool = False

    outputs: StepOutputBuilder = field(default_factory=StepOutputBuilder)
    temporary_directories: list[Path] = field(default_factory=list)

    def output(self, name: str, value: JsonValue) -> None:
        """Record a step output visible to later steps as steps.<id>.output.<name>."""
        self.outputs.set(name, value)

    async def create_temporary_directory(self) -> Path:
        """Create a temporary directory under the workspace.

        The directory is removed by the runner once the step finishes.
        """
        path = Path(tempfile.mkdtemp(prefix=f"step-{self.step_id}-", dir=self.workspace_path))
        self.temporary_directories.append(path)
        return path


ActionHandler = Callable[[ActionContext], Awaitable[None]]


@dataclass
class ActionSchema:
    """JSON Schemas declared by an action."""

    input: JsonObject | None = None
    output: JsonObject | None = None


@dataclass
class TemplateAction:
    """A pluggable step handler identified by a string id."""

    id: str
    handler: ActionHandler
    description: str | None = None
    schema: ActionSchema | None = None
    supports_dry_run: bool = False

    @property
    def input_schema(self) -> JsonObject | None:
        return self.schema.input if self.schema else None

    @property
    def output_schema(self) -> JsonObject | None:
        return self.schema.output if self.schema else None

    def to_dict(self) -> dict[str, Any]:
        """Describe the action for listings."""
        return {
            "id": self.id,
            "description": self.description,
            "schema": {
                "input": self.input_schema,
                "output": self.output_schema,
            },
            "supportsDryRun": self.supports_dry_run,
        }


def create_template_action(
    id: str,
    handler: ActionHandler,
    *,
    description: str | None = None,
    input_schema: JsonObject | None = None,
    output_schema: JsonObject | None = None,
    supports_dry_run: bool = False,
) -> TemplateAction:
    """Build a TemplateAction from a handler and its schemas."""
    schema = None
    if input_schema is not None or output_schema is not None:
        schema = ActionSchema(input=input_schema, output=output_schema)
    return TemplateAction(
        id=id,
        handler=handler,
        description=description,
        schema=schema,
        supports_dry_run=supports_dry_run,
    )
