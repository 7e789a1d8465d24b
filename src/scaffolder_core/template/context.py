"""Template context builder."""

from typing import Any

from scaffolder_core.errors import create_error
from scaffolder_core.types import JsonObject

from .types import TemplateContext


class ContextBuilder:
    """Build TemplateContext incrementally during task execution.

    Step outputs only accumulate, in step order, and each step id is written
    at most once.
    """

    def __init__(
        self,
        parameters: JsonObject,
        user: JsonObject | None = None,
    ):
        """Initialize context builder.

        Args:
            parameters: Task parameters
            user: Identity of the task invoker, if any
        """
        self._context = TemplateContext(
            parameters=parameters,
            steps={},
            user=user,
        )

    def add_step_output(self, step_id: str, output: dict[str, Any]) -> None:
        """Add a completed step's output to context.

        Args:
            step_id: Step identifier
            output: Output mapping recorded by the step's action

        Raises:
            ScaffolderError(STEP_OUTPUT_EXISTS) if the step already has output
        """
        if step_id in self._context.steps:
            raise create_error("STEP_OUTPUT_EXISTS", step_id=step_id)
        self._context.steps[step_id] = {"output": output}

    def has_step(self, step_id: str) -> bool:
        return step_id in self._context.steps

    def get_context(self) -> TemplateContext:
        """Get current context (without secrets)."""
        return self._context

    def get_input_context(self, secrets: dict[str, str] | None) -> TemplateContext:
        """Get a context that also carries the task secrets.

        Only used while rendering a step's input.
        """
        return self._context.with_secrets(secrets)
