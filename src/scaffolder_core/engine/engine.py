"""Workflow runner for executing scaffolder tasks."""

import shutil
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from jsonschema.exceptions import ValidationError
from jsonschema.validators import validator_for

from scaffolder_core.actions import ActionContext, TemplateAction, TemplateActionRegistry
from scaffolder_core.config import RunnerConfig
from scaffolder_core.errors import create_error
from scaffolder_core.logging import LogConfig, create_step_logger
from scaffolder_core.telemetry import ScaffolderMetrics
from scaffolder_core.telemetry.logging import ScaffolderLogger, get_logger
from scaffolder_core.template import ContextBuilder, TemplateEngine, TemplateFilter
from scaffolder_core.types import JsonObject
from scaffolder_core.workflow import SUPPORTED_API_VERSION, TaskStep

from .helpers import generate_example_output, is_truthy
from .tracker import ScaffoldingTracker, TaskTrack
from .types import TaskContext, WorkflowResponse


class WorkflowRunner:
    """
    Execute scaffolder tasks.

    Core execution loop:
    1. Check the task apiVersion and create the workspace
    2. For each step in order:
       a. Evaluate the `if` condition
       b. Resolve the action (or short-circuit a dry run)
       c. Render and validate input
       d. Invoke the handler and store its output
    3. Render the task output
    4. Remove the workspace

    A runner holds no per-task state, so one instance can execute many tasks
    concurrently.
    """

    def __init__(
        self,
        working_directory: str | Path,
        action_registry: TemplateActionRegistry,
        *,
        additional_template_filters: Mapping[str, TemplateFilter] | None = None,
        metrics: ScaffolderMetrics | None = None,
        logger: ScaffolderLogger | None = None,
        log_config: LogConfig | None = None,
    ):
        """Initialize workflow runner.

        Args:
            working_directory: Directory under which task workspaces are created
            action_registry: Registry the step actions are resolved against
            additional_template_filters: Extra filters available to templates
            metrics: Metrics to record task and step outcomes into
            logger: Optional component logger
            log_config: Configuration for step loggers
        """
        self._working_directory = Path(working_directory)
        self._action_registry = action_registry
        self._logger = logger or get_logger("engine")
        self._template_engine = TemplateEngine(additional_template_filters)
        self._tracker = ScaffoldingTracker(metrics)
        self._log_config = log_config or LogConfig()

    @classmethod
    def from_config(
        cls,
        config: RunnerConfig,
        action_registry: TemplateActionRegistry,
        *,
        additional_template_filters: Mapping[str, TemplateFilter] | None = None,
        metrics: ScaffolderMetrics | None = None,
    ) -> "WorkflowRunner":
        """Create a runner from loaded configuration."""
        return cls(
            config.working_directory,
            action_registry,
            additional_template_filters=additional_template_filters,
            metrics=metrics,
            log_config=config.log,
        )

    @property
    def template_engine(self) -> TemplateEngine:
        return self._template_engine

    async def execute(self, task: TaskContext) -> WorkflowResponse:
        """
        Execute a task.

        Args:
            task: Task to execute

        Returns:
            WorkflowResponse with the rendered task output

        Raises:
            ScaffolderError(SPEC_VERSION_UNSUPPORTED) if the apiVersion is not supported
            ScaffolderError(ACTION_NOT_FOUND) if a step names an unknown action
            ScaffolderError(ACTION_INPUT_INVALID) if step input fails validation
            Any exception raised by an action handler
        """
        spec = task.spec
        if not spec.is_supported_version:
            self._tracker.task_rejected(task)
            raise create_error(
                "SPEC_VERSION_UNSUPPORTED",
                api_version=spec.api_version,
                supported_version=SUPPORTED_API_VERSION,
            )

        workspace_path = self._working_directory / await task.get_workspace_name()
        workspace_path.mkdir(parents=True, exist_ok=True)

        self._logger.info(
            "Starting task",
            template=spec.template_name,
            steps=len(spec.steps),
            dry_run=task.is_dry_run,
        )

        try:
            context = ContextBuilder(spec.parameters, user=spec.user)
            task_track = await self._tracker.task_start(task)

            for step in spec.steps:
                await self._execute_step(task, step, context, workspace_path, task_track)

            output = self._template_engine.render_value(spec.output, context.get_context())
            task_track.mark_successful()
            self._logger.info("Task completed", template=spec.template_name)
            return WorkflowResponse(output=output if output is not None else {})
        finally:
            self._remove_directory(workspace_path)

    async def _execute_step(
        self,
        task: TaskContext,
        step: TaskStep,
        context: ContextBuilder,
        workspace_path: Path,
        task_track: TaskTrack,
    ) -> None:
        step_track = await self._tracker.step_start(task, step)
        try:
            if step.condition is not None:
                condition = self._template_engine.render(step.condition, context.get_context())
                # A condition that could not be evaluated never runs its step
                if condition.failures or not is_truthy(condition.value):
                    await step_track.skip_falsy()
                    return

            action = self._action_registry.get(step.action)

            if task.is_dry_run and not action.supports_dry_run:
                await task_track.skip_dry_run(step, action)
                output_schema = action.output_schema
                example = generate_example_output(output_schema) if output_schema else {}
                context.add_step_output(step.id, _json_object(example))
                return

            step_input = _json_object(
                self._template_engine.render_value(
                    step.input or {}, context.get_input_context(task.secrets)
                )
            )

            self._validate_input(action, step, step_input)

            step_logger = create_step_logger(task, step.id, self._log_config)
            action_context = ActionContext(
                step_id=step.id,
                input=step_input,
                secrets=dict(task.secrets or {}),
                logger=step_logger.logger,
                log_stream=step_logger.stream,
                workspace_path=workspace_path,
                template_info=task.spec.template_info,
                is_dry_run=task.is_dry_run,
            )
            try:
                await action.handler(action_context)
            finally:
                for directory in action_context.temporary_directories:
                    self._remove_directory(directory)
                await step_logger.close()

            context.add_step_output(step.id, action_context.outputs.build())
            await step_track.mark_successful()
        except Exception as e:
            await task_track.mark_failed(step, e)
            step_track.mark_failed()
            raise

    def _validate_input(
        self,
        action: TemplateAction,
        step: TaskStep,
        step_input: JsonObject,
    ) -> None:
        """Validate rendered input against the action's input schema.

        Raises:
            ScaffolderError(ACTION_INPUT_INVALID) listing every violation
        """
        schema = action.input_schema
        if not schema:
            return

        validator_cls = validator_for(schema)
        validator_cls.check_schema(schema)
        errors = sorted(
            validator_cls(schema).iter_errors(step_input),
            key=lambda e: e.json_path,
        )
        if errors:
            raise create_error(
                "ACTION_INPUT_INVALID",
                action_id=action.id,
                step_id=step.id,
                detail=", ".join(_describe_violation(e) for e in errors),
            )

    def _remove_directory(self, path: Path) -> None:
        try:
            shutil.rmtree(path)
        except FileNotFoundError:
            return
        except OSError as e:
            self._logger.warning(
                "Failed to remove directory",
                path=str(path),
                error=str(e),
            )


def _json_object(value: Any) -> JsonObject:
    return value if isinstance(value, dict) else {}


def _describe_violation(error: ValidationError) -> str:
    """Describe a schema violation from the schema side only.

    Input may carry rendered secrets, so the offending value is never quoted.
    """
    if error.validator == "type":
        constraint = f"expected type {error.validator_value!r}"
    elif error.validator == "required":
        missing = [name for name in error.validator_value if name not in (error.instance or {})]
        constraint = f"missing required properties {missing!r}"
    else:
        constraint = f"failed {error.validator} constraint {error.validator_value!r}"
    return f"{error.json_path}: {constraint}"
