"""Scaffolder Core - Workflow runner for templated scaffolding tasks.

Executes an ordered list of steps, each bound to a pluggable action, rendering
${{ }} template expressions in step input and task output along the way.
"""

from scaffolder_core.actions import (
    ActionContext,
    TemplateAction,
    TemplateActionRegistry,
    create_template_action,
)
from scaffolder_core.engine import TaskContext, WorkflowResponse, WorkflowRunner
from scaffolder_core.errors import ScaffolderError
from scaffolder_core.workflow import TaskSpec, TaskStep, load_task_spec, parse_task_spec

__version__ = "0.1.0"
__all__ = [
    "__version__",
    "WorkflowRunner",
    "WorkflowResponse",
    "TaskContext",
    "TaskSpec",
    "TaskStep",
    "TemplateAction",
    "TemplateActionRegistry",
    "ActionContext",
    "ScaffolderError",
    "create_template_action",
    "load_task_spec",
    "parse_task_spec",
]
