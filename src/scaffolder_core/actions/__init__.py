"""Template actions - the contract step handlers implement."""

from .registry import TemplateActionRegistry
from .types import (
    ActionContext,
    ActionHandler,
    ActionSchema,
    StepOutputBuilder,
    TemplateAction,
    create_template_action,
)

__all__ = [
    "TemplateActionRegistry",
    "TemplateAction",
    "ActionSchema",
    "ActionContext",
    "ActionHandler",
    "StepOutputBuilder",
    "create_template_action",
]
