"""Task specification data model types."""

from dataclasses import dataclass, field
from typing import Any

from scaffolder_core.types import JsonObject

# The only task specification format the workflow runner executes
SUPPORTED_API_VERSION = "scaffolder.backstage.io/v1beta3"


def _entity_name(entity: JsonObject | None) -> str:
    if not isinstance(entity, dict):
        return ""
    metadata = entity.get("metadata")
    if not isinstance(metadata, dict):
        return ""
    name = metadata.get("name")
    return name if isinstance(name, str) else ""


@dataclass(frozen=True)
class TemplateInfo:
    """Metadata describing the template a task was created from."""

    base_url: str | None = None
    entity: JsonObject | None = None

    @property
    def entity_name(self) -> str:
        """Name of the template entity, or "" when unknown."""
        return _entity_name(self.entity)

    def to_dict(self) -> dict[str, Any]:
        return {"baseUrl": self.base_url, "entity": self.entity}


@dataclass(frozen=True)
class TaskStep:
    """One step of a task: an action invocation with optional input and condition."""

    id: str
    name: str
    action: str
    input: JsonObject | None = None
    condition: str | bool | None = None  # "if" in the task specification


@dataclass(frozen=True)
class TaskSpec:
    """Complete task specification."""

    api_version: str
    steps: tuple[TaskStep, ...] = ()
    parameters: JsonObject = field(default_factory=dict)
    output: JsonObject = field(default_factory=dict)
    user: JsonObject | None = None
    template_info: TemplateInfo | None = None

    @property
    def is_supported_version(self) -> bool:
        return self.api_version == SUPPORTED_API_VERSION

    @property
    def template_name(self) -> str:
        """Template entity name used as a metric label."""
        return self.template_info.entity_name if self.template_info else ""

    @property
    def invoker_name(self) -> str:
        """Invoking user entity name used as a metric label."""
        if not self.user:
            return ""
        return _entity_name(self.user.get("entity"))

    def get_step(self, step_id: str) -> TaskStep | None:
        """Get step by ID.

        Args:
            step_id: Step identifier

        Returns:
            Step or None if not found
        """
        for step in self.steps:
            if step.id == step_id:
                return step
        return None
