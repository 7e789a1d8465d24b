"""Template engine type definitions."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from scaffolder_core.types import JsonObject


@dataclass
class TemplateContext:
    """Context available to templates.

    Access patterns:
    - ${{ parameters.name }} → self.parameters["name"]
    - ${{ steps.fetch.output.url }} → self.steps["fetch"]["output"]["url"]
    - ${{ secrets.token }} → self.secrets["token"] (step input only)
    - ${{ user.ref }} → self.user["ref"]
    """

    parameters: JsonObject
    steps: dict[str, JsonObject] = field(default_factory=dict)
    secrets: dict[str, str] | None = None
    user: JsonObject | None = None

    def with_secrets(self, secrets: dict[str, str] | None) -> "TemplateContext":
        """Return a copy that also exposes the given secrets."""
        return replace(self, secrets=dict(secrets or {}))

    def to_variables(self) -> dict[str, Any]:
        """Build the variable mapping handed to the template environment.

        Absent secrets and user are left out entirely so lookups against them
        behave like any other undefined name.
        """
        variables: dict[str, Any] = {
            "parameters": self.parameters,
            "steps": self.steps,
        }
        if self.secrets is not None:
            variables["secrets"] = self.secrets
        if self.user is not None:
            variables["user"] = self.user
        return variables


class TemplateKind(str, Enum):
    """How a string leaf is rendered."""

    WHOLE_EXPRESSION = "whole_expression"
    MIXED_TEXT = "mixed_text"


@dataclass(frozen=True)
class Classification:
    """Result of classifying a string leaf.

    ``expression`` holds the inner expression source for whole-expression
    strings and is None for mixed text.
    """

    kind: TemplateKind
    expression: str | None = None

    @property
    def is_whole_expression(self) -> bool:
        return self.kind == TemplateKind.WHOLE_EXPRESSION


@dataclass
class RenderResult:
    """Result of template rendering."""

    value: Any  # Rendered value (None when the whole value was dropped)
    had_templates: bool  # Whether any templates were found
    templates_rendered: list[str] = field(default_factory=list)  # Template strings found
    failures: list[str] = field(default_factory=list)  # Leaf-level errors that were recovered
