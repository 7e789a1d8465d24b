"""Template Engine implementation."""

import json
from collections.abc import Mapping
from typing import Any

from jinja2 import TemplateError, Undefined, UndefinedError
from jinja2.sandbox import SandboxedEnvironment

from scaffolder_core.errors import create_error
from scaffolder_core.telemetry.logging import ScaffolderLogger, get_logger

from .filters import FILTERS, TemplateFilter
from .parser import VARIABLE_END, VARIABLE_START, classify, has_templates, wrap_serialized
from .types import RenderResult, TemplateContext

# Marks a leaf that rendered to nothing and must be left out of its parent
_DROPPED = object()


def _finalize(value: Any) -> Any:
    """Render null as nothing and booleans the way they are written in specs."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


def create_environment(
    additional_filters: Mapping[str, TemplateFilter] | None = None,
) -> SandboxedEnvironment:
    """Create the sandboxed environment used to evaluate ${{ }} expressions.

    Args:
        additional_filters: Extra filters to install next to the built-ins

    Returns:
        Configured SandboxedEnvironment
    """
    environment = SandboxedEnvironment(
        variable_start_string=VARIABLE_START,
        variable_end_string=VARIABLE_END,
        autoescape=False,
        keep_trailing_newline=True,
        undefined=Undefined,
        finalize=_finalize,
    )
    environment.filters.update(FILTERS)
    if additional_filters:
        environment.filters.update(additional_filters)
    return environment


class TemplateEngine:
    """Render template expressions in structured values.

    Supports:
    - Variable access: ${{ parameters.name }}
    - Nested access: ${{ steps.fetch.output.url }}
    - Filters: ${{ parameters.items | length }}, ${{ parameters.data | serialize }}

    A string that is exactly one expression keeps the type of the value it
    evaluates to. Any other string renders to a string. Strings rendering to
    "" are dropped from the result, and so are strings that look up through
    an undefined value.
    """

    def __init__(
        self,
        additional_filters: Mapping[str, TemplateFilter] | None = None,
        logger: ScaffolderLogger | None = None,
    ) -> None:
        """Initialize template engine.

        Args:
            additional_filters: Extra filters available to templates
            logger: Logger for recovered rendering failures
        """
        self._environment = create_environment(additional_filters)
        self._logger = logger or get_logger("template")

    @property
    def environment(self) -> SandboxedEnvironment:
        return self._environment

    def render(self, template: Any, context: TemplateContext) -> RenderResult:
        """Render template expressions in a value.

        Args:
            template: Value that may contain ${{ }} expressions.
                      Can be string, dict, list, or primitive.
            context: Template context with parameters, steps, secrets, user

        Returns:
            RenderResult with a new rendered value; the input is never mutated
        """
        variables = context.to_variables()
        result = RenderResult(value=None, had_templates=False)

        def render_value(value: Any) -> Any:
            """Recursively render a value."""
            if isinstance(value, str):
                if has_templates(value):
                    result.templates_rendered.append(value)
                return self._render_leaf(value, variables, result)

            elif isinstance(value, Mapping):
                rendered: dict[str, Any] = {}
                for key, item in value.items():
                    new_item = render_value(item)
                    if new_item is not _DROPPED:
                        rendered[key] = new_item
                return rendered

            elif isinstance(value, (list, tuple)):
                items = (render_value(item) for item in value)
                return [item for item in items if item is not _DROPPED]

            else:
                # Primitive types - return as-is
                return value

        rendered = render_value(template)
        result.value = None if rendered is _DROPPED else rendered
        result.had_templates = len(result.templates_rendered) > 0
        return result

    def render_value(self, template: Any, context: TemplateContext) -> Any:
        """Render a value and return only the rendered tree."""
        return self.render(template, context).value

    def _render_leaf(
        self,
        text: str,
        variables: dict[str, Any],
        result: RenderResult,
    ) -> Any:
        if not has_templates(text):
            return _DROPPED if text == "" else text

        try:
            classification = classify(self._environment, text)
            if classification.is_whole_expression:
                wrapped = wrap_serialized(classification.expression or "")
                templated = self._environment.from_string(wrapped).render(variables)
                if templated == "":
                    return _DROPPED
                return json.loads(templated)
        except UndefinedError as e:
            return self._drop_unresolved(result, text, e)
        except (TemplateError, TypeError, ValueError) as e:
            message = f"Failed to parse template string: {text} with error {e}"
            self._record_failure(result, message, e)

        # Fallback to plain string rendering
        try:
            templated = self._environment.from_string(text).render(variables)
        except UndefinedError as e:
            return self._drop_unresolved(result, text, e)
        except (TemplateError, TypeError, ValueError) as e:
            message = f"Failed to render template string: {text} with error {e}"
            self._record_failure(result, message, e)
            return text

        if templated == "":
            return _DROPPED
        return templated

    def _drop_unresolved(self, result: RenderResult, text: str, cause: UndefinedError) -> Any:
        """Record a lookup through an undefined value and leave the leaf out."""
        message = f"Failed to resolve template string: {text} with error {cause}"
        self._record_failure(result, message, cause)
        return _DROPPED

    def _record_failure(self, result: RenderResult, message: str, cause: Exception) -> None:
        """Log a recovered leaf failure and keep it on the result."""
        error = create_error("TEMPLATE_ERROR", detail=message)
        result.failures.append(message)
        self._logger.error(
            str(error),
            error_code=error.code,
            error_type=type(cause).__name__,
        )
