"""Error registry: the error codes the scaffolder can raise."""

from typing import Any

from .errors import ErrorCategory, ErrorTemplate, ScaffolderError

BUILTIN_TEMPLATES = (
    # Task specification
    ErrorTemplate(
        code="SPEC_VERSION_UNSUPPORTED",
        category=ErrorCategory.VALIDATION,
        message="Wrong template version executed with the workflow engine",
        detail="Task apiVersion '{api_version}' is not supported",
        suggestion="Use apiVersion '{supported_version}'",
    ),
    ErrorTemplate(
        code="SPEC_INVALID",
        category=ErrorCategory.VALIDATION,
        message="Invalid task specification",
        detail="{detail}",
        suggestion="Check the task specification against the v1beta3 format",
    ),
    # Actions
    ErrorTemplate(
        code="ACTION_INPUT_INVALID",
        category=ErrorCategory.VALIDATION,
        message="Invalid input passed to action {action_id}",
        detail="{detail}",
        suggestion="Check the step input against the action's input schema",
    ),
    ErrorTemplate(
        code="ACTION_NOT_FOUND",
        category=ErrorCategory.ACTION,
        message="Template action with ID '{action_id}' is not registered.",
        suggestion="Register the action before executing tasks that use it",
    ),
    ErrorTemplate(
        code="ACTION_ALREADY_REGISTERED",
        category=ErrorCategory.ACTION,
        message="Template action with ID '{action_id}' has already been registered",
    ),
    ErrorTemplate(
        code="ACTION_FAILED",
        category=ErrorCategory.ACTION,
        message="Action '{action_id}' failed",
        detail="{detail}",
    ),
    # Rendering and execution
    ErrorTemplate(
        code="TEMPLATE_ERROR",
        category=ErrorCategory.TEMPLATE,
        message="Template rendering failed",
        detail="{detail}",
        suggestion="Check template syntax and variable names",
    ),
    ErrorTemplate(
        code="STEP_OUTPUT_EXISTS",
        category=ErrorCategory.EXECUTION,
        message="Output for step '{step_id}' has already been recorded",
        suggestion="Give every step in the task a unique id",
    ),
    # System
    ErrorTemplate(
        code="CONFIG_INVALID",
        category=ErrorCategory.SYSTEM,
        message="Invalid configuration",
        detail="{detail}",
        suggestion="Check the configuration file and fix errors",
    ),
    ErrorTemplate(
        code="INTERNAL_ERROR",
        category=ErrorCategory.SYSTEM,
        message="Internal error",
        detail="{detail}",
    ),
)


class ErrorRegistry:
    """Lookup table from error code to template."""

    def __init__(self) -> None:
        self._templates: dict[str, ErrorTemplate] = {t.code: t for t in BUILTIN_TEMPLATES}

    def get_template(self, code: str) -> ErrorTemplate | None:
        return self._templates.get(code)

    def list_codes(self) -> list[str]:
        return list(self._templates)

    def register(self, template: ErrorTemplate) -> None:
        """Add a template, replacing any existing one with the same code."""
        self._templates[template.code] = template

    def create(
        self,
        code: str,
        context: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> ScaffolderError:
        """Create an error for a registered code.

        Args:
            code: Error code
            context: Values for the template placeholders
            cause: Exception that led to this error

        Returns:
            ScaffolderError instance

        Raises:
            ValueError: If the code is not registered
        """
        template = self._templates.get(code)
        if template is None:
            raise ValueError(f"Unknown error code: {code}")
        return template.build(context or {}, cause)
