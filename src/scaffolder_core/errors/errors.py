"""Scaffolder error types."""

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Where an error originates."""

    ACTION = "ACTION"
    EXECUTION = "EXECUTION"
    TEMPLATE = "TEMPLATE"
    VALIDATION = "VALIDATION"
    SYSTEM = "SYSTEM"


@dataclass
class ScaffolderError(Exception):
    """Base exception for all scaffolder errors.

    Carries a stable code for programmatic handling next to the human-readable
    message, plus the step, action and task it relates to when known.
    """

    code: str
    category: ErrorCategory
    message: str
    detail: str | None = None
    suggestion: str | None = None
    retryable: bool = False

    step_id: str | None = None
    action_id: str | None = None
    task_id: str | None = None

    cause: BaseException | None = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.message}: {self.detail}" if self.detail else self.message

    def to_dict(self) -> dict[str, Any]:
        """Plain mapping suitable for log records."""
        data = {f.name: getattr(self, f.name) for f in fields(self) if f.name != "cause"}
        data["category"] = self.category.value
        data["cause"] = repr(self.cause) if self.cause is not None else None
        return data

    def with_context(self, **context: str | None) -> "ScaffolderError":
        """Copy of this error with step_id, action_id or task_id filled in.

        Values already set on the error win over None.
        """
        updates = {key: value for key, value in context.items() if value is not None}
        return replace(self, **updates)


class _KeepMissing(dict):
    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


@dataclass(frozen=True)
class ErrorTemplate:
    """Blueprint for one error code.

    Templates use str.format placeholders; placeholders with no value in the
    context are left in place.
    """

    code: str
    category: ErrorCategory
    message: str
    detail: str | None = None
    suggestion: str | None = None
    retryable: bool = False

    def build(
        self,
        context: dict[str, Any],
        cause: BaseException | None = None,
    ) -> ScaffolderError:
        """Create an error from this template and the given context."""
        values = _KeepMissing(context)

        def fill(text: str | None) -> str | None:
            return text.format_map(values) if text is not None else None

        return ScaffolderError(
            code=self.code,
            category=self.category,
            message=fill(self.message) or f"Error {self.code}",
            detail=fill(self.detail),
            suggestion=fill(self.suggestion),
            retryable=self.retryable,
            step_id=context.get("step_id"),
            action_id=context.get("action_id"),
            task_id=context.get("task_id"),
            cause=cause,
        )
