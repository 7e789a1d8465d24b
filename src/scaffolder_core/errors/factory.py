"""Creating ScaffolderErrors from codes and from foreign exceptions."""

from typing import Any

from .errors import ScaffolderError
from .registry import ErrorRegistry


class ErrorFactory:
    """Builds ScaffolderErrors against one registry."""

    def __init__(self, registry: ErrorRegistry | None = None):
        self.registry = registry or ErrorRegistry()

    def create(
        self,
        code: str,
        context: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> ScaffolderError:
        """Create an error from a code; keyword arguments extend the context."""
        return self.registry.create(code, {**(context or {}), **kwargs})

    def from_exception(
        self,
        error: BaseException,
        *,
        step_id: str | None = None,
        action_id: str | None = None,
        task_id: str | None = None,
    ) -> ScaffolderError:
        """Convert any exception to a ScaffolderError.

        ScaffolderErrors only gain the given context. Anything else becomes
        ACTION_FAILED when an action is named and INTERNAL_ERROR otherwise, with
        the original exception kept as the cause.
        """
        if isinstance(error, ScaffolderError):
            return error.with_context(step_id=step_id, action_id=action_id, task_id=task_id)

        return self.registry.create(
            "ACTION_FAILED" if action_id else "INTERNAL_ERROR",
            {
                "detail": f"{type(error).__name__}: {error}",
                "step_id": step_id,
                "action_id": action_id,
                "task_id": task_id,
            },
            cause=error,
        )


_default_factory: ErrorFactory | None = None


def get_error_factory() -> ErrorFactory:
    """Process-wide factory backed by the built-in registry."""
    global _default_factory  # noqa: PLW0603
    if _default_factory is None:
        _default_factory = ErrorFactory()
    return _default_factory


def create_error(code: str, **context: Any) -> ScaffolderError:
    """Create an error from a registered code.

    Example:
        raise create_error("ACTION_NOT_FOUND", action_id="fetch:plain")
    """
    return get_error_factory().create(code, context)
