"""Action registry - registration table of template actions."""

from scaffolder_core.errors import create_error
from scaffolder_core.telemetry.logging import ScaffolderLogger, get_logger

from .types import TemplateAction


class TemplateActionRegistry:
    """Registry of the actions task steps can refer to by id."""

    def __init__(self, logger: ScaffolderLogger | None = None):
        """Initialize action registry.

        Args:
            logger: Optional logger
        """
        self._actions: dict[str, TemplateAction] = {}
        self._logger = logger or get_logger("actions")

    def register(self, action: TemplateAction) -> None:
        """Register an action.

        Args:
            action: Action to register

        Raises:
            ScaffolderError(ACTION_ALREADY_REGISTERED) if the id is taken
        """
        if action.id in self._actions:
            raise create_error("ACTION_ALREADY_REGISTERED", action_id=action.id)
        self._actions[action.id] = action
        self._logger.debug("Registered template action", action_id=action.id)

    def get(self, action_id: str) -> TemplateAction:
        """Get an action by id.

        Args:
            action_id: Action identifier

        Returns:
            The registered action

        Raises:
            ScaffolderError(ACTION_NOT_FOUND) if no action has that id
        """
        action = self._actions.get(action_id)
        if action is None:
            raise create_error("ACTION_NOT_FOUND", action_id=action_id)
        return action

    def list(self) -> list[TemplateAction]:
        """List registered actions in registration order."""
        return list(self._actions.values())

    def __contains__(self, action_id: object) -> bool:
        return action_id in self._actions

    def __len__(self) -> int:
        return len(self._actions)
