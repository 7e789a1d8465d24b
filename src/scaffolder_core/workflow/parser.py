"""Task specification parsing from mappings and YAML."""

from collections.abc import Mapping
from typing import Any

import yaml

from scaffolder_core.errors import create_error

from .types import TaskSpec, TaskStep, TemplateInfo


def _get(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first key present, accepting camelCase and snake_case spellings."""
    for key in keys:
        if key in data:
            return data[key]
    return default


def load_task_spec(yaml_content: str) -> TaskSpec:
    """Parse YAML content into a TaskSpec.

    Args:
        yaml_content: YAML content to parse

    Returns:
        Parsed task specification

    Raises:
        ScaffolderError(SPEC_INVALID) if YAML is invalid
    """
    try:
        data = yaml.safe_load(yaml_content)
    except yaml.YAMLError as e:
        raise create_error("SPEC_INVALID", detail=f"Invalid YAML: {e}") from e

    return parse_task_spec(data)


def parse_task_spec(data: Any) -> TaskSpec:
    """Convert a task specification mapping into a TaskSpec.

    The version marker is not checked here; the workflow runner rejects
    unsupported versions before running anything.

    Args:
        data: Mapping with apiVersion, steps, parameters, output, user, templateInfo

    Returns:
        Parsed task specification

    Raises:
        ScaffolderError(SPEC_INVALID) if the shape is wrong
    """
    if not isinstance(data, Mapping):
        raise create_error("SPEC_INVALID", detail="Task specification must be a mapping")

    api_version = _get(data, "apiVersion", "api_version", default="")
    if not isinstance(api_version, str):
        raise create_error("SPEC_INVALID", detail="apiVersion must be a string")

    parameters = _get(data, "parameters", default={}) or {}
    if not isinstance(parameters, Mapping):
        raise create_error("SPEC_INVALID", detail="parameters must be a mapping")

    raw_steps = _get(data, "steps", default=[]) or []
    if not isinstance(raw_steps, list):
        raise create_error("SPEC_INVALID", detail="steps must be a list")

    steps = tuple(_parse_step(index, step_data) for index, step_data in enumerate(raw_steps))

    output = _get(data, "output", default={}) or {}
    if not isinstance(output, Mapping):
        raise create_error("SPEC_INVALID", detail="output must be a mapping")

    user = _get(data, "user")
    if user is not None and not isinstance(user, Mapping):
        raise create_error("SPEC_INVALID", detail="user must be a mapping")

    return TaskSpec(
        api_version=api_version,
        steps=steps,
        parameters=dict(parameters),
        output=dict(output),
        user=dict(user) if user is not None else None,
        template_info=_parse_template_info(_get(data, "templateInfo", "template_info")),
    )


def _parse_step(index: int, step_data: Any) -> TaskStep:
    if not isinstance(step_data, Mapping):
        raise create_error("SPEC_INVALID", detail=f"steps[{index}] must be a mapping")

    step_id = step_data.get("id")
    if not step_id or not isinstance(step_id, str):
        raise create_error("SPEC_INVALID", detail=f"steps[{index}].id is required")

    action = step_data.get("action")
    if not action or not isinstance(action, str):
        raise create_error("SPEC_INVALID", detail=f"steps[{index}].action is required")

    step_input = step_data.get("input")
    if step_input is not None and not isinstance(step_input, Mapping):
        raise create_error("SPEC_INVALID", detail=f"steps[{index}].input must be a mapping")

    condition = _get(step_data, "if", "condition")
    if condition is not None and not isinstance(condition, (str, bool)):
        raise create_error(
            "SPEC_INVALID", detail=f"steps[{index}].if must be a string or boolean"
        )

    return TaskStep(
        id=step_id,
        name=step_data.get("name") or step_id,
        action=action,
        input=dict(step_input) if step_input is not None else None,
        condition=condition,
    )


def _parse_template_info(raw: Any) -> TemplateInfo | None:
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        raise create_error("SPEC_INVALID", detail="templateInfo must be a mapping")
    entity = raw.get("entity")
    return TemplateInfo(
        base_url=_get(raw, "baseUrl", "base_url"),
        entity=dict(entity) if isinstance(entity, Mapping) else None,
    )
