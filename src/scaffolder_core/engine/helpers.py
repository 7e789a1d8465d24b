"""Helpers for conditional steps and dry runs."""

from typing import Any

from scaffolder_core.types import JsonObject


def is_truthy(value: Any) -> bool:
    """Coerce a rendered condition to a boolean.

    "", "false", None, zero, False and empty collections are false;
    everything else is true.
    """
    if isinstance(value, str):
        return value not in ("", "false")
    if isinstance(value, (list, tuple, dict)):
        return len(value) > 0
    return bool(value)


def generate_example_output(schema: JsonObject) -> Any:
    """Fabricate a value that conforms to a JSON Schema.

    Uses the first entry of ``examples`` when the schema declares one,
    otherwise builds a placeholder from the schema type.

    Args:
        schema: JSON Schema describing the value

    Returns:
        Example value
    """
    examples = schema.get("examples")
    if isinstance(examples, list) and examples:
        return examples[0]

    schema_type = schema.get("type")
    if schema_type == "object":
        properties = schema.get("properties") or {}
        return {key: generate_example_output(value) for key, value in properties.items()}
    if schema_type == "array":
        items = schema.get("items")
        if isinstance(items, list):
            items = items[0] if items else None
        if isinstance(items, dict):
            return [generate_example_output(items)]
        return []
    if schema_type == "string":
        return "<example>"
    if schema_type in ("number", "integer"):
        return 0
    if schema_type == "boolean":
        return False
    return "<unknown>"
