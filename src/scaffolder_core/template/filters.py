"""Template filter implementations."""

import json
from collections.abc import Callable
from typing import Any

from jinja2 import Undefined

TemplateFilter = Callable[..., Any]


def filter_serialize(value: Any) -> str:
    """Serialize value to JSON text.

    Undefined values serialize to an empty string so the surrounding leaf is
    dropped rather than failing.

    Args:
        value: Value to serialize

    Returns:
        JSON string representation
    """
    if isinstance(value, Undefined):
        return ""
    return json.dumps(value)


# Registry of filters installed on every environment
FILTERS: dict[str, TemplateFilter] = {
    "serialize": filter_serialize,
}
