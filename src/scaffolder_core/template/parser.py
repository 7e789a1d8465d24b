"""Template parsing utilities."""

import re

from jinja2 import Environment, nodes

from .types import Classification, TemplateKind

VARIABLE_START = "${{"
VARIABLE_END = "}}"

# Markers that make a string worth handing to the template environment
TEMPLATE_MARKERS = (VARIABLE_START, "{%", "{#")

# Captures the inner expression of a string that is exactly one ${{ ... }}
WHOLE_EXPRESSION_PATTERN = re.compile(r"\$\{\{(.+)\}\}", re.DOTALL)


def has_templates(text: str) -> bool:
    """Check if text contains anything the template environment would interpret.

    Args:
        text: Text to check

    Returns:
        True if template syntax found
    """
    return any(marker in text for marker in TEMPLATE_MARKERS)


def classify(environment: Environment, text: str) -> Classification:
    """Classify a string as a whole expression or mixed text.

    The string is parsed into a syntax tree; it is a whole expression when the
    tree holds exactly one output node wrapping exactly one non-literal
    expression.

    Args:
        environment: Environment whose delimiters are used for parsing
        text: Text to classify

    Returns:
        Classification of the text

    Raises:
        jinja2.TemplateSyntaxError: If the text does not parse
    """
    tree = environment.parse(text)
    body = tree.body
    if (
        len(body) == 1
        and isinstance(body[0], nodes.Output)
        and len(body[0].nodes) == 1
        and not isinstance(body[0].nodes[0], nodes.TemplateData)
    ):
        match = WHOLE_EXPRESSION_PATTERN.fullmatch(text.strip())
        if match:
            return Classification(TemplateKind.WHOLE_EXPRESSION, match.group(1).strip())
    return Classification(TemplateKind.MIXED_TEXT)


def wrap_serialized(expression: str) -> str:
    """Rewrite an expression so its value is piped through ``serialize``.

    E.g., "parameters.count" → "${{ (parameters.count) | serialize }}"
    """
    return f"{VARIABLE_START} ({expression}) | serialize {VARIABLE_END}"
