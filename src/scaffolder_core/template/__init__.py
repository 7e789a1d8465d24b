"""Template Engine for task specifications."""

from .context import ContextBuilder
from .engine import TemplateEngine, create_environment
from .filters import FILTERS, TemplateFilter, filter_serialize
from .parser import classify, has_templates
from .types import Classification, RenderResult, TemplateContext, TemplateKind

__all__ = [
    "TemplateEngine",
    "TemplateContext",
    "RenderResult",
    "ContextBuilder",
    "Classification",
    "TemplateKind",
    "TemplateFilter",
    "FILTERS",
    "filter_serialize",
    "classify",
    "has_templates",
    "create_environment",
]
