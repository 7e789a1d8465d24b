"""Task specification model and parsing."""

from .parser import load_task_spec, parse_task_spec
from .types import SUPPORTED_API_VERSION, TaskSpec, TaskStep, TemplateInfo

__all__ = [
    "TaskSpec",
    "TaskStep",
    "TemplateInfo",
    "SUPPORTED_API_VERSION",
    "parse_task_spec",
    "load_task_spec",
]
