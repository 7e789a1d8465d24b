"""Scaffolder configuration - Config loading and models."""

from .loader import (
    ConfigLoader,
    deep_merge,
    load_config,
    resolve_env_vars,
)
from .models import RunnerConfig

__all__ = [
    "RunnerConfig",
    "ConfigLoader",
    "load_config",
    "deep_merge",
    "resolve_env_vars",
]
