"""Runner configuration loading from YAML with environment references."""

import os
import re
import typing
from dataclasses import fields, is_dataclass
from enum import EnumMeta
from pathlib import Path
from typing import Any

import yaml

from scaffolder_core.errors import create_error
from scaffolder_core.logging import LogConfig
from scaffolder_core.telemetry import TelemetryConfig
from scaffolder_core.telemetry.logging import ScaffolderLogger, get_logger

from .models import RunnerConfig

CONFIG_PATH_ENV = "SCAFFOLDER_CONFIG_PATH"
DEFAULT_CONFIG_FILE = "scaffolder-config.yaml"

# ${NAME}, ${NAME:-fallback} or ${NAME:?message}
_ENV_REFERENCE = re.compile(r"\$\{(?P<name>[^}:]+)(?::(?P<op>[-?])(?P<arg>[^}]*))?\}")

_SECTIONS: dict[str, type] = {"log": LogConfig, "telemetry": TelemetryConfig}


def resolve_env_vars(value: str) -> str:
    """Substitute environment references in a string.

    ``${NAME}`` must be set, ``${NAME:-fallback}`` falls back when unset and
    ``${NAME:?message}`` fails with the given message when unset.

    Raises:
        ScaffolderError(CONFIG_INVALID): If a required variable is not set
    """

    def substitute(match: re.Match[str]) -> str:
        name, op, arg = match.group("name", "op", "arg")
        current = os.environ.get(name)
        if current is not None:
            return current
        if op == "-":
            return arg
        message = arg if op == "?" and arg else f"Required environment variable {name} not set"
        raise create_error("CONFIG_INVALID", detail=message)

    return _ENV_REFERENCE.sub(substitute, value)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge ``override`` into a copy of ``base``; nested mappings merge key by key."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def _resolve_tree(data: Any) -> Any:
    if isinstance(data, str):
        return resolve_env_vars(data)
    if isinstance(data, dict):
        return {key: _resolve_tree(value) for key, value in data.items()}
    if isinstance(data, list):
        return [_resolve_tree(item) for item in data]
    return data


class ConfigLoader:
    """Loads RunnerConfig from a YAML file or a mapping."""

    def __init__(self, logger: ScaffolderLogger | None = None):
        self._config: RunnerConfig | None = None
        self._logger = logger or get_logger("config")

    def load(
        self,
        path: str | Path | None = None,
        use_defaults: bool = True,
        overrides: dict[str, Any] | None = None,
    ) -> RunnerConfig:
        """Load configuration from a YAML file.

        Without an explicit path, SCAFFOLDER_CONFIG_PATH is used, then
        ./scaffolder-config.yaml. A missing file yields the defaults unless
        use_defaults is False.

        Args:
            path: Config file path
            use_defaults: Fall back to defaults when the file does not exist
            overrides: Values deep-merged over the file contents

        Returns:
            Loaded RunnerConfig

        Raises:
            ScaffolderError(CONFIG_INVALID): If the file is missing or invalid
        """
        config_path = Path(path) if path is not None else self._default_path()

        if not config_path.exists():
            if not use_defaults:
                raise create_error(
                    "CONFIG_INVALID", detail=f"Configuration file not found: {config_path}"
                )
            self._logger.info("No config file found, using defaults", config_path=str(config_path))
            return self.load_from_dict(overrides or {})

        try:
            data = yaml.safe_load(config_path.read_text()) or {}
        except yaml.YAMLError as e:
            raise create_error("CONFIG_INVALID", detail=f"Invalid YAML in config file: {e}") from e
        if not isinstance(data, dict):
            raise create_error("CONFIG_INVALID", detail="Configuration must be a mapping")

        data = _resolve_tree(data)
        if overrides:
            data = deep_merge(data, overrides)
        return self.load_from_dict(data, config_path)

    def load_from_dict(
        self,
        data: dict[str, Any],
        config_path: Path | None = None,
    ) -> RunnerConfig:
        """Build RunnerConfig from an already parsed mapping.

        Raises:
            ScaffolderError(CONFIG_INVALID): If validation or conversion fails
        """
        errors = self.validate(data)
        if errors:
            raise create_error(
                "CONFIG_INVALID",
                detail="Configuration validation failed:\n"
                + "\n".join(f"- {error}" for error in errors),
            )

        try:
            config = self._build(RunnerConfig, data)
        except (TypeError, ValueError) as e:
            raise create_error(
                "CONFIG_INVALID", detail=f"Failed to parse configuration: {e}"
            ) from e

        self._config = config
        self._logger.info(
            "Configuration loaded",
            config_path=str(config_path) if config_path else None,
        )
        return config

    def validate(self, data: dict[str, Any]) -> list[str]:
        """Return every problem found in the mapping; empty when valid."""
        errors = [
            f"Unknown configuration key: {key}"
            for key in data
            if key not in {f.name for f in fields(RunnerConfig)}
        ]

        working_directory = data.get("working_directory")
        if working_directory is not None and not isinstance(working_directory, str):
            errors.append("working_directory must be a string")

        for section, section_type in _SECTIONS.items():
            value = data.get(section)
            if value is None:
                continue
            if not isinstance(value, dict):
                errors.append(f"{section} must be a dictionary")
                continue
            known = {f.name for f in fields(section_type)}
            errors.extend(
                f"Unknown configuration key: {section}.{key}" for key in value if key not in known
            )

        return errors

    def get(self) -> RunnerConfig:
        """Last loaded configuration.

        Raises:
            ScaffolderError(CONFIG_INVALID): If nothing has been loaded
        """
        if self._config is None:
            raise create_error("CONFIG_INVALID", detail="Configuration not loaded")
        return self._config

    def _default_path(self) -> Path:
        return Path(os.environ.get(CONFIG_PATH_ENV) or DEFAULT_CONFIG_FILE)

    def _build(self, target: Any, value: Any) -> Any:
        """Convert raw YAML values into dataclass and enum fields."""
        if value is None:
            return None
        if isinstance(target, type) and is_dataclass(target) and isinstance(value, dict):
            hints = typing.get_type_hints(target)
            return target(
                **{
                    f.name: self._build(hints[f.name], value[f.name])
                    for f in fields(target)
                    if f.name in value
                }
            )
        if isinstance(target, EnumMeta) and isinstance(value, str):
            return target(value)
        return value


def load_config(path: str | Path | None = None) -> RunnerConfig:
    """Load configuration with a fresh ConfigLoader."""
    return ConfigLoader().load(path)
