"""
Reporter Configuration Manifest.

Declarative, frozen settings the reporter facade is constructed with and
holds by reference. Toggles such as ``set_verbose`` never mutate an
instance; they swap in a ``model_copy`` with the updated field.

Sources, lowest to highest precedence:
    1. Field defaults
    2. YAML file (``reporter:`` section) via ``from_yaml``
    3. Environment variables via ``from_env``
    4. Explicit CLI flags (applied by the caller with ``model_copy``)
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ...exceptions import BuildlineConfigError
from ..io import load_config_from_yaml
from ..paths import (
    BUILD_COMMAND,
    EXECUTING_COMMAND_ENV,
    NO_COLOR_ENV,
    TELEMETRY_DIR,
    TELEMETRY_DIR_ENV,
    TELEMETRY_DISABLED_ENV,
    VERBOSE_ENV,
)
from .types import CommandName, LogLevel, ValidatedPath

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _is_truthy(value: str | None) -> bool:
    return value is not None and value.strip().lower() in _TRUTHY


class ReporterConfig(BaseModel):
    """
    Output and telemetry policy of the reporter.

    Attributes:
        verbose: Show verbose lines (DEBUG level).
        no_color: Strip ANSI colors from console and error output.
        executing_command: CLI command being run; ``build`` makes
            ``panic_on_build`` fatal.
        log_level: Base console level when not verbose.
        log_dir: Optional directory for a rotating plain-text log.
        telemetry_enabled: Record anonymous usage events.
        telemetry_dir: Directory of the JSONL telemetry sink.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    verbose: bool = False
    no_color: bool = False
    executing_command: CommandName = None
    log_level: LogLevel = Field(default="INFO")
    log_dir: ValidatedPath | None = None
    telemetry_enabled: bool = True
    telemetry_dir: ValidatedPath = Field(default=TELEMETRY_DIR)

    @model_validator(mode="before")
    @classmethod
    def handle_empty_config(cls, data: Any) -> Any:
        """Treat an empty ``reporter:`` YAML section as all defaults."""
        if data is None:
            return {}
        return data

    @property
    def is_build(self) -> bool:
        return self.executing_command == BUILD_COMMAND

    @classmethod
    def from_env(
        cls, environ: Mapping[str, str] | None = None, base: "ReporterConfig | None" = None
    ) -> "ReporterConfig":
        """
        Overlay environment variables on *base* (or on defaults).

        Args:
            environ: Mapping to read instead of ``os.environ``.
            base: Config to start from, e.g. one loaded with ``from_yaml``.

        Returns:
            New frozen config.
        """
        env = os.environ if environ is None else environ
        updates: dict[str, Any] = {}

        if VERBOSE_ENV in env:
            updates["verbose"] = _is_truthy(env[VERBOSE_ENV])
        # NO_COLOR disables colors whenever it is present and non-empty
        if env.get(NO_COLOR_ENV):
            updates["no_color"] = True
        if env.get(EXECUTING_COMMAND_ENV):
            updates["executing_command"] = env[EXECUTING_COMMAND_ENV]
        if TELEMETRY_DISABLED_ENV in env:
            updates["telemetry_enabled"] = not _is_truthy(env[TELEMETRY_DISABLED_ENV])
        if env.get(TELEMETRY_DIR_ENV):
            updates["telemetry_dir"] = env[TELEMETRY_DIR_ENV]

        data = base.model_dump() if base is not None else {}
        data.update(updates)
        return cls._validate(data, source="environment")

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "ReporterConfig":
        """
        Load settings from the ``reporter:`` section of a YAML file.

        Args:
            yaml_path: Config file path.

        Returns:
            New frozen config.

        Raises:
            BuildlineConfigError: If the file is missing, malformed or invalid.
        """
        try:
            raw = load_config_from_yaml(yaml_path)
        except (FileNotFoundError, ValueError) as e:
            raise BuildlineConfigError(str(e)) from e

        section = raw.get("reporter", raw)
        return cls._validate(section, source=str(yaml_path))

    @classmethod
    def _validate(cls, data: Any, source: str) -> "ReporterConfig":
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise BuildlineConfigError(f"Invalid reporter configuration ({source}): {e}") from e
