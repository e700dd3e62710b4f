"""
Project-wide Constants and Environment Keys.

Single source of truth for the logger identity, the environment variables
read by the reporter, and the default location of the telemetry sink.

Module Attributes:
    LOGGER_NAME: Global logger identity used by all modules.
    EXECUTING_COMMAND_ENV: Variable naming the CLI command being executed.
    BUILD_COMMAND: Command name that turns ``panic_on_build`` fatal.
    TELEMETRY_DIR: Default directory for the JSONL telemetry sink.
"""

import os
from pathlib import Path
from typing import Final

# Global logger identity used by all modules to ensure log synchronization
LOGGER_NAME: Final[str] = "buildline"

# ENVIRONMENT KEYS
EXECUTING_COMMAND_ENV: Final[str] = "BUILDLINE_EXECUTING_COMMAND"
VERBOSE_ENV: Final[str] = "BUILDLINE_VERBOSE"
NO_COLOR_ENV: Final[str] = "NO_COLOR"
TELEMETRY_DISABLED_ENV: Final[str] = "BUILDLINE_TELEMETRY_DISABLED"
TELEMETRY_DIR_ENV: Final[str] = "BUILDLINE_TELEMETRY_DIR"

# Invocation that makes panic_on_build terminate the process
BUILD_COMMAND: Final[str] = "build"

# TELEMETRY EVENTS
GENERAL_PANIC: Final[str] = "GENERAL_PANIC"
BUILD_PANIC: Final[str] = "BUILD_PANIC"
ACTIVITY_DURATION: Final[str] = "ACTIVITY_DURATION"


def get_telemetry_dir() -> Path:
    """
    Resolve the directory holding the telemetry event log.

    Honors ``BUILDLINE_TELEMETRY_DIR`` when set, otherwise falls back to
    ``~/.buildline/telemetry``.

    Returns:
        Absolute Path to the telemetry directory (not created).
    """
    override = os.getenv(TELEMETRY_DIR_ENV)
    if override:
        return Path(override).expanduser().resolve()
    return (Path.home() / ".buildline" / "telemetry").resolve()


TELEMETRY_DIR: Final[Path] = get_telemetry_dir()
