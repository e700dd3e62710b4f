"""
Constants and Environment Keys Package.

Centralizes the logger identity, environment variable names and telemetry
event keys shared by every reporter component.

Example:
    >>> from buildline.core.paths import LOGGER_NAME, EXECUTING_COMMAND_ENV
    >>> LOGGER_NAME
    'buildline'
"""

from .constants import (
    ACTIVITY_DURATION,
    BUILD_COMMAND,
    BUILD_PANIC,
    EXECUTING_COMMAND_ENV,
    GENERAL_PANIC,
    LOGGER_NAME,
    NO_COLOR_ENV,
    TELEMETRY_DIR,
    TELEMETRY_DIR_ENV,
    TELEMETRY_DISABLED_ENV,
    VERBOSE_ENV,
    get_telemetry_dir,
)

__all__ = [
    "LOGGER_NAME",
    "EXECUTING_COMMAND_ENV",
    "VERBOSE_ENV",
    "NO_COLOR_ENV",
    "TELEMETRY_DISABLED_ENV",
    "TELEMETRY_DIR_ENV",
    "TELEMETRY_DIR",
    "BUILD_COMMAND",
    "GENERAL_PANIC",
    "BUILD_PANIC",
    "ACTIVITY_DURATION",
    "get_telemetry_dir",
]
