"""
Core Utilities Package

This package exposes the essential components for configuration, logging,
rendering, error normalization and project constants.
"""

# Configuration
from .config import ReporterConfig

# Structured Errors
from .errors import (
    ErrorContext,
    ErrorFormatter,
    StackFrame,
    StructuredError,
    classify,
    construct_error,
    normalize,
    normalize_args,
)

# Input/Output Utilities
from .io import load_config_from_yaml, save_config_as_yaml

# Logging & Rendering
from .logger import ColorFormatter, Logger, LogRenderer, LogStyle, RenderBackendProtocol

# Constants
from .paths import (
    BUILD_COMMAND,
    EXECUTING_COMMAND_ENV,
    LOGGER_NAME,
    TELEMETRY_DIR,
)

__all__ = [
    # Configuration
    "ReporterConfig",
    # Constants
    "LOGGER_NAME",
    "BUILD_COMMAND",
    "EXECUTING_COMMAND_ENV",
    "TELEMETRY_DIR",
    # Errors
    "StructuredError",
    "ErrorContext",
    "StackFrame",
    "ErrorFormatter",
    "classify",
    "normalize",
    "normalize_args",
    "construct_error",
    # Logging
    "Logger",
    "ColorFormatter",
    "LogRenderer",
    "LogStyle",
    "RenderBackendProtocol",
    # I/O
    "save_config_as_yaml",
    "load_config_from_yaml",
]
