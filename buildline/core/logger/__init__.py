"""
Logging and Rendering Package.

Centralizes console logging and the default rendering backend used by the
reporter facade.

Available Components:

- Logger: Static utility for stream and file logging initialization.
- ColorFormatter: ANSI-aware console formatter.
- PlainFormatter: ANSI-stripping formatter for plain consoles and log files.
- LogRenderer: Default ``RenderBackendProtocol`` implementation.
- LogStyle: Unified logging style constants.
"""

from .backend import (
    ActivityHandle,
    ActivityHandleProtocol,
    ActivityType,
    LogRenderer,
    RenderBackendProtocol,
)
from .logger import ColorFormatter, Logger, PlainFormatter
from .styles import LogStyle

__all__ = [
    "Logger",
    "ColorFormatter",
    "PlainFormatter",
    "LogStyle",
    "LogRenderer",
    "ActivityHandle",
    "ActivityHandleProtocol",
    "ActivityType",
    "RenderBackendProtocol",
]
