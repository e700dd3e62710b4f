"""
Configuration Package.

Pydantic manifests and semantic types for reporter settings.
"""

from .reporter_config import ReporterConfig
from .types import CommandName, LogLevel, ValidatedPath

__all__ = [
    "ReporterConfig",
    "CommandName",
    "LogLevel",
    "ValidatedPath",
]
