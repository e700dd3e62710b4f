"""
Semantic type Definitions & Validation Primitives.

Annotated pydantic types shared by the configuration models: path
sanitization, log levels and the command name used for build detection.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Literal

from pydantic import AfterValidator, PlainSerializer


# VALIDATORS
def _sanitize_path(v: str | Path) -> Path:
    """
    Resolve path to absolute form without disk side-effects.

    Args:
        v: Path object or string to sanitize

    Returns:
        Absolute Path with home directory expanded
    """
    return Path(v).expanduser().resolve()


def _normalize_command(v: str | None) -> str | None:
    if v is None:
        return None
    v = v.strip().lower()
    return v or None


# FILESYSTEM
ValidatedPath = Annotated[
    Path,
    AfterValidator(_sanitize_path),
    PlainSerializer(lambda v: str(v), when_used="json", return_type=str),
]

# SYSTEM
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
CommandName = Annotated[str | None, AfterValidator(_normalize_command)]
