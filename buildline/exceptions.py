"""
buildline Exception Hierarchy.

BuildlineError (base, Exception)
├── BuildlineConfigError(BuildlineError, ValueError)   ← config validation
└── ActivityStateError(BuildlineError, RuntimeError)   ← activity lifecycle misuse

User-supplied error content is never raised: it is normalized into a
``StructuredError``. These exceptions signal programming or configuration
mistakes only.
"""


class BuildlineError(Exception):
    """Base exception for all buildline errors."""


class BuildlineConfigError(BuildlineError, ValueError):
    """Configuration validation error (backward-compatible with ValueError)."""


class ActivityStateError(BuildlineError, RuntimeError):
    """An activity was asked to finish after it already finished."""
