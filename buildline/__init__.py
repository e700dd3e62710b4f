"""
buildline: status and error reporting for command-line build tools.

Top-level convenience API re-exporting the most commonly used components
from subpackages, so build code and the ``buildline`` CLI can write:

    from buildline import Reporter, ReporterConfig, get_reporter
"""

from importlib.metadata import version as _pkg_version

__version__ = _pkg_version("buildline")

from .core import (
    LogStyle,
    ReporterConfig,
    StructuredError,
)
from .exceptions import ActivityStateError, BuildlineConfigError, BuildlineError
from .reporter import (
    ActivityTimer,
    ProgressActivity,
    Reporter,
    get_reporter,
    set_reporter,
)
from .telemetry import TelemetryClient
from .tracing import Span, Tracer

__all__ = [
    "__version__",
    # Core
    "ReporterConfig",
    "StructuredError",
    "LogStyle",
    # Reporter
    "Reporter",
    "ActivityTimer",
    "ProgressActivity",
    "get_reporter",
    "set_reporter",
    # Collaborators
    "TelemetryClient",
    "Tracer",
    "Span",
    # Exceptions
    "BuildlineError",
    "BuildlineConfigError",
    "ActivityStateError",
]
