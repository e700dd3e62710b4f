"""
Reporter Facade Package.

Exposes the ``Reporter`` facade, its activity trackers and the process-wide
default instance.
"""

from .activity import ActivityTimer, ProgressActivity
from .reporter import Reporter, get_reporter, set_reporter

__all__ = [
    "Reporter",
    "ActivityTimer",
    "ProgressActivity",
    "get_reporter",
    "set_reporter",
]
