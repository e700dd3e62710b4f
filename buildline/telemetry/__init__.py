"""
Telemetry Package.

Anonymous usage and error events recorded to a local JSONL sink.
"""

from .client import SINK_FILENAME, TelemetryClient, TelemetryClientProtocol

__all__ = [
    "SINK_FILENAME",
    "TelemetryClient",
    "TelemetryClientProtocol",
]
