"""
Tracing Package.

Provides the span/tracer pair the reporter opens alongside every activity.
"""

from .tracer import Span, SpanProtocol, Tracer, TracerProtocol, global_tracer, set_global_tracer

__all__ = [
    "Span",
    "SpanProtocol",
    "Tracer",
    "TracerProtocol",
    "global_tracer",
    "set_global_tracer",
]
