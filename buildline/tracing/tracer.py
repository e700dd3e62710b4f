"""
OpenTelemetry Tracing Adapter.

Thin wrapper exposing the ``start_span(name, child_of=...)`` / ``finish()``
surface the reporter relies on over an OpenTelemetry tracer. ``child_of``
becomes the parent context of the new span and ``finish()`` ends it.

Where spans go is decided by the installed ``TracerProvider``: with only
``opentelemetry-api`` configured they are no-ops, an application (or a test)
installs an SDK provider with its own span processors and exporters.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from opentelemetry import trace
from opentelemetry.context import Context

from ..core.paths import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)

INSTRUMENTATION_NAME = "buildline"


class SpanProtocol(Protocol):
    def finish(self) -> None: ...  # pragma: no cover


class TracerProtocol(Protocol):
    def start_span(self, name: str, child_of: Any = None) -> SpanProtocol: ...  # pragma: no cover


class Span:
    """
    Reporter-facing handle around an OpenTelemetry span.

    Attributes:
        name: Operation name (the activity name for reporter spans)
        otel_span: Underlying ``opentelemetry.trace.Span``
        parent_id: Hex span id of the parent, None for root spans
    """

    def __init__(self, name: str, otel_span: trace.Span, parent_id: str | None = None) -> None:
        self.name = name
        self.otel_span = otel_span
        self.parent_id = parent_id
        self._finished = False

    @property
    def trace_id(self) -> str:
        return trace.format_trace_id(self.otel_span.get_span_context().trace_id)

    @property
    def span_id(self) -> str:
        return trace.format_span_id(self.otel_span.get_span_context().span_id)

    @property
    def finished(self) -> bool:
        return self._finished

    def set_tag(self, key: str, value: Any) -> "Span":
        self.otel_span.set_attribute(key, value)
        return self

    def finish(self) -> None:
        """End the underlying span; later calls are ignored."""
        if self._finished:
            logger.debug(f"span '{self.name}' already finished")
            return
        self._finished = True
        self.otel_span.end()

    def __repr__(self) -> str:
        return f"Span(name={self.name!r}, span_id={self.span_id}, finished={self._finished})"


class Tracer:
    """
    Span factory backed by an OpenTelemetry tracer.

    Args:
        provider: ``TracerProvider`` to draw the tracer from; the globally
            registered provider when omitted.

    Example:
        >>> tracer = Tracer()
        >>> parent = tracer.start_span("build")
        >>> child = tracer.start_span("compile", child_of=parent)
        >>> child.finish(); parent.finish()
    """

    def __init__(self, provider: trace.TracerProvider | None = None) -> None:
        self._tracer = trace.get_tracer(INSTRUMENTATION_NAME, tracer_provider=provider)

    def start_span(self, name: str, child_of: Span | None = None, **tags: Any) -> Span:
        """
        Open a span, optionally as a child of *child_of*.

        Args:
            name: Operation name
            child_of: Parent span; None opens a new trace
            **tags: Initial span attributes

        Returns:
            The running span.
        """
        if child_of is None:
            # Empty context: never pick up an ambient current span
            otel_span = self._tracer.start_span(name, context=Context(), attributes=tags or None)
            return Span(name, otel_span)

        context = trace.set_span_in_context(child_of.otel_span)
        otel_span = self._tracer.start_span(name, context=context, attributes=tags or None)
        return Span(name, otel_span, parent_id=child_of.span_id)


_global_tracer: Tracer | None = None


def global_tracer() -> Tracer:
    """Process-wide default tracer, bound to the global ``TracerProvider``."""
    global _global_tracer
    if _global_tracer is None:
        _global_tracer = Tracer()
    return _global_tracer


def set_global_tracer(tracer: Tracer | None) -> None:
    """Replace (or with None, reset) the process-wide tracer."""
    global _global_tracer
    _global_tracer = tracer
