"""
Shared fixtures for the buildline test suite.

Reporters built here write into an in-memory stream with colors disabled,
use a mocked telemetry client and a tracer whose spans land in an
in-memory exporter.
"""

import io
import uuid
from unittest.mock import MagicMock

import pytest
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from buildline.core import ErrorFormatter, LogRenderer, ReporterConfig
from buildline.core.paths import EXECUTING_COMMAND_ENV, NO_COLOR_ENV, VERBOSE_ENV
from buildline.reporter import Reporter, set_reporter
from buildline.tracing import Tracer


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast, isolated tests")
    config.addinivalue_line("markers", "integration: tests touching the filesystem or processes")


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep host environment variables from leaking into reporter behavior."""
    for key in (EXECUTING_COMMAND_ENV, NO_COLOR_ENV, VERBOSE_ENV, "DEBUG"):
        monkeypatch.delenv(key, raising=False)
    yield
    set_reporter(None)


@pytest.fixture
def stream():
    return io.StringIO()


@pytest.fixture
def renderer(stream):
    """LogRenderer bound to a unique logger name and an in-memory stream."""
    return LogRenderer(name=f"buildline-test-{uuid.uuid4().hex[:8]}", stream=stream, colors=False)


@pytest.fixture
def telemetry():
    return MagicMock()


@pytest.fixture
def span_exporter():
    return InMemorySpanExporter()


@pytest.fixture
def tracer(span_exporter):
    """Tracer on a private SDK provider exporting finished spans to memory."""
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(span_exporter))
    return Tracer(provider)


@pytest.fixture
def reporter(renderer, telemetry, tracer, tmp_path):
    config = ReporterConfig(telemetry_enabled=False, telemetry_dir=tmp_path / "telemetry")
    return Reporter(
        config,
        backend=renderer,
        formatter=ErrorFormatter(colors=True),
        telemetry=telemetry,
        tracer=tracer,
    )
