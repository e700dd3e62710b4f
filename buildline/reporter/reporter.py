"""
Reporter Facade.

Single entry point build code talks to for console output. It owns no
rendering state of its own; it glues four collaborators together:

- a rendering backend (``RenderBackendProtocol``) for every printed line
- an ``ErrorFormatter`` for native tracebacks
- a telemetry client for duration metrics and panic events
- a tracer whose spans mirror activities

All collaborators are injectable. Defaults are built from the
``ReporterConfig`` the reporter is constructed with.
"""

from __future__ import annotations

import contextlib
import io
import logging
import os
import sys
import textwrap
import time
from typing import Any, Callable, Iterator, NoReturn

from ..core.config import ReporterConfig
from ..core.errors import ErrorFormatter, NormalizedErrors, iter_errors, normalize_args
from ..core.logger import LogRenderer, LogStyle, RenderBackendProtocol
from ..core.paths import BUILD_COMMAND, BUILD_PANIC, EXECUTING_COMMAND_ENV, GENERAL_PANIC, LOGGER_NAME
from ..telemetry import TelemetryClient, TelemetryClientProtocol
from ..tracing import Span, TracerProtocol, global_tracer
from .activity import ActivityTimer, ProgressActivity

logger = logging.getLogger(LOGGER_NAME)

# Reference point for uptime(); close enough to process start for a CLI
_PROCESS_START = time.perf_counter()


class _LineWriter(io.TextIOBase):
    """Text stream forwarding each complete line to a callback."""

    def __init__(self, emit: Callable[[str], None]) -> None:
        super().__init__()
        self._emit = emit
        self._buffer = ""

    def writable(self) -> bool:
        return True

    def write(self, s: str) -> int:
        self._buffer += s
        while "\n" in self._buffer:
            line, self._buffer = self._buffer.split("\n", 1)
            self._emit(line)
        return len(s)

    def flush(self) -> None:
        if self._buffer:
            line, self._buffer = self._buffer, ""
            self._emit(line)


class Reporter:
    """
    Formats and prints build progress, activities and structured errors.

    Attributes:
        config: Frozen settings currently in effect
        backend: Rendering backend receiving every line
        formatter: Native traceback renderer
        telemetry: Usage/error event recorder
        tracer: Span factory used for activities
        format: ``LogStyle`` palette, for callers building their own lines

    Example:
        >>> reporter = Reporter(ReporterConfig(verbose=True))
        >>> with reporter.activity_timer("bootstrap") as activity:
        ...     activity.set_status("loading plugins")
        >>> reporter.error("Could not read config", OSError("permission denied"))
    """

    format = LogStyle

    def __init__(
        self,
        config: ReporterConfig | None = None,
        backend: RenderBackendProtocol | None = None,
        formatter: ErrorFormatter | None = None,
        telemetry: TelemetryClientProtocol | None = None,
        tracer: TracerProtocol | None = None,
    ) -> None:
        self.config = config or ReporterConfig()
        self.backend = backend or LogRenderer(
            is_verbose=self.config.verbose,
            level=self.config.log_level,
            colors=False if self.config.no_color else None,
            log_dir=self.config.log_dir,
        )
        self.formatter = formatter or ErrorFormatter(colors=self._console_colors())
        self.telemetry = telemetry or TelemetryClient(
            enabled=self.config.telemetry_enabled, sink_dir=self.config.telemetry_dir
        )
        self.tracer = tracer or global_tracer()

    # CONFIGURATION
    def set_verbose(self, is_verbose: bool = True) -> None:
        """Toggle verbose output."""
        self.config = self.config.model_copy(update={"verbose": is_verbose})
        self.backend.set_verbose(is_verbose)

    def set_no_color(self, is_no_color: bool = False) -> None:
        """Turn off colors in console and error output."""
        self.config = self.config.model_copy(update={"no_color": is_no_color})
        self.backend.set_colors(not is_no_color)
        if is_no_color:
            self.formatter.without_colors()
        else:
            self.formatter.with_colors()

    def _console_colors(self) -> bool:
        """Whether the backend paints its console output (unknown backends: follow the config)."""
        enabled = getattr(self.backend, "colors_enabled", None)
        return enabled if isinstance(enabled, bool) else not self.config.no_color

    def set_stage(self, stage: str) -> None:
        """Forward the current build stage to backends that display one."""
        set_stage = getattr(self.backend, "set_stage", None)
        if set_stage is not None:
            set_stage(stage)

    # LOG VERBS
    def success(self, text: str) -> None:
        self.backend.success(text)

    def verbose(self, text: str) -> None:
        self.backend.verbose(text)

    def info(self, text: str) -> None:
        self.backend.info(text)

    def warn(self, text: str) -> None:
        self.backend.warn(text)

    def log(self, text: str) -> None:
        self.backend.log(text)

    def uptime(self, prefix: str) -> None:
        """Log milliseconds elapsed since the reporter module was loaded."""
        self.verbose(f"{prefix}: {(time.perf_counter() - _PROCESS_START) * 1000:.3f}ms")

    @staticmethod
    def strip_indent(text: str) -> str:
        """Remove common leading indentation and surrounding blank lines."""
        return textwrap.dedent(text).strip("\n")

    # ERRORS
    def error(self, *args: Any) -> NormalizedErrors:
        """
        Normalize and report an error without stopping the process.

        Accepted shapes: ``error(message)``, ``error(exception)``,
        ``error([items])``, ``error({details})``, ``error(prefix, exception)``
        and ``error(prefix, [exceptions])``.

        Returns:
            The ``StructuredError``, or a list of them for list inputs.
        """
        normalized = normalize_args(*args)
        for structured_error in iter_errors(normalized):
            self.backend.error(structured_error)
            if structured_error.error is not None:
                self.log(self.formatter.render(structured_error.error))
        return normalized

    def panic(self, *args: Any) -> NoReturn:
        """Report the error, record it and exit with status 1."""
        errors = self.error(*args)
        try:
            self.telemetry.track_error(GENERAL_PANIC, error=errors)
        finally:
            sys.exit(1)

    def panic_on_build(self, *args: Any) -> NormalizedErrors:
        """
        Report the error; exit with status 1 only during a ``build`` command.

        Returns:
            The normalized error(s) when the process keeps running.
        """
        errors = self.error(*args)
        try:
            self.telemetry.track_error(BUILD_PANIC, error=errors)
        finally:
            if self.executing_command == BUILD_COMMAND:
                sys.exit(1)
        return errors

    @property
    def executing_command(self) -> str | None:
        """Current CLI command: environment first, then configuration."""
        command = os.getenv(EXECUTING_COMMAND_ENV) or self.config.executing_command
        return command.strip().lower() if command else None

    # ACTIVITIES
    def activity_timer(self, name: str, parent_span: Span | None = None) -> ActivityTimer:
        """
        Create a spinner activity.

        Args:
            name: Activity name, also the span name and metric key.
            parent_span: Span to nest this activity's span under.

        Returns:
            An idle ``ActivityTimer``; call ``start()`` to begin.
        """
        span = self.tracer.start_span(name, child_of=parent_span)
        handle = self.backend.create_activity(type="spinner", id=name, status="")
        return ActivityTimer(name, handle, span, self.telemetry)

    def create_progress(
        self,
        name: str,
        total: int | None = None,
        start: int = 0,
        parent_span: Span | None = None,
    ) -> ProgressActivity:
        """
        Create a progress-bar activity.

        Args:
            name: Activity name, also the span name.
            total: Items to process (may be assigned later).
            start: Initial count.
            parent_span: Span to nest this activity's span under.

        Returns:
            An idle ``ProgressActivity``.
        """
        span = self.tracer.start_span(name, child_of=parent_span)
        handle = self.backend.create_activity(type="progress", id=name, current=start, total=total)
        return ProgressActivity(name, handle, span, total=total, start=start)

    # CONSOLE
    @contextlib.contextmanager
    def console_redirect(self) -> Iterator[None]:
        """
        Route ``print`` output (stdout and stderr) through ``log`` for the block.

        Example:
            >>> with reporter.console_redirect():
            ...     third_party_plugin.run()
        """
        writer = _LineWriter(self.log)
        try:
            with contextlib.redirect_stdout(writer), contextlib.redirect_stderr(writer):
                yield
        finally:
            writer.flush()


# PROCESS-WIDE DEFAULT
_default_reporter: Reporter | None = None


def get_reporter() -> Reporter:
    """Return the process-wide reporter, creating it from the environment on first use."""
    global _default_reporter
    if _default_reporter is None:
        _default_reporter = Reporter(ReporterConfig.from_env())
        logger.debug("Default reporter initialized from environment")
    return _default_reporter


def set_reporter(reporter: Reporter | None) -> None:
    """Replace (or with None, reset) the process-wide reporter."""
    global _default_reporter
    _default_reporter = reporter
