"""
Activity Trackers.

Two lifecycles share one shape (``start`` / ``set_status`` / terminal call /
``span``) but deliberately differ in their details:

+-------------------+----------------------------+---------------------------+
|                   | ``ActivityTimer`` (spinner)| ``ProgressActivity``      |
+===================+============================+===========================+
| repeated start()  | resets the start time      | ignored after the first   |
| terminal call     | ``end()``                  | ``done()``                |
| duration metric   | ``ACTIVITY_DURATION``      | none                      |
+-------------------+----------------------------+---------------------------+

Each tracker opens a tracing span on creation and finishes it exactly once
in its terminal call. A second terminal call raises ``ActivityStateError``.
"""

from __future__ import annotations

import time
from typing import Any

from ..core.logger import ActivityHandleProtocol
from ..core.paths import ACTIVITY_DURATION
from ..exceptions import ActivityStateError
from ..telemetry import TelemetryClientProtocol
from ..tracing import SpanProtocol


class _BaseActivity:
    """Shared state of spinner and progress trackers."""

    kind: str = ""

    def __init__(self, name: str, handle: ActivityHandleProtocol, span: SpanProtocol) -> None:
        self.name = name
        self.span = span
        self._handle = handle
        self.start_time: float | None = None
        self.is_done = False

    @property
    def id(self) -> str:
        return getattr(self._handle, "id", self.name)

    def set_status(self, status: str) -> None:
        """Push a new status line; callable any number of times before finishing."""
        self._handle.update({"status": status})

    def _finish(self) -> None:
        if self.is_done:
            raise ActivityStateError(f"Activity '{self.name}' has already finished")
        self.is_done = True
        self.span.finish()
        self._handle.done()

    def __repr__(self) -> str:
        state = "done" if self.is_done else ("running" if self.start_time is not None else "idle")
        return f"{type(self).__name__}(name={self.name!r}, state={state})"


class ActivityTimer(_BaseActivity):
    """
    Spinner-style activity that reports its duration when it ends.

    Example:
        >>> activity = reporter.activity_timer("compile assets")
        >>> activity.start()
        >>> activity.set_status("12 files")
        >>> activity.end()
    """

    kind = "spinner"

    def __init__(
        self,
        name: str,
        handle: ActivityHandleProtocol,
        span: SpanProtocol,
        telemetry: TelemetryClientProtocol,
    ) -> None:
        super().__init__(name, handle, span)
        self._telemetry = telemetry

    def start(self) -> None:
        """Record the start time and notify the backend. Calling again restarts the clock."""
        self.start_time = time.perf_counter()
        self._handle.update({"start_time": self.start_time})

    @property
    def elapsed_ms(self) -> int:
        """Rounded milliseconds since ``start()``; measured from 0 if never started."""
        return round((time.perf_counter() - (self.start_time or 0.0)) * 1000)

    def end(self) -> None:
        """Emit the duration metric, finish the span and close the activity."""
        if self.is_done:
            raise ActivityStateError(f"Activity '{self.name}' has already finished")
        self._telemetry.track_cli(ACTIVITY_DURATION, name=self.name, duration=self.elapsed_ms)
        self._finish()

    def __enter__(self) -> "ActivityTimer":
        self.start()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if not self.is_done:
            self.end()


class ProgressActivity(_BaseActivity):
    """
    Progress-bar activity counting ticks towards ``total``.

    ``tick()`` has no upper bound: overshooting ``total`` is rendered as is.

    Example:
        >>> progress = reporter.create_progress("resize images", total=40)
        >>> progress.start()
        >>> for image in images:
        ...     resize(image)
        ...     progress.tick()
        >>> progress.done()
    """

    kind = "progress"

    def __init__(
        self,
        name: str,
        handle: ActivityHandleProtocol,
        span: SpanProtocol,
        total: int | None,
        start: int = 0,
    ) -> None:
        super().__init__(name, handle, span)
        self._total = total
        self.current = start
        self._has_started = False

    @property
    def total(self) -> int | None:
        return self._total

    @total.setter
    def total(self, value: int | None) -> None:
        self._total = value
        self._handle.update({"total": value})

    def start(self) -> None:
        """Record the start time once; later calls are ignored."""
        if self._has_started:
            return
        self._has_started = True
        self.start_time = time.perf_counter()
        self._handle.update({"start_time": self.start_time})

    def tick(self, increment: int = 1) -> None:
        self.current += increment
        self._handle.update({"current": self.current})

    def done(self) -> None:
        """Finish the span and close the activity (no duration metric)."""
        self._finish()

    def __enter__(self) -> "ProgressActivity":
        self.start()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if not self.is_done:
            self.done()
