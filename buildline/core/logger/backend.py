"""
Rendering Backend.

Default terminal renderer for the reporter facade. Activities and log
verbs are turned into plain log lines on the ``buildline`` logger; any
object satisfying ``RenderBackendProtocol`` can replace it (for instance
a full-screen progress UI).

The backend owns all rendering state: live activities are keyed by id,
interleaved updates from several activities only touch their own handle.
"""

from __future__ import annotations

import itertools
import logging
import time
from typing import IO, TYPE_CHECKING, Any, Literal, Protocol

from ..paths import LOGGER_NAME
from .logger import Logger
from .styles import LogStyle

if TYPE_CHECKING:  # pragma: no cover
    from ..errors import StructuredError

ActivityType = Literal["spinner", "progress"]


# PROTOCOLS
class ActivityHandleProtocol(Protocol):
    """Backend-side handle for one live activity."""

    def update(self, partial: dict[str, Any]) -> None:
        """Merge *partial* into the activity state and re-render."""
        ...  # pragma: no cover

    def done(self) -> None:
        """Mark the activity complete."""
        ...  # pragma: no cover


class RenderBackendProtocol(Protocol):
    """
    Protocol defining the rendering backend interface.

    Enables dependency injection and mocking in tests while keeping the
    facade independent of how lines reach the terminal.
    """

    def create_activity(
        self, type: ActivityType, id: str, **fields: Any
    ) -> ActivityHandleProtocol: ...  # pragma: no cover

    def success(self, text: str) -> None: ...  # pragma: no cover

    def verbose(self, text: str) -> None: ...  # pragma: no cover

    def info(self, text: str) -> None: ...  # pragma: no cover

    def warn(self, text: str) -> None: ...  # pragma: no cover

    def log(self, text: str) -> None: ...  # pragma: no cover

    def error(self, structured_error: "StructuredError") -> None: ...  # pragma: no cover

    def set_verbose(self, is_verbose: bool) -> None: ...  # pragma: no cover

    def set_colors(self, enabled: bool) -> None: ...  # pragma: no cover


# ACTIVITY HANDLE
class ActivityHandle:
    """
    Mutable render state of a single spinner or progress bar.

    Attributes:
        id: Unique id among live activities
        type: ``spinner`` or ``progress``
        status: Latest status text
        start_time: perf_counter timestamp pushed by ``start()``
        current: Progress count (progress only)
        total: Progress target (progress only)
        is_done: Whether ``done()`` was called
    """

    # Progress lines are emitted at INFO every time another tenth is crossed
    _PROGRESS_STEPS = 10

    def __init__(self, backend: "LogRenderer", type: ActivityType, id: str, **fields: Any) -> None:
        self._backend = backend
        self.id = id
        self.type = type
        self.status: str = fields.get("status", "") or ""
        self.start_time: float | None = fields.get("start_time")
        self.current: int = fields.get("current", 0) or 0
        self.total: int | None = fields.get("total")
        self.is_done = False
        self._last_bucket = -1

    @property
    def elapsed(self) -> float:
        """Seconds since ``start_time`` (0.0 when never started)."""
        if self.start_time is None:
            return 0.0
        return time.perf_counter() - self.start_time

    @property
    def ratio(self) -> str:
        total = "?" if self.total is None else str(self.total)
        return f"{self.current}/{total}"

    def update(self, partial: dict[str, Any]) -> None:
        if self.is_done:
            return

        if "start_time" in partial:
            self.start_time = partial["start_time"]
            if self.type == "spinner":
                self._backend.info(f"{LogStyle.SPINNER} {self.id}")
            else:
                self._backend.info(f"{LogStyle.SPINNER} {self.id} {self.ratio}")

        if "status" in partial:
            self.status = partial["status"] or ""
            if self.status:
                self._backend.info(f"{LogStyle.INDENT}{LogStyle.ARROW} {self.id}: {self.status}")

        if "total" in partial:
            self.total = partial["total"]
            self._backend.verbose(f"{self.id} total set to {self.total}")

        if "current" in partial:
            self.current = partial["current"]
            self._render_progress()

    def _render_progress(self) -> None:
        if not self.total or self.total <= 0:
            self._backend.verbose(f"{self.id} {self.ratio}")
            return

        bucket = min(self.current * self._PROGRESS_STEPS // self.total, self._PROGRESS_STEPS)
        if bucket != self._last_bucket:
            self._last_bucket = bucket
            percent = 100 * self.current / self.total
            self._backend.info(f"{LogStyle.INDENT}{self.id} {self.ratio} ({percent:.0f}%)")
        else:
            self._backend.verbose(f"{self.id} {self.ratio}")

    def done(self) -> None:
        if self.is_done:
            return
        self.is_done = True

        parts = [f"{LogStyle.SUCCESS} {self.id}"]
        if self.type == "progress":
            parts.append(self.ratio)
        parts.append(f"- {self.elapsed:.3f}s")
        if self.status:
            parts.append(f"- {self.status}")
        self._backend.success(" ".join(parts))
        self._backend.release(self)


# LOG RENDERER
class LogRenderer:
    """
    ``logging``-backed implementation of ``RenderBackendProtocol``.

    Verbose lines are emitted at DEBUG, so ``set_verbose`` simply moves the
    logger level between DEBUG and the base ``level``. ``set_colors`` swaps
    the console formatter in place.

    Each renderer writes to its own child of the ``buildline`` logger unless
    a name is given, so several renderers never steal each other's stream.

    Attributes:
        name: Logger name the renderer writes to
        is_verbose: Whether verbose lines are shown
        level: Base level name used when not verbose
        colors: Color policy forwarded to ``Logger`` (None = auto-detect)
        stage: Last stage name received through ``set_stage``
    """

    _instances = itertools.count(1)

    def __init__(
        self,
        name: str | None = None,
        stream: IO[str] | None = None,
        is_verbose: bool = False,
        colors: bool | None = None,
        log_dir: Any = None,
        level: str = "INFO",
    ) -> None:
        self.name = name or f"{LOGGER_NAME}.renderer-{next(self._instances)}"
        self.stream = stream
        self.is_verbose = is_verbose
        self.level = level
        self.colors = colors
        self.log_dir = log_dir
        self.stage: str | None = None
        self._activities: dict[str, ActivityHandle] = {}
        self._log = self._configure()

    def _configure(self) -> logging.Logger:
        return Logger.setup(
            name=self.name,
            log_dir=self.log_dir,
            level="DEBUG" if self.is_verbose else self.level,
            colors=self.colors,
            stream=self.stream,
        )

    @property
    def activities(self) -> dict[str, ActivityHandle]:
        """Live activities keyed by id (read-only view)."""
        return dict(self._activities)

    def _unique_id(self, id: str) -> str:
        if id not in self._activities:
            return id
        n = 2
        while f"{id}-{n}" in self._activities:
            n += 1
        return f"{id}-{n}"

    def create_activity(self, type: ActivityType, id: str, **fields: Any) -> ActivityHandle:
        """
        Register a new live activity.

        Args:
            type: ``spinner`` or ``progress``
            id: Requested id; suffixed with ``-N`` while another live
                activity holds the same id
            **fields: Initial state (status, current, total, start_time)

        Returns:
            The backend handle the tracker pushes updates to.
        """
        handle = ActivityHandle(self, type, self._unique_id(id), **fields)
        self._activities[handle.id] = handle
        self._log.debug(f"{handle.id} {type} created")
        return handle

    def release(self, handle: ActivityHandle) -> None:
        self._activities.pop(handle.id, None)

    # LOG VERBS
    def success(self, text: str) -> None:
        self._log.info(text)

    def verbose(self, text: str) -> None:
        self._log.debug(text)

    def info(self, text: str) -> None:
        self._log.info(text)

    def warn(self, text: str) -> None:
        self._log.warning(f"{LogStyle.WARNING} {text}")

    def log(self, text: str) -> None:
        self._log.info(text)

    def error(self, structured_error: "StructuredError") -> None:
        """Render the one-line summary of a normalized error."""
        header = structured_error.level.lower()
        if structured_error.id:
            header = f"{header} #{structured_error.id}"
        line = f"{LogStyle.FAILURE} {header} {structured_error.text}"
        if structured_error.level == "WARNING":
            self._log.warning(line)
        elif structured_error.level == "INFO":
            self._log.info(line)
        else:
            self._log.error(line)

    # CONFIGURATION
    @property
    def colors_enabled(self) -> bool:
        """Whether console lines are currently painted."""
        return Logger.uses_colors(self._log)

    def set_verbose(self, is_verbose: bool = True) -> None:
        self.is_verbose = is_verbose
        base = getattr(logging, self.level.upper(), logging.INFO)
        self._log.setLevel(logging.DEBUG if is_verbose else base)

    def set_colors(self, enabled: bool) -> None:
        self.colors = enabled
        Logger.recolor(self._log, enabled)

    def set_stage(self, stage: str) -> None:
        self.stage = stage
        self._log.debug(f"[{stage}]")
