"""
Anonymous Usage Telemetry.

Records CLI usage events (activity durations, panics) as JSON lines in a
local sink. Events carry a random per-process session id and nothing that
identifies the user or machine. Transport to a collection service is out of
scope; whatever ships the file picks it up from ``TELEMETRY_DIR``.

Telemetry must never break a build: sink failures are logged at debug level
and dropped.
"""

from __future__ import annotations

import json
import logging
import threading
import uuid
from collections.abc import Mapping
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Protocol

from ..core.paths import LOGGER_NAME, TELEMETRY_DIR

logger = logging.getLogger(LOGGER_NAME)

SINK_FILENAME = "events.jsonl"


class TelemetryClientProtocol(Protocol):
    def track_error(self, kind: str, error: Any = None) -> None: ...  # pragma: no cover

    def track_cli(self, event: str, **payload: Any) -> None: ...  # pragma: no cover


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _to_jsonable(value: Any) -> Any:
    """Reduce structured errors, exceptions and containers to JSON-safe data."""
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, BaseException):
        return {"error_type": type(value).__name__, "message": str(value)}
    if isinstance(value, Mapping):
        return {str(k): _to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(v) for v in value]
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)


class _JsonlSink:
    def __init__(self, path: Path) -> None:
        self._path = path
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def write(self, event: Mapping[str, Any]) -> None:
        payload = json.dumps(event, ensure_ascii=False)
        with self._lock:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("a", encoding="utf-8") as handle:
                handle.write(payload + "\n")


class TelemetryClient:
    """
    Local JSONL telemetry recorder.

    Attributes:
        enabled: When False every call is a no-op
        session_id: Random id shared by all events of this process
        sink_path: File events are appended to

    Example:
        >>> client = TelemetryClient(sink_dir=Path("/tmp/telemetry"))
        >>> client.track_cli("ACTIVITY_DURATION", name="compile", duration=120)
    """

    def __init__(self, enabled: bool = True, sink_dir: Path | None = None) -> None:
        self.enabled = enabled
        self.session_id = uuid.uuid4().hex
        self._sink = _JsonlSink((sink_dir or TELEMETRY_DIR) / SINK_FILENAME)

    @property
    def sink_path(self) -> Path:
        return self._sink.path

    def track_error(self, kind: str, error: Any = None) -> None:
        """
        Record an error event.

        Args:
            kind: Event kind, e.g. ``GENERAL_PANIC`` or ``BUILD_PANIC``
            error: StructuredError, list of them, or any JSON-reducible value
        """
        self._emit(kind, {"error": _to_jsonable(error)}, category="error")

    def track_cli(self, event: str, **payload: Any) -> None:
        """
        Record a CLI usage event.

        Args:
            event: Event name, e.g. ``ACTIVITY_DURATION``
            **payload: Event fields (``name``, ``duration``, ...)
        """
        self._emit(event, _to_jsonable(payload), category="cli")

    def _emit(self, event_type: str, payload: Mapping[str, Any], category: str) -> None:
        if not self.enabled:
            return
        event = {
            "event_type": event_type,
            "category": category,
            "timestamp": _now_iso(),
            "session_id": self.session_id,
            "payload": dict(payload),
        }
        try:
            self._sink.write(event)
        except OSError as e:
            logger.debug(f"telemetry sink unavailable ({self.sink_path}): {e}")
        except (TypeError, ValueError) as e:
            logger.debug(f"telemetry event {event_type} dropped, not serializable: {e}")
