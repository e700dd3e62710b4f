"""
Structured Error Schema.

Declarative shape every reported error is normalized into before it reaches
the rendering backend or telemetry. Construction is best-effort: whatever a
caller passes in, ``construct_error`` yields a ``StructuredError`` whose
``context.source_message`` is non-empty.
"""

from __future__ import annotations

import logging
import traceback
from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ..paths import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)

ErrorLevel = Literal["ERROR", "WARNING", "INFO"]
ErrorCategory = Literal["USER", "SYSTEM", "THIRD_PARTY", "UNKNOWN"]

UNKNOWN_MESSAGE = "Unknown error"


def describe_exception(error: BaseException) -> str:
    """Human message of *error*, falling back to its class name when empty."""
    message = str(error).strip()
    return message or type(error).__name__


class ErrorContext(BaseModel):
    """
    Free-form context bag attached to a structured error.

    ``source_message`` is the only guaranteed key; anything else the caller
    supplies (file paths, plugin names, ...) is kept as extra fields. The
    camelCase ``sourceMessage`` spelling is accepted on input.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    source_message: str = Field(default="", alias="sourceMessage")


class StackFrame(BaseModel):
    """One traceback entry, innermost frame last."""

    model_config = ConfigDict(frozen=True)

    file_name: str
    line_number: int | None = None
    function_name: str | None = None


class StructuredError(BaseModel):
    """
    Normalized error representation.

    Attributes:
        context: Context bag carrying at least ``source_message``.
        error: Native exception that caused the report, if any.
        id: Optional error code for lookup in documentation.
        level: Severity used by the renderer.
        category: Who is at fault (user, system, third party).
        text: Human message rendered on the summary line.
        stack: Frames extracted from ``error.__traceback__``.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, populate_by_name=True)

    context: ErrorContext = Field(default_factory=ErrorContext)
    error: BaseException | None = None
    id: str | None = None
    level: ErrorLevel = "ERROR"
    category: ErrorCategory = "UNKNOWN"
    text: str = ""
    stack: list[StackFrame] = Field(default_factory=list)

    @model_validator(mode="after")
    def fill_derived_fields(self) -> "StructuredError":
        """Guarantee a source message and derive ``text``/``stack`` when missing."""
        if not self.context.source_message.strip():
            if self.text.strip():
                self.context.source_message = self.text
            elif self.error is not None:
                self.context.source_message = describe_exception(self.error)
            else:
                self.context.source_message = UNKNOWN_MESSAGE

        if not self.text:
            self.text = self.context.source_message

        if not self.stack and self.error is not None:
            self.stack = extract_stack(self.error)
        return self

    @property
    def source_message(self) -> str:
        return self.context.source_message

    def to_dict(self) -> dict[str, Any]:
        """JSON-safe representation used by telemetry (native error reduced to its type)."""
        data = self.model_dump(mode="json", exclude={"error", "context"})
        # Context extras are caller objects of any type
        context = {"source_message": self.context.source_message, **(self.context.model_extra or {})}
        data["context"] = _plain(context)
        data["error_type"] = type(self.error).__name__ if self.error is not None else None
        return data


def _plain(value: Any) -> Any:
    """Reduce *value* to JSON-compatible builtins, stringifying anything else."""
    if isinstance(value, Mapping):
        return {str(k): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_plain(v) for v in value]
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)


def extract_stack(error: BaseException) -> list[StackFrame]:
    """
    Convert the traceback of *error* into ``StackFrame`` entries.

    Args:
        error: Exception, raised or not.

    Returns:
        Frames in call order, empty when the exception was never raised.
    """
    if error.__traceback__ is None:
        return []
    return [
        StackFrame(file_name=frame.filename, line_number=frame.lineno, function_name=frame.name)
        for frame in traceback.extract_tb(error.__traceback__)
    ]


def construct_error(details: Mapping[str, Any]) -> StructuredError:
    """
    Build a ``StructuredError`` from a loose details mapping.

    Recognized keys: ``context``, ``error``, ``id``, ``level``, ``category``,
    ``text``. Unknown keys are ignored. Invalid values (for instance an
    unknown ``level``) degrade to a minimal error instead of raising.

    Args:
        details: Details bag produced by the normalizer or passed by a caller.

    Returns:
        StructuredError with a non-empty ``context.source_message``.
    """
    fields: dict[str, Any] = {
        key: details[key]
        for key in ("context", "error", "id", "level", "category", "text")
        if key in details and details[key] is not None
    }

    context = fields.get("context")
    if context is not None and not isinstance(context, (Mapping, ErrorContext)):
        fields["context"] = {"source_message": str(context)}

    error = fields.get("error")
    if error is not None and not isinstance(error, BaseException):
        fields.pop("error")
        fields.setdefault("text", str(error))

    if "level" in fields and isinstance(fields["level"], str):
        fields["level"] = fields["level"].upper()
    if "category" in fields and isinstance(fields["category"], str):
        fields["category"] = fields["category"].upper()

    try:
        return StructuredError.model_validate(fields)
    except ValidationError as e:
        logger.debug(f"Error details did not validate, degrading: {e.error_count()} issue(s)")
        return StructuredError(
            context=ErrorContext(source_message=_best_effort_message(details)),
            error=error if isinstance(error, BaseException) else None,
        )


def _best_effort_message(details: Mapping[str, Any]) -> str:
    context = details.get("context")
    if isinstance(context, Mapping):
        message = context.get("source_message") or context.get("sourceMessage")
        if message:
            return str(message)
    if details.get("text"):
        return str(details["text"])
    error = details.get("error")
    if isinstance(error, BaseException):
        return describe_exception(error)
    return UNKNOWN_MESSAGE
