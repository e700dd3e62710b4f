"""
Error Normalization.

Turns the loose argument shapes accepted by ``Reporter.error`` into
``StructuredError`` values in two steps:

1. ``classify(*args)`` maps positional arguments to one variant of the
   ``ErrorInput`` union: ``Message``, ``NativeError``, ``ErrorList`` or
   ``ContextObject``.
2. ``normalize(variant)`` handles each variant and returns a single
   ``StructuredError`` or an ordered list of them.

Priority of the two-argument forms mirrors what callers have historically
relied on: ``(prefix, [errors])`` fans out, ``(prefix, error)`` wraps.
User content never raises here; only a wrong argument count does.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Union

from .structured import StructuredError, construct_error, describe_exception


# INPUT VARIANTS
@dataclass(frozen=True)
class Message:
    """Plain message, optionally prefixed."""

    text: str
    prefix: str | None = None


@dataclass(frozen=True)
class NativeError:
    """Native exception, optionally prefixed with a caller message."""

    error: BaseException
    prefix: str | None = None


@dataclass(frozen=True)
class ErrorList:
    """Sequence of raw error inputs, each normalized independently."""

    items: tuple[Any, ...]
    prefix: str | None = None


@dataclass(frozen=True)
class ContextObject:
    """Pre-built details bag passed through to ``construct_error``."""

    details: Mapping[str, Any] = field(default_factory=dict)


ErrorInput = Union[Message, NativeError, ErrorList, ContextObject]

# A list result mirrors the input list, nested lists included
NormalizedErrors = Union[StructuredError, list[Any]]


# CLASSIFICATION
def classify(*args: Any) -> ErrorInput:
    """
    Map ``error(...)`` positional arguments to an ``ErrorInput`` variant.

    Args:
        *args: One ``(value)`` or two ``(prefix, value)`` arguments.

    Returns:
        The matching variant.

    Raises:
        TypeError: If called with zero or more than two arguments.
    """
    if len(args) == 2:
        prefix, value = args
        prefix = "" if prefix is None else str(prefix)
        if isinstance(value, (list, tuple)):
            return ErrorList(items=tuple(value), prefix=prefix)
        if isinstance(value, BaseException):
            return NativeError(error=value, prefix=prefix)
        return Message(text="" if value is None else str(value), prefix=prefix)

    if len(args) == 1:
        (value,) = args
        if isinstance(value, BaseException):
            return NativeError(error=value)
        if isinstance(value, (list, tuple)):
            return ErrorList(items=tuple(value))
        if isinstance(value, Mapping):
            return ContextObject(details=value)
        if isinstance(value, StructuredError):
            return ContextObject(details=dict(value))
        return Message(text="" if value is None else str(value))

    raise TypeError(f"error() takes 1 or 2 positional arguments but {len(args)} were given")


# NORMALIZATION
def _join(prefix: str | None, message: str) -> str:
    if prefix is None:
        return message
    return f"{prefix} {message}".strip()


def normalize(variant: ErrorInput) -> NormalizedErrors:
    """
    Convert an ``ErrorInput`` variant into structured error(s).

    Args:
        variant: Output of ``classify``.

    Returns:
        A ``StructuredError`` for scalar inputs, an ordered list for
        ``ErrorList``.
    """
    if isinstance(variant, ErrorList):
        # Nested lists stay nested: one result slot per input item
        return [
            normalize(classify(item) if variant.prefix is None else classify(variant.prefix, item))
            for item in variant.items
        ]

    if isinstance(variant, NativeError):
        message = _join(variant.prefix, describe_exception(variant.error))
        return construct_error({"error": variant.error, "context": {"source_message": message}})

    if isinstance(variant, ContextObject):
        return construct_error(variant.details)

    if isinstance(variant, Message):
        return construct_error({"context": {"source_message": _join(variant.prefix, variant.text)}})

    raise TypeError(f"Unsupported error input: {type(variant).__name__}")  # pragma: no cover


def normalize_args(*args: Any) -> NormalizedErrors:
    """Shortcut for ``normalize(classify(*args))``."""
    return normalize(classify(*args))


def iter_errors(normalized: NormalizedErrors) -> list[StructuredError]:
    """Flatten a (possibly nested) normalization result into a list."""
    if not isinstance(normalized, list):
        return [normalized]
    flat: list[StructuredError] = []
    for item in normalized:
        flat.extend(iter_errors(item))
    return flat
