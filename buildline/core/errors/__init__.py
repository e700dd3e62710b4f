"""
Structured Error Package.

Normalizes heterogeneous error inputs (messages, exceptions, lists, context
bags) into ``StructuredError`` values and renders native exceptions.
"""

from .formatter import ErrorFormatter
from .normalizer import (
    ContextObject,
    ErrorInput,
    ErrorList,
    Message,
    NativeError,
    NormalizedErrors,
    classify,
    iter_errors,
    normalize,
    normalize_args,
)
from .structured import (
    ErrorCategory,
    ErrorContext,
    ErrorLevel,
    StackFrame,
    StructuredError,
    construct_error,
    describe_exception,
    extract_stack,
)

__all__ = [
    # Schema
    "StructuredError",
    "ErrorContext",
    "StackFrame",
    "ErrorLevel",
    "ErrorCategory",
    "construct_error",
    "describe_exception",
    "extract_stack",
    # Normalization
    "ErrorInput",
    "Message",
    "NativeError",
    "ErrorList",
    "ContextObject",
    "NormalizedErrors",
    "classify",
    "normalize",
    "normalize_args",
    "iter_errors",
    # Rendering
    "ErrorFormatter",
]
