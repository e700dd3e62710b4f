"""
Test Suite for Error Normalization.

Tests argument classification into input variants and their conversion
into StructuredError values.
"""

import pytest

from buildline.core.errors import (
    ContextObject,
    ErrorList,
    Message,
    NativeError,
    StructuredError,
    classify,
    iter_errors,
    normalize,
    normalize_args,
)


# CLASSIFY
@pytest.mark.unit
class TestClassify:
    """Tests for positional-argument dispatch."""

    def test_prefix_and_list(self):
        errors = [ValueError("a"), KeyError("b")]
        variant = classify("Failed:", errors)
        assert variant == ErrorList(items=tuple(errors), prefix="Failed:")

    def test_prefix_and_exception(self):
        error = OSError("disk full")
        assert classify("Write failed", error) == NativeError(error=error, prefix="Write failed")

    def test_prefix_and_string(self):
        assert classify("Plugin", "crashed") == Message(text="crashed", prefix="Plugin")

    def test_single_exception(self):
        error = RuntimeError("boom")
        assert classify(error) == NativeError(error=error)

    def test_single_list(self):
        assert classify(["a", "b"]) == ErrorList(items=("a", "b"))

    def test_single_tuple(self):
        assert isinstance(classify(("a",)), ErrorList)

    def test_single_mapping(self):
        details = {"id": "123", "context": {"source_message": "x"}}
        assert classify(details) == ContextObject(details=details)

    def test_single_string(self):
        assert classify("plain") == Message(text="plain")

    def test_other_scalar_degrades_to_message(self):
        assert classify(42) == Message(text="42")

    def test_list_takes_priority_over_exception_check(self):
        assert isinstance(classify("p", [RuntimeError("x")]), ErrorList)

    def test_no_arguments_raises(self):
        with pytest.raises(TypeError, match="1 or 2"):
            classify()

    def test_three_arguments_raises(self):
        with pytest.raises(TypeError, match="3 were given"):
            classify("a", "b", "c")


# NORMALIZE
@pytest.mark.unit
def test_normalize_string():
    """Test a string becomes the source message."""
    result = normalize_args("Something went wrong")

    assert isinstance(result, StructuredError)
    assert result.context.source_message == "Something went wrong"
    assert result.error is None


@pytest.mark.unit
def test_normalize_exception():
    """Test an exception's message becomes the source message and is kept."""
    error = ValueError("bad value")

    result = normalize_args(error)

    assert result.context.source_message == "bad value"
    assert result.error is error


@pytest.mark.unit
def test_normalize_exception_without_message_uses_class_name():
    """Test an empty exception message falls back to the class name."""
    result = normalize_args(KeyboardInterrupt())

    assert result.context.source_message == "KeyboardInterrupt"


@pytest.mark.unit
def test_normalize_prefix_and_exception():
    """Test the prefix and exception message are joined by a space."""
    result = normalize_args("Could not write file", OSError("disk full"))

    assert result.context.source_message == "Could not write file disk full"
    assert isinstance(result.error, OSError)


@pytest.mark.unit
def test_normalize_prefix_and_list_keeps_order():
    """Test (prefix, [errA, errB]) yields one error per item, in order."""
    err_a, err_b = ValueError("first"), TypeError("second")

    result = normalize_args("Plugin failed:", [err_a, err_b])

    assert isinstance(result, list)
    assert len(result) == 2
    assert result[0].context.source_message == "Plugin failed: first"
    assert result[1].context.source_message == "Plugin failed: second"
    assert result[0].error is err_a
    assert result[1].error is err_b


@pytest.mark.unit
def test_normalize_list_of_mixed_items():
    """Test a single list normalizes each element independently."""
    result = normalize_args(["missing page", RuntimeError("timeout")])

    assert [e.context.source_message for e in result] == ["missing page", "timeout"]
    assert result[0].error is None
    assert isinstance(result[1].error, RuntimeError)


@pytest.mark.unit
def test_normalize_nested_list_keeps_shape():
    """Test nested lists stay nested and iter_errors() flattens them in order."""
    result = normalize_args([["a", ValueError("b")], "c"])

    assert len(result) == 2
    assert isinstance(result[0], list)
    assert [e.context.source_message for e in result[0]] == ["a", "b"]
    assert isinstance(result[1], StructuredError)
    assert [e.context.source_message for e in iter_errors(result)] == ["a", "b", "c"]


@pytest.mark.unit
def test_normalize_prefix_applies_to_nested_items():
    """Test a prefix reaches every level of a nested list."""
    result = normalize_args("Plugin failed:", [[ValueError("inner")], "outer"])

    assert result[0][0].context.source_message == "Plugin failed: inner"
    assert result[1].context.source_message == "Plugin failed: outer"

@pytest.mark.unit
def test_normalize_context_object_passes_through():
    """Test a details bag keeps id, level and extra context keys."""
    result = normalize_args(
        {
            "id": "85901",
            "level": "warning",
            "context": {"sourceMessage": "Query failed", "filePath": "src/page.py"},
        }
    )

    assert result.id == "85901"
    assert result.level == "WARNING"
    assert result.context.source_message == "Query failed"
    assert result.context.model_extra["filePath"] == "src/page.py"


@pytest.mark.unit
def test_normalize_context_object_without_context():
    """Test a details bag missing its context still gets a source message."""
    result = normalize_args({"error": RuntimeError("nested")})

    assert result.context.source_message == "nested"


@pytest.mark.unit
def test_normalize_empty_string_never_empty():
    """Test even empty input yields a non-empty source message."""
    assert normalize_args("").context.source_message


@pytest.mark.unit
def test_normalize_empty_list():
    """Test an empty list normalizes to an empty list."""
    assert normalize(ErrorList(items=())) == []


@pytest.mark.unit
@pytest.mark.parametrize(
    "args",
    [
        ("text",),
        (ValueError("v"),),
        (["a", ValueError("b")],),
        ({"context": {"source_message": "ctx"}},),
        ({},),
        ("prefix", ValueError("v")),
        ("prefix", [ValueError("a"), "b"]),
        (None,),
    ],
)
def test_every_shape_has_source_message(args):
    """Test all supported shapes produce non-empty source messages."""
    for error in iter_errors(normalize_args(*args)):
        assert error.context.source_message.strip()
