"""
Test Suite for the Error Formatter.

Tests traceback rendering, cause chains and color stripping.
"""

import pytest

from buildline.core.errors import ErrorFormatter
from buildline.core.logger.styles import ANSI_RE


def _raise_chained() -> BaseException:
    try:
        try:
            raise KeyError("missing")
        except KeyError as inner:
            raise RuntimeError("lookup failed") from inner
    except RuntimeError as outer:
        return outer


@pytest.mark.unit
def test_render_header_contains_type_and_message():
    """Test the first line names the exception type and message."""
    output = ErrorFormatter(colors=False).render(ValueError("bad value"))

    assert output.splitlines()[0].strip() == "ValueError: bad value"


@pytest.mark.unit
def test_render_includes_frames_for_raised_error():
    """Test raised exceptions list their frames and source lines."""
    output = ErrorFormatter(colors=False).render(_raise_chained())

    assert "_raise_chained" in output
    assert "test_formatter.py" in output
    assert 'raise RuntimeError("lookup failed") from inner' in output


@pytest.mark.unit
def test_render_follows_cause_chain():
    """Test explicit causes are rendered after a 'Caused by' separator."""
    output = ErrorFormatter(colors=False).render(_raise_chained())

    assert "Caused by:" in output
    assert output.index("RuntimeError") < output.index("KeyError")


@pytest.mark.unit
def test_render_colored_by_default():
    """Test the default formatter emits ANSI codes."""
    output = ErrorFormatter().render(ValueError("x"))

    assert ANSI_RE.search(output)


@pytest.mark.unit
def test_without_colors_strips_ansi():
    """Test without_colors() disables ANSI codes for later renders."""
    formatter = ErrorFormatter()

    returned = formatter.without_colors()
    output = formatter.render(_raise_chained())

    assert returned is formatter
    assert ANSI_RE.search(output) is None


@pytest.mark.unit
def test_with_colors_restores_ansi():
    """Test with_colors() turns colors back on after without_colors()."""
    formatter = ErrorFormatter(colors=False)

    returned = formatter.with_colors()

    assert returned is formatter
    assert ANSI_RE.search(formatter.render(_raise_chained()))


@pytest.mark.unit
def test_render_survives_cyclic_context():
    """Test a self-referencing context chain terminates."""
    error = ValueError("loop")
    error.__context__ = error

    output = ErrorFormatter(colors=False).render(error)

    assert output.count("ValueError: loop") == 1
