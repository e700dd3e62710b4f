"""
Error Formatter.

Renders a native exception and its traceback into a printable block,
colored with ``LogStyle`` unless colors were switched off. The reporter
logs this block right after the one-line error summary.
"""

from __future__ import annotations

import traceback
from typing import Final

from ..logger.styles import LogStyle
from .structured import describe_exception

# Guards against cyclic __cause__/__context__ chains
_MAX_CHAIN: Final[int] = 10


class ErrorFormatter:
    """
    Pretty-printer for native exceptions.

    Attributes:
        colors: Whether ANSI colors are emitted.

    Example:
        >>> formatter = ErrorFormatter()
        >>> print(formatter.render(ValueError("bad value")))
        >>> formatter.without_colors()
    """

    def __init__(self, colors: bool = True) -> None:
        self.colors = colors

    def without_colors(self) -> "ErrorFormatter":
        """Switch to plain output for every subsequent render."""
        self.colors = False
        return self

    def with_colors(self) -> "ErrorFormatter":
        self.colors = True
        return self

    def render(self, error: BaseException) -> str:
        """
        Format *error*, its frames and its cause chain.

        Args:
            error: Exception to render (raised or not).

        Returns:
            Multi-line string, free of ANSI codes when colors are disabled.
        """
        blocks: list[str] = []
        current: BaseException | None = error
        seen: set[int] = set()

        while current is not None and id(current) not in seen and len(blocks) < _MAX_CHAIN:
            seen.add(id(current))
            blocks.append(self._render_single(current))
            if current.__cause__ is not None:
                current = current.__cause__
            elif current.__context__ is not None and not current.__suppress_context__:
                current = current.__context__
            else:
                current = None

        separator = "\n" + LogStyle.paint(f"{LogStyle.INDENT}Caused by:", LogStyle.DIM, self.colors) + "\n"
        return separator.join(blocks)

    def _render_single(self, error: BaseException) -> str:
        name = LogStyle.paint(type(error).__name__, LogStyle.RED + LogStyle.BOLD, self.colors)
        lines = [f"{LogStyle.INDENT}{name}: {describe_exception(error)}"]

        if error.__traceback__ is not None:
            frames = traceback.extract_tb(error.__traceback__)
            # Innermost frame first, the way stack traces are usually read
            for frame in reversed(frames):
                location = LogStyle.paint(f"{frame.filename}:{frame.lineno}", LogStyle.DIM, self.colors)
                func = LogStyle.paint(frame.name, LogStyle.CYAN, self.colors)
                lines.append(f"{LogStyle.DOUBLE_INDENT}- {func} {location}")
                if frame.line:
                    lines.append(f"{LogStyle.DOUBLE_INDENT}{LogStyle.INDENT}{frame.line.strip()}")

        return "\n".join(lines)
