"""
Logging style constants for consistent visual hierarchy.

Provides unified formatting symbols, indentation and ANSI colors used by the
console formatter, the rendering backend and the error formatter.
"""

from __future__ import annotations

import re

# Matches any ANSI SGR escape sequence
ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


class LogStyle:
    """Unified logging style constants for consistent visual hierarchy."""

    # Symbols
    ARROW = "»"
    WARNING = "⚠"
    SUCCESS = "✓"
    FAILURE = "✗"
    SPINNER = "◌"

    # Indentation
    INDENT = "  "
    DOUBLE_INDENT = "    "

    # ANSI Colors (applied to console output only)
    RESET = "\033[0m"
    DIM = "\033[2m"
    BOLD = "\033[1m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    RED = "\033[31m"
    CYAN = "\033[36m"

    @staticmethod
    def paint(text: str, color: str, enabled: bool = True) -> str:
        """Wrap *text* in *color* when *enabled*, otherwise return it untouched."""
        if not enabled or not text:
            return text
        return f"{color}{text}{LogStyle.RESET}"

    @staticmethod
    def strip(text: str) -> str:
        """Remove every ANSI escape sequence from *text*."""
        return ANSI_RE.sub("", text)

