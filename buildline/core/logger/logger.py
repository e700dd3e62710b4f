"""
Logging Management Module

Handles centralized logging configuration for the reporter. Every line the
rendering backend prints goes through the logger configured here, so
verbosity and color policy are decided in one place.

Key Features:
    - Singleton-like Behavior: Prevents duplicate logger configurations
    - Color Policy: ANSI colors only when enabled and the stream is a TTY
      (or when explicitly forced)
    - Rotating File Handler: Optional plain-text (ANSI-free) audit log per session
    - Timestamp-based Files: Unique log files per CLI invocation
"""

from __future__ import annotations

import logging
import os
import re
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import IO, Final

from ..paths import LOGGER_NAME
from .styles import LogStyle

# Matches stage tags like [build], [Bootstrap], [Query Running]
_TAG_RE = re.compile(r"\[([A-Za-z][A-Za-z _-]*)\]")


class ColorFormatter(logging.Formatter):
    """Formatter that applies ANSI colors to console output.

    Colors are applied based on log level and message content:
        - DEBUG (verbose lines): dim
        - WARNING/ERROR/CRITICAL: yellow/red message
        - Lines with ✓: green
        - Lines with ✗: red
        - Stage tags like [build]: bold cyan
    """

    _LEVEL_COLORS = {
        logging.DEBUG: LogStyle.DIM,
        logging.WARNING: LogStyle.YELLOW,
        logging.ERROR: LogStyle.RED,
        logging.CRITICAL: LogStyle.RED + LogStyle.BOLD,
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record with ANSI color codes on the message only."""
        formatted = super().format(record)
        msg = record.getMessage()
        if not msg:
            return formatted

        level_color = self._LEVEL_COLORS.get(record.levelno)
        if level_color:
            return self._color_message_only(formatted, msg, level_color)

        if LogStyle.SUCCESS in msg:
            return self._color_message_only(formatted, msg, LogStyle.GREEN)

        if LogStyle.FAILURE in msg:
            return self._color_message_only(formatted, msg, LogStyle.RED)

        if _TAG_RE.search(msg):
            idx = formatted.find(msg)
            if idx != -1:
                tagged = _TAG_RE.sub(
                    rf"{LogStyle.BOLD}{LogStyle.CYAN}\g<0>{LogStyle.RESET}", formatted[idx:]
                )
                return formatted[:idx] + tagged

        return formatted

    def _color_message_only(self, formatted: str, msg: str, color: str) -> str:
        """Apply *color* only to the message portion of *formatted*."""
        idx = formatted.find(msg)
        if idx == -1:
            return formatted
        return f"{formatted[:idx]}{color}{formatted[idx:]}{LogStyle.RESET}"


class PlainFormatter(logging.Formatter):
    """Formatter that strips ANSI codes, for uncolored consoles and log files."""

    def format(self, record: logging.LogRecord) -> str:
        return LogStyle.strip(super().format(record))


# LOGGER CLASS
class Logger:
    """
    Manages centralized logging configuration with singleton-like behavior.

    The reporter's rendering backend writes through the ``logging.Logger``
    returned by ``get_logger()``. Reconfiguration happens whenever colors,
    level or the log directory change, which is how ``set_verbose`` and
    ``set_no_color`` reach the console.

    Class Attributes:
        _configured_names (dict[str, bool]): Logger names already configured
        _active_log_file (Path | None): Current active log file path

    Attributes:
        name (str): Logger identifier (typically LOGGER_NAME constant)
        log_dir (Path | None): Directory for log file storage
        log_to_file (bool): Enable file logging (requires log_dir)
        level (int): Logging level
        colors (bool | None): True forces colors, False disables them,
            None colors only when the stream is a TTY
        stream (IO[str] | None): Console stream (defaults to sys.stdout)

    Example:
        >>> logger = Logger().get_logger()
        >>> logger.info("Reporter initializing...")
        >>> logger = Logger.setup(name=LOGGER_NAME, level="DEBUG", colors=False)
    """

    _configured_names: Final[dict[str, bool]] = {}
    _active_log_file: Path | None = None

    _FMT: Final[str] = "%(message)s"
    _FILE_FMT: Final[str] = "%(asctime)s - %(levelname)s - %(message)s"
    _DATEFMT: Final[str] = "%Y-%m-%d %H:%M:%S"

    def __init__(
        self,
        name: str = LOGGER_NAME,
        log_dir: Path | None = None,
        log_to_file: bool = True,
        level: int = logging.INFO,
        colors: bool | None = None,
        stream: IO[str] | None = None,
        max_bytes: int = 5 * 1024 * 1024,
        backup_count: int = 5,
        force: bool = False,
    ) -> None:
        """
        Initializes the Logger with specified configuration.

        Args:
            name: Logger identifier (default: LOGGER_NAME constant)
            log_dir: Directory for log file storage (None = console-only)
            log_to_file: Enable file logging if log_dir provided (default: True)
            level: Logging level as integer constant (default: logging.INFO)
            colors: Color policy for the console handler (None = auto-detect)
            stream: Console stream (default: sys.stdout at setup time)
            max_bytes: Maximum log file size before rotation in bytes
            backup_count: Number of rotated backup files to retain
            force: Reconfigure even if the name was configured before
        """
        self.name = name
        self.log_dir = log_dir
        self.log_to_file = log_to_file and (log_dir is not None)
        self.level = level
        self.colors = colors
        self.stream = stream
        self.max_bytes = max_bytes
        self.backup_count = backup_count

        self._log = logging.getLogger(name)

        if force or name not in Logger._configured_names or log_dir is not None:
            self._setup_logger()
            Logger._configured_names[name] = True

    def _use_colors(self, stream: IO[str]) -> bool:
        if self.colors is not None:
            return self.colors
        isatty = getattr(stream, "isatty", None)
        return bool(isatty and isatty())

    def _setup_logger(self) -> None:
        """
        Configures log handlers: Console always, File only if log_dir is provided.

        Existing handlers are closed and removed first to prevent duplicate
        output during reconfiguration.
        """
        self._log.setLevel(self.level)
        self._log.propagate = False

        if self._log.hasHandlers():
            for handler in self._log.handlers[:]:
                handler.close()
                self._log.removeHandler(handler)

        # 1. Console Handler
        stream = self.stream if self.stream is not None else sys.stdout
        console_h = logging.StreamHandler(stream)
        console_h.setFormatter(self.console_formatter(self._use_colors(stream)))
        self._log.addHandler(console_h)

        # 2. Rotating File Handler (plain text, timestamped)
        if self.log_to_file and self.log_dir:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
            filename = self.log_dir / f"{self.name}_{timestamp}.log"

            file_h = RotatingFileHandler(
                filename, maxBytes=self.max_bytes, backupCount=self.backup_count, encoding="utf-8"
            )
            file_h.setFormatter(PlainFormatter(self._FILE_FMT, self._DATEFMT))
            self._log.addHandler(file_h)

            Logger._active_log_file = filename

    @classmethod
    def console_formatter(cls, colors: bool) -> logging.Formatter:
        return ColorFormatter(cls._FMT) if colors else PlainFormatter(cls._FMT)

    @classmethod
    def recolor(cls, log: logging.Logger, colors: bool) -> None:
        """
        Swap the console formatter of *log* in place.

        File handlers (and the log file they own) are left untouched.
        """
        for handler in log.handlers:
            if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
                handler.setFormatter(cls.console_formatter(colors))

    @staticmethod
    def uses_colors(log: logging.Logger) -> bool:
        """Whether any console handler of *log* paints ANSI colors."""
        return any(isinstance(h.formatter, ColorFormatter) for h in log.handlers)

    def get_logger(self) -> logging.Logger:
        """Returns the configured logging.Logger instance."""
        return self._log

    @classmethod
    def get_log_file(cls) -> Path | None:
        """Returns the current active log file path, or None without file logging."""
        return cls._active_log_file

    @classmethod
    def setup(
        cls, name: str = LOGGER_NAME, log_dir: Path | None = None, level: str = "INFO", **kwargs
    ) -> logging.Logger:
        """
        Main entry point for (re)configuring the logger.

        Bridges semantic level strings (INFO, DEBUG, WARNING) to logging
        constants and always reconfigures the handlers.

        Args:
            name: Logger identifier (typically LOGGER_NAME constant)
            log_dir: Directory for log file storage (None = console-only mode)
            level: Logging level as string (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            **kwargs (Any): Additional arguments passed to Logger constructor

        Returns:
            Configured logging.Logger instance ready for use

        Environment Variables:
            DEBUG: If set to "1", overrides level to DEBUG regardless of level parameter
        """
        if os.getenv("DEBUG") == "1":
            numeric_level = logging.DEBUG
        else:
            numeric_level = getattr(logging, level.upper(), logging.INFO)

        kwargs.setdefault("force", True)
        return cls(name=name, log_dir=log_dir, level=numeric_level, **kwargs).get_logger()
