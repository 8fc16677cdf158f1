"""Logging utilities for emitkit and applications embedding it."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from coloredlogs import ColoredFormatter

if TYPE_CHECKING:
    from .settings import EmitterSettings

DEBUG_FORMAT = "[%(asctime)s] [%(levelname)-8s] [%(name)s:%(funcName)s:%(lineno)d] %(message)s"
DEFAULT_FORMAT = "[%(asctime)s] [%(levelname)-8s] [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class LoggerManager:
    """Installs colored console and file handlers on one logger (the root logger by default)."""

    def __init__(
        self,
        log_level: str = "INFO",
        debug_mode: bool = False,
        log_file: Optional[Path] = None,
        console_output: bool = True,
        logger_name: str = "",
    ):
        """
        Initialize the logger manager.

        Args:
            log_level: The base log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            debug_mode: Log everything, with function names and line numbers
            log_file: Optional path to a log file
            console_output: Whether to output logs to stdout
            logger_name: Logger to configure. Use "emitkit" to leave the
                application's root logger alone.
        """
        self.log_level = self._parse_log_level(log_level)
        self.debug_mode = debug_mode
        self.log_file = log_file
        self.console_output = console_output
        self.logger_name = logger_name
        self._loggers: dict[str, logging.Logger] = {}

        self._configure()

    @classmethod
    def from_settings(cls, settings: EmitterSettings, logger_name: str = "") -> LoggerManager:
        """Build a manager from resolved settings."""
        return cls(
            log_level=settings.log_level,
            debug_mode=settings.debug_mode,
            log_file=Path(settings.log_file) if settings.log_file else None,
            console_output=settings.log_to_console,
            logger_name=logger_name,
        )

    @property
    def target(self) -> logging.Logger:
        return logging.getLogger(self.logger_name or None)

    def _parse_log_level(self, level: str) -> int:
        """Parse log level string to logging constant."""
        value = getattr(logging, level.upper(), None)
        return value if isinstance(value, int) else logging.INFO

    def _build_formatter(self) -> logging.Formatter:
        return ColoredFormatter(
            fmt=DEBUG_FORMAT if self.debug_mode else DEFAULT_FORMAT,
            datefmt=DATE_FORMAT,
        )

    def _configure(self):
        """Replace the target logger's handlers with ours."""
        target = self.target
        effective = logging.DEBUG if self.debug_mode else self.log_level
        target.setLevel(effective)
        for handler in list(target.handlers):
            handler.flush()
            handler.close()
            target.removeHandler(handler)
        if self.logger_name:
            # Our handlers already emit; don't print twice through the root
            target.propagate = False

        formatter = self._build_formatter()
        if self.console_output:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(effective)
            console_handler.setFormatter(formatter)
            target.addHandler(console_handler)

        if self.log_file:
            self._setup_file_handler(target, formatter)

    def _setup_file_handler(self, logger: logging.Logger, formatter: logging.Formatter):
        """Attach a UTF-8 file handler, creating the log directory if needed."""
        try:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(self.log_file, mode="a", encoding="utf-8")
        except OSError as e:
            logging.getLogger("emitkit.logging").error(f"Failed to set up file logging: {e}")
            return
        file_handler.setLevel(logging.DEBUG)  # Everything goes to the file
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    def get_logger(self, name: str) -> logging.Logger:
        """
        Get or create a logger with the specified name.

        Args:
            name: The logger name (typically a module name)

        Returns:
            A logger instance
        """
        if name not in self._loggers:
            self._loggers[name] = logging.getLogger(name)
        return self._loggers[name]

    def set_level(self, level: str):
        """
        Change the log level of the target logger and its console handler.

        Args:
            level: The new log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        """
        self.log_level = self._parse_log_level(level)
        target = self.target
        target.setLevel(self.log_level)
        for handler in target.handlers:
            if not isinstance(handler, logging.FileHandler):
                handler.setLevel(self.log_level)

    def shutdown(self):
        """Flush and close the handlers this manager installed."""
        target = self.target
        for handler in list(target.handlers):
            handler.flush()
            handler.close()
            target.removeHandler(handler)


def get_emitkit_logger(component: str = "core") -> logging.Logger:
    """
    Get a logger for an emitkit component.

    Args:
        component: The component name

    Returns:
        A logger instance namespaced under ``emitkit``
    """
    return logging.getLogger(f"emitkit.{component}")
