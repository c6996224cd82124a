"""Logging utilities for Lark Log Webhook.

This module provides centralized logging configuration with support for:
- Console and file logging
- Log rotation
- Rich formatting for console output
- A ``SUCCESS`` level between INFO and WARNING
"""

from __future__ import annotations

import logging
from contextlib import suppress
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

from .config import LoggingConfig, LogType

SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")

# Global logger registry
_loggers: dict[str, logging.Logger] = {}
_configured = False
_current_level: int = logging.INFO

console = Console()


class CloseOnEmitFileHandler(RotatingFileHandler):
    """A RotatingFileHandler that closes the file after each emit.

    This avoids holding an open file handle which can block temporary
    directory cleanup on Windows during tests.
    """

    def emit(self, record: logging.LogRecord) -> None:  # type: ignore[override]
        try:
            super().emit(record)
        finally:
            try:
                self.flush()
            finally:
                # Subsequent emits reopen the file (delay=True)
                self.close()


def setup_logging(config: LoggingConfig | None = None) -> None:
    """Setup logging configuration for the entire application.

    Handlers already attached to the root logger are closed and replaced. The
    bridge handler of every target registry that still has targets is attached
    again, so forwarding keeps working after reconfiguration.

    Args:
        config: LoggingConfig instance. If None, uses defaults.
    """
    global _configured, _current_level

    from .targets import RegistryHandler, TargetRegistry

    if config is None:
        config = LoggingConfig()

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if isinstance(handler, RegistryHandler):
            continue
        with suppress(Exception):
            handler.flush()
        with suppress(Exception):
            handler.close()
    root_logger.handlers.clear()

    level_value = logging.getLevelName(config.level)
    root_logger.setLevel(level_value)
    logging.getLogger("lark_log").setLevel(level_value)

    file_formatter = logging.Formatter(config.format)

    console_handler = RichHandler(
        console=console,
        show_time=True,
        show_path=True,
        markup=False,
        rich_tracebacks=True,
    )
    console_handler.setLevel(level_value)
    root_logger.addHandler(console_handler)

    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = CloseOnEmitFileHandler(
            log_path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
            delay=True,
        )
        file_handler.setLevel(level_value)
        file_handler.setFormatter(file_formatter)
        root_logger.addHandler(file_handler)

    for registry in TargetRegistry.live():
        registry.attach()

    _configured = True
    _current_level = level_value

    for lg in _loggers.values():
        lg.setLevel(level_value)

    logger = get_logger("setup")
    logger.info(f"Logging configured: level={config.level}")
    if config.log_file:
        logger.info(f"Log file: {config.log_file}")


def get_logger(name: str) -> logging.Logger:
    """Get or create a logger with the given name.

    Args:
        name: Logger name (typically module name)

    Returns:
        Logger instance
    """
    if name not in _loggers:
        logger = logging.getLogger(f"lark_log.{name}")
        logger.setLevel(_current_level)
        _loggers[name] = logger

    return _loggers[name]


def log_success(logger: logging.Logger, msg: str, *args: Any, **kwargs: Any) -> None:
    """Log a message at the SUCCESS level."""
    logger.log(SUCCESS, msg, *args, **kwargs)


def log_exception(logger: logging.Logger, exc: Exception, context: str = "") -> None:
    """Log an exception with context.

    Args:
        logger: Logger instance
        exc: Exception to log
        context: Additional context string
    """
    if context:
        logger.exception(f"{context}: {exc}")
    else:
        logger.exception(f"Exception occurred: {exc}")


def level_to_type(levelno: int) -> LogType:
    """Map a stdlib logging level number to a log type name."""
    if levelno >= logging.ERROR:
        return "error"
    if levelno >= logging.WARNING:
        return "warn"
    if levelno >= SUCCESS:
        return "success"
    if levelno >= logging.INFO:
        return "info"
    return "debug"


TYPE_LEVELS: dict[str, int] = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "success": SUCCESS,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}
