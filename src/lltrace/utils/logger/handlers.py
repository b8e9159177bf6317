"""
Log handlers for lltrace.

Two rotating files under the log directory (human-readable and JSON)
and an optional stderr stream.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from .config import LogConfig, ensure_log_directory, get_config
from .formatters import HumanFormatter, JsonFormatter


def _rotating_handler(
    path: Path, max_bytes: int, backup_count: int, formatter: logging.Formatter
) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        filename=path,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    # Files record everything the logger lets through
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(formatter)
    return handler


def create_file_handler(config: LogConfig) -> RotatingFileHandler:
    ensure_log_directory(config)
    return _rotating_handler(
        config.human_log_path,
        config.human_log_max_bytes,
        config.human_log_backup_count,
        HumanFormatter(),
    )


def create_json_handler(config: LogConfig) -> RotatingFileHandler:
    ensure_log_directory(config)
    return _rotating_handler(
        config.json_log_path,
        config.json_log_max_bytes,
        config.json_log_backup_count,
        JsonFormatter(),
    )


def create_console_handler(config: LogConfig) -> logging.StreamHandler:
    """Stderr handler: warnings and up, or everything in debug mode."""
    handler = logging.StreamHandler(sys.stderr)
    verbose = config.default_level <= logging.DEBUG
    handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    handler.setFormatter(HumanFormatter())
    return handler


def setup_handlers(
    logger: logging.Logger,
    config: Optional[LogConfig] = None,
    include_console: Optional[bool] = None,
) -> None:
    """Swap the logger's handlers for the configured file and console set.

    Existing handlers are closed, so calling this again (a second
    setup_logging, or a test switching log directories) never leaves
    a stale file open.
    """
    config = config or get_config()
    if include_console is None:
        include_console = config.console_enabled

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [
        create_file_handler(config),
        create_json_handler(config),
    ]
    if include_console:
        handlers.append(create_console_handler(config))

    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(config.default_level)
