"""
Structured logging for lltrace.

Simple API:
    from lltrace.utils.logger import debug, info, warn, error

    warn("Parent span %s was never observed", parent_id)

Component loggers:
    from lltrace.utils.logger import get_logger, log_context

    logger = get_logger("builder")      # logs as "lltrace.builder"
    with log_context(trace_source="run.jsonl"):
        logger.info("Loading trace")
"""

import logging
from typing import Any, Optional

from .config import LogConfig, ensure_log_directory, get_config
from .context import ContextFilter, get_trace_source, log_context
from .handlers import setup_handlers

ROOT_LOGGER_NAME = "lltrace"

_initialized = False
_root_logger: Optional[logging.Logger] = None


def _attach_context_filter(logger: logging.Logger) -> None:
    if not any(isinstance(f, ContextFilter) for f in logger.filters):
        logger.addFilter(ContextFilter())


def setup_logging(config: Optional[LogConfig] = None) -> logging.Logger:
    """Configure the "lltrace" logger from config (or the environment).

    Safe to call more than once; handlers are replaced, not stacked.
    get_logger() calls it on first use.
    """
    global _initialized, _root_logger

    config = config or get_config()
    ensure_log_directory(config)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    setup_handlers(logger, config)
    _attach_context_filter(logger)
    # Keep trace diagnostics out of the host application's root logger
    logger.propagate = False

    _initialized = True
    _root_logger = logger
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get the root lltrace logger, or a named child of it.

    Child records are stamped with the trace source by a filter on their
    own logger as well, since logger-level filters do not see records
    propagated from children.
    """
    if not _initialized:
        setup_logging()

    if not name:
        return _root_logger or logging.getLogger(ROOT_LOGGER_NAME)

    logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
    _attach_context_filter(logger)
    return logger


def reset_logging() -> None:
    """Drop handlers and mark logging uninitialized (used by tests)."""
    global _initialized, _root_logger

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    _initialized = False
    _root_logger = None


def debug(msg: str, *args: Any, **kwargs: Any) -> None:
    get_logger().debug(msg, *args, **kwargs)


def info(msg: str, *args: Any, **kwargs: Any) -> None:
    get_logger().info(msg, *args, **kwargs)


def warn(msg: str, *args: Any, **kwargs: Any) -> None:
    get_logger().warning(msg, *args, **kwargs)


def error(msg: str, *args: Any, **kwargs: Any) -> None:
    get_logger().error(msg, *args, **kwargs)


def exception(msg: str, *args: Any, **kwargs: Any) -> None:
    """Log an error with the current exception's traceback."""
    get_logger().exception(msg, *args, **kwargs)


__all__ = [
    "ROOT_LOGGER_NAME",
    "LogConfig",
    "get_config",
    "setup_logging",
    "get_logger",
    "reset_logging",
    "log_context",
    "get_trace_source",
    "debug",
    "info",
    "warn",
    "error",
    "exception",
]
