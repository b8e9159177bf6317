"""
Logging configuration for lltrace.

Reads logging settings from environment variables.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

# Environment variable names
DEBUG_ENV = "LLTRACE_DEBUG"
LOG_LEVEL_ENV = "LLTRACE_LOG_LEVEL"
LOG_CONSOLE_ENV = "LLTRACE_LOG_CONSOLE"
LOG_DIR_ENV = "LLTRACE_LOG_DIR"

LOG_DIR = Path.home() / ".cache" / "lltrace" / "logs"

HUMAN_LOG_FILE = "lltrace.log"
JSON_LOG_FILE = "lltrace.json"

LOG_LEVEL_MAP = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}

_TRUTHY = ("1", "true", "yes")
_FALSY = ("0", "false", "no")


@dataclass
class LogConfig:
    """Configuration for the logging system.

    Attributes:
        log_dir: Directory where log files are stored
        human_log_max_bytes: Rotation size of the human-readable log
        human_log_backup_count: Rotated human-readable files to keep
        json_log_max_bytes: Rotation size of the JSON log
        json_log_backup_count: Rotated JSON files to keep
        default_level: Level of the root lltrace logger
        console_enabled: Also log to stderr
    """

    log_dir: Path = field(default_factory=lambda: LOG_DIR)
    human_log_max_bytes: int = 5 * 1024 * 1024
    human_log_backup_count: int = 3
    json_log_max_bytes: int = 10 * 1024 * 1024
    json_log_backup_count: int = 2
    default_level: int = logging.INFO
    console_enabled: bool = False

    @property
    def human_log_path(self) -> Path:
        return self.log_dir / HUMAN_LOG_FILE

    @property
    def json_log_path(self) -> Path:
        return self.log_dir / JSON_LOG_FILE


def get_config() -> LogConfig:
    """Create a LogConfig from environment variables.

    Environment variables:
        LLTRACE_DEBUG: '1', 'true' or 'yes' enables debug level and console output
        LLTRACE_LOG_LEVEL: 'debug', 'info', 'warning', 'error' or 'critical'
        LLTRACE_LOG_CONSOLE: force console output on ('1') or off ('0')
        LLTRACE_LOG_DIR: override the log directory

    Returns:
        LogConfig with settings from environment, falling back to defaults.
    """
    config = LogConfig()

    log_dir = os.environ.get(LOG_DIR_ENV)
    if log_dir:
        config.log_dir = Path(log_dir).expanduser()

    if os.environ.get(DEBUG_ENV, "").lower() in _TRUTHY:
        config.default_level = logging.DEBUG
        config.console_enabled = True

    log_level_str = os.environ.get(LOG_LEVEL_ENV, "").lower()
    if log_level_str in LOG_LEVEL_MAP:
        config.default_level = LOG_LEVEL_MAP[log_level_str]

    console_env = os.environ.get(LOG_CONSOLE_ENV, "").lower()
    if console_env in _TRUTHY:
        config.console_enabled = True
    elif console_env in _FALSY:
        config.console_enabled = False

    return config


def ensure_log_directory(config: Optional[LogConfig] = None) -> Path:
    """Create the log directory if needed and return it."""
    log_dir = config.log_dir if config else LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir
