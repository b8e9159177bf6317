"""
Tests for the logger package.
"""

import json
import logging
from logging.handlers import RotatingFileHandler
from unittest.mock import patch

import pytest

from lltrace.utils import logger as log
from lltrace.utils.logger import LogConfig, get_config, log_context
from lltrace.utils.logger.context import ContextFilter, get_trace_source
from lltrace.utils.logger.formatters import HumanFormatter, JsonFormatter


@pytest.fixture
def log_config(tmp_path):
    return LogConfig(log_dir=tmp_path / "logs")


@pytest.fixture
def fresh_logging(log_config):
    log.reset_logging()
    logger = log.setup_logging(log_config)
    yield logger
    log.reset_logging()


def _record(msg="hello", level=logging.INFO, name="lltrace.test"):
    return logging.LogRecord(name, level, "builder.py", 42, msg, (), None)


class TestGetConfig:
    """Tests for environment-driven configuration"""

    def test_defaults(self):
        with patch.dict("os.environ", {}, clear=True):
            config = get_config()
        assert config.default_level == logging.INFO
        assert config.console_enabled is False

    def test_debug_env(self):
        with patch.dict("os.environ", {"LLTRACE_DEBUG": "1"}, clear=True):
            config = get_config()
        assert config.default_level == logging.DEBUG
        assert config.console_enabled is True

    def test_explicit_level(self):
        with patch.dict("os.environ", {"LLTRACE_LOG_LEVEL": "error"}, clear=True):
            assert get_config().default_level == logging.ERROR

    def test_console_can_be_forced_off(self):
        env = {"LLTRACE_DEBUG": "yes", "LLTRACE_LOG_CONSOLE": "0"}
        with patch.dict("os.environ", env, clear=True):
            assert get_config().console_enabled is False

    def test_log_dir_override(self, tmp_path):
        with patch.dict("os.environ", {"LLTRACE_LOG_DIR": str(tmp_path)}, clear=True):
            assert get_config().log_dir == tmp_path


class TestSetupLogging:
    """Tests for setup_logging / get_logger"""

    def test_creates_log_files(self, fresh_logging, log_config):
        fresh_logging.info("started")
        for handler in fresh_logging.handlers:
            handler.flush()

        assert log_config.human_log_path.exists()
        assert log_config.json_log_path.exists()
        assert "started" in log_config.human_log_path.read_text()

    def test_root_logger_does_not_propagate(self, fresh_logging):
        assert fresh_logging.name == "lltrace"
        assert fresh_logging.propagate is False

    def test_setup_twice_does_not_duplicate_handlers(self, fresh_logging, log_config):
        def file_handlers():
            return [
                h for h in fresh_logging.handlers if isinstance(h, RotatingFileHandler)
            ]

        assert len(file_handlers()) == 2
        log.setup_logging(log_config)
        assert len(file_handlers()) == 2

    def test_component_logger_is_child(self, fresh_logging):
        assert log.get_logger("builder").name == "lltrace.builder"

    def test_console_handler_added(self, tmp_path):
        log.reset_logging()
        try:
            logger = log.setup_logging(
                LogConfig(log_dir=tmp_path, console_enabled=True)
            )
            console = [h for h in logger.handlers if type(h) is logging.StreamHandler]
            assert len(console) == 1
            assert console[0].level == logging.WARNING
        finally:
            log.reset_logging()


class TestLogContext:
    """Tests for trace source context"""

    def test_context_sets_and_restores(self):
        assert get_trace_source() is None
        with log_context(trace_source="a.jsonl"):
            assert get_trace_source() == "a.jsonl"
            with log_context(trace_source="b.jsonl"):
                assert get_trace_source() == "b.jsonl"
            assert get_trace_source() == "a.jsonl"
        assert get_trace_source() is None

    def test_filter_stamps_record(self):
        record = _record()
        with log_context(trace_source="run.jsonl"):
            assert ContextFilter().filter(record) is True
        assert record.trace_source == "run.jsonl"


class TestFormatters:
    """Tests for the human and JSON formatters"""

    def test_human_format(self):
        record = _record()
        record.trace_source = "run.jsonl"
        line = HumanFormatter().format(record)

        assert "| INFO" in line
        assert "lltrace.test" in line
        assert "builder.py:42" in line
        assert line.endswith("hello [source=run.jsonl]")

    def test_json_format(self):
        record = _record(level=logging.WARNING)
        record.trace_source = "run.jsonl"
        data = json.loads(JsonFormatter().format(record))

        assert data["level"] == "WARNING"
        assert data["message"] == "hello"
        assert data["line"] == 42
        assert data["trace_source"] == "run.jsonl"

    def test_json_format_with_exception(self):
        try:
            raise ValueError("boom")
        except ValueError:
            import sys

            record = logging.LogRecord(
                "lltrace", logging.ERROR, "x.py", 1, "failed", (), sys.exc_info()
            )
        data = json.loads(JsonFormatter().format(record))

        assert data["exception"]["type"] == "ValueError"
        assert data["exception"]["message"] == "boom"
        assert any("boom" in line for line in data["exception"]["traceback"])
