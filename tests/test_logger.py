"""Tests for configutils.logger module.

Covers both logger implementations and the environment-driven factory
functions used by the loader's module logger.
"""

import io
import json
import logging
import os
from unittest import mock

import pytest

from configutils.logger import (
    DefaultLogger,
    Logger,
    StructuredLogger,
    create_logger,
    get_logger,
)


class TestLoggerInterface:
    """Tests for the Logger abstract interface."""

    def test_logger_is_abstract(self):
        """Test that Logger cannot be instantiated directly."""
        with pytest.raises(TypeError):
            Logger()  # type: ignore

    def test_logger_has_required_methods(self):
        """Test that Logger defines all required abstract methods."""
        for method in ["debug", "info", "warning", "error", "critical", "get_session_id"]:
            assert hasattr(Logger, method)


class TestDefaultLogger:
    """Tests for the DefaultLogger implementation."""

    def test_default_logger_creates_session_id(self):
        """Test that DefaultLogger creates a unique session ID."""
        logger = DefaultLogger(output=io.StringIO())
        assert len(logger.get_session_id()) == 36  # UUID format

    def test_different_instances_have_different_session_ids(self):
        logger1 = DefaultLogger(output=io.StringIO())
        logger2 = DefaultLogger(output=io.StringIO())
        assert logger1.get_session_id() != logger2.get_session_id()

    def test_writes_to_output(self):
        """Test that DefaultLogger writes to the specified output."""
        output = io.StringIO()
        logger = DefaultLogger(output=output)
        logger.info("Test message")

        output_str = output.getvalue()
        assert "[INFO]" in output_str
        assert "Test message" in output_str
        assert "session:" + logger.get_session_id()[:8] in output_str

    def test_can_disable_timestamp(self):
        """Test that output starts with the level when timestamps are off."""
        output = io.StringIO()
        logger = DefaultLogger(output=output, include_timestamp=False)
        logger.info("Test message")

        assert output.getvalue().startswith("[INFO] [configutils]")

    def test_min_level_drops_lower_messages(self):
        """Test that debug messages are dropped at the default INFO level."""
        output = io.StringIO()
        logger = DefaultLogger(output=output)
        logger.debug("Hidden")
        logger.warning("Shown")

        output_str = output.getvalue()
        assert "Hidden" not in output_str
        assert "Shown" in output_str

    def test_all_levels(self):
        """Test that all log levels work."""
        output = io.StringIO()
        logger = DefaultLogger(output=output, min_level="debug")

        logger.debug("Debug message")
        logger.info("Info message")
        logger.warning("Warning message")
        logger.error("Error message")
        logger.critical("Critical message")

        output_str = output.getvalue()
        for level in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            assert f"[{level}]" in output_str

    def test_accepts_kwargs(self):
        """Test that logger accepts and formats keyword arguments."""
        output = io.StringIO()
        logger = DefaultLogger(name="test-logger", output=output)
        logger.info("Applying override layer", layer="file", index=0)

        output_str = output.getvalue()
        assert "[test-logger]" in output_str
        assert "(layer=file index=0)" in output_str


class TestStructuredLogger:
    """Tests for the StructuredLogger implementation."""

    def test_creates_session_id(self):
        """Test that StructuredLogger creates a truncated session ID."""
        logger = StructuredLogger(name="test-structured")
        assert len(logger.get_session_id()) == 8

    def test_text_format_on_stderr(self, capsys):
        """Test that StructuredLogger writes text to stderr by default."""
        logger = StructuredLogger(name="test-text", json_format=False)
        logger.info("Test message")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "INFO" in captured.err
        assert "Test message" in captured.err
        assert "test-text" in captured.err

    def test_json_format(self, capsys):
        """Test that StructuredLogger can output JSON format."""
        logger = StructuredLogger(name="test-json", json_format=True)
        logger.info("Test message")

        log_entry = json.loads(capsys.readouterr().err.strip())
        assert log_entry["level"] == "INFO"
        assert log_entry["message"] == "Test message"
        assert log_entry["logger"] == "test-json"
        assert log_entry["session_id"] == logger.get_session_id()

    def test_json_includes_extras(self, capsys):
        """Test that JSON format includes extra kwargs."""
        logger = StructuredLogger(name="test-json-extras", json_format=True)
        logger.info("Applied environment overrides", env_prefix="MYAPP", variables=["MYAPP_PI"])

        log_entry = json.loads(capsys.readouterr().err.strip())
        assert log_entry["env_prefix"] == "MYAPP"
        assert log_entry["variables"] == ["MYAPP_PI"]

    def test_text_includes_extras(self, capsys):
        """Test that text format includes extra kwargs."""
        logger = StructuredLogger(name="test-text-extras", json_format=False)
        logger.info("Test message", key="value")

        assert "key=value" in capsys.readouterr().err

    def test_file_output(self, tmp_path):
        """Test that StructuredLogger can write to a file."""
        log_file = tmp_path / "configutils.log"

        logger = StructuredLogger(name="test-file", log_file=str(log_file))
        logger.info("File test message")

        for handler in logger._logger.handlers:
            handler.flush()

        assert "File test message" in log_file.read_text()

    def test_unwritable_log_file_keeps_console(self, tmp_path, capsys):
        """Test that a bad log file path is reported and console logging still works."""
        log_file = tmp_path / "missing" / "dir" / "configutils.log"

        logger = StructuredLogger(name="test-bad-file", log_file=str(log_file))
        logger.warning("Still logged")

        err = capsys.readouterr().err
        assert "Failed to setup log file" in err
        assert "Still logged" in err

    def test_reinitialising_does_not_duplicate_handlers(self):
        StructuredLogger(name="test-handlers")
        logger = StructuredLogger(name="test-handlers")
        assert len(logger._logger.handlers) == 1

    def test_handles_reserved_kwargs(self, capsys):
        """Test that reserved kwargs are prefixed to avoid conflicts."""
        logger = StructuredLogger(name="test-reserved", json_format=True)
        # "name" is a reserved LogRecord attribute
        logger.info("Test", name="should be prefixed")

        log_entry = json.loads(capsys.readouterr().err.strip())
        assert log_entry["_name"] == "should be prefixed"
        assert log_entry["logger"] == "test-reserved"


class TestLoggerFactoryFunctions:
    """Tests for create_logger and get_logger factory functions."""

    def test_create_logger_returns_logger(self):
        assert isinstance(create_logger(name="test-factory"), Logger)

    def test_create_logger_respects_level(self, capsys):
        """Test that create_logger respects the level parameter."""
        logger = create_logger(name="test-level-factory", level=logging.ERROR)
        logger.warning("Should not appear")
        logger.error("Should appear")

        err = capsys.readouterr().err
        assert "Should not appear" not in err
        assert "Should appear" in err

    def test_create_logger_respects_json_format(self, capsys):
        logger = create_logger(name="test-json-factory", level=logging.INFO, json_format=True)
        logger.info("JSON test")

        assert json.loads(capsys.readouterr().err.strip())["message"] == "JSON test"

    def test_get_logger_reads_env_level(self, capsys):
        """Test that get_logger reads log level from environment."""
        with mock.patch.dict(os.environ, {"TEST_PROJECT_LOG_LEVEL": "DEBUG"}):
            logger = get_logger("test-project")
            logger.debug("Debug should appear")

        assert "Debug should appear" in capsys.readouterr().err

    def test_get_logger_reads_env_json(self, capsys):
        """Test that get_logger reads JSON format from environment."""
        with mock.patch.dict(
            os.environ, {"TEST_JSON_ENV_LOG_JSON": "true", "TEST_JSON_ENV_LOG_LEVEL": "INFO"}
        ):
            logger = get_logger("test-json-env")
            logger.info("JSON env test")

        assert json.loads(capsys.readouterr().err.strip())["message"] == "JSON env test"

    def test_get_logger_reads_env_file(self, tmp_path):
        log_file = tmp_path / "env.log"

        with mock.patch.dict(os.environ, {"TEST_FILE_ENV_LOG_FILE": str(log_file)}):
            logger = get_logger("test-file-env")
            logger.error("To file")

        for handler in logger._logger.handlers:
            handler.flush()

        assert "To file" in log_file.read_text()

    def test_env_prefix_conversion(self):
        """Test that logger names are correctly converted to env prefixes."""
        with mock.patch.dict(os.environ, {"MY_APP_CONFIG_LOG_LEVEL": "DEBUG"}):
            logger = get_logger("my-app.config")
            assert logger._logger.level == logging.DEBUG

    def test_default_level_is_warning(self, capsys):
        """Test that the loader stays quiet unless configured otherwise."""
        with mock.patch.dict(os.environ, {}, clear=False):
            os.environ.pop("TEST_DEFAULT_LEVEL_LOG_LEVEL", None)
            logger = get_logger("test-default-level")
            logger.info("Info should not appear")
            logger.warning("Warning should appear")

        err = capsys.readouterr().err
        assert "Info should not appear" not in err
        assert "Warning should appear" in err


class TestLoggerConsistency:
    """Tests ensuring consistent behavior across logger implementations."""

    @staticmethod
    def _make(logger_class):
        if logger_class is DefaultLogger:
            return logger_class(output=io.StringIO())
        return logger_class(name=f"test-{logger_class.__name__}")

    @pytest.mark.parametrize("logger_class", [DefaultLogger, StructuredLogger])
    def test_all_loggers_have_session_id(self, logger_class):
        session_id = self._make(logger_class).get_session_id()
        assert isinstance(session_id, str)
        assert len(session_id) > 0

    @pytest.mark.parametrize("logger_class", [DefaultLogger, StructuredLogger])
    def test_all_loggers_accept_kwargs(self, logger_class):
        """Test that all logger implementations accept keyword arguments."""
        self._make(logger_class).info("Test", key="value", number=42, flag=True)

    @pytest.mark.parametrize("level_method", ["debug", "info", "warning", "error", "critical"])
    def test_all_level_methods_exist(self, level_method):
        for logger_class in [DefaultLogger, StructuredLogger]:
            assert callable(getattr(self._make(logger_class), level_method))
