"""Tests for structured loggers and logging configuration."""

import io
import logging

import pytest

from ttynamed.core.logging_config import coerce_level, configure_logging
from ttynamed.core.logging_utils import StructuredLogger, get_module_logger


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
    logging.captureWarnings(False)


class TestGetModuleLogger:

    def test_namespaced(self):
        log = get_module_logger("Store")
        assert isinstance(log, StructuredLogger)
        assert log.name == "ttynamed.Store"
        assert log.component == "Store"

    def test_already_namespaced(self):
        assert get_module_logger("ttynamed.cli").name == "ttynamed.cli"
        assert get_module_logger().name == "ttynamed"
        assert get_module_logger().component == "Core"

    def test_messages_carry_component_prefix(self, caplog):
        log = get_module_logger("Enumerator")
        with caplog.at_level(logging.DEBUG, logger="ttynamed"):
            log.warning("could not read %s", "ttyUSB1")
        assert "[Enumerator] could not read ttyUSB1" in caplog.text

    def test_bad_format_args_do_not_raise(self, caplog):
        log = get_module_logger("Enumerator")
        with caplog.at_level(logging.DEBUG, logger="ttynamed"):
            log.info("no placeholders", "extra")
        assert "args=extra" in caplog.text


class TestConfigureLogging:

    def test_coerce_level(self):
        assert coerce_level("DEBUG") == logging.DEBUG
        assert coerce_level(logging.ERROR) == logging.ERROR
        with pytest.raises(ValueError):
            coerce_level("chatty")

    def test_console_stream(self, restore_root_logging):
        stream = io.StringIO()
        configure_logging("info", stream=stream)

        get_module_logger("Cli").info("hello")

        assert "[Cli] hello" in stream.getvalue()
        assert "INFO" in stream.getvalue()

    def test_level_filters(self, restore_root_logging):
        stream = io.StringIO()
        configure_logging("warning", stream=stream)

        get_module_logger("Cli").info("quiet")

        assert stream.getvalue() == ""

    def test_log_file(self, restore_root_logging, tmp_path):
        log_file = tmp_path / "logs" / "ttynamed.log"
        configure_logging("debug", console=False, log_file=log_file)

        get_module_logger("Store").debug("saved")
        for handler in restore_root_logging.handlers:
            handler.flush()

        assert "[Store] saved" in log_file.read_text()

    def test_reconfigure_replaces_handlers(self, restore_root_logging):
        first = io.StringIO()
        second = io.StringIO()
        configure_logging("warning", stream=first)

        configure_logging("debug", stream=second)
        get_module_logger("Cli").debug("again")

        assert len(restore_root_logging.handlers) == 1
        assert restore_root_logging.level == logging.DEBUG
        assert first.getvalue() == ""
        assert "[Cli] again" in second.getvalue()
