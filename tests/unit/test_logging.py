"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of OASMODEL, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Unit tests for the logging setup.
"""

import json
import logging

import pytest
from rich.logging import RichHandler

from oasmodel import loader
from oasmodel.core.logging import (
    JSONFormatter,
    RichContextFormatter,
    configure_logging,
    get_logger,
    log_operation,
)


class ListHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


def make_record(**extra):
    record = logging.LogRecord(
        "oasmodel.test", logging.INFO, __file__, 10, "hello %s", ("world",), None
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.mark.unit
class TestFormatters:
    """Tests for the log formatters."""

    def test_json_formatter(self):
        """Test that JSON output includes the message and context."""
        output = JSONFormatter().format(make_record(context_data={"file": "a.yaml"}))

        data = json.loads(output)
        assert data["message"] == "hello world"
        assert data["level"] == "INFO"
        assert data["context"] == {"file": "a.yaml"}

    def test_rich_context_formatter(self):
        """Test that context is appended to the message."""
        output = RichContextFormatter("%(message)s").format(make_record(context_data={"n": 2}))

        assert output == "hello world [n=2]"

    def test_rich_context_formatter_without_context(self):
        """Test formatting a record that carries no context."""
        assert RichContextFormatter("%(message)s").format(make_record()) == "hello world"


@pytest.mark.unit
class TestConfigureLogging:
    """Tests for configuring the package logger."""

    def test_rich_console(self, package_logger):
        """Test that rich output is used by default."""
        configure_logging(level="WARNING")

        assert package_logger.level == logging.WARNING
        assert package_logger.propagate is False
        assert len(package_logger.handlers) == 1
        assert isinstance(package_logger.handlers[0], RichHandler)

    def test_json_and_file(self, package_logger, temp_dir):
        """Test JSON formatting with a log file."""
        log_file = temp_dir / "logs" / "oasmodel.log"

        configure_logging(log_file=str(log_file), json_format=True, debug=True)
        get_logger("oasmodel.loader").info("loaded")

        assert package_logger.level == logging.DEBUG
        assert all(isinstance(h.formatter, JSONFormatter) for h in package_logger.handlers)
        for handler in package_logger.handlers:
            handler.flush()
        lines = [json.loads(line) for line in log_file.read_text().splitlines()]
        assert any(line["message"] == "loaded" for line in lines)


@pytest.mark.unit
class TestLogOperation:
    """Tests for the log_operation context manager."""

    def test_logs_start_and_completion(self):
        """Test that an operation logs its start and completion with context."""
        logger = logging.getLogger("oasmodel.tests.operation")
        handler = ListHandler()
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)
        try:
            with log_operation(logger, "decoding", context={"file": "a.yaml"}) as context:
                context["paths"] = 3
        finally:
            logger.removeHandler(handler)

        messages = [record.getMessage() for record in handler.records]
        assert messages[0] == "Starting decoding"
        assert messages[1].startswith("Completed decoding in ")
        assert handler.records[1].context_data == {"file": "a.yaml", "paths": 3}

    def test_logs_failure_and_reraises(self):
        """Test that a failing operation is logged as an error and the exception propagates."""
        logger = logging.getLogger("oasmodel.tests.failure")
        handler = ListHandler()
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)
        try:
            with pytest.raises(KeyError):
                with log_operation(logger, "lookup"):
                    raise KeyError("missing")
        finally:
            logger.removeHandler(handler)

        failure = handler.records[-1]
        assert failure.levelno == logging.ERROR
        assert failure.getMessage().startswith("Failed lookup after ")
        assert failure.context_data["error_type"] == "KeyError"


@pytest.mark.unit
class TestModuleLoggers:
    """Tests for the loggers used across the package."""

    def test_module_loggers_report_to_package_logger(self, package_logger, write_spec):
        """Test that records from decoding modules reach the package logger's handlers."""
        handler = ListHandler()
        package_logger.addHandler(handler)
        package_logger.setLevel(logging.DEBUG)

        loader.load_paths(write_spec({"paths": {"/a": {"get": {}}, "owner": "me"}}))

        names = {record.name for record in handler.records}
        assert {"oasmodel.loader", "oasmodel.partition", "oasmodel.paths"} <= names
        assert loader.logger is get_logger("oasmodel.loader")
