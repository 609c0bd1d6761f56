"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of OASMODEL, licensed under the MIT License.
See LICENSE file for details.
"""

"""Logging setup for OASMODEL.

Console output goes through rich, with optional JSON formatting and a log
file. Context passed as ``extra={"context_data": {...}}`` is rendered by
both formatters.
"""

import json
import logging
import os
import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "oasmodel"
PLAIN_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """
    Formatter that outputs log records as JSON.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now().isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        context = getattr(record, "context_data", None)
        if context:
            log_data["context"] = context

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }

        return json.dumps(log_data, default=str)


class RichContextFormatter(logging.Formatter):
    """
    Formatter for Rich console output with context data appended.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context = getattr(record, "context_data", None)
        if context:
            context_str = " ".join(f"[{k}={v}]" for k, v in context.items())
            message = f"{message} {context_str}"
        return message


@contextmanager
def log_operation(
    logger: logging.Logger,
    operation_name: str,
    level: int = logging.INFO,
    context: dict[str, Any] | None = None,
) -> Iterator[dict[str, Any]]:
    """
    Context manager for logging operations with timing and context tracking.

    Args:
    ----
        logger: The logger instance to use
        operation_name: Name of the operation being performed
        level: Log level to use
        context: Additional context data to include in the logs

    Yields:
    ------
        The context dictionary, which the caller may add entries to

    Raises:
    ------
        Exception: Re-raises any exception that occurs within the context

    """
    start_time = time.time()
    context = dict(context or {})

    logger.log(level, f"Starting {operation_name}", extra={"context_data": context})

    try:
        yield context
    except Exception as e:
        duration = time.time() - start_time
        error_context = {
            **context,
            "error_type": type(e).__name__,
            "error": str(e),
            "duration": f"{duration:.2f}s",
        }
        logger.log(
            logging.ERROR,
            f"Failed {operation_name} after {duration:.2f}s",
            extra={"context_data": error_context},
        )
        raise

    duration = time.time() - start_time
    logger.log(
        level,
        f"Completed {operation_name} in {duration:.2f}s",
        extra={"context_data": context},
    )


def configure_logging(
    level: int | str = logging.INFO,
    log_file: str | None = None,
    json_format: bool = False,
    use_rich: bool = True,
    debug: bool = False,
) -> None:
    """
    Configure the package logger.

    Args:
    ----
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL or integer)
        log_file: Optional path to log file
        json_format: Whether to use JSON format for logs
        use_rich: Whether to use Rich for console output
        debug: Whether to force debug mode

    """
    if isinstance(level, str):
        level = getattr(logging, level.upper())
    if debug:
        level = logging.DEBUG

    handlers: list[logging.Handler] = []

    if use_rich and not json_format:
        console_handler = RichHandler(
            console=Console(stderr=True), rich_tracebacks=True, markup=False, show_path=debug
        )
        console_handler.setFormatter(RichContextFormatter("%(message)s"))
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(
            JSONFormatter() if json_format else RichContextFormatter(PLAIN_FORMAT)
        )
    handlers.append(console_handler)

    if log_file:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            JSONFormatter() if json_format else RichContextFormatter(PLAIN_FORMAT)
        )
        handlers.append(file_handler)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        logger.addHandler(handler)

    logger.debug(f"Logging configured with level {logging.getLevelName(level)}")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the standard configuration.

    Args:
    ----
        name: Name of the logger, typically __name__

    Returns:
    -------
        A logger instance

    """
    return logging.getLogger(name)
