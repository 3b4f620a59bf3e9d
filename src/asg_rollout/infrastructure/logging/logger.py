"""Structured logging setup built on structlog and the stdlib logging module."""

import logging
import os
import sys
from typing import Any, Optional

import structlog

ROOT_LOGGER_NAME = "asg_rollout"

_configured = False


def setup_logging(
    log_level: Optional[str] = None,
    log_destination: Optional[str] = None,
    log_file: Optional[str] = None,
) -> None:
    """
    Set up structured logging for the application using structlog.

    :param log_level: Logging level (e.g., DEBUG, INFO, WARNING, ERROR, CRITICAL).
    :param log_destination: Where to send logs ("stderr", "file", or "both").
    :param log_file: Path of the log file when logging to a file.
    """
    global _configured

    log_level = log_level or os.environ.get("ASG_ROLLOUT_LOG_LEVEL", "WARNING")
    log_destination = log_destination or os.environ.get("ASG_ROLLOUT_LOG_DESTINATION", "stderr")
    log_file = log_file or os.environ.get("ASG_ROLLOUT_LOG_FILE", "asg_rollout.log")

    shared_processors: list[Any] = [
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[structlog.stdlib.filter_by_level]
        + shared_processors
        + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
    )

    handlers: list[logging.Handler] = []
    if log_destination in ("file", "both"):
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))
    if log_destination in ("stderr", "both"):
        handlers.append(logging.StreamHandler(sys.stderr))

    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(getattr(logging, log_level.upper(), logging.WARNING))
    root.propagate = False

    _configured = True


def get_logger(name: str = ROOT_LOGGER_NAME) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger below the application root logger."""
    if not _configured:
        setup_logging()
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return structlog.stdlib.get_logger(name)
