"""Logging for the billscan namespace.

Every module logs through ``get_logger(__name__)``. Output goes to stderr;
the level comes from ``BILLSCAN_LOG_LEVEL`` (DEBUG, INFO, WARNING, ERROR),
INFO when unset. The parsing core only logs at DEBUG.
"""

import logging
import os
import sys

DEFAULT_LOG_LEVEL = logging.INFO

LOG_FORMAT = "%(levelname)s [%(name)s] %(message)s"
LOG_FORMAT_DEBUG = "%(levelname)s [%(name)s:%(lineno)d] %(message)s"

LOGGER_NAMESPACE = "billscan"
LEVEL_ENV_VAR = "BILLSCAN_LOG_LEVEL"

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
}

_logging_configured = False


def _format_for(level: int) -> logging.Formatter:
    return logging.Formatter(LOG_FORMAT_DEBUG if level == logging.DEBUG else LOG_FORMAT)


def configure_logging(level: int | None = None) -> None:
    """Attach the stderr handler to the billscan logger, once per process."""
    global _logging_configured

    if _logging_configured:
        return

    if level is None:
        level = _LEVELS.get(os.environ.get(LEVEL_ENV_VAR, "").upper(), DEFAULT_LOG_LEVEL)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_format_for(level))

    package_logger = logging.getLogger(LOGGER_NAMESPACE)
    package_logger.setLevel(level)
    package_logger.addHandler(handler)
    package_logger.propagate = False

    _logging_configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the billscan namespace (``__name__`` is already inside it)."""
    configure_logging()
    if name == LOGGER_NAMESPACE or name.startswith(f"{LOGGER_NAMESPACE}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")


def set_log_level(level: int) -> None:
    """Change the billscan level at runtime, e.g. for ``billscan --verbose``."""
    package_logger = logging.getLogger(LOGGER_NAMESPACE)
    package_logger.setLevel(level)
    for handler in package_logger.handlers:
        handler.setFormatter(_format_for(level))
