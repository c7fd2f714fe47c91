"""Logging utilities for genstubs commands."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "genstubs"
_CONSOLE_FORMAT = "[genstubs] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger under the genstubs hierarchy (``genstubs.<name>``)."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Path | None = None,
) -> logging.Logger:
    """Install console and optional file handlers on the genstubs logger.

    ``verbose`` wins over ``quiet`` when both are set.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Repeated CLI invocations in one process must not stack handlers.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        sink = logging.FileHandler(log_file, encoding="utf-8")
        sink.setLevel(level)
        sink.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(sink)

    return logger


def log_failure(logger: logging.Logger, message: str, exc: BaseException) -> None:
    """Log an error, attaching the traceback only when debug output is on."""
    if logger.isEnabledFor(logging.DEBUG):
        logger.error("%s: %s", message, exc, exc_info=exc)
    else:
        logger.error("%s: %s", message, exc)


__all__ = ["configure_logging", "get_logger", "log_failure"]
