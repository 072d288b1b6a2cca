"""Logging setup shared by the docbundle CLI and service."""

from __future__ import annotations

import logging
from pathlib import Path

_ROOT_LOGGER = "docbundle"
CONSOLE_FORMAT = "[docbundle] %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``docbundle`` or one of its ``docbundle.<name>`` children."""
    return logging.getLogger(f"{_ROOT_LOGGER}.{name}" if name else _ROOT_LOGGER)


def _handler(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def configure_logging(
    *, verbose: bool = False, log_file: Path | str | None = None
) -> logging.Logger:
    """Send docbundle records to stderr and, when ``log_file`` is set, append them there.

    Calling this again replaces the handlers installed by the previous call.
    The log file's parent directory is created if it is missing.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_ROOT_LOGGER)
    logger.setLevel(level)
    logger.propagate = False
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
        existing.close()

    logger.addHandler(_handler(logging.StreamHandler(), level, CONSOLE_FORMAT))
    if log_file is not None:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        logger.addHandler(
            _handler(logging.FileHandler(path, encoding="utf-8"), level, FILE_FORMAT)
        )
    return logger


__all__ = ["configure_logging", "get_logger"]
