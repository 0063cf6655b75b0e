"""Logging setup for commitsmith.

Components log their traces under the ``commitsmith`` logger. Failures are
reported to the user once, by the CLI controller, so the package logger stays
at WARNING unless ``--debug`` or ``COMMITSMITH_LOG_LEVEL`` asks for more.
"""

from __future__ import annotations

import logging
import os
from typing import Final

import click


LOG_LEVEL_ENV_VAR: Final[str] = "COMMITSMITH_LOG_LEVEL"
PACKAGE_LOGGER: Final[str] = "commitsmith"
DEFAULT_LEVEL: Final[int] = logging.WARNING

_FORMAT: Final[str] = "[%(levelname)s %(name)s] %(message)s"
_LEVEL_COLORS: Final[dict[int, str]] = {
    logging.DEBUG: "bright_black",
    logging.INFO: "cyan",
    logging.WARNING: "yellow",
    logging.ERROR: "red",
    logging.CRITICAL: "magenta",
}


class _StderrEchoHandler(logging.Handler):
    """Send records through ``click.echo`` so they share stderr with the CLI."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            color = _LEVEL_COLORS.get(record.levelno)
            click.echo(click.style(message, fg=color), err=True)
        except Exception:
            self.handleError(record)


def _level_from_env() -> int | None:
    level_name = os.getenv(LOG_LEVEL_ENV_VAR)
    if not level_name:
        return None

    level = logging.getLevelName(level_name.upper())
    return level if isinstance(level, int) else None


def _package_logger() -> logging.Logger:
    logger = logging.getLogger(PACKAGE_LOGGER)

    if not any(isinstance(h, _StderrEchoHandler) for h in logger.handlers):
        handler = _StderrEchoHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
        env_level = _level_from_env()
        logger.setLevel(env_level if env_level is not None else DEFAULT_LEVEL)

    return logger


def commitsmith_logger(name: str) -> logging.Logger:
    """Return the logger for *name*, a module under the commitsmith package."""

    _package_logger()
    return logging.getLogger(name)


def set_commitsmith_log_level(level_name: str) -> None:
    """Set the threshold for every commitsmith logger (``--debug`` uses DEBUG)."""

    os.environ[LOG_LEVEL_ENV_VAR] = level_name
    level = _level_from_env()
    _package_logger().setLevel(level if level is not None else DEFAULT_LEVEL)
