"""Logger helpers shared by the testmatrix packages.

All package loggers live under their own top-level namespace (``testmatrix``,
``testmatrix_cli``, ``testmatrix_common``) so the CLI can configure them
together without touching third-party loggers.
"""

from __future__ import annotations

import logging
import sys

LOGGING_PACKAGES = ("testmatrix", "testmatrix_cli", "testmatrix_common")

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"
DEBUG_LOG_FORMAT = (
    "%(asctime)s %(levelname)s %(name)s [%(filename)s:%(lineno)d]: %(message)s"
)


class _StderrHandler(logging.StreamHandler):
    """Stream handler that always writes to the current ``sys.stderr``."""

    @property
    def stream(self):
        return sys.stderr

    @stream.setter
    def stream(self, value) -> None:
        pass


def get_cli_logger(name: str) -> logging.Logger:
    """Return a module logger.

    Parameters
    ----------
    name : str
        Usually ``__name__`` of the calling module

    Returns
    -------
    logging.Logger
        The logger instance
    """
    return logging.getLogger(name)


def configure_logger(
    name: str,
    level: str | int = logging.WARNING,
    to_console: bool = True,
    verbose_debug: bool = False,
) -> logging.Logger:
    """Configure a package logger with a single stderr handler.

    Re-configuring replaces the handler installed by a previous call instead
    of stacking another one.

    Parameters
    ----------
    name : str
        Logger name, normally a top-level package
    level : str | int
        Log level name or number
    to_console : bool
        Whether to attach a stderr handler
    verbose_debug : bool
        Use the detailed format with timestamps and source locations

    Returns
    -------
    logging.Logger
        The configured logger
    """
    logger = logging.getLogger(name)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if isinstance(handler, _StderrHandler):
            logger.removeHandler(handler)

    if to_console:
        handler = _StderrHandler()
        handler.setFormatter(
            logging.Formatter(DEBUG_LOG_FORMAT if verbose_debug else LOG_FORMAT),
        )
        logger.addHandler(handler)

    return logger


def configure_package_loggers(
    level: str | int,
    verbose_debug: bool = False,
) -> None:
    """Configure every package logger with the same level."""
    for pkg_name in LOGGING_PACKAGES:
        configure_logger(pkg_name, level=level, verbose_debug=verbose_debug)
