"""Logging setup for Folio.

Modules obtain their logger with::

    from .log import get_logger
    logger = get_logger(__name__)

Handlers and levels are configured once, by the CLI entry point. Records
are written with ``click.echo`` so they land on whatever stderr click is
currently using.
"""

from __future__ import annotations

import logging

import click

DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


class ClickHandler(logging.Handler):
    """Logging handler that writes records to stderr through click."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(self.format(record), err=True)
        except Exception:
            self.handleError(record)


def configure_logging(level: int = logging.WARNING, fmt: str = DEFAULT_FORMAT) -> None:
    """Configure the ``folio`` logger.

    Safe to call more than once; a handler is only attached the first time.

    Args:
        level: Logging level for the package logger.
        fmt: Format string for log records.
    """
    logger = logging.getLogger("folio")
    if not any(isinstance(h, ClickHandler) for h in logger.handlers):
        handler = ClickHandler()
        handler.setFormatter(logging.Formatter(fmt))
        logger.addHandler(handler)
    logger.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module. Does not configure anything."""
    return logging.getLogger(name)
