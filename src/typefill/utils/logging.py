"""Logging utilities.

Purpose:
    Centralize logging configuration for the package.

Key responsibilities:
    - Provide a helper to obtain package loggers.
    - Allow an optional verbose/debug mode for the CLI.

Notes/Edge cases:
    - The package root logger carries a ``NullHandler`` so library use stays
      silent unless the application configures logging.
    - :func:`configure_logging` is idempotent; repeated calls adjust the level
      but never stack handlers.
"""

from __future__ import annotations

import logging
import sys

_ROOT = "typefill"
_HANDLER_ATTR = "_typefill_handler"

logging.getLogger(_ROOT).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return a logger below the package root for module ``name``."""

    if name == _ROOT or name.startswith(_ROOT + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT}.{name}")


def configure_logging(*, verbose: bool = False) -> logging.Logger:
    """Attach a stderr handler to the package logger.

    ``verbose`` selects ``DEBUG`` instead of ``WARNING``.
    """

    logger = logging.getLogger(_ROOT)
    level = logging.DEBUG if verbose else logging.WARNING
    handler = next((h for h in logger.handlers if getattr(h, _HANDLER_ATTR, False)), None)
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        setattr(handler, _HANDLER_ATTR, True)
        logger.addHandler(handler)
    handler.setLevel(level)
    logger.setLevel(level)
    return logger


__all__ = ["get_logger", "configure_logging"]
