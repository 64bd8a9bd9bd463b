"""Centralized logging configuration for the ``ledger_tracker`` package.

- ``configure_logging(...)``: attach a single rich handler to the package
  root logger. Called once by the CLI at startup.
- ``get_logger(name)``: acquire a logger, attaching a ``NullHandler`` to the
  package root until logging is configured.

Library modules never attach their own handlers.
"""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

_PKG_LOGGER_NAME = "ledger_tracker"
_CONFIGURED = False


def _parse_level(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        level = level.strip().upper()
        if level.isdigit():
            return int(level)
        numeric = getattr(logging, level, None)
        if isinstance(numeric, int):
            return numeric
    env_val = os.getenv("LEDGER_TRACKER_LOG_LEVEL")
    if env_val:
        return _parse_level(env_val)
    return logging.WARNING


def configure_logging(level: int | str | None = None) -> None:
    """Configure the package root logger exactly once.

    ``level`` may be an ``int`` or a level name. When ``None`` the
    ``LEDGER_TRACKER_LOG_LEVEL`` environment variable is used, falling back
    to ``WARNING`` so the dashboard output stays clean.
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    logger = logging.getLogger(_PKG_LOGGER_NAME)

    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    logger.setLevel(_parse_level(level))
    logger.addHandler(handler)
    # Avoid double emission via the root logger.
    logger.propagate = False

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger by name, silent until ``configure_logging`` runs."""

    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
