"""Centralized logging configuration for the ``transaction_analyzer`` package.

``configure_logging`` attaches a single ``StreamHandler`` to the package root
logger the first time the CLI calls it; later calls only change the level.
Library modules only call ``get_logger("transaction_analyzer.<module>")`` and
never attach handlers.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

_PKG_LOGGER_NAME = "transaction_analyzer"
_PKG_HANDLER_NAME = "transaction_analyzer.stream"
_LEVEL_ENV_VAR = "TRANSACTION_ANALYZER_LOG_LEVEL"
_CONFIGURED = False


def _level_from_name(name: str) -> int | None:
    name = name.strip().upper()
    if name.isdigit():
        return int(name)
    numeric = getattr(logging, name, None)
    return numeric if isinstance(numeric, int) else None


def _parse_level(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        parsed = _level_from_name(level)
        if parsed is not None:
            return parsed
    # Env override when explicit ``level`` is missing or unrecognised
    env_val = os.getenv(_LEVEL_ENV_VAR)
    if env_val:
        parsed = _level_from_name(env_val)
        if parsed is not None:
            return parsed
    return logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Attach the package ``StreamHandler`` on the first call.

    When ``level`` is ``None`` the ``TRANSACTION_ANALYZER_LOG_LEVEL``
    environment variable is used, falling back to ``INFO``. Later calls keep
    the existing handler, format and stream but apply an explicitly given
    ``level``.
    """

    global _CONFIGURED
    logger = logging.getLogger(_PKG_LOGGER_NAME)
    if _CONFIGURED:
        if level is not None:
            resolved = _parse_level(level)
            logger.setLevel(resolved)
            for h in logger.handlers:
                if h.get_name() == _PKG_HANDLER_NAME:
                    h.setLevel(resolved)
        return

    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    resolved = _parse_level(level)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.set_name(_PKG_HANDLER_NAME)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or "%(asctime)s %(name)s %(levelname)s %(message)s"))

    logger.setLevel(resolved)
    logger.addHandler(handler)
    # Avoid double emission via the root logger.
    logger.propagate = False

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger by name, adding a ``NullHandler`` to the package root
    until :func:`configure_logging` has run."""

    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
