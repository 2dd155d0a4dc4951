"""Central logging utilities for the rater.

Key Features
------------
1. configure_logging(): idempotent level setup for the package logger.
2. get_logger(name): typed helper returning a module-scoped logger.

Importing the package configures nothing. The first engine built calls
``configure_logging()``, which only sets the level of the ``policy_rater``
logger; handlers and the root logger are left to the application.
"""

from __future__ import annotations

import logging
from typing import Final

from beartype import beartype

from .config import get_settings

__all__: Final = [
    "configure_logging",
    "get_logger",
]

_ROOT_LOGGER_NAME: Final = "policy_rater"
_is_configured: bool = False


@beartype
def configure_logging(*, level: int | None = None) -> None:
    """Configure the package logger exactly once.

    Calling this function multiple times is safe – configuration will only
    be applied on the first invocation. When ``level`` is omitted the level
    comes from ``Settings.log_level``.
    """
    global _is_configured
    if _is_configured:
        return

    if level is None:
        level = logging.getLevelName(get_settings().log_level)

    logging.getLogger(_ROOT_LOGGER_NAME).setLevel(level)
    _is_configured = True


@beartype
def get_logger(name: str | None = None, *, level: int | None = None) -> logging.Logger:
    """Return a module-scoped logger under the package logger."""
    logger = logging.getLogger(name or _ROOT_LOGGER_NAME)
    if level is not None:
        logger.setLevel(level)
    return logger
