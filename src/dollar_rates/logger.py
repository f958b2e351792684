"""Logging utilities for the dollar_rates package."""

from __future__ import annotations

import logging
from typing import Optional

_LOGGER: Optional[logging.Logger] = None


def get_logger(name: str = "dollar_rates") -> logging.Logger:
    """Return a named logger, configuring the root handler on first use."""
    global _LOGGER
    if _LOGGER is None:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )
        _LOGGER = logging.getLogger("dollar_rates")
    return logging.getLogger(name)


def set_level(level: str) -> None:
    """Adjust the root log level, e.g. from a ``--log-level`` flag."""
    get_logger()
    logging.getLogger().setLevel(level.upper())
