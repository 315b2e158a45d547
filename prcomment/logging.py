"""Logger setup for the prcomment CLI and service.

Descriptions and prompts are printed on stdout so they can be piped into a
PR body; all diagnostics go to stderr under the ``prcomment`` logger.
"""

from __future__ import annotations

import logging
import sys

ROOT_LOGGER = "prcomment"
CONSOLE_FORMAT = "[prcomment] %(levelname)s %(message)s"


def get_logger(component: str | None = None) -> logging.Logger:
    """Return ``prcomment`` or ``prcomment.<component>``."""
    return logging.getLogger(f"{ROOT_LOGGER}.{component}" if component else ROOT_LOGGER)


def configure_logging(*, verbose: bool = False) -> logging.Logger:
    """Send prcomment records to stderr; ``verbose`` adds git commands and ticket lookups."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.propagate = False

    # main() runs once per test and once per serve; keep a single handler.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console)
    return logger


__all__ = ["configure_logging", "get_logger"]
