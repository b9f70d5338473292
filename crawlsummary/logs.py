"""
Logging for the summarizer.

Progress of the two passes (seed map built, resolved, records folded) is
logged at INFO; skipped lines, missing parents and pathological chains at
WARNING. Everything goes to stderr because stdout may carry the JSON summary.
"""

from __future__ import annotations

import logging
import os
import sys

_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}


def setup_logging(level: str | int | None = None) -> None:
    """
    Configure the root logger once per process.

    level: a name such as "debug" or a logging constant. None reads
    CRAWLSUMMARY_LOG_LEVEL and falls back to INFO; unknown names mean INFO.
    """
    if level is None:
        level = os.getenv("CRAWLSUMMARY_LOG_LEVEL", "INFO")

    if isinstance(level, str):
        level = _LEVELS.get(level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )
