"""Root logger wiring: append-only log file plus stdout."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"


def configure_logging(level: str, log_file: str) -> None:
    """Send every record to *log_file* (appending) and to stdout.

    Raises ``OSError`` when the log file cannot be opened.
    """
    file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    logging.basicConfig(
        level=level.upper(),
        format=LOG_FORMAT,
        handlers=[file_handler, logging.StreamHandler(sys.stdout)],
        force=True,
    )
