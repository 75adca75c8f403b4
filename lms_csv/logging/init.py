from __future__ import annotations

import logging
import sys
from typing import TextIO

"""Labeled console logging for the CLI.

Lines start with INFO, WARN, ERROR or SUMMARY (level 25, between INFO and
WARNING). Output goes to stdout, or to stderr when stdout carries JSON.
"""

__all__ = [
    "setup_logging",
    "log_summary",
    "reset_logging",
    "LabeledFormatter",
    "SUMMARY_LEVEL",
    "LOGGER_NAME",
]

SUMMARY_LEVEL = 25
LOGGER_NAME = "lms_csv"

_logger: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    LEVEL_LABELS = {
        logging.WARNING: "WARN",
        SUMMARY_LEVEL: "SUMMARY",
    }

    def format(self, record: logging.LogRecord) -> str:
        level_label = self.LEVEL_LABELS.get(record.levelno, record.levelname)
        return f"{level_label} {record.getMessage()}"


def setup_logging(stream: TextIO | None = None) -> logging.Logger:
    """Configure the application logger once; later calls return it unchanged.

    Module loggers below ``lms_csv.`` share its handler.

    Args:
        stream: handler target, ``sys.stdout`` when omitted
    """
    global _logger

    if _logger is not None:
        return _logger

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.INFO)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setLevel(logging.INFO)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.propagate = False

    _logger = logger
    return logger


def log_summary(message: str) -> None:
    setup_logging().log(SUMMARY_LEVEL, message)


def reset_logging() -> None:
    """Forget the configured logger so the next setup_logging() rebuilds it."""
    global _logger
    _logger = None
