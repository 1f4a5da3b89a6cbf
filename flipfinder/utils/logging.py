"""Namespaced logger for flipfinder with event-name plus key=value records."""

from __future__ import annotations

import logging
import os
from typing import Optional

NAMESPACE = "flipfinder"
_LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def format_fields(**fields: object) -> str:
    """Render ``key=value`` pairs for a log record, e.g. ``listings=12 errors=1``.

    Values containing whitespace are quoted so a record stays on one line.
    """

    parts = []
    for key, value in fields.items():
        text = " ".join(str(value).split())
        if text != str(value) or " " in text or not text:
            text = f'"{text}"'
        parts.append(f"{key}={text}")
    return " ".join(parts)


def configure_logging(namespace: str = NAMESPACE) -> logging.Logger:
    logger = logging.getLogger(namespace)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    logger.addHandler(handler)
    logger.setLevel(_LOG_LEVEL)
    logger.propagate = False
    return logger


def get_logger(child: Optional[str] = None) -> logging.Logger:
    """Logger under the ``flipfinder`` namespace, e.g. ``flipfinder.db.csv_ingest``."""

    base = configure_logging()
    return base.getChild(child) if child else base
