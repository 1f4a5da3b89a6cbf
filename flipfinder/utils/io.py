"""IO helpers for reading exports and locating the data directory."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Union

from .logging import get_logger

LOGGER = get_logger("utils.io")

DATA_DIR = os.getenv("DATA_DIR", os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "data"))


def resolve_path(name: Union[str, Path]) -> Path:
    """Resolve a filename relative to the data directory."""

    path = Path(name)
    return path if path.is_absolute() else Path(DATA_DIR) / path


def read_text(name: Union[str, Path]) -> str:
    path = resolve_path(name)
    LOGGER.debug("reading_file path=%s", path)
    with open(path, "r", encoding="utf-8-sig") as infile:
        return infile.read()


__all__ = ["DATA_DIR", "resolve_path", "read_text"]
