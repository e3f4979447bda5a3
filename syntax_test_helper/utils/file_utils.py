#!/usr/bin/env python3
"""
File utility functions for the syntax test helper.

Handles the scoped reads and writes of fixture and output files. Every I/O
failure is re-raised as a FileAccessError naming the path.
"""

import logging
from pathlib import Path

from ..errors import FileAccessError

logger = logging.getLogger(__name__)


def read_file_bytes(file_path: Path) -> bytes:
    """Read a whole file as raw bytes."""
    try:
        with open(file_path, 'rb') as f:
            data = f.read()
    except OSError as e:
        raise FileAccessError(file_path, e) from e
    logger.debug("Read %d bytes from %s", len(data), file_path)
    return data


def ensure_readable(file_path: Path) -> None:
    """Fail early if a file cannot be opened for reading."""
    try:
        with open(file_path, 'rb'):
            pass
    except OSError as e:
        raise FileAccessError(file_path, e) from e


def write_text_file(file_path: Path, text: str) -> None:
    """Write text verbatim as UTF-8, replacing the file in place (not atomic)."""
    try:
        with open(file_path, 'w', encoding='utf-8', newline='') as f:
            f.write(text)
    except OSError as e:
        raise FileAccessError(file_path, e) from e
    logger.debug("Wrote %d characters to %s", len(text), file_path)
