"""Utility modules for the syntax test helper."""

from .file_utils import ensure_readable, read_file_bytes, write_text_file
from .logging_utils import setup_logging

__all__ = [
    "ensure_readable",
    "read_file_bytes",
    "write_text_file",
    "setup_logging",
]
