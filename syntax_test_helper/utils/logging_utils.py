#!/usr/bin/env python3
"""
Logging setup for the syntax test helper.

Standard output carries the golden output compared by regression tests, so
console logging always goes to stderr. An optional file receives debug logs.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, TextIO, Union

from ..errors import FileAccessError

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(name)s - %(message)s'


def setup_logging(*, console_level: int = logging.WARNING,
                  file_path: Optional[Union[str, Path]] = None,
                  file_level: int = logging.DEBUG,
                  stream: Optional[TextIO] = None,
                  replace_existing: bool = True) -> None:
    """Configure the root logger with a console handler and an optional file handler."""
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    if replace_existing:
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(LOG_FORMAT)
    console_handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if file_path:
        path_obj = Path(file_path)
        mode = 'w' if replace_existing else 'a'
        try:
            path_obj.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(path_obj, mode=mode, encoding='utf-8')
        except OSError as e:
            raise FileAccessError(path_obj, e) from e
        file_handler.setLevel(file_level)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
