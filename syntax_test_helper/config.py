#!/usr/bin/env python3
"""Environment-driven settings for the syntax test helper."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

LOG_LEVEL_ENV = "SWIFTSYNTAX_TEST_LOG_LEVEL"
LOG_FILE_ENV = "SWIFTSYNTAX_TEST_LOG_FILE"

DEFAULT_LOG_LEVEL = logging.WARNING


@dataclass(frozen=True)
class HelperSettings:
    log_level: int = DEFAULT_LOG_LEVEL          # SWIFTSYNTAX_TEST_LOG_LEVEL
    log_file: Optional[Path] = None             # SWIFTSYNTAX_TEST_LOG_FILE

    @classmethod
    def from_environment(cls, environ: Optional[Mapping[str, str]] = None) -> "HelperSettings":
        env = os.environ if environ is None else environ
        log_file = env.get(LOG_FILE_ENV)
        return cls(
            log_level=_parse_log_level(env.get(LOG_LEVEL_ENV)),
            log_file=Path(log_file) if log_file else None,
        )


def _parse_log_level(value: Optional[str]) -> int:
    if not value:
        return DEFAULT_LOG_LEVEL
    level = logging.getLevelName(value.strip().upper())
    # getLevelName returns a string for names it does not know
    return level if isinstance(level, int) else DEFAULT_LOG_LEVEL
