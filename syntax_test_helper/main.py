#!/usr/bin/env python3
"""
Main entry point for the syntax test helper.

Usage:
    swift-swiftsyntax-test -deserialize -pre-edit-tree tree.json -out out.swift
    python3 -m syntax_test_helper -help
"""

import logging
import sys
from typing import List, Optional, TextIO

from .actions import run_action
from .arguments import ArgumentStore, select_action
from .config import HelperSettings
from .errors import HelperError
from .reporter import HelperReporter
from .utils.logging_utils import setup_logging

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def main(argv: Optional[List[str]] = None, stdout: Optional[TextIO] = None,
         stderr: Optional[TextIO] = None, settings: Optional[HelperSettings] = None) -> int:
    """Run one action and return the process exit code."""
    reporter = HelperReporter(stdout=stdout, stderr=stderr)
    settings = settings if settings is not None else HelperSettings.from_environment()
    raw_args = sys.argv[1:] if argv is None else argv

    try:
        setup_logging(console_level=settings.log_level, file_path=settings.log_file, stream=reporter.stderr)
        args = ArgumentStore.parse(raw_args)
        action = select_action(args)
        outcome = run_action(action, args)
    except HelperError as e:
        logger.debug("Action failed: %r", e)
        reporter.report_failure(e)
        return EXIT_FAILURE

    reporter.report_outcome(outcome)
    return EXIT_SUCCESS


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
