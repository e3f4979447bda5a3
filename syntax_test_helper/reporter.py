#!/usr/bin/env python3
"""
Console reporting for the syntax test helper.

Formats the usage text and failure diagnostics. The driver owns the
streams and hands them to the reporter; nothing else writes to them.
"""

import sys
from typing import Optional, TextIO

from .config import LOG_FILE_ENV, LOG_LEVEL_ENV
from .errors import HelperError
from .models import ActionOutcome

PROGRAM_NAME = "swift-swiftsyntax-test"

HELP_HINT = f"Run {PROGRAM_NAME} -help for more help."

USAGE = f"""\
Utility to test SwiftSyntax syntax tree deserialization.

Actions (must specify one):
  -deserialize
        Deserialize a full pre-edit syntax tree (-pre-edit-tree) and write
        the source representation of the syntax tree to an out file (-out).
  -deserialize-incremental
        Deserialize a full pre-edit syntax tree (-pre-edit-tree), parse an
        incrementally transferred post-edit syntax tree (-incr-tree) and
        write the source representation of the post-edit syntax tree to an
        out file (-out).
  -classify-syntax
        Parse the given source file (-source-file) and output it with
        tokens classified for syntax colouring.
  -print-source
        Parse the given source file (-source-file) and print its syntax
        tree, wrapping every node in tags naming its kind.
  -help
        Print this help message

Arguments:
  -source-file FILENAME
        The path to a Swift source file to parse
  -pre-edit-tree FILENAME
        The path to a JSON serialized pre-edit syntax tree
  -incr-tree FILENAME
        The path to a JSON serialized incrementally transferred post-edit
        syntax tree
  -serialization-format {{json,byteTree}} [default: json]
        The format that shall be used to serialize/deserialize the syntax
        tree. Defaults to json.
  -out FILENAME
        The file to which the source representation of the post-edit syntax
        tree shall be written.
  -swiftc FILENAME
        If specified, the path to the swiftc executable to parse the file.
        If not specified, swiftc will be looked up from PATH.

Environment:
  {LOG_LEVEL_ENV}
        Log level for diagnostics on stderr (default: WARNING).
  {LOG_FILE_ENV}
        If set, debug logs are also written to this file.
"""


class HelperReporter:
    """Writes action output and failure diagnostics."""

    def __init__(self, stdout: Optional[TextIO] = None, stderr: Optional[TextIO] = None):
        self.stdout = stdout if stdout is not None else sys.stdout
        self.stderr = stderr if stderr is not None else sys.stderr

    def report_outcome(self, outcome: ActionOutcome) -> None:
        """Print whatever the action produced for standard output."""
        if outcome.stdout:
            self.stdout.write(outcome.stdout)
            self.stdout.flush()

    def report_failure(self, error: HelperError) -> None:
        """Print the failure followed by the help hint."""
        self.stderr.write(f"{error}\n")
        self.stderr.write(f"{HELP_HINT}\n")
        self.stderr.flush()
