#!/usr/bin/env python3
"""
Parse Swift source files by running the compiler's syntax dumper.

`swiftc -frontend -emit-syntax FILE` prints the file's syntax tree as JSON
on stdout; the tree is then read back with a fresh deserializer.
"""

import logging
import os
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional

from .deserializer import SerializationFormat, SyntaxTreeDeserializer
from .errors import DeserializationError, ParserInvocationError
from .nodes import Syntax

logger = logging.getLogger(__name__)

SWIFTC_NAME = "swiftc"


class SyntaxTreeParser:
    """Runs an external swiftc and returns the tree it emits."""

    @staticmethod
    def find_swiftc(swiftc: Optional[Path] = None) -> Path:
        """Return the given executable, or look swiftc up on PATH."""
        if swiftc is not None:
            return swiftc
        found = shutil.which(SWIFTC_NAME)
        if found is None:
            raise ParserInvocationError(
                f"Could not find {SWIFTC_NAME} in PATH ({os.environ.get('PATH', '')})"
            )
        return Path(found)

    @staticmethod
    def emit_syntax_command(swiftc: Path, source_file: Path) -> List[str]:
        return [str(swiftc), "-frontend", "-emit-syntax", str(source_file)]

    @classmethod
    def parse(cls, source_file: Path, swiftc: Optional[Path] = None) -> Syntax:
        """Parse source_file and return the root of its syntax tree."""
        executable = cls.find_swiftc(swiftc)
        command = cls.emit_syntax_command(executable, source_file)
        logger.debug("Running %s", " ".join(command))

        try:
            completed = subprocess.run(command, stdout=subprocess.PIPE, stderr=subprocess.PIPE)
        except OSError as e:
            raise ParserInvocationError(f"Failed to run parser: {e}", executable) from e

        if completed.returncode != 0:
            stderr = completed.stderr.decode("utf-8", errors="replace").strip()
            raise ParserInvocationError(
                f"Parsing {source_file} failed with exit code {completed.returncode}: {stderr}",
                executable,
            )

        try:
            return SyntaxTreeDeserializer().deserialize(completed.stdout, SerializationFormat.JSON)
        except DeserializationError as e:
            raise ParserInvocationError(f"Parser produced an invalid syntax tree: {e}", executable) from e
