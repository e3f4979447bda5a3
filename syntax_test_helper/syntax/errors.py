#!/usr/bin/env python3
"""Errors raised by the syntax tooling."""

from pathlib import Path
from typing import Optional


class SyntaxToolingError(Exception):
    """Base class for recoverable syntax tooling failures."""


class DeserializationError(SyntaxToolingError):
    """A payload is not a valid tree in the declared serialization format."""


class ParserInvocationError(SyntaxToolingError):
    """Running the external parser did not produce a tree."""

    def __init__(self, message: str, executable: Optional[Path] = None):
        self.executable = executable
        if executable is not None:
            message = f"{message} (swiftc: {executable})"
        super().__init__(message)


class SyntaxContractViolation(AssertionError):
    """A tree broke an invariant its consumer relies on. Not recoverable."""
