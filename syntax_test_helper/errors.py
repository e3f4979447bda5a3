#!/usr/bin/env python3
"""
Failures reported by the syntax test helper.

Every class here is terminal for an invocation: the driver prints the
message and exits with status 1.
"""

from pathlib import Path
from typing import Union

from .syntax.errors import SyntaxToolingError


class HelperError(Exception):
    """Base class for every failure the driver reports."""


class MissingRequiredArgument(HelperError):
    """A flag an action needs was not supplied."""

    def __init__(self, flag_name: str):
        self.flag_name = flag_name
        super().__init__(f"Missing required argument: {flag_name}")


class InvalidArgumentValue(HelperError):
    """A flag's value is outside its closed set."""

    def __init__(self, flag_name: str, value: str):
        self.flag_name = flag_name
        self.value = value
        super().__init__(f"Invalid value '{value}' for argument {flag_name}")


class MalformedArgument(HelperError):
    """The argument vector does not follow the flag/value grammar."""

    def __init__(self, argument: str, reason: str):
        self.argument = argument
        self.reason = reason
        super().__init__(f"Malformed argument {argument}: {reason}")


class NoActionSpecified(HelperError):
    """None of the action flags was given."""

    def __init__(self):
        super().__init__("No action specified.")


class FileAccessError(HelperError):
    """Reading or writing a file failed."""

    def __init__(self, path: Union[str, Path], cause: OSError):
        self.path = Path(path)
        self.cause = cause
        reason = cause.strerror or str(cause)
        super().__init__(f"Could not access file {self.path}: {reason}")


class CollaboratorError(HelperError):
    """The syntax tooling failed; its own message is kept unchanged."""

    def __init__(self, cause: SyntaxToolingError):
        self.cause = cause
        super().__init__(str(cause))
