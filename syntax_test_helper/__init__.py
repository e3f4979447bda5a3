"""Test helper driving syntax tree deserialization, classification and printing."""

from .arguments import ArgumentStore, resolve_serialization_format, select_action
from .errors import (
    CollaboratorError,
    FileAccessError,
    HelperError,
    InvalidArgumentValue,
    MalformedArgument,
    MissingRequiredArgument,
    NoActionSpecified,
)
from .models import Action, ActionOutcome

__all__ = [
    "Action",
    "ActionOutcome",
    "ArgumentStore",
    "CollaboratorError",
    "FileAccessError",
    "HelperError",
    "InvalidArgumentValue",
    "MalformedArgument",
    "MissingRequiredArgument",
    "NoActionSpecified",
    "resolve_serialization_format",
    "select_action",
]
