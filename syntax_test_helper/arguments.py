#!/usr/bin/env python3
"""
Command-line argument handling.

Arguments are single-dash flags, optionally followed by a value token:

    -deserialize -pre-edit-tree tree.json -out out.swift

A token that starts with '-' begins a new flag. The token after a flag is
its value unless it is itself a flag, in which case the first flag is a
boolean switch. When a flag is repeated the last occurrence wins.
"""

from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional

from .errors import InvalidArgumentValue, MalformedArgument, MissingRequiredArgument, NoActionSpecified
from .models import ACTION_PRECEDENCE, FLAG_MARKER, VALUE_FLAGS, Action, Flag
from .syntax import SerializationFormat


class ArgumentStore:
    """Immutable flag -> optional value mapping built from argv."""

    def __init__(self, values: Mapping[str, Optional[str]]):
        self._values = MappingProxyType(dict(values))

    @classmethod
    def parse(cls, raw_args: Iterable[str]) -> "ArgumentStore":
        """Parse raw tokens (without the program name)."""
        values: Dict[str, Optional[str]] = {}
        current_flag: Optional[str] = None

        for token in raw_args:
            if token.startswith(FLAG_MARKER):
                if current_flag is not None:
                    values[current_flag] = None
                current_flag = token
                continue
            if current_flag is None:
                raise MalformedArgument(token, "value given without a preceding flag")
            values[current_flag] = token
            current_flag = None

        if current_flag is not None:
            if current_flag in VALUE_FLAGS:
                raise MalformedArgument(current_flag, "expected a value after the flag")
            values[current_flag] = None

        return cls(values)

    def has(self, name: str) -> bool:
        """True if the flag was given, with or without a value."""
        return name in self._values

    def get(self, name: str) -> Optional[str]:
        return self._values.get(name)

    def get_required(self, name: str) -> str:
        value = self._values.get(name)
        if value is None:
            raise MissingRequiredArgument(name)
        return value

    def get_path(self, name: str) -> Optional[Path]:
        value = self.get(name)
        return Path(value) if value is not None else None

    def get_required_path(self, name: str) -> Path:
        return Path(self.get_required(name))

    def __repr__(self) -> str:
        return f"ArgumentStore({dict(self._values)!r})"


def resolve_serialization_format(store: ArgumentStore) -> SerializationFormat:
    """Map -serialization-format onto the closed set of formats; json by default."""
    value = store.get(Flag.SERIALIZATION_FORMAT)
    if not value:
        return SerializationFormat.JSON
    for serialization_format in SerializationFormat:
        if serialization_format.value == value:
            return serialization_format
    raise InvalidArgumentValue(Flag.SERIALIZATION_FORMAT, value)


def select_action(store: ArgumentStore) -> Action:
    """Pick the highest-precedence action whose flag is present."""
    for action in ACTION_PRECEDENCE:
        if store.has(action.flag):
            return action
    raise NoActionSpecified()
