#!/usr/bin/env python3
"""
Data models for the syntax test helper.

Contains the command-line vocabulary and the values passed between the
argument layer, the actions and the driver.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


FLAG_MARKER = "-"


class Flag:
    """Command-line flag names."""
    DESERIALIZE = "-deserialize"
    DESERIALIZE_INCREMENTAL = "-deserialize-incremental"
    CLASSIFY_SYNTAX = "-classify-syntax"
    PRINT_SOURCE = "-print-source"
    HELP = "-help"

    SOURCE_FILE = "-source-file"
    PRE_EDIT_TREE = "-pre-edit-tree"
    INCR_TREE = "-incr-tree"
    SERIALIZATION_FORMAT = "-serialization-format"
    OUT = "-out"
    SWIFTC = "-swiftc"


# Flags that must be followed by a value token
VALUE_FLAGS = frozenset({
    Flag.SOURCE_FILE,
    Flag.PRE_EDIT_TREE,
    Flag.INCR_TREE,
    Flag.SERIALIZATION_FORMAT,
    Flag.OUT,
    Flag.SWIFTC,
})


class Action(Enum):
    """Actions the helper can perform, keyed by their selecting flag."""
    DESERIALIZE = Flag.DESERIALIZE
    INCREMENTAL_ROUND_TRIP = Flag.DESERIALIZE_INCREMENTAL
    CLASSIFY_SYNTAX_COLORING = Flag.CLASSIFY_SYNTAX
    PRINT_TREE_STRUCTURE = Flag.PRINT_SOURCE
    HELP = Flag.HELP

    @property
    def flag(self) -> str:
        return self.value


# First present flag wins; combinations are never rejected
ACTION_PRECEDENCE = (
    Action.INCREMENTAL_ROUND_TRIP,
    Action.CLASSIFY_SYNTAX_COLORING,
    Action.DESERIALIZE,
    Action.PRINT_TREE_STRUCTURE,
    Action.HELP,
)


@dataclass(frozen=True)
class ActionOutcome:
    """What an action hands back to the driver."""
    action: Action
    stdout: Optional[str] = None

    @classmethod
    def silent(cls, action: Action) -> "ActionOutcome":
        """Outcome of an action whose result went to a file."""
        return cls(action=action)
