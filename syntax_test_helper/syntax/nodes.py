#!/usr/bin/env python3
"""
Syntax tree data model.

A tree is made of two variants sharing one capability: layout nodes
(`SyntaxNode`) and tokens (`TokenSyntax`). Both expose `kind_name`,
`children` and `description`, so consumers never need to inspect
concrete types beyond `is_token`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Iterator, List, Optional

from .tokens import COUNTED_TRIVIA

if TYPE_CHECKING:
    from .visitor import SyntaxVisitor


UNKNOWN_KINDS = {
    "Unknown",
    "UnknownDecl",
    "UnknownExpr",
    "UnknownStmt",
    "UnknownType",
    "UnknownPattern",
}


class SourcePresence(Enum):
    """Whether a node was written in source or synthesized by the parser."""
    PRESENT = "Present"
    MISSING = "Missing"


@dataclass(frozen=True)
class TriviaPiece:
    """One piece of whitespace or comment attached to a token."""
    kind: str
    text: str

    @classmethod
    def counted(cls, kind: str, count: int) -> "TriviaPiece":
        """Build a repeated piece such as three spaces."""
        return cls(kind=kind, text=COUNTED_TRIVIA[kind] * count)


class Syntax:
    """
    Capability shared by every node in a tree.

    Abstract: only `TokenSyntax` and `SyntaxNode` are instantiated, and each
    provides `kind_name` and `children`.
    """

    presence: SourcePresence
    node_id: Optional[int]

    @property
    def is_token(self) -> bool:
        return False

    @property
    def is_present(self) -> bool:
        return self.presence == SourcePresence.PRESENT

    @property
    def kind_name(self) -> str:
        raise NotImplementedError

    @property
    def children(self) -> List["Syntax"]:
        raise NotImplementedError

    @property
    def is_unknown(self) -> bool:
        return False

    @property
    def description(self) -> str:
        """The exact source text this subtree represents."""
        return "".join(token.full_text for token in self.tokens())

    def tokens(self) -> Iterator["TokenSyntax"]:
        """Yield every present token of the subtree in source order."""
        if not self.is_present:
            return
        if self.is_token:
            yield self  # type: ignore[misc]
            return
        for child in self.children:
            yield from child.tokens()

    def walk(self, visitor: "SyntaxVisitor") -> None:
        visitor.walk(self)

    def __str__(self) -> str:
        return self.description


@dataclass(eq=False)
class TokenSyntax(Syntax):
    """A lexical token together with its leading and trailing trivia."""
    token_kind: str
    text: str
    leading_trivia: List[TriviaPiece] = field(default_factory=list)
    trailing_trivia: List[TriviaPiece] = field(default_factory=list)
    presence: SourcePresence = SourcePresence.PRESENT
    node_id: Optional[int] = None

    @property
    def is_token(self) -> bool:
        return True

    @property
    def kind_name(self) -> str:
        return "TokenSyntax"

    @property
    def children(self) -> List[Syntax]:
        return []

    @property
    def full_text(self) -> str:
        if not self.is_present:
            return ""
        leading = "".join(piece.text for piece in self.leading_trivia)
        trailing = "".join(piece.text for piece in self.trailing_trivia)
        return leading + self.text + trailing

    def __repr__(self) -> str:
        return f"TokenSyntax({self.token_kind}, {self.text!r})"


@dataclass(eq=False)
class SyntaxNode(Syntax):
    """A layout node; absent optional children are stored as None."""
    kind: str
    layout: List[Optional[Syntax]] = field(default_factory=list)
    presence: SourcePresence = SourcePresence.PRESENT
    node_id: Optional[int] = None

    @property
    def kind_name(self) -> str:
        return f"{self.kind}Syntax"

    @property
    def children(self) -> List[Syntax]:
        return [child for child in self.layout if child is not None and child.is_present]

    @property
    def is_unknown(self) -> bool:
        return self.kind in UNKNOWN_KINDS

    def __repr__(self) -> str:
        return f"SyntaxNode({self.kind}, {len(self.layout)} slots)"
