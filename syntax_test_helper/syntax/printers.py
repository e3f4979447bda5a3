#!/usr/bin/env python3
"""Text renderings of syntax trees used by the test helper actions."""

from __future__ import annotations

from typing import Dict, List

from .classifier import SyntaxClassification, classify_trivia
from .errors import SyntaxContractViolation
from .nodes import Syntax, TokenSyntax, TriviaPiece
from .visitor import SyntaxVisitor


def _wrap(text: str, classification: SyntaxClassification) -> str:
    if classification == SyntaxClassification.NONE or not text:
        return text
    return f"<{classification.tag}>{text}</{classification.tag}>"


class ClassifiedSyntaxTreePrinter(SyntaxVisitor):
    """Renders source text with each classified token and comment tagged."""

    def __init__(self, classifications: Dict[TokenSyntax, SyntaxClassification]):
        self.classifications = classifications
        self._parts: List[str] = []

    def print(self, tree: Syntax) -> str:
        self._parts = []
        self.walk(tree)
        return "".join(self._parts)

    def visit_token(self, token: TokenSyntax) -> None:
        self._print_trivia(token.leading_trivia)
        classification = self.classifications.get(token, SyntaxClassification.NONE)
        self._parts.append(_wrap(token.text, classification))
        self._print_trivia(token.trailing_trivia)

    def _print_trivia(self, trivia: List[TriviaPiece]) -> None:
        for piece in trivia:
            self._parts.append(_wrap(piece.text, classify_trivia(piece)))


class NodePrinter(SyntaxVisitor):
    """
    Renders the node structure of a tree.

    Every layout node is wrapped in `<KindSyntax>...</KindSyntax>`; tokens
    are emitted verbatim with their trivia. Trees handed to this printer
    must not contain unknown nodes.
    """

    def __init__(self):
        self._parts: List[str] = []

    def print(self, tree: Syntax) -> str:
        self._parts = []
        self.walk(tree)
        return "".join(self._parts)

    def visit_pre(self, node: Syntax) -> None:
        if node.is_unknown:
            raise SyntaxContractViolation(f"Unexpected unknown node {node.kind_name} in syntax tree")
        self._parts.append(f"<{node.kind_name}>")

    def visit_post(self, node: Syntax) -> None:
        self._parts.append(f"</{node.kind_name}>")

    def visit_token(self, token: TokenSyntax) -> None:
        self._parts.append(token.full_text)
