#!/usr/bin/env python3
"""Depth-first traversal over syntax trees."""

from enum import Enum

from .nodes import Syntax, TokenSyntax


class VisitorContinueKind(Enum):
    """Whether the walk should descend into a node's children."""
    VISIT_CHILDREN = "visitChildren"
    SKIP_CHILDREN = "skipChildren"


class SyntaxVisitor:
    """
    Base visitor.

    For each present layout node the walk calls `visit_pre`, then `visit`,
    then recurses into the children (unless `visit` asked to skip them) and
    finally calls `visit_post`. Tokens only receive `visit_token`.
    """

    def visit_pre(self, node: Syntax) -> None:
        pass

    def visit(self, node: Syntax) -> VisitorContinueKind:
        return VisitorContinueKind.VISIT_CHILDREN

    def visit_post(self, node: Syntax) -> None:
        pass

    def visit_token(self, token: TokenSyntax) -> None:
        pass

    def walk(self, node: Syntax) -> None:
        if not node.is_present:
            return
        if node.is_token:
            self.visit_token(node)  # type: ignore[arg-type]
            return
        self.visit_pre(node)
        if self.visit(node) == VisitorContinueKind.VISIT_CHILDREN:
            for child in node.children:
                self.walk(child)
        self.visit_post(node)
