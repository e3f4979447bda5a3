#!/usr/bin/env python3
"""
Token classification for syntax colouring.

Each token gets a base classification from its kind. Some node slots
refine that: the name of a type reference is a type identifier, the
condition of an `#if` clause names build configurations, and so on. A
forced context overrides every token beneath it; an unforced one only
re-labels plain identifiers.
"""

from enum import Enum
from typing import Dict, NamedTuple, Optional

from .nodes import Syntax, SyntaxNode, TokenSyntax, TriviaPiece
from .tokens import is_keyword_kind, is_pound_kind


class SyntaxClassification(Enum):
    """Classification names mapped to the markup tag used when printing."""
    NONE = ""
    KEYWORD = "kw"
    IDENTIFIER = "id"
    TYPE_IDENTIFIER = "type"
    DOLLAR_IDENTIFIER = "dollar"
    INTEGER_LITERAL = "int"
    FLOATING_LITERAL = "float"
    STRING_LITERAL = "str"
    STRING_INTERPOLATION_ANCHOR = "anchor"
    POUND_DIRECTIVE_KEYWORD = "#kw"
    BUILD_CONFIG_ID = "#id"
    ATTRIBUTE = "attr-builtin"
    OBJECT_LITERAL = "object-literal"
    EDITOR_PLACEHOLDER = "placeholder"
    LINE_COMMENT = "comment-line"
    DOC_LINE_COMMENT = "doc-comment-line"
    BLOCK_COMMENT = "comment-block"
    DOC_BLOCK_COMMENT = "doc-comment-block"

    @property
    def tag(self) -> str:
        return self.value


class _Context(NamedTuple):
    classification: SyntaxClassification
    force: bool


_TOKEN_KIND_CLASSIFICATIONS = {
    "contextual_keyword": SyntaxClassification.KEYWORD,
    "identifier": SyntaxClassification.IDENTIFIER,
    "dollarident": SyntaxClassification.DOLLAR_IDENTIFIER,
    "integer_literal": SyntaxClassification.INTEGER_LITERAL,
    "floating_literal": SyntaxClassification.FLOATING_LITERAL,
    "string_literal": SyntaxClassification.STRING_LITERAL,
    "string_segment": SyntaxClassification.STRING_LITERAL,
    "string_quote": SyntaxClassification.STRING_LITERAL,
    "multiline_string_quote": SyntaxClassification.STRING_LITERAL,
    "string_interpolation_anchor": SyntaxClassification.STRING_INTERPOLATION_ANCHOR,
}

_POUND_DIRECTIVES = {
    "pound_if", "pound_else", "pound_elseif", "pound_endif",
    "pound_sourceLocation", "pound_warning", "pound_error",
}

_POUND_OBJECT_LITERALS = {"pound_fileLiteral", "pound_imageLiteral", "pound_colorLiteral"}

# (node kind, layout slot) -> context applied to everything in that slot
_SLOT_CONTEXTS = {
    ("SimpleTypeIdentifier", 0): _Context(SyntaxClassification.TYPE_IDENTIFIER, False),
    ("MemberTypeIdentifier", 2): _Context(SyntaxClassification.TYPE_IDENTIFIER, False),
    ("Attribute", 0): _Context(SyntaxClassification.ATTRIBUTE, True),
    ("Attribute", 1): _Context(SyntaxClassification.ATTRIBUTE, True),
    ("IfConfigClause", 1): _Context(SyntaxClassification.BUILD_CONFIG_ID, False),
    ("ExpressionSegment", 1): _Context(SyntaxClassification.STRING_INTERPOLATION_ANCHOR, True),
    ("ExpressionSegment", 3): _Context(SyntaxClassification.STRING_INTERPOLATION_ANCHOR, True),
    ("ObjectLiteralExpr", 0): _Context(SyntaxClassification.OBJECT_LITERAL, True),
}

_TRIVIA_CLASSIFICATIONS = {
    "LineComment": SyntaxClassification.LINE_COMMENT,
    "DocLineComment": SyntaxClassification.DOC_LINE_COMMENT,
    "BlockComment": SyntaxClassification.BLOCK_COMMENT,
    "DocBlockComment": SyntaxClassification.DOC_BLOCK_COMMENT,
}


def classify_token_kind(token: TokenSyntax) -> SyntaxClassification:
    """Classification of a token ignoring where it appears."""
    kind = token.token_kind
    if is_keyword_kind(kind):
        return SyntaxClassification.KEYWORD
    if is_pound_kind(kind):
        if kind in _POUND_DIRECTIVES:
            return SyntaxClassification.POUND_DIRECTIVE_KEYWORD
        if kind in _POUND_OBJECT_LITERALS:
            return SyntaxClassification.OBJECT_LITERAL
        return SyntaxClassification.KEYWORD
    if kind == "identifier" and token.text.startswith("<#") and token.text.endswith("#>"):
        return SyntaxClassification.EDITOR_PLACEHOLDER
    return _TOKEN_KIND_CLASSIFICATIONS.get(kind, SyntaxClassification.NONE)


def classify_trivia(piece: TriviaPiece) -> SyntaxClassification:
    return _TRIVIA_CLASSIFICATIONS.get(piece.kind, SyntaxClassification.NONE)


class SyntaxClassifier:
    """Computes the classification of every token in a tree."""

    @classmethod
    def classify_tokens_in_tree(cls, tree: Syntax) -> Dict[TokenSyntax, SyntaxClassification]:
        classifications: Dict[TokenSyntax, SyntaxClassification] = {}
        cls._classify(tree, None, classifications)
        return classifications

    @classmethod
    def _classify(cls, node: Optional[Syntax], context: Optional[_Context],
                  classifications: Dict[TokenSyntax, SyntaxClassification]) -> None:
        if node is None or not node.is_present:
            return
        if isinstance(node, TokenSyntax):
            classifications[node] = cls._apply_context(classify_token_kind(node), context)
            return
        if not isinstance(node, SyntaxNode):
            return
        for index, child in enumerate(node.layout):
            child_context = context
            slot_context = _SLOT_CONTEXTS.get((node.kind, index))
            if slot_context is not None and not (context is not None and context.force):
                child_context = slot_context
            cls._classify(child, child_context, classifications)

    @staticmethod
    def _apply_context(base: SyntaxClassification,
                       context: Optional[_Context]) -> SyntaxClassification:
        if context is None:
            return base
        if context.force or base == SyntaxClassification.IDENTIFIER:
            return context.classification
        return base
