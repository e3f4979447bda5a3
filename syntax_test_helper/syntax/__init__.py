"""Syntax tree model, deserialization, parsing and classification."""

from .classifier import SyntaxClassification, SyntaxClassifier
from .deserializer import SerializationFormat, SyntaxTreeDeserializer
from .errors import DeserializationError, ParserInvocationError, SyntaxContractViolation, SyntaxToolingError
from .nodes import SourcePresence, Syntax, SyntaxNode, TokenSyntax, TriviaPiece
from .parser import SyntaxTreeParser
from .printers import ClassifiedSyntaxTreePrinter, NodePrinter
from .visitor import SyntaxVisitor, VisitorContinueKind

__all__ = [
    "ClassifiedSyntaxTreePrinter",
    "DeserializationError",
    "NodePrinter",
    "ParserInvocationError",
    "SerializationFormat",
    "SourcePresence",
    "Syntax",
    "SyntaxClassification",
    "SyntaxClassifier",
    "SyntaxContractViolation",
    "SyntaxNode",
    "SyntaxToolingError",
    "SyntaxTreeDeserializer",
    "SyntaxTreeParser",
    "SyntaxVisitor",
    "TokenSyntax",
    "TriviaPiece",
    "VisitorContinueKind",
]
