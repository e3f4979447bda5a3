#!/usr/bin/env python3
"""
Syntax tree deserialization.

A `SyntaxTreeDeserializer` instance is a session: every node it produces is
remembered by id, so a later incremental payload can refer back to nodes of
an earlier tree by marking them as omitted.
"""

from __future__ import annotations

import json
import logging
import re
from enum import Enum
from typing import Any, Dict, List, Optional

from .bytetree import ByteTreeObject, ByteTreeReader
from .errors import DeserializationError
from .nodes import SourcePresence, Syntax, SyntaxNode, TokenSyntax, TriviaPiece
from .tokens import COUNTED_TRIVIA, TEXT_TRIVIA, default_text, is_known_token_kind

logger = logging.getLogger(__name__)

_KIND_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# ByteTree node type discriminators
_BYTETREE_LAYOUT = 0
_BYTETREE_TOKEN = 1
_BYTETREE_OMITTED = 2


class SerializationFormat(Enum):
    """Encodings a tree payload can use."""
    JSON = "json"
    BYTE_TREE = "byteTree"


class SyntaxTreeDeserializer:
    """Turns serialized payloads into trees, caching nodes across calls."""

    def __init__(self):
        self._node_cache: Dict[int, Syntax] = {}

    @property
    def cached_node_count(self) -> int:
        return len(self._node_cache)

    def deserialize(self, data: bytes, serialization_format: SerializationFormat) -> Syntax:
        """Deserialize one payload; omitted nodes resolve against earlier calls."""
        try:
            if serialization_format == SerializationFormat.JSON:
                tree = self._deserialize_json(data)
            elif serialization_format == SerializationFormat.BYTE_TREE:
                tree = self._deserialize_byte_tree(data)
            else:
                raise DeserializationError(f"Unsupported serialization format: {serialization_format}")
        except RecursionError:
            raise DeserializationError(
                f"Syntax tree nesting too deep to deserialize ({len(data)} bytes)"
            ) from None
        logger.debug(
            "Deserialized %s payload (%d bytes); node cache now holds %d nodes",
            serialization_format.value, len(data), len(self._node_cache),
        )
        return tree

    # ------------------------------------------------------------------
    # JSON
    # ------------------------------------------------------------------

    def _deserialize_json(self, data: bytes) -> Syntax:
        try:
            document = json.loads(data)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DeserializationError(f"Invalid JSON syntax tree: {e}") from e
        root = self._node_from_json(document)
        if root is None:
            raise DeserializationError("Serialized syntax tree has no root node")
        return root

    def _node_from_json(self, value: Any) -> Optional[Syntax]:
        if value is None:
            return None
        if not isinstance(value, dict):
            raise DeserializationError(f"Expected a syntax node object, found {type(value).__name__}")

        node_id = self._json_id(value)
        if value.get("omitted"):
            return self._lookup_omitted(node_id)

        presence = self._presence(value.get("presence", SourcePresence.PRESENT.value))
        if "tokenKind" in value:
            node: Syntax = self._token_from_json(value, presence, node_id)
        elif "kind" in value:
            layout = value.get("layout")
            if not isinstance(layout, list):
                raise DeserializationError(f"Node {node_id} has no layout array")
            node = SyntaxNode(
                kind=self._checked_kind(value["kind"]),
                layout=[self._node_from_json(child) for child in layout],
                presence=presence,
                node_id=node_id,
            )
        else:
            raise DeserializationError(f"Node {node_id} is neither a token nor a layout node")

        self._remember(node)
        return node

    def _token_from_json(self, value: Dict[str, Any], presence: SourcePresence,
                         node_id: Optional[int]) -> TokenSyntax:
        token_kind_info = value["tokenKind"]
        if not isinstance(token_kind_info, dict) or not isinstance(token_kind_info.get("kind"), str):
            raise DeserializationError(f"Token {node_id} has a malformed tokenKind")
        return TokenSyntax(
            token_kind=token_kind_info["kind"],
            text=self._token_text(token_kind_info["kind"], token_kind_info.get("text")),
            leading_trivia=self._trivia_from_json(value.get("leadingTrivia", [])),
            trailing_trivia=self._trivia_from_json(value.get("trailingTrivia", [])),
            presence=presence,
            node_id=node_id,
        )

    def _trivia_from_json(self, pieces: Any) -> List[TriviaPiece]:
        if not isinstance(pieces, list):
            raise DeserializationError("Trivia must be an array")
        trivia = []
        for piece in pieces:
            if not isinstance(piece, dict):
                raise DeserializationError("Trivia piece must be an object")
            trivia.append(self._trivia_piece(piece.get("kind"), piece.get("value")))
        return trivia

    @staticmethod
    def _json_id(value: Dict[str, Any]) -> Optional[int]:
        node_id = value.get("id")
        if node_id is None:
            return None
        if not isinstance(node_id, int) or isinstance(node_id, bool):
            raise DeserializationError(f"Node id must be an integer, found {node_id!r}")
        return node_id

    # ------------------------------------------------------------------
    # ByteTree
    # ------------------------------------------------------------------

    def _deserialize_byte_tree(self, data: bytes) -> Syntax:
        root_object = ByteTreeReader(data).read_document()
        root = self._node_from_byte_tree(root_object)
        if root is None:
            raise DeserializationError("Serialized syntax tree has no root node")
        return root

    def _node_from_byte_tree(self, obj: ByteTreeObject) -> Optional[Syntax]:
        if len(obj) == 0:
            return None

        node_type = obj.uint_at(0)
        node_id = obj.uint_at(1)
        if node_type == _BYTETREE_OMITTED:
            return self._lookup_omitted(node_id)

        presence = SourcePresence.PRESENT if obj.uint_at(2) else SourcePresence.MISSING
        if node_type == _BYTETREE_TOKEN:
            token_kind = obj.string_at(3)
            node: Syntax = TokenSyntax(
                token_kind=token_kind,
                # An empty scalar stands for the kind's fixed spelling
                text=self._token_text(token_kind, obj.string_at(4) or None),
                leading_trivia=self._trivia_from_byte_tree(obj.object_at(5)),
                trailing_trivia=self._trivia_from_byte_tree(obj.object_at(6)),
                presence=presence,
                node_id=node_id,
            )
        elif node_type == _BYTETREE_LAYOUT:
            layout = obj.object_at(4)
            node = SyntaxNode(
                kind=self._checked_kind(obj.string_at(3)),
                layout=[self._node_from_byte_tree(layout.object_at(i)) for i in range(len(layout))],
                presence=presence,
                node_id=node_id,
            )
        else:
            raise DeserializationError(f"Unknown ByteTree node type {node_type} for node {node_id}")

        self._remember(node)
        return node

    def _trivia_from_byte_tree(self, obj: ByteTreeObject) -> List[TriviaPiece]:
        trivia = []
        for index in range(len(obj)):
            piece = obj.object_at(index)
            kind = piece.string_at(0)
            value = piece.uint_at(1) if kind in COUNTED_TRIVIA else piece.string_at(1)
            trivia.append(self._trivia_piece(kind, value))
        return trivia

    # ------------------------------------------------------------------
    # Shared helpers
    # ------------------------------------------------------------------

    def _remember(self, node: Syntax) -> None:
        if node.node_id is not None:
            self._node_cache[node.node_id] = node

    def _lookup_omitted(self, node_id: Optional[int]) -> Syntax:
        if node_id is None:
            raise DeserializationError("Omitted node has no id")
        try:
            return self._node_cache[node_id]
        except KeyError:
            raise DeserializationError(
                f"Omitted node {node_id} was not part of a previously deserialized tree"
            ) from None

    @staticmethod
    def _token_text(token_kind: str, text: Optional[str]) -> str:
        if text is not None:
            if not isinstance(text, str):
                raise DeserializationError(f"Text of {token_kind} token must be a string")
            return text
        spelling = default_text(token_kind)
        if spelling is None:
            if is_known_token_kind(token_kind):
                raise DeserializationError(f"Token of kind {token_kind} is missing its text")
            raise DeserializationError(f"Unknown token kind: {token_kind}")
        return spelling

    @staticmethod
    def _trivia_piece(kind: Any, value: Any) -> TriviaPiece:
        if kind in COUNTED_TRIVIA:
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise DeserializationError(f"{kind} trivia needs a non-negative count, found {value!r}")
            return TriviaPiece.counted(kind, value)
        if kind in TEXT_TRIVIA:
            if not isinstance(value, str):
                raise DeserializationError(f"{kind} trivia needs text, found {value!r}")
            return TriviaPiece(kind=kind, text=value)
        raise DeserializationError(f"Unknown trivia kind: {kind!r}")

    @staticmethod
    def _checked_kind(kind: Any) -> str:
        if not isinstance(kind, str) or not _KIND_PATTERN.match(kind):
            raise DeserializationError(f"Invalid syntax kind: {kind!r}")
        return kind

    @staticmethod
    def _presence(value: Any) -> SourcePresence:
        try:
            return SourcePresence(value)
        except ValueError:
            raise DeserializationError(f"Invalid presence: {value!r}") from None
