"""
Tests for JSON and ByteTree deserialization and the incremental node cache.
"""

import json

import pytest

from syntax_test_helper.syntax import (
    DeserializationError,
    SerializationFormat,
    SourcePresence,
    SyntaxNode,
    SyntaxTreeDeserializer,
    TokenSyntax,
)
from tests.helpers import (
    bt_document,
    bt_node,
    bt_object,
    bt_omitted,
    bt_token,
    bt_trivia,
    dump_json,
    let_decl_tree,
    node,
    omitted,
    tok,
    trivia,
)


def deserialize_json(tree, deserializer=None):
    deserializer = deserializer or SyntaxTreeDeserializer()
    return deserializer.deserialize(dump_json(tree), SerializationFormat.JSON)


class TestJsonDeserialization:
    """Test suite for the JSON tree format."""

    def test_renders_exact_source(self):
        """Test that the description reproduces the source text."""
        tree = deserialize_json(let_decl_tree())

        assert tree.description == "let x = 1"
        assert isinstance(tree, SyntaxNode)
        assert tree.kind_name == "SourceFileSyntax"

    def test_keyword_and_punctuator_spellings(self):
        """Test that fixed-spelling tokens need no text."""
        tree = deserialize_json(node(1, "TupleExpr",
            tok(2, "l_paren"),
            tok(3, "kw_self"),
            tok(4, "r_paren"),
            tok(5, "arrow"),
            tok(6, "pound_if")))

        assert tree.description == "(self)->#if"

    def test_trivia_is_preserved(self):
        """Test counted and comment trivia."""
        tree = deserialize_json(tok(1, "identifier", "foo",
            leading=[trivia("LineComment", "// hi"), trivia("Newline", 1), trivia("Tab", 2)],
            trailing=[trivia("Space", 3), trivia("BlockComment", "/* x */"),
                      trivia("CarriageReturnLineFeed", 1)]))

        assert tree.description == "// hi\n\t\tfoo   /* x */\r\n"

    def test_missing_tokens_render_empty(self):
        """Test that synthesized tokens contribute no text."""
        tree = deserialize_json(node(1, "CodeBlock",
            tok(2, "l_brace"),
            tok(3, "r_brace", presence="Missing", leading=[trivia("Space", 1)])))

        assert tree.description == "{"

    def test_null_children_are_absent(self):
        """Test that null layout slots are kept as None and skipped."""
        tree = deserialize_json(node(1, "ReturnStmt", tok(2, "kw_return"), None))

        assert tree.layout[1] is None
        assert len(tree.children) == 1

    def test_token_without_id(self):
        """Test that ids are optional for fresh nodes."""
        tree = deserialize_json({"tokenKind": {"kind": "kw_let"}})

        assert isinstance(tree, TokenSyntax)
        assert tree.node_id is None
        assert tree.presence == SourcePresence.PRESENT

    @pytest.mark.parametrize("payload", [
        b"not json",
        b"null",
        b"[]",
        json.dumps({"id": 1}).encode(),
        json.dumps({"id": 1, "kind": "SourceFile"}).encode(),
        json.dumps({"id": 1, "kind": "Bad Kind!", "layout": []}).encode(),
        json.dumps({"id": "one", "tokenKind": {"kind": "kw_let"}}).encode(),
        json.dumps({"id": 1, "tokenKind": {"kind": "no_such_kind"}}).encode(),
        json.dumps({"id": 1, "tokenKind": {"kind": "identifier"}}).encode(),
        json.dumps({"id": 1, "tokenKind": {"kind": "kw_let"}, "presence": "Sometimes"}).encode(),
        json.dumps({"id": 1, "tokenKind": {"kind": "kw_let"},
                    "leadingTrivia": [{"kind": "Space", "value": "x"}]}).encode(),
        json.dumps({"id": 1, "tokenKind": {"kind": "kw_let"},
                    "leadingTrivia": [{"kind": "Confetti", "value": 1}]}).encode(),
        b"\xff\xfe\x00",
    ])
    def test_invalid_payloads(self, payload):
        """Test that structurally invalid documents raise DeserializationError."""
        with pytest.raises(DeserializationError):
            SyntaxTreeDeserializer().deserialize(payload, SerializationFormat.JSON)


class TestIncrementalSession:
    """Test suite for reusing nodes across deserialize calls."""

    def test_omitted_nodes_resolve_from_previous_tree(self):
        """Test that the second payload can reuse nodes of the first."""
        deserializer = SyntaxTreeDeserializer()
        deserialize_json(let_decl_tree(), deserializer)

        post_edit = node(20, "SourceFile",
            node(21, "CodeBlockItemList",
                node(22, "CodeBlockItem",
                    node(23, "VariableDecl",
                        None,
                        None,
                        omitted(5),
                        node(24, "PatternBindingList",
                            node(25, "PatternBinding",
                                node(26, "IdentifierPattern",
                                    tok(27, "identifier", "y", trailing=[trivia("Space", 1)])),
                                None,
                                omitted(10),
                                None,
                                None))),
                    None,
                    None)),
            omitted(14))

        tree = deserialize_json(post_edit, deserializer)

        assert tree.description == "let y = 1"

    def test_omitted_node_needs_a_primed_session(self):
        """Test that a fresh deserializer cannot resolve omitted nodes."""
        with pytest.raises(DeserializationError) as excinfo:
            deserialize_json(node(1, "SourceFile", omitted(5)))

        assert "5" in str(excinfo.value)

    def test_sessions_are_independent(self):
        """Test that two deserializers do not share their caches."""
        first = SyntaxTreeDeserializer()
        deserialize_json(let_decl_tree(), first)

        assert first.cached_node_count > 0
        assert SyntaxTreeDeserializer().cached_node_count == 0


class TestByteTreeDeserialization:
    """Test suite for the ByteTree binary format."""

    def _let_tree(self):
        return bt_node(1, "SourceFile",
            bt_node(2, "CodeBlockItemList",
                bt_node(3, "CodeBlockItem",
                    bt_node(4, "VariableDecl",
                        None,
                        None,
                        bt_token(5, "kw_let", trailing=[bt_trivia("Space", 1)]),
                        bt_node(6, "PatternBindingList",
                            bt_node(7, "PatternBinding",
                                bt_node(8, "IdentifierPattern",
                                    bt_token(9, "identifier", "x", trailing=[bt_trivia("Space", 1)])),
                                None,
                                bt_node(10, "InitializerClause",
                                    bt_token(11, "equal", trailing=[bt_trivia("Space", 1)]),
                                    bt_node(12, "IntegerLiteralExpr",
                                        bt_token(13, "integer_literal", "1"))),
                                None,
                                None))),
                    None,
                    None)),
            bt_token(14, "eof"))

    def test_renders_exact_source(self):
        """Test that a ByteTree document deserializes to the same text."""
        data = bt_document(self._let_tree())

        tree = SyntaxTreeDeserializer().deserialize(data, SerializationFormat.BYTE_TREE)

        assert tree.description == "let x = 1"

    def test_comment_trivia(self):
        """Test text trivia in ByteTree documents."""
        data = bt_document(bt_token(1, "kw_func", leading=[bt_trivia("DocLineComment", "/// doc"),
                                                           bt_trivia("Newline", 1)]))

        tree = SyntaxTreeDeserializer().deserialize(data, SerializationFormat.BYTE_TREE)

        assert tree.description == "/// doc\nfunc"

    def test_omitted_nodes(self):
        """Test incremental reuse in ByteTree payloads."""
        deserializer = SyntaxTreeDeserializer()
        deserializer.deserialize(bt_document(self._let_tree()), SerializationFormat.BYTE_TREE)

        post_edit = bt_node(30, "SourceFile", bt_omitted(2), bt_token(31, "eof", leading=[bt_trivia("Newline", 1)]))
        tree = deserializer.deserialize(bt_document(post_edit), SerializationFormat.BYTE_TREE)

        assert tree.description == "let x = 1\n"

    def test_missing_node(self):
        """Test that the presence field is honoured."""
        data = bt_document(bt_node(1, "CodeBlock", bt_token(2, "l_brace"), bt_token(3, "r_brace", present=False)))

        tree = SyntaxTreeDeserializer().deserialize(data, SerializationFormat.BYTE_TREE)

        assert tree.description == "{"

    @pytest.mark.parametrize("payload", [
        b"",
        b"\x01\x00",
        bt_document(bt_token(1, "kw_let"), version=2),
        bt_document(bt_token(1, "kw_let")) + b"\x00",
        bt_document(bt_object()),
        bt_document(b"\x03\x00\x00\x00abc"),
        bt_document(bt_object(bt_object(), bt_object())),
    ])
    def test_invalid_documents(self, payload):
        """Test truncated, versioned and malformed documents."""
        with pytest.raises(DeserializationError):
            SyntaxTreeDeserializer().deserialize(payload, SerializationFormat.BYTE_TREE)

    def test_json_payload_is_not_a_byte_tree(self):
        """Test that a payload in the wrong format fails cleanly."""
        with pytest.raises(DeserializationError):
            SyntaxTreeDeserializer().deserialize(dump_json(let_decl_tree()), SerializationFormat.BYTE_TREE)


class TestNestingDepth:
    """Test suite for payloads nested deeper than the interpreter can recurse."""

    DEPTH = 3000

    def test_deep_json_tree(self):
        """Test that a very deep JSON tree is a deserialization error."""
        leaf = json.dumps(tok(1, "identifier", "x"))
        payload = ('{"kind": "ParenExpr", "layout": [' * self.DEPTH + leaf + "]}" * self.DEPTH).encode()

        with pytest.raises(DeserializationError) as excinfo:
            SyntaxTreeDeserializer().deserialize(payload, SerializationFormat.JSON)

        assert "nesting too deep" in str(excinfo.value)

    def test_deep_byte_tree(self):
        """Test that a very deep ByteTree document is a deserialization error."""
        root = bt_token(1, "identifier", "x")
        for node_id in range(2, self.DEPTH):
            root = bt_node(node_id, "ParenExpr", root)

        with pytest.raises(DeserializationError) as excinfo:
            SyntaxTreeDeserializer().deserialize(bt_document(root), SerializationFormat.BYTE_TREE)

        assert "nesting too deep" in str(excinfo.value)

    def test_moderate_nesting_is_accepted(self):
        """Test that ordinary nesting still deserializes."""
        tree = tok(1, "identifier", "x")
        for node_id in range(2, 50):
            tree = node(node_id, "ParenExpr", tree)

        assert deserialize_json(tree).description == "x"
