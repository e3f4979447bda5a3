"""
Shared helpers for syntax test helper tests.

Builds JSON and ByteTree fixtures, fake swiftc executables and runs the
driver in-process with captured streams.
"""

import io
import json
import os
import stat
import struct
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

from syntax_test_helper.config import HelperSettings
from syntax_test_helper.main import main


# ----------------------------------------------------------------------
# JSON tree builders
# ----------------------------------------------------------------------

def trivia(kind: str, value: Union[int, str]) -> Dict:
    return {"kind": kind, "value": value}


def tok(node_id: int, kind: str, text: Optional[str] = None, leading: List[Dict] = None,
        trailing: List[Dict] = None, presence: str = "Present") -> Dict:
    token_kind = {"kind": kind}
    if text is not None:
        token_kind["text"] = text
    return {
        "id": node_id,
        "tokenKind": token_kind,
        "leadingTrivia": leading or [],
        "trailingTrivia": trailing or [],
        "presence": presence,
    }


def node(node_id: int, kind: str, *layout: Optional[Dict], presence: str = "Present") -> Dict:
    return {"id": node_id, "kind": kind, "layout": list(layout), "presence": presence}


def omitted(node_id: int) -> Dict:
    return {"id": node_id, "omitted": True}


def let_decl_tree(name: str = "x", value: str = "1", base_id: int = 0) -> Dict:
    """Tree for `let <name> = <value>` as swiftc would emit it."""
    i = base_id
    return node(i + 1, "SourceFile",
        node(i + 2, "CodeBlockItemList",
            node(i + 3, "CodeBlockItem",
                node(i + 4, "VariableDecl",
                    None,
                    None,
                    tok(i + 5, "kw_let", trailing=[trivia("Space", 1)]),
                    node(i + 6, "PatternBindingList",
                        node(i + 7, "PatternBinding",
                            node(i + 8, "IdentifierPattern",
                                tok(i + 9, "identifier", name, trailing=[trivia("Space", 1)])),
                            None,
                            node(i + 10, "InitializerClause",
                                tok(i + 11, "equal", trailing=[trivia("Space", 1)]),
                                node(i + 12, "IntegerLiteralExpr",
                                    tok(i + 13, "integer_literal", value))),
                            None,
                            None))),
                None,
                None)),
        tok(i + 14, "eof"))


def dump_json(tree: Dict) -> bytes:
    return json.dumps(tree).encode("utf-8")


# ----------------------------------------------------------------------
# ByteTree builders
# ----------------------------------------------------------------------

_OBJECT_BIT = 1 << 31


def bt_scalar(data: bytes) -> bytes:
    return struct.pack("<I", len(data)) + data


def bt_uint8(value: int) -> bytes:
    return bt_scalar(struct.pack("<B", value))


def bt_uint32(value: int) -> bytes:
    return bt_scalar(struct.pack("<I", value))


def bt_string(value: str) -> bytes:
    return bt_scalar(value.encode("utf-8"))


def bt_object(*fields: bytes) -> bytes:
    return struct.pack("<I", _OBJECT_BIT | len(fields)) + b"".join(fields)


def bt_trivia(kind: str, value: Union[int, str]) -> bytes:
    encoded = bt_uint32(value) if isinstance(value, int) else bt_string(value)
    return bt_object(bt_string(kind), encoded)


def bt_token(node_id: int, kind: str, text: str = "", leading: List[bytes] = (),
             trailing: List[bytes] = (), present: bool = True) -> bytes:
    return bt_object(
        bt_uint8(1), bt_uint32(node_id), bt_uint8(1 if present else 0),
        bt_string(kind), bt_string(text),
        bt_object(*leading), bt_object(*trailing),
    )


def bt_node(node_id: int, kind: str, *layout: Optional[bytes], present: bool = True) -> bytes:
    children = [child if child is not None else bt_object() for child in layout]
    return bt_object(
        bt_uint8(0), bt_uint32(node_id), bt_uint8(1 if present else 0),
        bt_string(kind), bt_object(*children),
    )


def bt_omitted(node_id: int) -> bytes:
    return bt_object(bt_uint8(2), bt_uint32(node_id))


def bt_document(root: bytes, version: int = 1) -> bytes:
    return struct.pack("<I", version) + root


# ----------------------------------------------------------------------
# Fixtures on disk
# ----------------------------------------------------------------------

@contextmanager
def create_fixture_dir(files: Optional[Dict[str, Union[str, bytes]]] = None) -> Iterator[Path]:
    """Create a temporary directory populated with the given files."""
    with tempfile.TemporaryDirectory() as temp_dir:
        root = Path(temp_dir)
        for relative_path, content in (files or {}).items():
            path = root / relative_path
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(content, encoding="utf-8")
        yield root


def write_fake_swiftc(directory: Path, tree_json: Path, exit_code: int = 0,
                      stderr_message: str = "", args_log: Optional[Path] = None) -> Path:
    """Write a shell script that behaves like `swiftc -frontend -emit-syntax`."""
    lines = ["#!/bin/sh"]
    if args_log is not None:
        lines.append(f'echo "$@" > "{args_log}"')
    if exit_code:
        lines.append(f'echo "{stderr_message}" >&2')
        lines.append(f"exit {exit_code}")
    else:
        lines.append(f'cat "{tree_json}"')
    script = directory / "swiftc"
    script.write_text("\n".join(lines) + "\n", encoding="utf-8")
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


# ----------------------------------------------------------------------
# Driver
# ----------------------------------------------------------------------

@dataclass
class HelperRun:
    exit_code: int
    stdout: str
    stderr: str


def run_helper(args: List[str], cwd: Optional[Path] = None) -> HelperRun:
    """Run the driver in-process and capture its streams."""
    stdout = io.StringIO()
    stderr = io.StringIO()
    previous_cwd = os.getcwd()
    if cwd is not None:
        os.chdir(cwd)
    try:
        exit_code = main(args, stdout=stdout, stderr=stderr, settings=HelperSettings())
    finally:
        os.chdir(previous_cwd)
    return HelperRun(exit_code=exit_code, stdout=stdout.getvalue(), stderr=stderr.getvalue())
