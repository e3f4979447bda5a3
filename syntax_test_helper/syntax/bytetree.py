#!/usr/bin/env python3
"""
Reader for the ByteTree binary encoding.

Every field starts with a little-endian UInt32 header. If the top bit is
set the field is an object and the low 31 bits give its number of fields,
which follow immediately. Otherwise the field is a scalar and the low bits
give its length in bytes.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import List, Union

from .errors import DeserializationError


PROTOCOL_VERSION = 1
_OBJECT_BIT = 1 << 31

ByteTreeField = Union["ByteTreeObject", bytes]


@dataclass
class ByteTreeObject:
    """An object field; its fields are scalars (bytes) or nested objects."""
    fields: List[ByteTreeField]

    def __len__(self) -> int:
        return len(self.fields)

    def object_at(self, index: int) -> "ByteTreeObject":
        value = self._field(index)
        if not isinstance(value, ByteTreeObject):
            raise DeserializationError(f"ByteTree field {index} is a scalar, expected an object")
        return value

    def scalar_at(self, index: int) -> bytes:
        value = self._field(index)
        if isinstance(value, ByteTreeObject):
            raise DeserializationError(f"ByteTree field {index} is an object, expected a scalar")
        return value

    def uint_at(self, index: int) -> int:
        raw = self.scalar_at(index)
        if len(raw) not in (1, 2, 4, 8):
            raise DeserializationError(f"ByteTree field {index} has invalid integer width {len(raw)}")
        return int.from_bytes(raw, "little")

    def string_at(self, index: int) -> str:
        try:
            return self.scalar_at(index).decode("utf-8")
        except UnicodeDecodeError as e:
            raise DeserializationError(f"ByteTree field {index} is not valid UTF-8: {e}") from e

    def _field(self, index: int) -> ByteTreeField:
        if index >= len(self.fields):
            raise DeserializationError(
                f"ByteTree object has {len(self.fields)} fields, field {index} requested"
            )
        return self.fields[index]


class ByteTreeReader:
    """Decodes a complete ByteTree document into nested ByteTreeObjects."""

    def __init__(self, data: bytes):
        self.data = data
        self.offset = 0

    def read_document(self) -> ByteTreeObject:
        """Check the protocol version and return the root object."""
        version = self._read_uint32()
        if version != PROTOCOL_VERSION:
            raise DeserializationError(
                f"Unsupported ByteTree protocol version {version} (expected {PROTOCOL_VERSION})"
            )
        root = self._read_field()
        if not isinstance(root, ByteTreeObject):
            raise DeserializationError("ByteTree root is not an object")
        if self.offset != len(self.data):
            raise DeserializationError(
                f"Trailing data after ByteTree root ({len(self.data) - self.offset} bytes)"
            )
        return root

    def _read_field(self) -> ByteTreeField:
        header = self._read_uint32()
        length = header & ~_OBJECT_BIT
        if header & _OBJECT_BIT:
            return ByteTreeObject([self._read_field() for _ in range(length)])
        return self._read_bytes(length)

    def _read_uint32(self) -> int:
        raw = self._read_bytes(4)
        return struct.unpack("<I", raw)[0]

    def _read_bytes(self, count: int) -> bytes:
        end = self.offset + count
        if end > len(self.data):
            raise DeserializationError(
                f"Unexpected end of ByteTree data at offset {self.offset} (needed {count} bytes)"
            )
        chunk = self.data[self.offset:end]
        self.offset = end
        return chunk
