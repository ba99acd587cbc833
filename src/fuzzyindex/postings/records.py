"""Posting record types shared by emitters and callers."""

from __future__ import annotations

import struct
from collections.abc import Callable
from dataclasses import dataclass
from typing import Union

GROUP_ITEM_SIZE = 3
DELIMITER_SIZE = 4
_DOC_ID = struct.Struct(">I")


@dataclass(frozen=True)
class Fixed:
    """Value occupies the fixed two-byte tail of a 4-byte CJK key."""

    size: int = 4


@dataclass(frozen=True)
class Length:
    """Number of significant bytes in a blank-padded ASCII key."""

    size: int


ValueSpec = Union[Fixed, Length]
PostingValue = Union[bytes, ValueSpec]
PostingCallback = Callable[[bytes, PostingValue, int], None]


@dataclass(frozen=True)
class PostingRecord:
    key: bytes
    value: PostingValue
    length: int

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {"key_hex": self.key.hex(), "length": self.length}
        if isinstance(self.value, bytes):
            payload["value_hex"] = self.value.hex()
        else:
            payload["value_spec"] = {"kind": type(self.value).__name__.lower(), "size": self.value.size}
        return payload


class RecordCollector:
    """Callback that keeps every record it receives, in call order."""

    def __init__(self) -> None:
        self.records: list[PostingRecord] = []

    def __call__(self, key: bytes, value: PostingValue, length: int) -> None:
        self.records.append(PostingRecord(key=bytes(key), value=value, length=length))

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)


def delimiter_for_document(doc_id: int) -> bytes:
    """Big-endian 32-bit document id, the delimiter used when indexing."""
    if not 0 <= doc_id <= 0xFFFFFFFF:
        raise ValueError(f"Document id out of range: {doc_id}")
    return _DOC_ID.pack(doc_id)


def decode_group(value: bytes, delimiter_size: int = DELIMITER_SIZE) -> tuple[bytes, list[tuple[bytes, int]]]:
    """Split a delimited posting value into its delimiter and (suffix, freq) items.

    ASCII postings decode to a single ``(b"  ", freq)`` item.
    """
    body = len(value) - delimiter_size
    if body < 0 or body % GROUP_ITEM_SIZE:
        raise ValueError(f"Malformed posting value of {len(value)} bytes.")
    items: list[tuple[bytes, int]] = []
    for offset in range(delimiter_size, len(value), GROUP_ITEM_SIZE):
        items.append((value[offset:offset + 2], value[offset + 2]))
    return value[:delimiter_size], items
