"""Bigram/unigram tokenizer for mixed Big5 and ASCII buffers."""

from __future__ import annotations

from typing import Union

from fuzzyindex.tokenization.encoding import (
    MAX_TOKEN_BYTES,
    UNIGRAM_MARKER,
    is_alnum,
    is_ideograph_lead,
    is_lead_byte,
    is_upper,
)
from fuzzyindex.tokenization.table import FrequencyTable, SortedFrequencyTable
from fuzzyindex.utils.logging import get_logger

logger = get_logger(__name__)

Buffer = Union[bytes, bytearray, memoryview]


def terminate(buffer: Buffer) -> bytes:
    """Copy of ``buffer`` up to (not including) its first NUL byte."""
    if isinstance(buffer, str):
        raise TypeError("Expected a Big5/ASCII byte buffer, got str.")
    data = bytes(buffer)
    end = data.find(b"\0")
    return data if end < 0 else data[:end]


def _ideograph_at(data: bytes, pos: int, end: int) -> bool:
    # A character counts only if its trail byte is inside the buffer.
    return pos + 1 < end and is_ideograph_lead(data[pos])


def _add(table: FrequencyTable, token: bytes) -> None:
    entry, created = table.find_or_insert(token)
    if not created:
        table.increment(entry)


def extract_words(
    buffer: Buffer,
    table: FrequencyTable,
    *,
    query: bool = False,
) -> FrequencyTable:
    """Scan ``buffer`` once and insert-or-increment every token into ``table``.

    Runs of ideographs yield overlapping 4-byte bigrams followed by a 2-byte
    unigram carrying ``UNIGRAM_MARKER``. In query mode that trailing unigram is
    dropped when the character before the last one is also an ideograph.
    ASCII alnum runs of two or more bytes are lowercased and truncated to
    ``MAX_TOKEN_BYTES``.
    """
    data = terminate(buffer)
    end = len(data)
    pos = 0
    while pos < end:
        byte = data[pos]
        if is_lead_byte(byte):
            if pos + 1 >= end:
                # Lead byte without a trail byte: nothing left to read.
                break
            start = pos
            pos += 2
            if _ideograph_at(data, pos, end):
                if is_ideograph_lead(data[start]):
                    _add(table, data[start:pos + 2])
                pos += 2
                while _ideograph_at(data, pos, end):
                    _add(table, data[pos - 2:pos + 2])
                    pos += 2
                if not (query and is_ideograph_lead(data[pos - 4])):
                    _add(table, data[pos - 2:pos] + UNIGRAM_MARKER)
            elif is_ideograph_lead(data[start]):
                _add(table, data[start:start + 2] + UNIGRAM_MARKER)
        elif is_alnum(byte):
            start = pos
            run = bytearray()
            while pos < end and is_alnum(data[pos]):
                run.append(data[pos] + 32 if is_upper(data[pos]) else data[pos])
                pos += 1
            if len(run) > 1:
                if len(run) > MAX_TOKEN_BYTES:
                    logger.debug("Truncating %d-byte run at offset %d", len(run), start)
                _add(table, bytes(run[:MAX_TOKEN_BYTES]))
        else:
            pos += 1
    return table


def count_tokens(
    buffer: Buffer,
    *,
    query: bool = False,
    weight: int = 1,
    into: dict[bytes, int] | None = None,
) -> dict[bytes, int]:
    """Token counts for ``buffer`` in byte order, scaled by ``weight``.

    When ``into`` is given the weighted counts are added to it, so several
    fields of one document can be folded into a single mapping.
    """
    if weight < 1:
        raise ValueError("weight must be a positive integer.")
    table = SortedFrequencyTable()
    try:
        extract_words(buffer, table, query=query)
        counts = into if into is not None else {}
        for entry in table:
            counts[entry.token] = counts.get(entry.token, 0) + entry.count * weight
    finally:
        table.destroy_all()
    return counts
