"""fuzzyindex: bigram posting streams for Big5/ASCII text."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from fuzzyindex.config import ParseConfig
from fuzzyindex.postings.buffer import BufferExhausted
from fuzzyindex.postings.drivers import parse_delim, parse_pair, parse_query, parse_word
from fuzzyindex.postings.records import (
    Fixed,
    Length,
    PostingRecord,
    RecordCollector,
    decode_group,
    delimiter_for_document,
)
from fuzzyindex.tokenization.tokenizer import count_tokens, extract_words

try:
    __version__ = version("fuzzyindex")
except PackageNotFoundError:  # pragma: no cover - runtime fallback
    __version__ = "0.0.0"

__all__ = [
    "__version__",
    "BufferExhausted",
    "Fixed",
    "Length",
    "ParseConfig",
    "PostingRecord",
    "RecordCollector",
    "count_tokens",
    "decode_group",
    "delimiter_for_document",
    "extract_words",
    "parse_delim",
    "parse_pair",
    "parse_query",
    "parse_word",
]
