"""Entry points: tokenize a buffer and stream its postings to a callback."""

from __future__ import annotations

from typing import Optional

from fuzzyindex.config import ParseConfig
from fuzzyindex.postings.context import ParseContext
from fuzzyindex.postings.emitters import DelimitedEmitter, Emitter, PairEmitter, WordEmitter
from fuzzyindex.postings.records import PostingCallback
from fuzzyindex.tokenization.tokenizer import Buffer, extract_words
from fuzzyindex.utils.logging import get_logger

logger = get_logger(__name__)

QUERY_DELIMITER = b"    "


def _run(
    buffer: Buffer,
    emitter_cls: type[Emitter],
    callback: PostingCallback,
    context: ParseContext,
) -> int:
    emitter = emitter_cls(context, callback)
    try:
        extract_words(buffer, context.table, query=context.query)
        logger.debug("%s: %d distinct tokens", emitter_cls.__name__, len(context.table))
        context.table.for_each_in_order(emitter.visit)
        emitter.finish()
    finally:
        context.close()
    return emitter.calls


def parse_pair(buffer: Buffer, callback: PostingCallback) -> int:
    """Emit ``(first char, rest, freq)`` per token; returns the callback count."""
    return _run(buffer, PairEmitter, callback, ParseContext.create())


def parse_word(buffer: Buffer, callback: PostingCallback) -> int:
    """Emit ``(token, Fixed | Length, freq)`` per token; returns the callback count."""
    return _run(buffer, WordEmitter, callback, ParseContext.create())


def parse_delim(
    buffer: Buffer,
    delimiter: Optional[bytes],
    callback: PostingCallback,
    *,
    query: Optional[bool] = None,
    config: Optional[ParseConfig] = None,
) -> int:
    """Emit one grouped posting per shared CJK prefix and one per ASCII token.

    ``delimiter`` and ``query`` fall back to ``config`` when passed as None.
    Raises :class:`~fuzzyindex.postings.buffer.BufferExhausted` if a group
    outgrows ``config.max_value_bytes``; records already delivered to the
    callback before that point are not retracted.
    """
    cfg = config or ParseConfig()
    context = ParseContext.create(
        delimiter=cfg.delimiter if delimiter is None else delimiter,
        query=cfg.query if query is None else query,
        max_value_bytes=cfg.max_value_bytes,
    )
    return _run(buffer, DelimitedEmitter, callback, context)


def parse_query(
    buffer: Buffer,
    callback: PostingCallback,
    *,
    delimiter: bytes = QUERY_DELIMITER,
    config: Optional[ParseConfig] = None,
) -> int:
    """Delimited postings for a search query (trailing unigrams suppressed)."""
    return parse_delim(buffer, delimiter, callback, query=True, config=config)


def parse_with_config(buffer: Buffer, strategy: str, callback: PostingCallback, config: ParseConfig) -> int:
    """Dispatch by strategy name; pair and word take nothing from ``config``."""
    if strategy == "pair":
        return parse_pair(buffer, callback)
    if strategy == "word":
        return parse_word(buffer, callback)
    if strategy == "delim":
        return parse_delim(buffer, None, callback, config=config)
    raise ValueError(f"Unknown strategy: {strategy}")
