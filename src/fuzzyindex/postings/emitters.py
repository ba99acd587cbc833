"""Serializers that turn an ordered frequency table into posting records.

All emitters are table visitors: the driver calls ``visit`` once per entry in
byte order and ``finish`` once after the walk. The one-byte frequency written
out is always ``saturate(count)``.
"""

from __future__ import annotations

from fuzzyindex.postings.context import ParseContext
from fuzzyindex.postings.records import Fixed, Length, PostingCallback, PostingValue
from fuzzyindex.tokenization.encoding import ASCII_PADDING, is_ascii_token, saturate
from fuzzyindex.tokenization.table import Entry
from fuzzyindex.utils.logging import get_logger

logger = get_logger(__name__)


class Emitter:
    def __init__(self, context: ParseContext, callback: PostingCallback) -> None:
        self.context = context
        self.callback = callback
        self.calls = 0

    def _emit(self, key: bytes, value: PostingValue, length: int) -> None:
        self.calls += 1
        self.callback(key, value, length)

    def visit(self, entry: Entry) -> None:
        raise NotImplementedError

    def finish(self) -> None:
        pass


class PairEmitter(Emitter):
    """Key is the first character, value the rest: ``(c1, c2, freq)``."""

    def visit(self, entry: Entry) -> None:
        freq = saturate(entry.count)
        if is_ascii_token(entry.token):
            self._emit(entry.token, ASCII_PADDING, freq)
        else:
            self._emit(entry.token[:2], entry.token[2:], freq)


class WordEmitter(Emitter):
    """Whole token as key.

    The second argument is not payload: CJK tokens get ``Fixed(4)`` (the
    value is the fixed two-byte tail of the key), ASCII tokens are padded
    with two blanks and get ``Length(n)`` where ``n`` is the padded size.
    """

    def visit(self, entry: Entry) -> None:
        freq = saturate(entry.count)
        if is_ascii_token(entry.token):
            padded = entry.token + ASCII_PADDING
            self._emit(padded, Length(len(padded)), freq)
        else:
            self._emit(entry.token, Fixed(), freq)


class DelimitedEmitter(Emitter):
    """Merge same-prefix CJK entries into one ``delimiter + (suffix, freq)*`` value.

    Relies on the table walk being in byte order, so entries sharing their
    first two bytes arrive back to back.
    """

    def visit(self, entry: Entry) -> None:
        ctx = self.context
        freq = saturate(entry.count)
        if is_ascii_token(entry.token):
            value = ctx.delimiter + ASCII_PADDING + bytes((freq,))
            self._emit(entry.token, value, len(value))
            return

        prefix, suffix = entry.token[:2], entry.token[2:4]
        if ctx.previous_key == prefix:
            logger.debug("Append %r to group %r", suffix, prefix)
        else:
            self._flush()
            logger.debug("Open group %r", prefix)
            ctx.buffer.write(ctx.delimiter)
            ctx.previous_key = prefix
        # One write per item: an overflow leaves no partial item behind.
        ctx.buffer.write(suffix + bytes((freq,)))

    def finish(self) -> None:
        self._flush()

    def _flush(self) -> None:
        ctx = self.context
        if ctx.previous_key is None:
            return
        value = ctx.buffer.getvalue()
        ctx.buffer.reset()
        key, ctx.previous_key = ctx.previous_key, None
        self._emit(key, value, len(value))
