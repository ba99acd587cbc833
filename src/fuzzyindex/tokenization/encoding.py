"""Byte classification for Big5 / ASCII buffers."""

from __future__ import annotations

# Lead bytes above 0xA0 start a double-byte character; 0xA1-0xA3 are symbols.
LEAD_BYTE_FLOOR = 0xA0
IDEOGRAPH_LEAD_FLOOR = 0xA3

UNIGRAM_MARKER = b"!!"
ASCII_PADDING = b"  "
MAX_TOKEN_BYTES = 32
FREQ_CEILING = 0xA3


def is_lead_byte(b: int) -> bool:
    return b > LEAD_BYTE_FLOOR


def is_ideograph_lead(b: int) -> bool:
    return b > IDEOGRAPH_LEAD_FLOOR


def is_alnum(b: int) -> bool:
    return 0x61 <= b <= 0x7A or 0x41 <= b <= 0x5A or 0x30 <= b <= 0x39


def is_upper(b: int) -> bool:
    return 0x41 <= b <= 0x5A


def is_ascii_token(token: bytes) -> bool:
    """True for lowercase ASCII run tokens, False for CJK bigrams/unigrams."""
    return not is_lead_byte(token[0])


def saturate(count: int) -> int:
    """Frequency as written into a posting record (one byte, capped)."""
    return FREQ_CEILING if count > FREQ_CEILING else count
