"""Per-call parse state."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from fuzzyindex.postings.buffer import DEFAULT_VALUE_LIMIT, ValueBuffer
from fuzzyindex.postings.records import DELIMITER_SIZE
from fuzzyindex.tokenization.table import FrequencyTable, SortedFrequencyTable

DEFAULT_DELIMITER = b"????"


@dataclass
class ParseContext:
    """Everything one driver call owns; never shared between calls."""

    table: FrequencyTable = field(default_factory=SortedFrequencyTable)
    buffer: ValueBuffer = field(default_factory=ValueBuffer)
    delimiter: bytes = DEFAULT_DELIMITER
    query: bool = False
    previous_key: Optional[bytes] = None

    def __post_init__(self) -> None:
        if len(self.delimiter) != DELIMITER_SIZE:
            raise ValueError(f"Delimiter must be exactly {DELIMITER_SIZE} bytes, got {len(self.delimiter)}.")
        self.delimiter = bytes(self.delimiter)

    @classmethod
    def create(
        cls,
        *,
        delimiter: bytes = DEFAULT_DELIMITER,
        query: bool = False,
        max_value_bytes: int = DEFAULT_VALUE_LIMIT,
    ) -> "ParseContext":
        return cls(delimiter=delimiter, query=query, buffer=ValueBuffer(max_value_bytes))

    def close(self) -> None:
        self.table.destroy_all()
        self.buffer.reset()
        self.previous_key = None
