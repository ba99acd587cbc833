"""Token frequency table used for a single parse call."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Protocol

from fuzzyindex.tokenization.encoding import MAX_TOKEN_BYTES


@dataclass
class Entry:
    token: bytes
    count: int = 1


class FrequencyTable(Protocol):
    """Ordered token -> count store.

    Traversal order is strictly increasing byte order; the delimited emitter
    depends on tokens with a shared two-byte prefix being adjacent.
    """

    def find_or_insert(self, token: bytes) -> tuple[Entry, bool]: ...

    def increment(self, entry: Entry) -> None: ...

    def for_each_in_order(self, visitor: Callable[[Entry], None]) -> None: ...

    def destroy_all(self) -> None: ...

    def __len__(self) -> int: ...


class SortedFrequencyTable:
    """Dict-backed table that sorts its keys on traversal."""

    def __init__(self) -> None:
        self._entries: dict[bytes, Entry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, token: object) -> bool:
        return token in self._entries

    def __iter__(self) -> Iterator[Entry]:
        for token in sorted(self._entries):
            yield self._entries[token]

    def find_or_insert(self, token: bytes) -> tuple[Entry, bool]:
        """Return ``(entry, created)``; a created entry starts at count 1."""
        entry = self._entries.get(token)
        if entry is not None:
            return entry, False
        if not token:
            raise ValueError("Empty token.")
        if len(token) > MAX_TOKEN_BYTES:
            raise ValueError(f"Token longer than {MAX_TOKEN_BYTES} bytes: {token!r}")
        entry = Entry(token=bytes(token))
        self._entries[entry.token] = entry
        return entry, True

    def increment(self, entry: Entry) -> None:
        entry.count += 1

    def add(self, token: bytes) -> Entry:
        entry, created = self.find_or_insert(token)
        if not created:
            self.increment(entry)
        return entry

    def get(self, token: bytes) -> int:
        entry = self._entries.get(token)
        return entry.count if entry is not None else 0

    def for_each_in_order(self, visitor: Callable[[Entry], None]) -> None:
        for entry in self:
            visitor(entry)

    def destroy_all(self) -> None:
        self._entries.clear()
