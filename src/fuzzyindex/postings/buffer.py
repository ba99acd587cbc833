"""Bounded scratch buffer for grouped posting values."""

from __future__ import annotations

DEFAULT_VALUE_LIMIT = 32768


class BufferExhausted(OverflowError):
    """Raised when a write would grow a value buffer past its limit."""

    def __init__(self, limit: int, requested: int) -> None:
        super().__init__(f"value buffer limit of {limit} bytes exceeded ({requested} bytes requested)")
        self.limit = limit
        self.requested = requested


class ValueBuffer:
    """Growable byte buffer with a hard upper bound."""

    def __init__(self, limit: int = DEFAULT_VALUE_LIMIT) -> None:
        if limit <= 0:
            raise ValueError("limit must be positive.")
        self._limit = limit
        self._data = bytearray()

    @property
    def limit(self) -> int:
        return self._limit

    def __len__(self) -> int:
        return len(self._data)

    def reset(self) -> None:
        self._data.clear()

    def write(self, chunk: bytes) -> None:
        requested = len(self._data) + len(chunk)
        if requested > self._limit:
            raise BufferExhausted(self._limit, requested)
        self._data.extend(chunk)

    def getvalue(self) -> bytes:
        return bytes(self._data)
