from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict
import json

from .postings.buffer import DEFAULT_VALUE_LIMIT
from .postings.context import DEFAULT_DELIMITER
from .postings.records import DELIMITER_SIZE, delimiter_for_document
from .utils.serialization import read_yaml


@dataclass(frozen=True)
class ParseConfig:
    """Options for one driver call.

    ``delimiter`` and ``query`` are read by the delimited drivers only;
    ``max_value_bytes`` bounds each grouped posting value.
    """

    delimiter: bytes = DEFAULT_DELIMITER
    query: bool = False
    max_value_bytes: int = DEFAULT_VALUE_LIMIT

    def __post_init__(self) -> None:
        if not isinstance(self.delimiter, (bytes, bytearray)) or len(self.delimiter) != DELIMITER_SIZE:
            raise ValueError(f"delimiter must be {DELIMITER_SIZE} bytes, got {self.delimiter!r}")
        if self.max_value_bytes <= DELIMITER_SIZE:
            raise ValueError(f"max_value_bytes must exceed {DELIMITER_SIZE}, got {self.max_value_bytes}")

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["delimiter"] = self.delimiter.decode("latin-1")
        return d

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2)

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "ParseConfig":
        # Exactly one of delimiter / delimiter_hex / doc_id is honoured, in that order.
        if d.get("delimiter") is not None:
            delimiter = _as_bytes(d["delimiter"])
        elif d.get("delimiter_hex") is not None:
            delimiter = bytes.fromhex(str(d["delimiter_hex"]))
        elif d.get("doc_id") is not None:
            delimiter = delimiter_for_document(int(d["doc_id"]))
        else:
            delimiter = DEFAULT_DELIMITER
        return ParseConfig(
            delimiter=delimiter,
            query=bool(d.get("query", False)),
            max_value_bytes=int(d.get("max_value_bytes", DEFAULT_VALUE_LIMIT)),
        )

    @staticmethod
    def from_json(s: str) -> "ParseConfig":
        return ParseConfig.from_dict(json.loads(s))

    @staticmethod
    def from_yaml(path: Path) -> "ParseConfig":
        payload = read_yaml(Path(path))
        if "parse" in payload and isinstance(payload["parse"], dict):
            payload = payload["parse"]
        return ParseConfig.from_dict(payload)


def _as_bytes(value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    try:
        return str(value).encode("latin-1")
    except UnicodeEncodeError as exc:
        raise ValueError(f"delimiter must be latin-1 text, got {value!r}") from exc
