from __future__ import annotations

import argparse
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator, Optional

from ..utils.logging import configure_logging


def add_logging_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--log-level",
        default=None,
        help="Logging level (e.g., INFO, DEBUG). Also respects FUZZYINDEX_LOG_LEVEL env var.",
    )


def setup_logging_from_args(args: argparse.Namespace) -> None:
    configure_logging(args.log_level)


@contextmanager
def open_output(path: Optional[str]) -> Iterator[IO[str]]:
    if not path or path == "-":
        yield sys.stdout
        return
    with Path(path).open("w", encoding="utf-8") as handle:
        yield handle
