"""Posting emission command."""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any

from tqdm import tqdm

from fuzzyindex.cli.common import add_logging_args, open_output, setup_logging_from_args
from fuzzyindex.config import ParseConfig
from fuzzyindex.postings.buffer import BufferExhausted
from fuzzyindex.postings.drivers import parse_with_config
from fuzzyindex.postings.records import DELIMITER_SIZE, RecordCollector, delimiter_for_document
from fuzzyindex.utils.logging import get_logger
from fuzzyindex.utils.serialization import write_jsonl

logger = get_logger(__name__)


def _delimiter_arg(value: str) -> bytes:
    try:
        delimiter = value.encode("latin-1")
    except UnicodeEncodeError:
        raise argparse.ArgumentTypeError(f"delimiter must be latin-1 text: {value!r}") from None
    if len(delimiter) != DELIMITER_SIZE:
        raise argparse.ArgumentTypeError(f"delimiter must be {DELIMITER_SIZE} characters: {value!r}")
    return delimiter


def add_parser(subparsers: argparse._SubParsersAction) -> argparse.ArgumentParser:
    parser = subparsers.add_parser("emit", help="Emit posting records for Big5/ASCII files.")
    parser.add_argument("--input", required=True, nargs="+", help="Input files; one parse call each.")
    parser.add_argument("--output", default=None, help="Output JSONL file (default: stdout).")
    parser.add_argument("--strategy", default="delim", choices=["pair", "word", "delim"])
    parser.add_argument("--config", default=None, help="Optional ParseConfig YAML file.")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--delimiter", type=_delimiter_arg, default=None, help="4-character delimiter (latin-1).")
    group.add_argument(
        "--doc-id",
        type=int,
        default=None,
        help="Use the big-endian document id as delimiter; incremented per input file.",
    )
    parser.add_argument("--query", action="store_true", default=None, help="Query mode (delim only).")
    parser.add_argument("--max-value-bytes", type=int, default=None, help="Bound for grouped values.")
    parser.add_argument("--no-progress", action="store_true", help="Disable the progress bar.")
    add_logging_args(parser)
    parser.set_defaults(func=run)
    return parser


def _resolve_config(args: argparse.Namespace) -> ParseConfig:
    config = ParseConfig.from_yaml(Path(args.config)) if args.config else ParseConfig()
    overrides: dict[str, Any] = {}
    if args.delimiter is not None:
        overrides["delimiter"] = args.delimiter
    if args.query is not None:
        overrides["query"] = args.query
    if args.max_value_bytes is not None:
        overrides["max_value_bytes"] = args.max_value_bytes
    return replace(config, **overrides) if overrides else config


def run(args: argparse.Namespace) -> int:
    setup_logging_from_args(args)
    try:
        config = _resolve_config(args)
    except ValueError as exc:
        print(f"{args.config}: {exc}", file=sys.stderr)
        return 2

    paths = [Path(p) for p in args.input]
    total = 0
    with open_output(args.output) as handle:
        for idx, path in enumerate(tqdm(paths, desc="Emitting postings", unit="file", disable=args.no_progress)):
            file_config = config
            if args.doc_id is not None:
                file_config = replace(config, delimiter=delimiter_for_document(args.doc_id + idx))
            collector = RecordCollector()
            try:
                parse_with_config(path.read_bytes(), args.strategy, collector, file_config)
            except BufferExhausted as exc:
                print(f"{path}: {exc}", file=sys.stderr)
                return 2
            rows = ({"source": str(path), **record.to_dict()} for record in collector)
            total += write_jsonl(handle, rows)
    logger.info("Wrote %d posting records from %d file(s)", total, len(paths))
    return 0
