"""Token count dump command."""

from __future__ import annotations

import argparse
from pathlib import Path

from fuzzyindex.cli.common import add_logging_args, open_output, setup_logging_from_args
from fuzzyindex.tokenization.tokenizer import count_tokens
from fuzzyindex.utils.serialization import write_jsonl


def add_parser(subparsers: argparse._SubParsersAction) -> argparse.ArgumentParser:
    parser = subparsers.add_parser("tokenize", help="Print token counts for a Big5/ASCII file.")
    parser.add_argument("--input", required=True, help="Input file (raw bytes).")
    parser.add_argument("--output", default=None, help="Output JSONL file (default: stdout).")
    parser.add_argument("--query", action="store_true", help="Tokenize in query mode.")
    add_logging_args(parser)
    parser.set_defaults(func=run)
    return parser


def run(args: argparse.Namespace) -> int:
    setup_logging_from_args(args)
    data = Path(args.input).read_bytes()
    counts = count_tokens(data, query=args.query)
    rows = (
        {
            "token_hex": token.hex(),
            "text": token.decode("big5", errors="replace"),
            "count": count,
        }
        for token, count in counts.items()
    )
    with open_output(args.output) as handle:
        write_jsonl(handle, rows)
    return 0
