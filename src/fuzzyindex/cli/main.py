"""fuzzyindex command-line entrypoint."""

from __future__ import annotations

import argparse

from fuzzyindex.cli import emit, tokenize


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="fuzzyindex",
        description="Bigram tokenization and posting emission for Big5/ASCII text.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    tokenize.add_parser(subparsers)
    emit.add_parser(subparsers)

    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
