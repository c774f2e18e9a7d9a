#!/usr/bin/env python3
"""
Command-line nearest-neighbour lookups against a binary vector file.

Loads the table once, then answers queries given on the command line or read
from stdin one per line until EOF.
"""

import argparse
import sys
from typing import List, Optional, TextIO

from .core.config import get_top_k, get_vectors_path, validate_config
from .util.logging import logger
from .vector import VectorError, UnknownWordError, analogy, distance, load_vectors
from .vector.types import VectorTable, WordDistance


def format_results(results: List[WordDistance]) -> str:
    """One ``word score`` line per result."""
    return "\n".join(f"{r.word} {r.score:.6f}" for r in results)


def run_query(table: VectorTable, words: List[str], limit: int) -> List[WordDistance]:
    """Dispatch on operand count: one word is a distance query, three an analogy."""
    if len(words) == 1:
        return distance(table, words[0], limit)
    if len(words) == 3:
        return analogy(table, words[0], words[1], words[2], limit)
    raise ValueError(f"Expected 1 or 3 words, got {len(words)}")


def serve(table: VectorTable, limit: int, analogy_mode: bool, stdin: TextIO, stdout: TextIO, stderr: TextIO) -> int:
    """Answer one query per input line until EOF. Returns the number of queries answered."""
    answered = 0
    for line in stdin:
        line = line.strip()
        if not line:
            continue

        if analogy_mode:
            words = line.split()
            if len(words) != 3:
                print(f"Expected three words, got {len(words)}: {line}", file=stderr)
                continue
        else:
            words = [line]

        try:
            results = run_query(table, words, limit)
        except UnknownWordError as e:
            print(str(e), file=stderr)
            continue

        if results:
            print(format_results(results), file=stdout)
        stdout.flush()
        answered += 1

    return answered


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wordvec-query",
        description="Find nearest neighbours and analogies in a binary word vector file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s king                     # 10 nearest neighbours of 'king'
  %(prog)s man king woman           # man is to king as woman is to ?
  %(prog)s --limit 5 < words.txt    # one word per line from stdin
  %(prog)s --analogy < triples.txt  # three words per line from stdin

Environment variables:
- WORDVEC_VECTORS_PATH=./vectors.bin (default vector file)
- WORDVEC_TOP_K=10 (default result limit)
- WORDVEC_REJECT_DEGENERATE=false (fail on zero-length vectors)
- WORDVEC_LOG_LEVEL=INFO
        """
    )

    parser.add_argument(
        "words",
        nargs="*",
        help="One word (distance) or three words (analogy); omit to read queries from stdin"
    )

    parser.add_argument(
        "--vectors", "-f",
        default=None,
        help="Binary vector file (default: WORDVEC_VECTORS_PATH or ./vectors.bin)"
    )

    parser.add_argument(
        "--limit", "-n",
        type=int,
        default=None,
        help="Number of results per query (default: WORDVEC_TOP_K or 10)"
    )

    parser.add_argument(
        "--analogy", "-a",
        action="store_true",
        help="Read three words per stdin line and run analogy queries"
    )

    parser.add_argument(
        "--reject-degenerate",
        action="store_true",
        default=None,
        help="Fail the load if any vector has zero length"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.words and len(args.words) not in (1, 3):
        parser.error(f"expected 1 or 3 words, got {len(args.words)}")

    issues = validate_config()
    if issues:
        for issue in issues:
            print(f"ERROR: {issue}", file=sys.stderr)
        return 2

    path = args.vectors or get_vectors_path()
    limit = args.limit if args.limit is not None else get_top_k()

    try:
        table = load_vectors(path, reject_degenerate=args.reject_degenerate)
    except (VectorError, OSError) as e:
        print(f"ERROR: Failed to load vectors from {path}: {e}", file=sys.stderr)
        return 1

    if args.words:
        try:
            results = run_query(table, args.words, limit)
        except UnknownWordError as e:
            print(str(e), file=sys.stderr)
            return 1
        if results:
            print(format_results(results))
        return 0

    answered = serve(table, limit, args.analogy, sys.stdin, sys.stdout, sys.stderr)
    logger.debug(f"Answered {answered} queries")
    return 0


if __name__ == "__main__":
    sys.exit(main())
