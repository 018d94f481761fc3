"""
Command-line entry point.

Reads a lemma id (1 or 2) from stdin, runs the exhaustive proof, and prints
one line per guaranteed equality to stdout. Progress ("Found abiding matrix #n")
goes to stderr through logging.

Usage:
    echo 1 | python -m lemma_prove
    echo 2 | exhaust-proof --receipt-dir receipts --log-file logs/lemma_2.log
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, List, Optional, TextIO

from lemma_core.errors import InvalidLemmaError, LemmaError

from .prover import format_guaranteed, prove_lemma
from .receipts import build_receipt, save_receipt

LOGGER_NAMES = ("lemma_core", "lemma_graph", "lemma_prove")

logger = logging.getLogger(__name__)


def setup_logger(
    names: Iterable[str] = LOGGER_NAMES,
    log_file: Optional[Path] = None,
    level=logging.INFO,
) -> List[logging.Logger]:
    """
    Setup package loggers.

    Console handler writes bare messages to stderr so progress lines stay
    literal; the optional file handler adds timestamps and levels.

    Args:
        names: Logger names to configure
        log_file: Optional path to log file
        level: Logging level

    Returns:
        Configured loggers
    """
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    handlers: List[logging.Handler] = [console_handler]

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="w")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(
            "[%(asctime)s] %(levelname)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
        ))
        handlers.append(file_handler)

    loggers = []
    for name in names:
        pkg_logger = logging.getLogger(name)
        pkg_logger.setLevel(level)
        # Clear any existing handlers
        pkg_logger.handlers = []
        for handler in handlers:
            pkg_logger.addHandler(handler)
        loggers.append(pkg_logger)

    return loggers


def read_lemma(stream: TextIO) -> int:
    """Parse the first whitespace-separated token of the stream as a lemma id."""
    tokens = stream.read().split()
    if not tokens:
        raise InvalidLemmaError("Expected a lemma id on stdin, got nothing")
    try:
        return int(tokens[0])
    except ValueError:
        raise InvalidLemmaError(
            f"Expected an integer lemma id, got {tokens[0]!r}"
        ) from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Exhaustive proof of the edge-equality lemmas (lemma id read from stdin)"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--log-file", type=Path, default=None, help="Also write logs to this file"
    )
    parser.add_argument(
        "--receipt-dir",
        type=Path,
        default=None,
        help="Write a JSON receipt for the run into this directory",
    )
    return parser


def main(
    argv: Optional[List[str]] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    args = build_parser().parse_args(argv)
    stdin = sys.stdin if stdin is None else stdin
    stdout = sys.stdout if stdout is None else stdout

    setup_logger(log_file=args.log_file, level=getattr(logging, args.log_level))

    try:
        lemma = read_lemma(stdin)
        result = prove_lemma(
            lemma, on_abiding=lambda n: logger.info(f"Found abiding matrix #{n}")
        )
    except LemmaError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1

    for line in format_guaranteed(result):
        print(line, file=stdout)

    if args.receipt_dir is not None:
        receipt_file = save_receipt(build_receipt(lemma, result), args.receipt_dir)
        logger.debug(f"Receipt saved to: {receipt_file}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
