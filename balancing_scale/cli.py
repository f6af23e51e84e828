"""Command-line interface: balance the scale tree described in a file."""
import argparse
import logging
import sys
from typing import List, NoReturn, Optional, TextIO

from balancing_scale.balancer import balance
from balancing_scale.config import OUTPUT_SEPARATOR, get_log_level
from balancing_scale.errors import ScaleError, ScaleInputError
from balancing_scale.logging_config import setup_logging
from balancing_scale.models import BalanceResult, ScaleTree
from balancing_scale.parser import build_tree

logger = logging.getLogger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    """Exits with status 1 on usage errors."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def read_tree(path: str) -> ScaleTree:
    """Read and validate the scale tree stored in ``path``."""
    try:
        with open(path, encoding="utf-8") as f:
            lines = f.readlines()
    except (OSError, UnicodeDecodeError) as e:
        raise ScaleInputError(f"failed to open file: {path} ({e})") from e
    return build_tree(lines, source=path)


def format_result(result: BalanceResult) -> List[str]:
    """One ``name,left,right`` line per scale, ascending by name."""
    return [
        OUTPUT_SEPARATOR.join((name, str(masses.left), str(masses.right)))
        for name, masses in sorted(result.items())
    ]


def write_result(result: BalanceResult, out: TextIO) -> None:
    for line in format_result(result):
        out.write(line + "\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="balancing-scale",
        description="Compute the masses that balance every scale in a scale tree.",
    )
    parser.add_argument("input_file", help="scale tree description")
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug output")
    parser.add_argument("--log-file", default=None, help="also write logs to this file")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else get_log_level(), args.log_file)

    try:
        tree = read_tree(args.input_file)
        result = balance(tree)
    except ScaleError as e:
        logger.debug("Failed to balance %s", args.input_file, exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1

    write_result(result, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
