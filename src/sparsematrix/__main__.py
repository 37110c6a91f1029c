"""Demonstration driver: ``python -m sparsematrix``.

Fills both diagonals of a square matrix (or loads cells from a file of
``row<TAB>col<TAB>value`` lines), prints the inner fragment and the number
of occupied cells.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from sparsematrix.lines import split_fields, trim
from sparsematrix.sparsematrix import sparsematrix

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from typing import TextIO

logger = logging.getLogger(__name__)


def fill_diagonals(matrix: sparsematrix[int], size: int) -> None:
    """Write the column index along the main and the anti-diagonal."""
    for row in range(size):
        anti_col = size - 1 - row
        matrix[row][anti_col] = anti_col
        matrix[row][row] = row


def load_cells(matrix: sparsematrix[int], lines: Iterable[str]) -> None:
    """Write every ``row<TAB>col<TAB>value`` line into matrix. Blank lines are skipped.

    Raises:
        ValueError: If a line is malformed or a field is not an integer
    """
    for lineno, line in enumerate(lines, start=1):
        if not trim(line):
            continue
        try:
            row, col, value = (int(trim(field)) for field in split_fields(line))
        except ValueError as exc:
            raise ValueError(f"line {lineno}: {exc}") from None
        matrix[row][col] = value


def print_fragment(matrix: sparsematrix[int], first: int, last: int, out: TextIO) -> None:
    """Print rows and columns first..last inclusive, space separated."""
    for row in range(first, last + 1):
        out.write(" ".join(str(matrix[row][col]) for col in range(first, last + 1)) + "\n")


def print_cells(matrix: sparsematrix[int], out: TextIO) -> None:
    for pos, value in matrix:
        out.write(f"[{pos.row}][{pos.col}] = {value}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="python -m sparsematrix", description=__doc__.splitlines()[0])
    parser.add_argument("--size", type=int, default=10, help="side of the square to fill (default: 10)")
    parser.add_argument("--default", type=int, default=0, help="matrix default value (default: 0)")
    parser.add_argument(
        "--input",
        type=Path,
        help="read row<TAB>col<TAB>value lines instead of filling the diagonals",
    )
    parser.add_argument("--cells", action="store_true", help="also list every occupied cell")
    parser.add_argument("-v", "--verbose", action="store_true", help="log cell removals")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    matrix: sparsematrix[int] = sparsematrix(default=args.default)
    try:
        if args.input is not None:
            with args.input.open() as lines:
                load_cells(matrix, lines)
        else:
            fill_diagonals(matrix, args.size)
    except (OSError, ValueError) as exc:
        print(exc, file=sys.stderr)
        return 1

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("matrix has %d cells before printing", matrix.size())

    # Reading through the row proxies creates pending cells, which the size
    # query below drops again
    print_fragment(matrix, 1, args.size - 2, sys.stdout)
    print(matrix.size())

    if args.cells:
        print_cells(matrix, sys.stdout)

    return 0


if __name__ == "__main__":
    sys.exit(main())
