from __future__ import annotations

from operator import index as op_index
from typing import TYPE_CHECKING, Any, NamedTuple

if TYPE_CHECKING:
    from typing import SupportsIndex


class Position(NamedTuple):
    """Row/column coordinates of a matrix cell.

    Positions compare row-major: by row first, then by column within a row.
    """

    row: int
    col: int

    def is_valid(self) -> bool:
        """Return True if both coordinates are non-negative.

        Note:
            This is a convention only. The matrix accepts any integer
            coordinates and never calls this method itself.
        """
        return self.row >= 0 and self.col >= 0


class Cell(NamedTuple):
    """A stored cell as yielded by matrix iteration."""

    pos: Position
    value: Any


def make_position(row: SupportsIndex, col: SupportsIndex) -> Position:
    """Build a Position from two index-like values.

    Raises:
        TypeError: If either coordinate does not support __index__
    """
    try:
        return Position(op_index(row), op_index(col))
    except TypeError:
        raise TypeError("matrix indices must be integers") from None
