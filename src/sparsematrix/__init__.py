"""A logically infinite two-dimensional matrix that stores only non-default cells.

See README.md for complete documentation and usage examples.
"""

from sparsematrix.position import Cell, Position
from sparsematrix.proxy import ConstRowProxy, MatrixView, RowProxy, Slot, StaleSlotError
from sparsematrix.sparsematrix import sparsematrix

__all__ = [
    "Cell",
    "ConstRowProxy",
    "MatrixView",
    "Position",
    "RowProxy",
    "Slot",
    "StaleSlotError",
    "sparsematrix",
]
