from __future__ import annotations

from operator import index as op_index
from typing import TYPE_CHECKING, Generic, TypeVar, overload

from sparsematrix.position import make_position

if TYPE_CHECKING:
    from collections.abc import Iterator
    from typing import SupportsIndex

    from sparsematrix.position import Cell, Position
    from sparsematrix.sparsematrix import sparsematrix

T = TypeVar("T")


class StaleSlotError(RuntimeError):
    """Raised when writing through a Slot whose cell has been reorganized away."""


class Slot(Generic[T]):
    """Handle to one storage cell of a sparsematrix.

    A slot remembers the position and the storage generation it was issued
    under. Any erasure in the matrix moves the generation on, after which the
    slot is unbound: reads return the default and writes raise StaleSlotError.
    This holds for an erasure at any position, including a compaction that
    drops some other speculative cell, even while this slot's own cell is
    still stored. Take a fresh slot after any size/rows/cols query.
    """

    __slots__ = ("_generation", "_matrix", "_pos")

    def __init__(self, matrix: sparsematrix[T], pos: Position) -> None:
        self._matrix = matrix
        self._pos = pos
        self._generation = matrix._generation

    @property
    def pos(self) -> Position:
        return self._pos

    @property
    def bound(self) -> bool:
        """True while the slot still refers to a live storage cell."""
        return self._generation == self._matrix._generation and self._pos in self._matrix._storage

    @property
    def value(self) -> T | None:
        """Get or set the value held in the cell.

        :getter: Returns the live cell value, or the matrix default if unbound.
        :setter: Writes the cell and marks it pending, so a default written
            here is dropped at the next size/rows/cols query.

        Raises:
            StaleSlotError: If set while the slot is unbound
        """
        if not self.bound:
            return self._matrix._default
        return self._matrix._storage[self._pos]

    @value.setter
    def value(self, new_value: T) -> None:
        """Set the cell value. See getter for full documentation."""
        if not self.bound:
            raise StaleSlotError(f"slot {self._pos.row}:{self._pos.col} is no longer bound to the matrix")
        self._matrix._storage[self._pos] = new_value
        self._matrix._pending.add(self._pos)

    def __repr__(self) -> str:
        state = repr(self.value) if self.bound else "unbound"
        return f"Slot({self._pos.row}, {self._pos.col}: {state})"


class RowProxy(Generic[T]):
    """Writable view of one matrix row, returned by ``m[row]``.

    Every item access creates the cell if it is missing and marks it pending,
    because the proxy cannot tell a read from the first half of a write.
    """

    __slots__ = ("_matrix", "_row")

    def __init__(self, matrix: sparsematrix[T], row: int) -> None:
        self._matrix = matrix
        self._row = row

    @property
    def row(self) -> int:
        return self._row

    def __getitem__(self, col: SupportsIndex) -> T:
        """Return the cell value at col, creating a pending default cell if missing."""
        pos = make_position(self._row, col)
        self._matrix._touch(pos)
        return self._matrix._storage[pos]

    def __setitem__(self, col: SupportsIndex, value: T) -> None:
        """Write value into the cell at col.

        The write goes straight to storage; whether the cell is kept is
        decided at the next size/rows/cols query.
        """
        pos = make_position(self._row, col)
        self._matrix._touch(pos)
        self._matrix._storage[pos] = value

    def slot(self, col: SupportsIndex) -> Slot[T]:
        """Return a handle to the cell at col, creating a pending default cell if missing."""
        pos = make_position(self._row, col)
        self._matrix._touch(pos)
        return Slot(self._matrix, pos)

    def __repr__(self) -> str:
        return f"RowProxy(row={self._row})"


class ConstRowProxy(Generic[T]):
    """Read-only view of one matrix row. Item access never creates cells."""

    __slots__ = ("_matrix", "_row")

    def __init__(self, matrix: sparsematrix[T], row: int) -> None:
        self._matrix = matrix
        self._row = row

    @property
    def row(self) -> int:
        return self._row

    def __getitem__(self, col: SupportsIndex) -> T | None:
        return self._matrix.at(self._row, col)

    def __repr__(self) -> str:
        return f"ConstRowProxy(row={self._row})"


class MatrixView(Generic[T]):
    """Read-only facade over a sparsematrix, returned by :meth:`sparsematrix.view`.

    Indexing through the view never creates cells or marks them pending.
    Aggregate queries are forwarded to the matrix and still resolve its
    pending cells.
    """

    __slots__ = ("_matrix",)

    def __init__(self, matrix: sparsematrix[T]) -> None:
        self._matrix = matrix

    @property
    def default(self) -> T | None:
        return self._matrix.default

    @overload
    def __getitem__(self, key: SupportsIndex) -> ConstRowProxy[T]: ...

    @overload
    def __getitem__(self, key: tuple[SupportsIndex, SupportsIndex]) -> T | None: ...

    def __getitem__(self, key: SupportsIndex | tuple[SupportsIndex, SupportsIndex]) -> ConstRowProxy[T] | T | None:
        """Get a read-only row proxy or a single value.

        Raises:
            TypeError: If key is neither an integer nor a (row, col) pair
        """
        if isinstance(key, tuple):
            return self._matrix[key]

        try:
            row = op_index(key)
        except TypeError:
            raise TypeError("matrix indices must be integers or (row, col) pairs") from None
        return ConstRowProxy(self._matrix, row)

    def at(self, row: SupportsIndex, col: SupportsIndex) -> T | None:
        return self._matrix.at(row, col)

    def size(self) -> int:
        return self._matrix.size()

    def rows(self) -> int:
        return self._matrix.rows()

    def cols(self) -> int:
        return self._matrix.cols()

    def __len__(self) -> int:
        return self._matrix.size()

    def __contains__(self, key: object) -> bool:
        return key in self._matrix

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._matrix)

    def __repr__(self) -> str:
        return f"MatrixView({self._matrix!r})"
