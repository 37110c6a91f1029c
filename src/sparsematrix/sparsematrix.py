from __future__ import annotations

import logging
from collections.abc import Mapping
from copy import copy as shallow_copy
from operator import index as op_index
from typing import TYPE_CHECKING, Generic, TypeVar, overload

from sparsematrix.position import Cell, Position, make_position
from sparsematrix.proxy import MatrixView, RowProxy, Slot

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from typing import Any, SupportsIndex

T = TypeVar("T")

logger = logging.getLogger(__name__)


class sparsematrix(Generic[T]):  # noqa: N801
    """A logically infinite two-dimensional matrix that stores only non-default cells."""

    _storage: dict[Position, T]
    _pending: set[Position]
    _default: T | None
    _cached_rows: int | None
    _cached_cols: int | None
    _generation: int
    _auto_resolve: bool

    def __init__(
        self,
        data: Mapping[tuple[int, int], T] | Iterable[tuple[tuple[int, int], T]] | None = None,
        default: T | None = None,
        *,
        auto_resolve: bool = False,
    ) -> None:
        """Initialize a sparsematrix from data.

        Args:
            data: Initial cells (optional, defaults to empty)
                  - None: creates an empty matrix
                  - mapping: ``(row, col)`` keys, values placed at those positions
                  - iterable: ``((row, col), value)`` pairs, inserted in order
            default: Value reported for every position that holds no cell (default: None)
            auto_resolve: If True, iteration resolves pending cells before yielding

        Raises:
            TypeError: If a key is not a ``(row, col)`` pair of integers

        Note:
            Initial values equal to the default are not stored, exactly as
            with :meth:`insert`.
        """
        self._storage = {}
        self._pending = set()
        self._default = default
        self._cached_rows = 0
        self._cached_cols = 0
        self._generation = 0
        self._auto_resolve = auto_resolve

        if data is None:
            return

        items = data.items() if isinstance(data, Mapping) else data
        for key, value in items:
            row, col = self._split_key(key)
            self.insert(row, col, value)

    @property
    def default(self) -> T | None:
        """The value reported for positions that hold no cell. Fixed at construction."""
        return self._default

    @property
    def auto_resolve(self) -> bool:
        """Whether iteration resolves pending cells before yielding."""
        return self._auto_resolve

    # ---------------------
    # Cell access
    # ---------------------
    def insert(self, row: SupportsIndex, col: SupportsIndex, value: T) -> None:
        """Store value at (row, col), replacing any existing cell.

        Inserting the default value removes the cell at that position, if any.

        Args:
            row: Row index
            col: Column index
            value: Value to store
        """
        pos = make_position(row, col)

        if value != self._default:
            self._storage[pos] = value
            # Insertion can only grow the extents
            self._grow(pos)
        elif pos in self._storage:
            self._erase(pos)
            self._cached_rows = None
            self._cached_cols = None

    def discard(self, row: SupportsIndex, col: SupportsIndex) -> None:
        """Remove the cell at (row, col) if present. Same as inserting the default."""
        self.insert(row, col, self._default)  # type: ignore[arg-type]

    def at(self, row: SupportsIndex, col: SupportsIndex) -> T | None:
        """Return the value at (row, col), or the default if no cell is stored there.

        Never creates cells and never marks anything pending.
        """
        return self._storage.get(make_position(row, col), self._default)

    get = at

    def view(self) -> MatrixView[T]:
        """Return a read-only view whose row proxies never create cells."""
        return MatrixView(self)

    def clear(self) -> None:
        """Remove all cells."""
        self._storage.clear()
        self._pending.clear()
        self._cached_rows = 0
        self._cached_cols = 0
        self._generation += 1

    def copy(self) -> sparsematrix[T]:
        """Return a shallow copy with pending cells resolved.

        Returns:
            New sparsematrix with the same default, flags and cells
        """
        self.resolve_pending()
        result: sparsematrix[T] = sparsematrix(default=self._default, auto_resolve=self._auto_resolve)
        result._storage = dict(self._storage)
        result._cached_rows = self._cached_rows
        result._cached_cols = self._cached_cols
        return result

    __copy__ = copy

    # ---------------------
    # Aggregate queries
    # ---------------------
    def size(self) -> int:
        """Return the number of non-default cells."""
        self.resolve_pending()
        return len(self._storage)

    def rows(self) -> int:
        """Return 1 + the largest row index holding a cell, or 0 if the matrix is empty."""
        self.resolve_pending()
        if self._cached_rows is None:
            self._rescan()
        return self._cached_rows  # type: ignore[return-value]

    def cols(self) -> int:
        """Return 1 + the largest column index holding a cell, or 0 if the matrix is empty."""
        self.resolve_pending()
        if self._cached_cols is None:
            self._rescan()
        return self._cached_cols  # type: ignore[return-value]

    def resolve_pending(self) -> None:
        """Drop cells created by row-proxy access that still hold the default value.

        Cells that did receive a non-default value have their coordinates
        folded into the known extents. Calling this with nothing pending is a
        no-op, so aggregate queries may call it freely.
        """
        if not self._pending:
            return

        for pos in self._pending:
            if pos not in self._storage:
                # Already erased through insert() or clear()
                continue

            if self._storage[pos] == self._default:
                logger.debug("remove %d:%d value", pos.row, pos.col)
                self._erase(pos)
                # The cell may have been significant before it was reset
                # through a proxy, so it can sit on a known edge
                if self._on_edge(pos):
                    self._cached_rows = None
                    self._cached_cols = None
            else:
                self._grow(pos)

        self._pending.clear()

    # ---------------------
    # Iteration
    # ---------------------
    def __iter__(self) -> Iterator[Cell]:
        """Return an iterator over stored cells in row-major order.

        Yields:
            Cell tuples of (pos, value)

        Note:
            Unless ``auto_resolve`` is set, pending cells are not resolved
            first: a cell created by reading ``m[row][col]`` is visible here
            with the default value until the next size/rows/cols query.
        """
        if self._auto_resolve:
            self.resolve_pending()

        for pos in sorted(self._storage):
            # Skip cells erased since the key snapshot was taken
            if pos in self._storage:
                yield Cell(pos, self._storage[pos])

    def items(self) -> Iterator[Cell]:
        """Return an iterator over stored cells in row-major order. Same as iter()."""
        return iter(self)

    def slots(self) -> Iterator[Slot[T]]:
        """Return an iterator of writable handles over stored cells in row-major order.

        Yields:
            Slot handles; writing through a handle marks its position pending
        """
        if self._auto_resolve:
            self.resolve_pending()

        for pos in sorted(self._storage):
            if pos in self._storage:
                yield Slot(self, pos)

    # ---------------------
    # Container protocol
    # ---------------------
    @overload
    def __getitem__(self, key: SupportsIndex) -> RowProxy[T]: ...

    @overload
    def __getitem__(self, key: tuple[SupportsIndex, SupportsIndex]) -> T | None: ...

    def __getitem__(self, key: SupportsIndex | tuple[SupportsIndex, SupportsIndex]) -> RowProxy[T] | T | None:
        """Get a row proxy or a single value.

        Args:
            key: Row index, or (row, col) pair

        Returns:
            For a row index, a RowProxy whose item access creates pending cells.
            For a (row, col) pair, the stored value or default (read-only).

        Raises:
            TypeError: If key is neither an integer nor a (row, col) pair
        """
        if isinstance(key, tuple):
            row, col = self._split_key(key)
            return self.at(row, col)

        try:
            row = op_index(key)
        except TypeError:
            raise TypeError("matrix indices must be integers or (row, col) pairs") from None
        return RowProxy(self, row)

    def __setitem__(self, key: tuple[SupportsIndex, SupportsIndex], value: T) -> None:
        """Insert value at a (row, col) pair. See :meth:`insert`."""
        if not isinstance(key, tuple):
            raise TypeError("matrix assignment requires a (row, col) pair; use m[row][col] = value")
        row, col = self._split_key(key)
        self.insert(row, col, value)

    def __delitem__(self, key: tuple[SupportsIndex, SupportsIndex]) -> None:
        """Remove the cell at a (row, col) pair, if any."""
        row, col = self._split_key(key)
        self.discard(row, col)

    def __contains__(self, key: object) -> bool:
        """Return True if a cell is stored at the (row, col) pair.

        Pending cells count as stored; nothing is resolved first.
        """
        return self._split_key(key) in self._storage

    def __len__(self) -> int:
        """Return the number of non-default cells. Same as size()."""
        return self.size()

    def __eq__(self, other: object) -> bool:
        """Return True if other is a sparsematrix with the same default and cells.

        Args:
            other: Object to compare with

        Returns:
            True if both matrices report the same value at every position
        """
        if self is other:
            return True

        if not isinstance(other, sparsematrix):
            return NotImplemented

        if self._default != other._default:
            return False

        self.resolve_pending()
        other.resolve_pending()
        return self._storage == other._storage

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return NotImplemented
        return not result

    def __hash__(self) -> None:  # type: ignore[override]
        """Raise TypeError as sparsematrices are not hashable.

        Raises:
            TypeError: Always raised since sparsematrices are mutable
        """
        raise TypeError("unhashable type: 'sparsematrix'")

    def __repr__(self) -> str:
        """Return a string representation of the sparsematrix.

        Format: *<rows x cols/default>[(row, col): val, ...]*
        """
        header = f"<{self.rows()}x{self.cols()}/{self._default!r}>"
        cells = ", ".join(f"({pos.row}, {pos.col}): {value!r}" for pos, value in sorted(self._storage.items()))
        return f"{header}[{cells}]"

    # ---------------------
    # Internals
    # ---------------------
    @staticmethod
    def _split_key(key: Any) -> tuple[int, int]:
        """Unpack a (row, col) key, checking its shape and element types."""
        try:
            row, col = key
        except (TypeError, ValueError):
            raise TypeError("matrix positions must be (row, col) pairs") from None
        return make_position(row, col)

    def _touch(self, pos: Position) -> None:
        """Create a default cell at pos if needed and mark it pending.

        The new cell holds a shallow copy of the default, so in-place edits
        such as ``m[r][c] += [x]`` never reach the default itself.
        """
        if pos not in self._storage:
            self._storage[pos] = shallow_copy(self._default)  # type: ignore[assignment]
        self._pending.add(pos)

    def _erase(self, pos: Position) -> None:
        del self._storage[pos]
        self._generation += 1

    def _grow(self, pos: Position) -> None:
        """Fold pos into the known extents. Unknown extents stay unknown."""
        if self._cached_rows is not None:
            self._cached_rows = max(self._cached_rows, pos.row + 1)
        if self._cached_cols is not None:
            self._cached_cols = max(self._cached_cols, pos.col + 1)

    def _on_edge(self, pos: Position) -> bool:
        return (self._cached_rows is not None and pos.row + 1 == self._cached_rows) or (
            self._cached_cols is not None and pos.col + 1 == self._cached_cols
        )

    def _rescan(self) -> None:
        """Recompute both extents from every stored cell."""
        rows = 0
        cols = 0
        for row, col in self._storage:
            rows = max(rows, row + 1)
            cols = max(cols, col + 1)
        self._cached_rows = rows
        self._cached_cols = cols
