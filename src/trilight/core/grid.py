"""Grid data structure for triangular cellular automata."""

from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterator, List, Optional, Tuple, TypeVar
import numpy as np

T = TypeVar("T")


@dataclass(frozen=True)
class Neighborhood(Generic[T]):
    """Values seen by a rule when updating one cell.

    Iteration and indexing put ``center`` first, followed by ``neighbors``
    in left, right, below-or-above order.
    """

    center: T
    neighbors: Tuple[T, ...] = ()

    @property
    def values(self) -> Tuple[T, ...]:
        """Center and neighbors as one tuple."""
        return (self.center,) + self.neighbors

    def __iter__(self) -> Iterator[T]:
        return iter(self.values)

    def __len__(self) -> int:
        return 1 + len(self.neighbors)

    def __getitem__(self, index: int) -> T:
        return self.values[index]


class Grid(Generic[T]):
    """A 2D grid of arbitrary cell values over a triangular mesh.

    Cells are stored in a flat numpy object array; cell ``(i, j)`` lives at
    index ``i + j * width``. Coordinates outside the grid are never an error:
    reads return None and writes return False.

    The grid is drawn as alternating upward and downward triangles. A cell
    whose ``i + j`` is even points up and touches the cell below it; an odd
    cell points down and touches the cell above it. Both touch their left
    and right neighbors.
    """

    def __init__(self, width: int, height: int, default: T) -> None:
        """Initialize a new grid.

        Args:
            width: Number of columns
            height: Number of rows
            default: Initial value of every cell

        Raises:
            ValueError: If either dimension is negative
        """
        if width < 0 or height < 0:
            raise ValueError(f"Grid dimensions must be non-negative, got {width}x{height}")

        self.width = width
        self.height = height
        self._cells = np.empty(width * height, dtype=object)
        self._cells.fill(default)

    @property
    def cells(self) -> np.ndarray:
        """Read-only view of the flat cell array."""
        view = self._cells.view()
        view.flags.writeable = False
        return view

    @property
    def dims(self) -> Tuple[int, int]:
        """Get grid dimensions as (width, height)."""
        return (self.width, self.height)

    @property
    def size(self) -> int:
        """Number of cells in the grid."""
        return self.width * self.height

    def in_bounds(self, i: int, j: int) -> bool:
        """Check whether (i, j) addresses a cell of this grid."""
        return 0 <= i < self.width and 0 <= j < self.height

    def index(self, i: int, j: int) -> Optional[int]:
        """Linear index of (i, j), or None if out of bounds."""
        if not self.in_bounds(i, j):
            return None
        return i + j * self.width

    def get(self, i: int, j: int) -> Optional[T]:
        """Get the value of a cell.

        Args:
            i: Column coordinate
            j: Row coordinate

        Returns:
            The cell value, or None if (i, j) is outside the grid
        """
        idx = self.index(i, j)
        if idx is None:
            return None
        return self._cells[idx]

    def set(self, i: int, j: int, value: T) -> bool:
        """Set the value of a cell.

        Args:
            i: Column coordinate
            j: Row coordinate
            value: New cell value

        Returns:
            True if the cell was written, False if (i, j) is outside the grid
        """
        idx = self.index(i, j)
        if idx is None:
            return False
        self._cells[idx] = value
        return True

    def update(self, i: int, j: int, func: Callable[[T], T]) -> Optional[T]:
        """Replace a cell with ``func(old_value)``.

        Returns:
            The new value, or None if (i, j) is outside the grid
        """
        idx = self.index(i, j)
        if idx is None:
            return None
        value = func(self._cells[idx])
        self._cells[idx] = value
        return value

    def fill(self, value: T) -> None:
        """Set every cell to ``value``."""
        self._cells.fill(value)

    def neighbor_coords(self, i: int, j: int) -> List[Tuple[int, int]]:
        """Coordinates of the in-bounds neighbors of (i, j).

        The order is fixed: left, right, then below for an even cell or
        above for an odd one. The cell itself is not included.
        """
        if (i + j) % 2 == 0:
            #  1/c\2
            #   \3/
            candidates = [(i - 1, j), (i + 1, j), (i, j + 1)]
        else:
            #   /3\
            #  1\c/2
            candidates = [(i - 1, j), (i + 1, j), (i, j - 1)]

        return [(x, y) for x, y in candidates if self.in_bounds(x, y)]

    def neighborhood(self, i: int, j: int) -> Optional[Neighborhood[T]]:
        """Get a cell and its triangular neighbors.

        Args:
            i: Column coordinate
            j: Row coordinate

        Returns:
            Neighborhood with the cell as center and up to three neighbors,
            or None if (i, j) is outside the grid
        """
        center = self.index(i, j)
        if center is None:
            return None

        neighbors = tuple(self._cells[x + y * self.width] for x, y in self.neighbor_coords(i, j))
        return Neighborhood(self._cells[center], neighbors)

    def coords(self) -> Iterator[Tuple[int, int]]:
        """Iterate over every cell coordinate, column by column."""
        for i in range(self.width):
            for j in range(self.height):
                yield (i, j)

    def copy(self) -> "Grid[T]":
        """Create an independent copy of the grid."""
        other: Grid[T] = Grid(self.width, self.height, None)
        other.copy_from(self)
        return other

    def copy_from(self, other: "Grid[T]") -> None:
        """Copy cell values from another grid.

        Raises:
            ValueError: If grids have different dimensions
        """
        if other.dims != self.dims:
            raise ValueError(f"Grid dimensions don't match: {other.dims} vs {self.dims}")

        self._cells[:] = other._cells

    def to_array(self, func: Optional[Callable[[T], Any]] = None, dtype: Any = None) -> np.ndarray:
        """Convert the grid to a 2D array indexed as [row, column].

        Args:
            func: Optional conversion applied to every cell value
            dtype: Optional dtype of the resulting array

        Returns:
            Array of shape (height, width)
        """
        result = np.empty(self.size, dtype=dtype if dtype is not None else object)
        for idx, value in enumerate(self._cells):
            result[idx] = value if func is None else func(value)
        return result.reshape(self.height, self.width)

    def __eq__(self, other: object) -> bool:
        """Check if two grids are equal."""
        if not isinstance(other, Grid):
            return False
        return self.dims == other.dims and self._cells.tolist() == other._cells.tolist()

    def __repr__(self) -> str:
        return f"Grid(width={self.width}, height={self.height})"
