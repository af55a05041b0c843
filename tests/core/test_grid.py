"""Tests for the Grid class."""

import numpy as np
import pytest
from trilight.core.grid import Grid, Neighborhood


class TestGrid:
    """Test cases for the Grid class."""

    def test_initialization(self):
        """Test grid initialization."""
        grid = Grid(10, 20, 0)
        assert grid.width == 10
        assert grid.height == 20
        assert grid.dims == (10, 20)
        assert grid.size == 200
        assert len(grid.cells) == 200

    def test_default_value_everywhere(self):
        """Every in-bounds cell starts with the default value."""
        grid = Grid(4, 3, "x")
        for i in range(4):
            for j in range(3):
                assert grid.get(i, j) == "x"

    def test_negative_dimensions(self):
        """Negative dimensions are rejected."""
        with pytest.raises(ValueError):
            Grid(-1, 5, 0)

        with pytest.raises(ValueError):
            Grid(5, -1, 0)

    def test_empty_grid(self):
        """Zero dimensions give a harmless empty grid."""
        grid = Grid(0, 0, 0)
        assert grid.size == 0
        assert grid.get(0, 0) is None
        assert grid.neighborhood(0, 0) is None
        assert list(grid.coords()) == []

    def test_linear_addressing(self):
        """Cell (i, j) lives at index i + j * width."""
        grid = Grid(5, 4, 0)
        grid.set(3, 2, 7)
        assert grid.index(3, 2) == 13
        assert grid.cells[13] == 7
        assert grid.to_array()[2, 3] == 7

    def test_out_of_bounds_get(self):
        """Out-of-range reads give None instead of raising."""
        grid = Grid(3, 3, 1)
        assert grid.get(3, 0) is None
        assert grid.get(0, 3) is None
        assert grid.get(-1, 0) is None
        assert grid.get(0, -1) is None
        assert grid.get(100, 100) is None

    def test_row_overflow_is_not_wrapped(self):
        """A column past the width never aliases a cell of the next row."""
        grid = Grid(3, 3, 0)
        grid.set(0, 1, 5)
        assert grid.get(3, 0) is None

    def test_out_of_bounds_set(self):
        """Out-of-range writes return False and leave the grid untouched."""
        grid = Grid(3, 3, 0)
        assert grid.set(3, 0, 9) is False
        assert grid.set(-1, 2, 9) is False
        assert all(value == 0 for value in grid.cells)

    def test_set_and_get(self):
        """Test basic cell get/set operations."""
        grid = Grid(5, 5, 0)
        assert grid.set(1, 1, 4) is True
        assert grid.set(2, 3, 8) is True

        assert grid.get(1, 1) == 4
        assert grid.get(2, 3) == 8
        assert grid.get(0, 0) == 0

    def test_update(self):
        """update replaces a cell with a function of its old value."""
        grid = Grid(3, 3, 1)
        assert grid.update(1, 1, lambda v: v + 10) == 11
        assert grid.get(1, 1) == 11
        assert grid.update(5, 5, lambda v: v + 10) is None

    def test_fill(self):
        """fill sets every cell."""
        grid = Grid(3, 2, 0)
        grid.fill(3)
        assert grid.cells.tolist() == [3] * 6

    def test_cells_view_is_read_only(self):
        """Cells can only be written through set, update and fill."""
        grid = Grid(3, 3, 0)
        with pytest.raises(ValueError):
            grid.cells[4] = 99
        assert grid.get(1, 1) == 0

        grid.set(1, 1, 7)
        assert grid.cells[4] == 7

    def test_copy_is_independent(self):
        """Copies do not share storage."""
        grid = Grid(3, 3, 0)
        grid.set(1, 1, 5)

        clone = grid.copy()
        assert clone == grid

        clone.set(1, 1, 6)
        assert grid.get(1, 1) == 5
        assert clone != grid

    def test_copy_from_mismatch(self):
        """copy_from refuses grids of another size."""
        with pytest.raises(ValueError):
            Grid(3, 3, 0).copy_from(Grid(4, 3, 0))

    def test_equality(self):
        """Test grid equality comparison."""
        assert Grid(3, 3, 0) == Grid(3, 3, 0)
        assert Grid(3, 3, 0) != Grid(3, 4, 0)
        assert Grid(3, 3, 0) != Grid(3, 3, 1)
        assert Grid(3, 3, 0) != "not a grid"

    def test_coords_order(self):
        """Coordinates run through every row for one column before moving on."""
        grid = Grid(2, 3, 0)
        assert list(grid.coords()) == [(0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2)]

    def test_to_array(self):
        """to_array gives a (height, width) array with an optional conversion."""
        grid = Grid(3, 2, 1)
        grid.set(2, 1, 4)

        array = grid.to_array(lambda v: v * 2, dtype=np.int64)
        assert array.shape == (2, 3)
        assert array.dtype == np.int64
        assert array[1, 2] == 8
        assert array.sum() == 5 * 2 + 8


class TestNeighborhood:
    """Test cases for the triangular neighborhood query."""

    def make_grid(self, width=6, height=5):
        grid = Grid(width, height, None)
        for i, j in grid.coords():
            grid.set(i, j, (i, j))
        return grid

    def test_even_cell_looks_below(self):
        """An upward triangle sees left, right and below."""
        grid = self.make_grid()
        nbh = grid.neighborhood(2, 2)
        assert nbh.center == (2, 2)
        assert nbh.neighbors == ((1, 2), (3, 2), (2, 3))

    def test_odd_cell_looks_above(self):
        """A downward triangle sees left, right and above."""
        grid = self.make_grid()
        nbh = grid.neighborhood(2, 1)
        assert nbh.center == (2, 1)
        assert nbh.neighbors == ((1, 1), (3, 1), (2, 0))

    def test_center_is_first(self):
        """Iteration and indexing put the center first."""
        grid = self.make_grid()
        nbh = grid.neighborhood(3, 2)
        assert nbh[0] == (3, 2)
        assert list(nbh) == [(3, 2), (2, 2), (4, 2), (3, 1)]
        assert len(nbh) == 4

    def test_top_left_corner(self):
        """Corner (0, 0) only keeps neighbors inside the grid."""
        grid = self.make_grid()
        nbh = grid.neighborhood(0, 0)
        assert list(nbh) == [(0, 0), (1, 0), (0, 1)]

    def test_top_right_corner(self):
        """An odd top-right corner has only its left neighbor."""
        grid = self.make_grid(width=6)
        nbh = grid.neighborhood(5, 0)
        assert list(nbh) == [(5, 0), (4, 0)]

    def test_bottom_edge(self):
        """An even cell on the last row loses its lower neighbor."""
        grid = self.make_grid(width=6, height=5)
        nbh = grid.neighborhood(2, 4)
        assert list(nbh) == [(2, 4), (1, 4), (3, 4)]

    def test_single_cell_grid(self):
        """A 1x1 grid has no neighbors at all."""
        grid = Grid(1, 1, "only")
        nbh = grid.neighborhood(0, 0)
        assert nbh == Neighborhood("only", ())
        assert len(nbh) == 1

    def test_out_of_bounds(self):
        """A query outside the grid gives None."""
        grid = self.make_grid()
        assert grid.neighborhood(6, 0) is None
        assert grid.neighborhood(-1, 0) is None

    def test_neighbor_coords_are_symmetric(self):
        """If a touches b then b touches a."""
        grid = self.make_grid(width=7, height=6)
        for i, j in grid.coords():
            for x, y in grid.neighbor_coords(i, j):
                assert (i, j) in grid.neighbor_coords(x, y)

    def test_neighbor_count_bounds(self):
        """Every cell has between one and three neighbors on a 30x20 grid."""
        grid = Grid(30, 20, 0)
        counts = [len(grid.neighbor_coords(i, j)) for i, j in grid.coords()]
        assert min(counts) >= 1
        assert max(counts) == 3
