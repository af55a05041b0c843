"""Text rendering of triangular grids."""

from typing import List

from .grid import Grid


def _cell(grid: Grid, i: int, j: int) -> str:
    return f"{str(grid.get(i, j)):^3}"


def format_grid(grid: Grid) -> str:
    """Draw a grid as a mesh of alternating triangles.

    Rows are drawn in pairs. In an even row, odd columns are downward
    triangles on the upper strip and even columns upward triangles on the
    lower strip; the following odd row mirrors that layout.

    Args:
        grid: Grid to draw. Cells are formatted with ``str``.

    Returns:
        Multi-line string with ``3 * height + 1`` lines
    """
    width, height = grid.dims
    odd_columns = range(1, width, 2)
    even_columns = range(0, width, 2)

    lines: List[str] = ["      ·" + "-----·" * len(odd_columns)]

    for j in range(0, height, 2):
        line = "     /" + "".join(f" \\{_cell(grid, i, j)}/" for i in odd_columns)
        if width % 2 == 1:
            line += " \\"
        lines.append(line)

        line = "    " + "".join(f"/{_cell(grid, i, j)}\\ " for i in even_columns)
        if width % 2 == 0:
            line += "/"
        lines.append(line)

        lines.append("   ·" + "-----·" * len(even_columns))

        if j + 1 == height:
            break

        line = "    " + "".join(f"\\{_cell(grid, i, j + 1)}/ " for i in even_columns)
        if width % 2 == 0:
            line += "\\"
        lines.append(line)

        line = "     \\" + "".join(f" /{_cell(grid, i, j + 1)}\\" for i in odd_columns)
        if width % 2 == 1:
            line += " /"
        lines.append(line)

        lines.append("      ·" + "-----·" * len(odd_columns))

    return "\n".join(lines)


def print_grid(grid: Grid) -> None:
    """Print a grid as a triangular mesh."""
    print(format_grid(grid))
