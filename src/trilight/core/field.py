"""Tensor-based light field for fast evaluation of the decay rule."""

from typing import Callable, Optional, Tuple
import numpy as np
import torch
import torch.nn.functional as F

from .grid import Grid
from .light import Light, Source, Space, intensity_of


class LightField:
    """Light grid stored as a 2D tensor.

    Computes exactly what ``Automaton.evolve(decay)`` computes on a grid of
    ``Light`` cells, one whole generation per tensor operation instead of one
    rule call per cell.

    Intensities live in a float32 tensor of shape (height, width); a boolean
    mask of the same shape marks source cells.
    """

    def __init__(self, width: int, height: int, device: str = "cpu") -> None:
        """Initialize a dark light field.

        Args:
            width: Number of columns
            height: Number of rows
            device: Device to place tensors on ('cpu' or 'cuda')

        Raises:
            ValueError: If either dimension is negative
        """
        if width < 0 or height < 0:
            raise ValueError(f"Field dimensions must be non-negative, got {width}x{height}")

        self.width = width
        self.height = height
        self.device = torch.device(device)
        self._generation = 0

        # Keep torch single-threaded
        torch.set_num_threads(1)

        self._intensity = torch.zeros(height, width, dtype=torch.float32, device=self.device)
        self._sources = torch.zeros(height, width, dtype=torch.bool, device=self.device)

        # Upward (even) triangles look below, downward (odd) ones look above
        rows = torch.arange(height, device=self.device).unsqueeze(1)
        cols = torch.arange(width, device=self.device).unsqueeze(0)
        self._upward = (rows + cols) % 2 == 0

    @classmethod
    def from_grid(cls, grid: Grid, device: str = "cpu") -> "LightField":
        """Build a field from a grid of Light cells.

        Raises:
            TypeError: If a cell is not a Light value
        """
        for value in grid.cells:
            if not isinstance(value, Light):
                raise TypeError(f"Expected Light cells, found {type(value).__name__}")

        field = cls(grid.width, grid.height, device)
        intensities = grid.to_array(intensity_of, dtype=np.float32)
        sources = grid.to_array(lambda cell: isinstance(cell, Source), dtype=bool)
        field._intensity = torch.from_numpy(intensities).to(field.device)
        field._sources = torch.from_numpy(sources).to(field.device)
        return field

    def to_grid(self) -> Grid[Light]:
        """Convert the field back to a grid of Light cells."""
        intensities = self._intensity.to(torch.int64).cpu().numpy()
        sources = self._sources.cpu().numpy()

        grid: Grid[Light] = Grid(self.width, self.height, Space(0))
        for i, j in grid.coords():
            level = int(intensities[j, i])
            grid.set(i, j, Source(level) if sources[j, i] else Space(level))
        return grid

    @property
    def shape(self) -> Tuple[int, int]:
        """Get field dimensions as (width, height)."""
        return (self.width, self.height)

    @property
    def dims(self) -> Tuple[int, int]:
        """Alias of shape, (width, height)."""
        return self.shape

    @property
    def generation(self) -> int:
        """Number of generations computed so far."""
        return self._generation

    @property
    def intensity(self) -> torch.Tensor:
        """Intensity tensor of shape (height, width)."""
        return self._intensity

    @property
    def sources(self) -> torch.Tensor:
        """Boolean source mask of shape (height, width)."""
        return self._sources

    @property
    def total_intensity(self) -> int:
        """Sum of all cell intensities."""
        return int(self._intensity.sum().item())

    @property
    def lit_cells(self) -> int:
        """Number of cells with non-zero intensity."""
        return int((self._intensity > 0).sum().item())

    def in_bounds(self, i: int, j: int) -> bool:
        return 0 <= i < self.width and 0 <= j < self.height

    def get(self, i: int, j: int) -> Optional[Light]:
        """Get a cell as a Light value, or None if out of bounds."""
        if not self.in_bounds(i, j):
            return None
        level = int(self._intensity[j, i].item())
        return Source(level) if bool(self._sources[j, i]) else Space(level)

    def set(self, i: int, j: int, light: Light) -> bool:
        """Set a cell from a Light value. Returns False if out of bounds."""
        if not self.in_bounds(i, j):
            return False
        self._intensity[j, i] = float(light.intensity)
        self._sources[j, i] = isinstance(light, Source)
        return True

    def set_source(self, i: int, j: int, intensity: int) -> bool:
        """Turn a cell into a source of the given intensity."""
        return self.set(i, j, Source(intensity))

    def set_space(self, i: int, j: int, intensity: int = 0) -> bool:
        """Turn a cell into a space cell of the given intensity."""
        return self.set(i, j, Space(intensity))

    def step(self) -> None:
        """Advance the field by one generation of the decay rule."""
        # Zero padding stands in for missing neighbors: intensities are never negative
        padded = F.pad(self._intensity.unsqueeze(0).unsqueeze(0), (1, 1, 1, 1))[0, 0]

        left = padded[1:-1, :-2]
        right = padded[1:-1, 2:]
        above = padded[:-2, 1:-1]
        below = padded[2:, 1:-1]
        vertical = torch.where(self._upward, below, above)

        brightest = torch.maximum(torch.maximum(self._intensity, left), torch.maximum(right, vertical))
        faded = torch.clamp(brightest - 1, min=0)

        self._intensity = torch.where(self._sources, self._intensity, faded)
        self._generation += 1

    def run(self, generations: int, callback: Optional[Callable[["LightField"], None]] = None) -> None:
        """Advance the field by a fixed number of generations.

        Args:
            generations: Number of generations to compute
            callback: Optional function called with the field before each generation
        """
        for _ in range(generations):
            if callback is not None:
                callback(self)
            self.step()

    def run_until_stable(self, max_generations: int = 1000) -> Tuple[int, str]:
        """Step until a generation leaves the field unchanged.

        Returns:
            Tuple of (final_generation, reason) where reason is one of:
            'stable', 'max_generations'
        """
        for _ in range(max_generations):
            previous = self._intensity
            self.step()

            if torch.equal(previous, self._intensity):
                return self._generation, "stable"

        return self._generation, "max_generations"

    def __repr__(self) -> str:
        return f"LightField(width={self.width}, height={self.height}, device={self.device})"
