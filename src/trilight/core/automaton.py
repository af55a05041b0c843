"""Double-buffered automaton driver for triangular grids."""

from typing import Callable, Generic, Optional, Tuple, TypeVar

from .grid import Grid, Neighborhood

T = TypeVar("T")

Rule = Callable[[Neighborhood[T]], T]


class Automaton(Generic[T]):
    """Cellular automaton engine over a pair of grid buffers.

    One buffer is active and visible through ``grid``/``get``; the other is
    the write target of the next generation. Every call to ``evolve`` fills
    the inactive buffer from the active one and then swaps their roles, so
    a rule only ever sees values from the previous generation.
    """

    def __init__(self, seed: Grid[T]) -> None:
        """Initialize the automaton from a seed grid.

        Args:
            seed: Initial state. It is copied, never modified.
        """
        self._grids = (seed.copy(), seed.copy())
        self._active = 0
        self._generation = 0

    @property
    def grid(self) -> Grid[T]:
        """The active buffer.

        Only valid until the next ``evolve``, which makes it the write target.
        """
        return self._grids[self._active]

    @property
    def active(self) -> int:
        """Index (0 or 1) of the active buffer."""
        return self._active

    @property
    def generation(self) -> int:
        """Number of generations computed so far."""
        return self._generation

    @property
    def dims(self) -> Tuple[int, int]:
        """Grid dimensions as (width, height)."""
        return self.grid.dims

    @property
    def width(self) -> int:
        """Number of columns."""
        return self.grid.width

    @property
    def height(self) -> int:
        """Number of rows."""
        return self.grid.height

    def get(self, i: int, j: int) -> Optional[T]:
        """Get a cell of the active buffer, or None if out of bounds."""
        return self.grid.get(i, j)

    def set(self, i: int, j: int, value: T) -> bool:
        """Set a cell of the active buffer. Returns False if out of bounds."""
        return self.grid.set(i, j, value)

    def update(self, i: int, j: int, func: Callable[[T], T]) -> Optional[T]:
        """Replace a cell of the active buffer with ``func(old_value)``."""
        return self.grid.update(i, j, func)

    def neighborhood(self, i: int, j: int) -> Optional[Neighborhood[T]]:
        """Neighborhood of a cell in the active buffer."""
        return self.grid.neighborhood(i, j)

    def evolve(self, rule: Rule[T]) -> None:
        """Advance the automaton by one generation.

        Args:
            rule: Pure function mapping a cell's neighborhood to its next value
        """
        current = self._grids[self._active]
        target = self._grids[1 - self._active]

        for i, j in current.coords():
            target.set(i, j, rule(current.neighborhood(i, j)))

        self._active = 1 - self._active
        self._generation += 1

    def run(
        self,
        rule: Rule[T],
        generations: int,
        callback: Optional[Callable[["Automaton[T]"], None]] = None,
    ) -> None:
        """Evolve for a fixed number of generations.

        Args:
            rule: Transition rule applied every generation
            generations: Number of generations to compute
            callback: Optional function called with the automaton before each generation
        """
        for _ in range(generations):
            if callback is not None:
                callback(self)
            self.evolve(rule)

    def run_until_stable(self, rule: Rule[T], max_generations: int = 1000) -> Tuple[int, str]:
        """Evolve until a generation leaves the grid unchanged.

        Args:
            rule: Transition rule applied every generation
            max_generations: Maximum generations to run

        Returns:
            Tuple of (final_generation, reason) where reason is one of:
            'stable', 'max_generations'
        """
        for _ in range(max_generations):
            self.evolve(rule)

            if self._grids[0] == self._grids[1]:
                return self._generation, "stable"

        return self._generation, "max_generations"

    def __repr__(self) -> str:
        return f"Automaton(dims={self.dims}, generation={self._generation}, active={self._active})"
