"""Light cell values and the decay rule."""

from dataclasses import dataclass
from typing import Iterable

from .grid import Neighborhood

MAX_INTENSITY = 255


@dataclass(frozen=True)
class Light:
    """Base class for a light cell.

    Intensity is an 8-bit level: 0 is dark, 255 is the brightest value a
    cell can hold.
    """

    intensity: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.intensity <= MAX_INTENSITY:
            raise ValueError(f"Intensity must be between 0 and {MAX_INTENSITY}, got {self.intensity}")

    def __str__(self) -> str:
        """Three blanks when dark, otherwise the level centered in three columns."""
        if self.intensity == 0:
            return "   "
        return f"{self.intensity:^3}"


@dataclass(frozen=True)
class Source(Light):
    """A cell emitting light at a fixed intensity."""


@dataclass(frozen=True)
class Space(Light):
    """A cell that takes light from its neighbors and lets it fade."""


def intensity_of(light: Light) -> int:
    """Get the intensity of a light cell."""
    return light.intensity


def max_intensity(cells: Iterable[Light]) -> int:
    """Highest intensity among ``cells`` (0 when empty)."""
    return max((cell.intensity for cell in cells), default=0)


def decay(neighborhood: Neighborhood[Light]) -> Light:
    """Light diffusion rule.

    Sources keep their level. A space cell takes the brightest level in its
    neighborhood, itself included, minus one, and never drops below zero.
    """
    if isinstance(neighborhood.center, Source):
        return neighborhood.center

    brightest = max_intensity(neighborhood)
    return Space(max(brightest, 1) - 1)
