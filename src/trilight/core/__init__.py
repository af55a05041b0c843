"""Core triangular automaton logic."""

from .grid import Grid, Neighborhood
from .automaton import Automaton
from .light import Light, Source, Space, decay, intensity_of
from .render import format_grid, print_grid
from .field import LightField

__all__ = [
    "Grid",
    "Neighborhood",
    "Automaton",
    "Light",
    "Source",
    "Space",
    "decay",
    "intensity_of",
    "format_grid",
    "print_grid",
    "LightField",
]
