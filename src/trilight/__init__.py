"""Light diffusion cellular automaton on a triangular grid."""

__version__ = "0.1.0"

from .core.grid import Grid, Neighborhood
from .core.automaton import Automaton
from .core.light import Light, Source, Space, decay
from .core.render import format_grid

__all__ = ["Grid", "Neighborhood", "Automaton", "Light", "Source", "Space", "decay", "format_grid"]
