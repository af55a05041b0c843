"""Frontend interfaces for the light automaton."""

from .cli import CLILightDiffusion

__all__ = ["CLILightDiffusion"]
