"""Command-line interface for the triangular light automaton."""

import argparse
import sys
import time
from functools import partial
from typing import Any, Callable, Dict, Tuple

import numpy as np
import torch

from ..core.automaton import Automaton
from ..core.field import LightField
from ..core.grid import Grid
from ..core.light import Light, Source, Space, decay, intensity_of
from ..core.render import format_grid

ENGINES = ("automaton", "tensor")


class CLILightDiffusion:
    """Command-line interface for running light diffusion simulations."""

    def __init__(self, max_display_size: int = 60):
        """Initialize CLI interface.

        Args:
            max_display_size: Largest grid dimension drawn with --show-grid
        """
        self.max_display_size = max_display_size

    def run_simulation(
        self,
        width: int,
        height: int,
        source_x: int,
        source_y: int,
        intensity: int,
        lit_generations: int,
        dark_generations: int,
        engine: str = "automaton",
        device: str = "cpu",
        until_stable: bool = False,
        max_generations: int = 1000,
        verbose: bool = False,
        show_grid: bool = False,
    ) -> Tuple[int, str, Dict[str, Any]]:
        """Run a light diffusion simulation.

        A source is placed at (source_x, source_y) and left on for
        ``lit_generations``. It is then replaced by a space cell of the same
        intensity and the light is left to spread and fade for
        ``dark_generations``.

        Args:
            width: Grid width
            height: Grid height
            source_x: Column of the light source
            source_y: Row of the light source
            intensity: Source intensity (1-255)
            lit_generations: Generations with the source on
            dark_generations: Generations after the source is turned off
            engine: 'automaton' for the generic engine, 'tensor' for LightField
            device: Device for the tensor engine ('cpu' or 'cuda')
            until_stable: Keep evolving after the dark phase until nothing changes
            max_generations: Bound on the extra generations run by until_stable
            verbose: Print progress updates
            show_grid: Draw the grid before every generation

        Returns:
            Tuple of (final_generation, finish_reason, statistics)
        """
        put, run, settle, snapshot, generation = self._build_engine(width, height, engine, device, verbose)
        draw = self._draw_generation(snapshot, generation) if show_grid else None

        if verbose:
            print(f"Initializing {width}x{height} triangular grid ({engine} engine)")
            print(f"Placing source of intensity {intensity} at ({source_x}, {source_y})")

        put(source_x, source_y, Source(intensity))

        start_time = time.time()

        if verbose:
            print(f"\nSource on for {lit_generations} generations...")
        run(lit_generations, draw)

        put(source_x, source_y, Space(intensity))

        if verbose:
            print(f"Source off for {dark_generations} generations...")
        run(dark_generations, draw)

        reason = "completed"
        if until_stable:
            if verbose:
                print(f"Running until stable (max {max_generations} generations)...")
            _, reason = settle(max_generations)

        duration = time.time() - start_time
        final_generation = generation()
        final_grid = snapshot()

        if show_grid:
            print(f"\nFinal grid (generation {final_generation}):")
            print(self._format_grid(final_grid))

        stats = grid_statistics(final_grid)
        stats["generation"] = final_generation
        stats["engine"] = engine
        stats["duration_seconds"] = duration
        stats["generations_per_second"] = final_generation / duration if duration > 0 else 0

        return final_generation, reason, stats

    def _build_engine(
        self, width: int, height: int, engine: str, device: str, verbose: bool
    ) -> Tuple[Callable, Callable, Callable, Callable, Callable]:
        """Create the simulation backend and the operations the driver needs."""
        if engine == "tensor":
            if device == "cuda" and not torch.cuda.is_available():
                if verbose:
                    print("CUDA not available, falling back to CPU")
                device = "cpu"

            field = LightField(width, height, device)
            return (
                field.set,
                lambda generations, callback: field.run(generations, callback=callback),
                field.run_until_stable,
                field.to_grid,
                lambda: field.generation,
            )

        if engine != "automaton":
            raise ValueError(f"Unknown engine '{engine}'")

        automaton: Automaton[Light] = Automaton(Grid(width, height, Space(0)))
        return (
            automaton.set,
            lambda generations, callback: automaton.run(decay, generations, callback=callback),
            partial(automaton.run_until_stable, decay),
            lambda: automaton.grid,
            lambda: automaton.generation,
        )

    def _draw_generation(
        self, snapshot: Callable[[], Grid], generation: Callable[[], int]
    ) -> Callable[[Any], None]:
        """Build a callback that draws the current generation."""

        def draw(_engine: Any) -> None:
            print(f"\nGeneration {generation()}:")
            print(self._format_grid(snapshot()))

        return draw

    def _format_grid(self, grid: Grid) -> str:
        """Format grid for display, truncating if too large.

        Args:
            grid: Grid to format

        Returns:
            Formatted grid string
        """
        if grid.width > self.max_display_size or grid.height > self.max_display_size:
            return f"Grid too large to display ({grid.width}x{grid.height})"

        return format_grid(grid)


def grid_statistics(grid: Grid) -> Dict[str, Any]:
    """Summarize the light levels of a grid.

    Args:
        grid: Grid of Light cells

    Returns:
        Dictionary with grid size, lit cell count, total and peak intensity
    """
    levels = grid.to_array(intensity_of, dtype=np.int64)
    lit = int(np.count_nonzero(levels))

    return {
        "grid_size": grid.dims,
        "lit_cells": lit,
        "lit_fraction": lit / grid.size if grid.size > 0 else 0.0,
        "total_intensity": int(levels.sum()),
        "peak_intensity": int(levels.max()) if grid.size > 0 else 0,
        "sources": sum(1 for cell in grid.cells if isinstance(cell, Source)),
    }


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        description="Light diffusion on a triangular cellular automaton",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run the default 30x20 simulation and draw every generation
  trilight-cli --show-grid

  # Bright source in the corner of a small grid
  trilight-cli -W 12 -H 8 --source-x 0 --source-y 0 --intensity 6 -g

  # Keep going after the source is off until the light has faded
  trilight-cli --until-stable --verbose

  # Use the tensor engine on a large grid
  trilight-cli -W 400 -H 300 --source-x 200 --source-y 150 --engine tensor
        """,
    )

    # Grid configuration
    parser.add_argument("-W", "--width", type=int, default=30, help="Grid width (default: 30)")

    parser.add_argument("-H", "--height", type=int, default=20, help="Grid height (default: 20)")

    # Source configuration
    parser.add_argument(
        "--source-x",
        type=int,
        default=10,
        help="Column of the light source (default: 10)",
    )

    parser.add_argument(
        "--source-y",
        type=int,
        default=10,
        help="Row of the light source (default: 10)",
    )

    parser.add_argument(
        "-i",
        "--intensity",
        type=int,
        default=10,
        help="Intensity of the light source, 1-255 (default: 10)",
    )

    # Simulation configuration
    parser.add_argument(
        "--lit-generations",
        type=int,
        default=10,
        help="Generations to run with the source on (default: 10)",
    )

    parser.add_argument(
        "--dark-generations",
        type=int,
        default=20,
        help="Generations to run after the source is turned off (default: 20)",
    )

    parser.add_argument(
        "--until-stable",
        action="store_true",
        help="After the dark phase, keep running until the grid stops changing",
    )

    parser.add_argument(
        "-m",
        "--max-generations",
        type=int,
        default=1000,
        help="Maximum extra generations for --until-stable (default: 1000)",
    )

    parser.add_argument(
        "--engine",
        type=str,
        default="automaton",
        choices=list(ENGINES),
        help="Simulation engine (default: automaton)",
    )

    parser.add_argument(
        "--device",
        type=str,
        default="cpu",
        choices=["cpu", "cuda"],
        help="Device for the tensor engine (default: cpu)",
    )

    # Output configuration
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print detailed progress information",
    )

    parser.add_argument(
        "-g",
        "--show-grid",
        action="store_true",
        help="Draw the grid before every generation and at the end",
    )

    return parser


def format_finish_reason(reason: str, stats: dict) -> str:
    """Format the simulation finish reason for display.

    Args:
        reason: Finish reason from CLILightDiffusion.run_simulation
        stats: Statistics dictionary

    Returns:
        Formatted reason string
    """
    if reason == "completed":
        return f"Completed all scheduled generations ({stats.get('generation', 0)})"
    elif reason == "stable":
        if stats.get("lit_cells", 0) == 0:
            return "Stable - all light has faded"
        return "Stable - light levels no longer change"
    elif reason == "max_generations":
        return f"Maximum generations reached ({stats.get('generation', 0)})"
    else:
        return f"Unknown reason: {reason}"


def print_results(final_generation: int, reason: str, stats: dict, verbose: bool) -> None:
    """Print simulation results.

    Args:
        final_generation: Final generation number
        reason: Finish reason
        stats: Statistics dictionary
        verbose: Whether to show detailed statistics
    """
    print(f"\nSimulation completed after {final_generation} generations")
    print(f"Finish reason: {format_finish_reason(reason, stats)}")

    if verbose:
        print("\nDetailed Statistics:")
        print(f"  Grid size: {stats['grid_size'][0]}x{stats['grid_size'][1]}")
        print(f"  Engine: {stats['engine']}")
        print(f"  Lit cells: {stats['lit_cells']} ({stats['lit_fraction']:.2%})")
        print(f"  Total intensity: {stats['total_intensity']}")
        print(f"  Peak intensity: {stats['peak_intensity']}")
        print(f"  Sources: {stats['sources']}")
        if "duration_seconds" in stats:
            print(f"  Duration: {stats['duration_seconds']:.3f} seconds")
            print(f"  Speed: {stats['generations_per_second']:.0f} generations/second")
    else:
        duration = stats.get("duration_seconds", 0)
        speed = stats.get("generations_per_second", 0)

        print(
            "Lit cells: {}, "
            "Peak intensity: {}, "
            "Duration: {:.3f}s, "
            "Speed: {:.0f} gen/s".format(stats["lit_cells"], stats["peak_intensity"], duration, speed)
        )


def validate_args(args: argparse.Namespace) -> bool:
    """Validate command-line arguments.

    Args:
        args: Parsed arguments

    Returns:
        True if arguments are valid
    """
    errors = []

    if args.width <= 0:
        errors.append("Width must be positive")

    if args.height <= 0:
        errors.append("Height must be positive")

    if not (0 <= args.source_x < args.width and 0 <= args.source_y < args.height):
        errors.append(f"Source ({args.source_x}, {args.source_y}) must lie inside the grid")

    if not 1 <= args.intensity <= 255:
        errors.append("Intensity must be between 1 and 255")

    if args.lit_generations < 0:
        errors.append("Lit generations must be non-negative")

    if args.dark_generations < 0:
        errors.append("Dark generations must be non-negative")

    if args.max_generations <= 0:
        errors.append("Max generations must be positive")

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def main() -> int:
    """Main entry point for CLI interface.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args()

    if not validate_args(args):
        return 1

    cli = CLILightDiffusion()

    try:
        final_generation, reason, stats = cli.run_simulation(
            width=args.width,
            height=args.height,
            source_x=args.source_x,
            source_y=args.source_y,
            intensity=args.intensity,
            lit_generations=args.lit_generations,
            dark_generations=args.dark_generations,
            engine=args.engine,
            device=args.device,
            until_stable=args.until_stable,
            max_generations=args.max_generations,
            verbose=args.verbose,
            show_grid=args.show_grid,
        )

        print_results(final_generation, reason, stats, args.verbose)

        return 0

    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
        return 1
    except Exception as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
