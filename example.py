#!/usr/bin/env python3
"""
Example usage of the trilight package.
"""

from trilight import Automaton, Grid, Source, Space, decay, format_grid


def main():
    """Demonstrate programmatic usage of the trilight package."""
    # Create a dark grid with one light source
    automaton = Automaton(Grid(30, 20, Space(0)))
    automaton.set(10, 10, Source(10))

    # Let the light spread
    for _ in range(10):
        print(f"Generation {automaton.generation}:")
        print(format_grid(automaton.grid))
        automaton.evolve(decay)

    # Turn the source off and watch the light fade
    automaton.set(10, 10, Space(10))

    for _ in range(20):
        print(f"Generation {automaton.generation}:")
        print(format_grid(automaton.grid))
        automaton.evolve(decay)

    generation, reason = automaton.run_until_stable(decay)
    print(f"Stopped at generation {generation}: {reason}")


if __name__ == "__main__":
    main()
