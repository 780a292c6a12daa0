"""Tilescape Landscape Tiler.

Partitions an integer landscape into square subgrids, places one of three tile shapes
(full block, outer boundary, L-shape) on each subgrid according to the frequency of the
values it holds, then runs a constraint propagation sweep that marks the cells no
remaining tile can occupy.
"""

from pathlib import Path
from sys import argv, exit

from .puzzle_config import load_configs
from .solver import solver


def main() -> None:
    """Solve every landscape in the puzzle file named on the command line."""
    if len(argv) != 2:
        print("Usage: python -m tilescape <path_to_puzzle_file>")
        exit(1)
    puzzle_path = Path(argv[1])
    if not puzzle_path.is_file():
        print(f"Puzzle file not found: {puzzle_path}")
        exit(1)

    contexts = [solver.run(puzzle) for puzzle in load_configs(puzzle_path)]
    n_solved = sum(context.outcome is solver.Outcome.SOLVED for context in contexts)
    print(f"Solved {n_solved} of {len(contexts)} landscapes.")
