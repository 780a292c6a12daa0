"""Main solver module: subgrid placement followed by constraint propagation."""

import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from time import time
from typing import TextIO

from tilescape.landscape import Landscape
from tilescape.puzzle_config import PuzzleConfig
from tilescape.solver.config import SolverConfig
from tilescape.solver.config import config as solver_config
from tilescape.solver.frequency import FrequencyMap, combine_frequencies, tile_frequency
from tilescape.solver.propagation import PropagationResult, propagate
from tilescape.solver.selector import select_operation
from tilescape.solver.shapes import perform_operation
from tilescape.solver.utils import (
    TIMESTAMP_FMT,
    format_frequency,
    format_grid,
    format_placements,
    time_str,
)
from tilescape.tiles import Placement, TileShape, TileSupply, tile_supply_to_string


class Outcome(Enum):
    """Outcome of a solve."""

    PENDING = "pending"
    SOLVED = "solved"
    EMPTY_SUPPLY = "empty_supply"
    INFEASIBLE = "infeasible"


@dataclass(kw_only=True)
class SolveContext:
    """State for a single solve.  The solve owns `landscape` and `supply` and mutates them."""

    landscape: Landscape
    """The landscape being solved."""

    supply: TileSupply
    """Working tile supply.  Build with `SolveContext.create` to avoid mutating caller data."""

    targets: dict[int, int] = field(default_factory=dict)
    """Desired count per cell value (not used by the solver)."""

    placements: list[Placement] = field(default_factory=list)
    """Shapes placed so far, in placement order."""

    subgrid_frequencies: list[FrequencyMap] = field(default_factory=list)
    """Frequency of each subgrid after its operation, in row-major subgrid order."""

    propagation: PropagationResult | None = None
    """Result of the propagation sweep, once it has run."""

    outcome: Outcome = Outcome.PENDING
    """Outcome of the solve."""

    @classmethod
    def create(
        cls,
        landscape: Landscape,
        supply: Mapping[TileShape, int],
        targets: Mapping[int, int] | None = None,
    ) -> "SolveContext":
        """Create a context with private copies of the supply and targets."""
        return cls(
            landscape=landscape,
            supply=dict(supply),
            targets=dict(targets or {}),
        )


def solve(
    context: SolveContext,
    *,
    config: SolverConfig = solver_config,
    out: TextIO | None = None,
) -> FrequencyMap | None:
    """Place tiles on each subgrid of the landscape, then run constraint propagation.

    Args:
        context: The solve context.  Its landscape and supply are mutated in place.
        config: Solver configuration.
        out: Optional stream for diagnostic output.

    Returns:
        The combined post-placement frequency of all subgrids, or None if the supply is
        empty or propagation finds no solution.  `context.outcome` tells the two apart.

    Raises:
        OutOfBoundsError: If the landscape dimensions are not a multiple of the subgrid size.
        UnknownValueError: If a cell value is outside the value domain (strict mode).
    """
    if not context.supply:
        if out is not None:
            print("No tiles to place.", file=out, flush=True)
        context.outcome = Outcome.EMPTY_SUPPLY
        return None

    landscape = context.landscape
    size = config.subgrid_size
    # Bad dimensions and out-of-domain values must fail before any mutation.
    origins = list(landscape.region_origins(size))
    tile_frequency(landscape.data, config=config)

    for row, col in origins:
        subgrid = landscape.extract_region(row, col, size, copy=config.detach_subgrids)
        frequency = tile_frequency(subgrid, config=config)
        shape = select_operation(frequency, context.supply, config=config)

        if shape is None:
            if out is not None:
                print(f"Subgrid ({row}, {col}): no applicable operation.", file=out, flush=True)
        else:
            if out is not None:
                print(f"Subgrid ({row}, {col}): placing {shape.name}.", file=out, flush=True)
            perform_operation(subgrid, shape, config=config, out=out)
            context.placements.append(Placement(shape, row, col))
            if config.consume_supply:
                context.supply[shape] -= 1

        context.subgrid_frequencies.append(tile_frequency(subgrid, config=config))

    frequency_map = combine_frequencies(context.subgrid_frequencies)
    if out is not None:
        print(format_frequency(frequency_map), file=out, flush=True)

    context.propagation = propagate(
        landscape,
        context.supply,
        retire_exhausted=config.consume_supply,
        out=out,
    )
    if not context.propagation.feasible:
        context.outcome = Outcome.INFEASIBLE
        return None

    if out is not None:
        print("Solution found.", file=out, flush=True)
    context.outcome = Outcome.SOLVED
    return frequency_map


def run(puzzle_config: PuzzleConfig, *, config: SolverConfig = solver_config) -> SolveContext:
    """Run the solver on the given puzzle configuration, logging to a file.

    Args:
        puzzle_config (PuzzleConfig): The configuration for the puzzle to solve.
        config (SolverConfig): Solver configuration.

    Returns:
        The finished SolveContext.
    """
    print(f"config: {puzzle_config.name}")

    logfile = Path(config.log_dir) / f"{puzzle_config.name}.log"
    print(f"Log file: {logfile}")

    logfile.parent.mkdir(parents=True, exist_ok=True)

    with open(logfile, "w", encoding="utf-8") as logf:
        try:
            context = solve_one(puzzle_config, logf=logf, config=config)
        except KeyboardInterrupt:
            print("Solver interrupted by user.", file=logf, flush=True)
            print("Solver interrupted by user.")
            sys.exit(1)
    print(f"Outcome: {context.outcome.value}")
    print()
    return context


def solve_one(
    puzzle_config: PuzzleConfig,
    *,
    logf: TextIO,
    config: SolverConfig = solver_config,
) -> SolveContext:
    """Solve a single puzzle configuration.

    Args:
        puzzle_config (PuzzleConfig): The configuration for the puzzle to solve.
        logf: File object to log the solving process.
        config (SolverConfig): Solver configuration.

    Returns:
        The finished SolveContext.
    """
    start_time = time()
    start_time_str = datetime.fromtimestamp(start_time).astimezone().strftime(TIMESTAMP_FMT)
    print(f"Selected puzzle: {puzzle_config.name}", file=logf, flush=True)
    print(f"Start time: {start_time_str}", file=logf, flush=True)
    print(f"Dimensions: {puzzle_config.dims}", file=logf, flush=True)
    print(f"Tile supply: {tile_supply_to_string(puzzle_config.tiles)}", file=logf, flush=True)
    print(f"Solver config: {config.model_dump()}", file=logf, flush=True)
    print("Initial landscape:", file=logf, flush=True)
    print("", file=logf, flush=True)
    puzzle_config.make_landscape().print(file=logf)
    print("", file=logf, flush=True)

    context = SolveContext.create(
        puzzle_config.make_landscape(),
        puzzle_config.tiles,
        puzzle_config.targets,
    )
    result = solve(context, config=config, out=logf)

    print("", file=logf, flush=True)
    if result is not None:
        print("Solution found!", file=logf, flush=True)
    elif context.outcome == Outcome.INFEASIBLE:
        print("No solution found.", file=logf, flush=True)

    print("Final landscape:", file=logf, flush=True)
    print(format_grid(context.landscape.data), file=logf, flush=True)
    if context.placements:
        print("Placements:", file=logf, flush=True)
        print(format_placements(context.placements), file=logf, flush=True)
    print(f"Remaining supply: {tile_supply_to_string(context.supply)}", file=logf, flush=True)
    print(f"Time taken: {time_str(time() - start_time)}", file=logf, flush=True)
    return context
