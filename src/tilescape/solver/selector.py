"""Choice of the tile shape to place on a subgrid."""

from collections.abc import Mapping

from tilescape.solver.config import SolverConfig
from tilescape.solver.config import config as solver_config
from tilescape.tiles import EMPTY, INVALID, TileShape


def select_operation(
    frequency: Mapping[int, int],
    supply: Mapping[TileShape, int],
    *,
    config: SolverConfig = solver_config,
) -> TileShape | None:
    """Select the shape to place on a subgrid from its value frequencies.

    Values are visited in ascending order; empty and invalid cells are not content and
    never drive the choice.  For the first value that matches, the shapes are tried in
    the order FULL_BLOCK, OUTER_BOUNDARY, EL_SHAPE.

    Args:
        frequency: Value counts of the subgrid.
        supply: Remaining count of each shape.  Missing shapes count as zero.
        config: Solver configuration supplying the thresholds.

    Returns:
        The selected shape, or None if no shape applies.
    """
    for value in sorted(frequency):
        if value in (EMPTY, INVALID):
            continue
        count = frequency[value]
        if count >= config.full_block_threshold and supply.get(TileShape.FULL_BLOCK, 0) > 0:
            return TileShape.FULL_BLOCK
        if count >= config.outer_boundary_threshold and supply.get(TileShape.OUTER_BOUNDARY, 0) > 0:
            return TileShape.OUTER_BOUNDARY
        if 0 < count < config.el_threshold and supply.get(TileShape.EL_SHAPE, 0) > 0:
            return TileShape.EL_SHAPE
    return None
