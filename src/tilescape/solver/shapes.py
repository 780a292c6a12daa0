"""In-place placement operations for the three tile shapes.

Each operation mutates a square region and is idempotent: applying it a second time
leaves the region unchanged.
"""

from collections.abc import Callable
from typing import TextIO

import numpy as np

from tilescape.solver.config import SolverConfig
from tilescape.solver.config import config as solver_config
from tilescape.solver.utils import format_grid
from tilescape.tiles import EMPTY, TileShape


def _check_square(region: np.ndarray) -> int:
    if region.ndim != 2 or region.shape[0] != region.shape[1]:
        raise ValueError(f"Region must be square, got shape {region.shape}.")
    return region.shape[0]


def place_full_block(region: np.ndarray, *, marker: int) -> None:
    """Stamp every cell of the region with the FULL_BLOCK marker."""
    _check_square(region)
    region[:, :] = marker


def place_outer_boundary(region: np.ndarray) -> None:
    """Clear the four border lines of the region, leaving the interior untouched."""
    _check_square(region)
    region[0, :] = EMPTY
    region[-1, :] = EMPTY
    region[:, 0] = EMPTY
    region[:, -1] = EMPTY


def place_el_shape(region: np.ndarray) -> None:
    """Clear an L-shaped pair of edges, oriented by where the content is.

    If the last row holds at least as many non-empty cells as the first column, the last
    row and first column are cleared.  Otherwise the first row and last column are.
    """
    _check_square(region)
    last_row_count = int(np.count_nonzero(region[-1, :] != EMPTY))
    first_col_count = int(np.count_nonzero(region[:, 0] != EMPTY))

    if last_row_count >= first_col_count:
        region[-1, :] = EMPTY
        region[:, 0] = EMPTY
    else:
        region[0, :] = EMPTY
        region[:, -1] = EMPTY


_OPERATIONS: dict[TileShape, Callable[[np.ndarray, SolverConfig], None]] = {
    TileShape.FULL_BLOCK: lambda region, cfg: place_full_block(region, marker=cfg.marker),
    TileShape.OUTER_BOUNDARY: lambda region, cfg: place_outer_boundary(region),
    TileShape.EL_SHAPE: lambda region, cfg: place_el_shape(region),
}


def perform_operation(
    region: np.ndarray,
    shape: TileShape,
    *,
    config: SolverConfig = solver_config,
    out: TextIO | None = None,
) -> None:
    """Apply the operation for shape to the region in place.

    Args:
        region: Square subgrid to mutate.
        shape: The tile shape to place.
        config: Solver configuration (supplies the FULL_BLOCK marker).
        out: Optional stream for printing the updated subgrid.
    """
    try:
        operation = _OPERATIONS[shape]
    except KeyError:
        raise ValueError(f"Invalid operation type: {shape!r}") from None
    operation(region, config)

    if out is not None:
        print(f"Placed {shape.name}.", file=out, flush=True)
        if config.show_subgrids:
            print("Updated subgrid:", file=out, flush=True)
            print(format_grid(region), file=out, flush=True)
