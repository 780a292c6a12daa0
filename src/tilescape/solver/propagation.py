"""Constraint propagation over the landscape.

A worklist sweep in the style of AC-3 (https://en.wikipedia.org/wiki/AC-3_algorithm):
rather than pruning variable domains, it marks empty cells as INVALID when the tile
shape that could occupy them is exhausted.
"""

from collections import deque
from collections.abc import MutableMapping
from dataclasses import dataclass
from typing import TextIO, TypeAlias

from bitarray.util import zeros

from tilescape.landscape import Landscape
from tilescape.tiles import EMPTY, INVALID, TileShape

Cell: TypeAlias = tuple[int, int]


@dataclass
class PropagationResult:
    """Outcome of a propagation sweep."""

    feasible: bool
    """Whether the sweep reached its success condition (supply fully retired)."""

    steps: int = 0
    """Number of cells popped from the worklist."""

    revisions: int = 0
    """Number of cells turned from EMPTY to INVALID."""


def revise(
    landscape: Landscape, row: int, col: int, supply: MutableMapping[TileShape, int]
) -> int:
    """Invalidate cells around (row, col) that an exhausted shape can no longer cover.

    EL_SHAPE with no remaining supply invalidates the empty neighbours below and to the
    right of the cell.  Any other exhausted shape invalidates the cell itself.

    Returns:
        The number of cells turned from EMPTY to INVALID.
    """
    n_invalidated = 0
    for shape in sorted(supply):
        if supply[shape] != 0:
            continue
        if shape == TileShape.EL_SHAPE:
            for r, c in ((row + 1, col), (row, col + 1)):
                if landscape.in_bounds(r, c) and landscape[r, c] == EMPTY:
                    landscape[r, c] = INVALID
                    n_invalidated += 1
        elif landscape[row, col] == EMPTY:
            landscape[row, col] = INVALID
            n_invalidated += 1
    return n_invalidated


def propagate(
    landscape: Landscape,
    supply: MutableMapping[TileShape, int],
    *,
    retire_exhausted: bool = False,
    out: TextIO | None = None,
) -> PropagationResult:
    """Sweep the landscape, invalidating empty cells no remaining tile can occupy.

    The worklist starts with every EMPTY cell.  Whenever a cell is revised, every EMPTY
    cell not already pending is enqueued again so the invalidation spreads.  Each
    revision removes an EMPTY cell for good, so the sweep always terminates.

    Exhausted shapes keep invalidating until the worklist drains.  Only then are they
    retired from `supply` (if `retire_exhausted` is set).

    Args:
        landscape: The landscape to mutate in place.
        supply: Remaining supply per shape.  Only mutated when retire_exhausted is set.
        retire_exhausted: If True, shapes with no remaining supply are removed from
            `supply` once the sweep has settled.
        out: Optional stream for diagnostic output.

    Returns:
        A PropagationResult.  The sweep is feasible if `supply` is empty once it has
        settled; any shape left with tiles in hand means no solution was found.
    """
    result = PropagationResult(feasible=False)
    pending = zeros(landscape.n_rows * landscape.n_cols)
    queue: deque[Cell] = deque()

    def _enqueue_empty_cells() -> None:
        for r, c in landscape.cells_with(EMPTY):
            idx = r * landscape.n_cols + c
            if not pending[idx]:
                pending[idx] = 1
                queue.append((r, c))

    _enqueue_empty_cells()
    while queue:
        row, col = queue.popleft()
        pending[row * landscape.n_cols + col] = 0
        result.steps += 1

        n_invalidated = revise(landscape, row, col, supply)
        if n_invalidated:
            result.revisions += n_invalidated
            _enqueue_empty_cells()

    if retire_exhausted:
        for shape in [s for s, remaining in supply.items() if remaining == 0]:
            del supply[shape]
    result.feasible = not supply

    if out is None:
        return result
    if result.feasible:
        print(
            f"Propagation: supply exhausted after {result.steps} steps "
            f"({result.revisions} revisions).",
            file=out,
            flush=True,
        )
    else:
        print(
            f"Propagation: no solution found ({result.steps} steps, "
            f"{result.revisions} revisions).",
            file=out,
            flush=True,
        )
    return result
