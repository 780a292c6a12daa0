"""Tile shapes, tile supply and placement records."""

from collections.abc import Mapping
from enum import IntEnum
from typing import NamedTuple, TypeAlias

EMPTY = 0
"""Cell value of a cleared (unoccupied) cell."""

INVALID = -1
"""Sentinel for cells ruled out by constraint propagation."""


class TileShape(IntEnum):
    """Enumeration for the three tile shapes."""

    FULL_BLOCK = 0
    OUTER_BOUNDARY = 1
    EL_SHAPE = 2


TileSupply: TypeAlias = dict[TileShape, int]
"""Remaining count of each tile shape."""


class Placement(NamedTuple):
    """Record of a shape applied to the subgrid with top-left corner (row, col)."""

    shape: TileShape
    row: int
    col: int


def parse_tile_shape(name: str | TileShape) -> TileShape:
    """Return the TileShape for a shape name such as "EL_SHAPE" or "el-shape"."""
    if isinstance(name, TileShape):
        return name
    key = name.strip().upper().replace("-", "_")
    try:
        return TileShape[key]
    except KeyError:
        raise ValueError(f"Invalid tile shape: {name!r}") from None


def create_tile_supply(counts: Mapping[str | TileShape, int]) -> TileSupply:
    """Create a tile supply from a mapping of shape names (or shapes) to counts.

    Args:
        counts: Mapping of shape to count.  Repeated shapes are summed.

    Returns:
        A new TileSupply, ordered by TileShape.

    Raises:
        ValueError: If a shape name is unknown or a count is negative.
    """
    supply: TileSupply = {}
    for name, count in counts.items():
        shape = parse_tile_shape(name)
        count = int(count)
        if count < 0:
            raise ValueError(f"Tile count for {shape.name} must be non-negative, got {count}.")
        supply[shape] = supply.get(shape, 0) + count
    return {shape: supply[shape] for shape in sorted(supply)}


def tile_supply_to_string(supply: Mapping[TileShape, int]) -> str:
    """Convert a tile supply to a string such as "FULL_BLOCK=1 EL_SHAPE=2"."""
    return " ".join(f"{shape.name}={count}" for shape, count in supply.items())
