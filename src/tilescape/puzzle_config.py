"""Loader for puzzle files."""

from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path

import numpy as np

from tilescape.landscape import Landscape, parse_landscape
from tilescape.tiles import TileSupply, create_tile_supply, tile_supply_to_string


@dataclass
class PuzzleConfig:
    """A puzzle configuration: one landscape plus the tiles available to place on it."""

    name: str
    """Name of the puzzle, used for log file names."""

    dims: tuple[int, int]
    """The height and width of the landscape."""

    tiles: TileSupply
    """Available count of each tile shape."""

    landscape: list[list[int]]
    """The initial landscape, as a list of rows."""

    targets: dict[int, int] = field(default_factory=dict)
    """Desired count per cell value.  Carried for reference; the solver does not use it."""

    def __post_init__(self) -> None:
        """Validate the landscape."""
        height, width = self.dims
        if len(self.landscape) != height or any(len(row) != width for row in self.landscape):
            raise ValueError(f"Landscape shape does not match dimensions {self.dims}.")
        if any(count < 0 for count in self.tiles.values()):
            raise ValueError("Tile counts must be non-negative.")

    def __str__(self) -> str:
        """Return a string representation of the PuzzleConfig."""
        return (
            f"{self.name} ({self.dims[0]}x{self.dims[1]}): {tile_supply_to_string(self.tiles)}\n"
            f"{self.make_landscape()}"
        )

    def make_landscape(self) -> Landscape:
        """Build a fresh Landscape from the configuration."""
        return Landscape(np.array(self.landscape, dtype=np.int64))

    def to_dict(self) -> dict:
        """Return a dictionary representation of the PuzzleConfig for serialization."""
        return {
            "name": self.name,
            "dims": self.dims,
            "tiles": {shape.name: count for shape, count in self.tiles.items()},
            "targets": dict(self.targets),
            "landscape": [list(row) for row in self.landscape],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PuzzleConfig":
        """Create a PuzzleConfig instance from a dictionary representation."""
        return cls(
            name=data["name"],
            dims=tuple(data["dims"]),
            tiles=create_tile_supply(data["tiles"]),
            landscape=[list(row) for row in data["landscape"]],
            targets={int(k): int(v) for k, v in data.get("targets", {}).items()},
        )


def _parse_pairs(line: str) -> dict[str, int]:
    """Parse a line of KEY=COUNT tokens.  A single "-" means no entries."""
    pairs: dict[str, int] = {}
    if line == "-":
        return pairs
    for token in line.split():
        key, sep, value = token.partition("=")
        if not sep:
            raise ValueError(f"Expected KEY=COUNT, got '{token}'")
        try:
            pairs[key] = int(value)
        except ValueError:
            raise ValueError(f"Invalid count in '{token}'") from None
    return pairs


def _parse_targets(line: str) -> dict[int, int]:
    """Parse the target counts line, whose keys are cell values."""
    targets: dict[int, int] = {}
    for key, count in _parse_pairs(line).items():
        try:
            targets[int(key)] = count
        except ValueError:
            raise ValueError(f"Invalid target value '{key}' in '{line}'") from None
    return targets


def load_configs(configs_path: PathLike | str) -> list[PuzzleConfig]:
    """Load puzzle configurations from the given path.

    The file holds a dimensions line, a tile supply line (`SHAPE=count ...`), a target
    counts line (`value=count ...`, or `-`), a blank line, and then one or more landscapes
    separated by blank lines.  Each landscape becomes one PuzzleConfig.

    Args:
        configs_path (PathLike): Path to the puzzle file.
    """
    configs = []

    path = Path(configs_path).resolve()
    with open(path, "r", encoding="utf-8") as f:
        # Get dimensions from first line
        first_line = f.readline().strip()
        try:
            height, width = map(int, first_line.split())
        except ValueError:
            # Covers both incorrect number of values and non-integer values
            raise ValueError(f"Invalid dimensions line: '{first_line}'") from None

        tiles = create_tile_supply(_parse_pairs(f.readline().strip()))
        targets = _parse_targets(f.readline().strip())

        # Skip blank line
        if f.readline().strip() != "":
            raise ValueError("Expected a blank line after the target counts.")

        # Read the landscapes, each separated by a blank line
        while True:
            lines = []
            while True:
                line = f.readline()
                if not line or line.strip() == "":
                    break
                lines.append(line)

            if not lines:
                break  # No more landscapes to read

            index = len(configs)
            configs.append(
                PuzzleConfig(
                    name=f"{path.stem}-{index}",
                    dims=(height, width),
                    tiles=dict(tiles),
                    landscape=parse_landscape(lines).data.tolist(),
                    targets=dict(targets),
                )
            )

    return configs
