"""Classes and functions for representing the landscape grid."""

from collections.abc import Iterable, Iterator, Sequence
from typing import TextIO

import numpy as np

from tilescape.errors import OutOfBoundsError


class Landscape:
    """Store a rectangular 2D grid of integers as a numpy array.

    Subgrids returned by `extract_region` are views by default, so mutating them
    mutates the landscape.
    """

    def __init__(self, data: Sequence[Sequence[int]] | np.ndarray) -> None:
        if isinstance(data, np.ndarray):
            grid = data
        else:
            rows = [list(row) for row in data]
            if rows and any(len(row) != len(rows[0]) for row in rows):
                raise ValueError("Landscape rows must all have the same length.")
            grid = np.array(rows, dtype=np.int64)
        if grid.ndim != 2:
            raise ValueError(f"Landscape must be two-dimensional, got shape {grid.shape}.")
        self.data: np.ndarray = grid.astype(np.int64, copy=False)
        """The grid, indexed as data[row, col]."""

    @property
    def n_rows(self) -> int:
        """Number of rows in the landscape."""
        return self.data.shape[0]

    @property
    def n_cols(self) -> int:
        """Number of columns in the landscape."""
        return self.data.shape[1]

    @property
    def dims(self) -> tuple[int, int]:
        """The height and width of the landscape."""
        return (self.n_rows, self.n_cols)

    def copy(self) -> "Landscape":
        """Generate a copy of the landscape."""
        return Landscape(self.data.copy())

    def __str__(self) -> str:
        """Returns a string representation of the landscape, one row per line."""
        return "\n".join(" ".join(str(v) for v in row) for row in self.data.tolist())

    def print(self, *, file: TextIO | None = None) -> None:
        """Print the landscape."""
        print(str(self), file=file, flush=True)

    def __getitem__(self, idx: tuple[int, int]) -> int:
        """Get cell content by (row, col) index."""
        row, col = idx
        return int(self.data[row, col])

    def __setitem__(self, idx: tuple[int, int], value: int) -> None:
        """Set cell content by (row, col) index."""
        row, col = idx
        self.data[row, col] = value

    def in_bounds(self, row: int, col: int) -> bool:
        """Whether (row, col) lies inside the landscape."""
        return 0 <= row < self.n_rows and 0 <= col < self.n_cols

    def extract_region(
        self, row_start: int, col_start: int, size: int, *, copy: bool = False
    ) -> np.ndarray:
        """Return the size x size region with top-left corner (row_start, col_start).

        Args:
            row_start: Row of the top-left cell.
            col_start: Column of the top-left cell.
            size: Side length of the square region.
            copy: If True, return an independent copy instead of a view.

        Raises:
            OutOfBoundsError: If the region does not fit inside the landscape.
        """
        if size <= 0:
            raise ValueError(f"Region size must be positive, got {size}.")
        if (
            row_start < 0
            or col_start < 0
            or row_start + size > self.n_rows
            or col_start + size > self.n_cols
        ):
            raise OutOfBoundsError(
                f"Region of size {size} at ({row_start}, {col_start}) exceeds "
                f"landscape dimensions {self.dims}."
            )
        region = self.data[row_start : row_start + size, col_start : col_start + size]
        return region.copy() if copy else region

    def region_origins(self, size: int) -> Iterator[tuple[int, int]]:
        """Yield the top-left corners of the size x size subgrids in row-major order.

        Raises:
            OutOfBoundsError: If the landscape dimensions are not multiples of size.
        """
        if size <= 0:
            raise ValueError(f"Region size must be positive, got {size}.")
        if self.n_rows % size or self.n_cols % size:
            raise OutOfBoundsError(
                f"Landscape dimensions {self.dims} are not a multiple of subgrid size {size}."
            )
        for row in range(0, self.n_rows, size):
            for col in range(0, self.n_cols, size):
                yield (row, col)

    def cells_with(self, value: int) -> list[tuple[int, int]]:
        """Get the (row, col) coordinates of all cells holding value, in row-major order."""
        return [(int(r), int(c)) for r, c in np.argwhere(self.data == value)]

    def count(self, value: int) -> int:
        """Count the cells holding value."""
        return int(np.count_nonzero(self.data == value))


def parse_landscape(lines: Iterable[str]) -> Landscape:
    """Parse whitespace-separated integer rows into a Landscape."""
    rows = []
    for line in lines:
        line = line.strip()
        if not line:
            continue
        try:
            rows.append([int(tok) for tok in line.split()])
        except ValueError:
            raise ValueError(f"Invalid landscape row: '{line}'") from None
    return Landscape(rows)
