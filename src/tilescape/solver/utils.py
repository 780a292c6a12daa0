"""Formatting helpers for the solver's diagnostic output."""

from collections.abc import Iterable, Mapping

import numpy as np

from tilescape.tiles import Placement

TIMESTAMP_FMT = "%Y-%m-%d %H:%M:%S.%f %Z%z"


def format_grid(grid: np.ndarray) -> str:
    """Format a 2D array as rows of right-aligned integers."""
    rows = grid.tolist()
    if not rows:
        return ""
    width = max(len(str(v)) for row in rows for v in row)
    return "\n".join(" ".join(str(v).rjust(width) for v in row) for row in rows)


def format_frequency(freq: Mapping[int, int]) -> str:
    """Format a frequency map as a table, one "Tile <value>: <count>" line per entry."""
    lines = ["Tile frequency:"]
    lines.extend(f"  Tile {value}: {count}" for value, count in freq.items())
    return "\n".join(lines)


def format_placements(placements: Iterable[Placement]) -> str:
    """Format placement records, one per line."""
    return "\n".join(f"  {p.shape.name} @ ({p.row}, {p.col})" for p in placements)


def time_str(seconds: float) -> str:
    """Convert a time duration in seconds to a string formatted as "HH:MM:SS.ss"."""
    hours, rem = divmod(seconds, 3600)
    minutes, secs = divmod(rem, 60)
    return f"{int(hours):02}:{int(minutes):02}:{secs:05.2f}"
