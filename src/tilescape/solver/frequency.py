"""Frequency analysis of landscape regions."""

from collections.abc import Iterable, Mapping
from typing import TypeAlias

import numpy as np
from sortedcontainers import SortedDict

from tilescape.errors import UnknownValueError
from tilescape.solver.config import SolverConfig
from tilescape.solver.config import config as solver_config

FrequencyMap: TypeAlias = SortedDict
"""Mapping from cell value to occurrence count, ordered by value."""


def empty_frequency(*, config: SolverConfig = solver_config) -> FrequencyMap:
    """Return a frequency map with a zero count for every value of the domain.

    The domain is the closed range [min_value, max_value] plus the FULL_BLOCK marker.
    """
    freq = SortedDict((value, 0) for value in range(config.min_value, config.max_value + 1))
    freq.setdefault(config.marker, 0)
    return freq


def tile_frequency(region: np.ndarray, *, config: SolverConfig = solver_config) -> FrequencyMap:
    """Count the occurrences of each value in a region.

    Args:
        region: A 2D array (usually a subgrid view of the landscape).
        config: Solver configuration supplying the value domain.

    Returns:
        A FrequencyMap with an entry for every value of the domain, so that the counts
        always sum to the number of cells in the region.

    Raises:
        UnknownValueError: If the region holds a value outside the domain and the
            configuration is strict.
    """
    freq = empty_frequency(config=config)
    values, counts = np.unique(region, return_counts=True)
    for value, count in zip(values.tolist(), counts.tolist()):
        if value not in freq:
            if config.strict_domain:
                raise UnknownValueError(
                    f"Cell value {value} is outside the value domain "
                    f"[{config.min_value}, {config.max_value}]."
                )
            freq[value] = 0
        freq[value] += count
    return freq


def merge_frequencies(*freqs: Mapping[int, int]) -> FrequencyMap:
    """Merge frequency maps by summing counts key-wise.

    Keys missing from an operand count as zero, so merging is associative and commutative.
    """
    merged = SortedDict()
    for freq in freqs:
        for value, count in freq.items():
            merged[value] = merged.get(value, 0) + count
    return merged


def combine_frequencies(freqs: Iterable[Mapping[int, int]]) -> FrequencyMap:
    """Combine a sequence of per-subgrid frequency maps into a single map."""
    return merge_frequencies(*freqs)
