import numpy as np
import pytest

from tilescape.errors import UnknownValueError
from tilescape.solver.config import SolverConfig
from tilescape.solver.frequency import (
    combine_frequencies,
    empty_frequency,
    merge_frequencies,
    tile_frequency,
)


def _random_region(seed, size=4):
    rng = np.random.default_rng(seed)
    return rng.integers(0, 5, size=(size, size))


def test_empty_frequency_covers_domain():
    assert dict(empty_frequency()) == {0: 0, 1: 0, 2: 0, 3: 0, 4: 0, 5: 0}


def test_empty_frequency_includes_marker():
    freq = empty_frequency(config=SolverConfig(full_block_marker=9))
    assert list(freq) == [0, 1, 2, 3, 4, 9]


@pytest.mark.parametrize("seed", range(5))
@pytest.mark.parametrize("size", [2, 4, 6])
def test_counts_sum_to_region_area(seed, size):
    freq = tile_frequency(_random_region(seed, size))
    assert sum(freq.values()) == size * size


def test_counts_values():
    region = np.array([[1, 1, 1, 1]] * 4)
    freq = tile_frequency(region)
    assert dict(freq) == {0: 0, 1: 16, 2: 0, 3: 0, 4: 0, 5: 0}


def test_iteration_is_in_value_order():
    region = np.array([[4, 3], [2, 1]])
    assert list(tile_frequency(region)) == [0, 1, 2, 3, 4, 5]


def test_unknown_value_is_an_error_in_strict_mode():
    region = np.array([[1, 7], [0, 0]])
    with pytest.raises(UnknownValueError, match="7"):
        tile_frequency(region)


def test_unknown_value_widens_in_lenient_mode():
    region = np.array([[1, 7], [-1, 0]])
    freq = tile_frequency(region, config=SolverConfig(strict_domain=False))
    assert freq[7] == 1
    assert freq[-1] == 1
    assert sum(freq.values()) == 4
    assert list(freq)[0] == -1


def test_merge_is_keywise_sum():
    merged = merge_frequencies({0: 1, 1: 2}, {1: 3, 5: 4})
    assert dict(merged) == {0: 1, 1: 5, 5: 4}


def test_merge_is_commutative_and_associative():
    a, b, c = (tile_frequency(_random_region(seed)) for seed in (10, 11, 12))
    assert merge_frequencies(a, b) == merge_frequencies(b, a)
    assert merge_frequencies(merge_frequencies(a, b), c) == merge_frequencies(
        a, merge_frequencies(b, c)
    )
    assert combine_frequencies([a, b, c]) == merge_frequencies(a, b, c)


def test_merge_of_partition_equals_frequency_of_union():
    grid = np.random.default_rng(3).integers(0, 5, size=(8, 8))
    parts = [grid[r : r + 4, c : c + 4] for r in (0, 4) for c in (0, 4)]
    assert combine_frequencies(tile_frequency(p) for p in parts) == tile_frequency(grid)


def test_merge_does_not_mutate_operands():
    a = {1: 1}
    merge_frequencies(a, {1: 2})
    assert a == {1: 1}
