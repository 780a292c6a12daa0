import numpy as np
import pytest

from tilescape.solver.config import SolverConfig
from tilescape.solver.frequency import tile_frequency
from tilescape.solver.selector import select_operation
from tilescape.tiles import TileShape

FULL_SUPPLY = {TileShape.FULL_BLOCK: 1, TileShape.OUTER_BOUNDARY: 1, TileShape.EL_SHAPE: 1}


def _freq(counts):
    freq = {0: 0, 1: 0, 2: 0, 3: 0, 4: 0}
    freq.update(counts)
    return freq


@pytest.mark.parametrize("count", [13, 14, 16])
def test_full_block_at_or_above_threshold(count):
    freq = _freq({0: 16 - count, 1: count})
    assert select_operation(freq, FULL_SUPPLY) is TileShape.FULL_BLOCK


def test_full_block_requires_supply():
    freq = _freq({1: 16})
    supply = {**FULL_SUPPLY, TileShape.FULL_BLOCK: 0}
    assert select_operation(freq, supply) is TileShape.OUTER_BOUNDARY


@pytest.mark.parametrize("count", [6, 9, 12])
def test_outer_boundary_between_thresholds(count):
    freq = _freq({0: 16 - count, 2: count})
    assert select_operation(freq, FULL_SUPPLY) is TileShape.OUTER_BOUNDARY


@pytest.mark.parametrize("count", [1, 2])
def test_el_shape_for_rare_values(count):
    freq = _freq({0: 16 - count, 3: count})
    assert select_operation(freq, FULL_SUPPLY) is TileShape.EL_SHAPE


@pytest.mark.parametrize("count", [3, 4, 5])
def test_no_operation_between_el_and_outer_thresholds(count):
    freq = _freq({0: 16 - count, 4: count})
    assert select_operation(freq, FULL_SUPPLY) is None


def test_all_zero_region_selects_nothing():
    freq = tile_frequency(np.zeros((4, 4), dtype=int))
    assert select_operation(freq, FULL_SUPPLY) is None


def test_invalid_cells_do_not_drive_selection():
    freq = {-1: 16, 0: 0, 1: 0}
    assert select_operation(freq, FULL_SUPPLY) is None


def test_first_matching_value_wins():
    # Value 1 is rare (EL_SHAPE) and comes before the dominant value 2.
    freq = _freq({1: 2, 2: 14})
    assert select_operation(freq, FULL_SUPPLY) is TileShape.EL_SHAPE


def test_value_without_any_match_is_skipped():
    freq = _freq({1: 4, 2: 12})
    assert select_operation(freq, FULL_SUPPLY) is TileShape.OUTER_BOUNDARY


def test_missing_shapes_count_as_zero():
    freq = _freq({1: 16})
    assert select_operation(freq, {}) is None
    assert select_operation(freq, {TileShape.EL_SHAPE: 3}) is None


def test_thresholds_come_from_config():
    cfg = SolverConfig(subgrid_size=2, full_block_threshold=4, outer_boundary_threshold=2)
    freq = _freq({1: 4})
    assert select_operation(freq, FULL_SUPPLY, config=cfg) is TileShape.FULL_BLOCK
    freq = _freq({0: 2, 1: 2})
    assert select_operation(freq, FULL_SUPPLY, config=cfg) is TileShape.OUTER_BOUNDARY
