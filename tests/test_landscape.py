import numpy as np
import pytest

from tilescape.errors import OutOfBoundsError
from tilescape.landscape import Landscape, parse_landscape


def _grid(rows, cols):
    return Landscape(np.arange(rows * cols).reshape(rows, cols) % 5)


def test_ragged_rows_are_rejected():
    with pytest.raises(ValueError, match="same length"):
        Landscape([[1, 2], [3]])


def test_indexing_and_dims():
    landscape = Landscape([[1, 2, 3], [4, 0, 1]])
    assert landscape.dims == (2, 3)
    assert landscape[1, 0] == 4
    landscape[1, 0] = 2
    assert landscape[1, 0] == 2
    assert str(landscape) == "1 2 3\n2 0 1"


def test_extract_region_is_a_view_by_default():
    landscape = _grid(8, 8)
    region = landscape.extract_region(4, 0, 4)
    region[:, :] = 3
    assert (landscape.data[4:8, 0:4] == 3).all()


def test_extract_region_copy_leaves_landscape_alone():
    landscape = _grid(8, 8)
    before = landscape.data.copy()
    region = landscape.extract_region(0, 4, 4, copy=True)
    region[:, :] = -1
    assert (landscape.data == before).all()


@pytest.mark.parametrize("row, col", [(5, 0), (0, 5), (-1, 0), (0, -1)])
def test_extract_region_out_of_bounds(row, col):
    with pytest.raises(OutOfBoundsError):
        _grid(8, 8).extract_region(row, col, 4)


def test_out_of_bounds_error_is_an_index_error():
    with pytest.raises(IndexError):
        _grid(4, 4).extract_region(2, 2, 4)


def test_region_origins_row_major():
    assert list(_grid(8, 12).region_origins(4)) == [
        (0, 0), (0, 4), (0, 8),
        (4, 0), (4, 4), (4, 8),
    ]


def test_region_origins_rejects_non_multiple_dimensions():
    with pytest.raises(OutOfBoundsError, match="not a multiple"):
        list(_grid(8, 10).region_origins(4))


def test_cells_with_and_count():
    landscape = Landscape([[0, 1, 0], [2, 0, 3]])
    assert landscape.cells_with(0) == [(0, 0), (0, 2), (1, 1)]
    assert landscape.count(0) == 3
    assert landscape.count(4) == 0


def test_copy_is_independent():
    landscape = Landscape([[1, 1], [1, 1]])
    clone = landscape.copy()
    clone[0, 0] = 0
    assert landscape[0, 0] == 1


def test_parse_landscape_skips_blank_lines():
    landscape = parse_landscape(["1 2", "", "3  4\n"])
    assert landscape.data.tolist() == [[1, 2], [3, 4]]


def test_parse_landscape_rejects_non_integers():
    with pytest.raises(ValueError, match="Invalid landscape row"):
        parse_landscape(["1 x"])
