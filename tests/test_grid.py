"""Grid allocation and source ordering."""

from __future__ import annotations

import numpy as np
import pytest

from heatgrid.grid import SourcePoint, allocate_grid, sort_sources, source_mask


pytestmark = pytest.mark.unit


def test_allocate_grid_places_sources() -> None:
    grid = allocate_grid(2, 3, [SourcePoint(1, 2, 4.5), SourcePoint(0, 0, -1.0)])
    assert grid.shape == (2, 3)
    assert grid.dtype == float
    np.testing.assert_array_equal(grid, [[-1.0, 0.0, 0.0], [0.0, 0.0, 4.5]])


def test_allocate_grid_rejects_bad_geometry() -> None:
    with pytest.raises(ValueError, match="m must be >= 1"):
        allocate_grid(0, 3)
    with pytest.raises(ValueError, match="outside"):
        allocate_grid(2, 2, [SourcePoint(2, 0, 1.0)])


def test_sort_sources_row_major() -> None:
    pts = [SourcePoint(2, 0, 1.0), SourcePoint(0, 3, 2.0), SourcePoint(0, 1, 3.0)]
    assert [p.coord for p in sort_sources(pts)] == [(0, 1), (0, 3), (2, 0)]


def test_source_mask() -> None:
    mask = source_mask(2, 2, [SourcePoint(1, 0, 1.0)])
    assert mask.tolist() == [[False, False], [True, False]]
