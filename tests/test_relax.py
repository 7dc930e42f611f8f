"""Relaxation engine: sweep order, sources, convergence and the iteration cap."""

from __future__ import annotations

import numpy as np
import pytest

from heatgrid.grid import SourcePoint, allocate_grid
from heatgrid.kernels import make_heat_kernel, weighted_kernel
from heatgrid.relax import RelaxationState, relax, sweep


pytestmark = pytest.mark.unit


class CountingKernel:
    def __init__(self, inner) -> None:
        self.inner = inner
        self.calls = 0

    def __call__(self, x: float, right: float, top: float, left: float, bottom: float) -> float:
        self.calls += 1
        return self.inner(x, right, top, left, bottom)


def test_single_row_clamped_scenario() -> None:
    """1x2 grid [10, 0] with self weight 0.6 and neighbor weight 0.1."""
    grid = np.array([[10.0, 0.0]])
    delta = relax(weighted_kernel(0.6, 0.1), grid, 2, 1, [], 0.0, 1, "clamped")

    assert grid[0, 0] == pytest.approx(6.0)
    # reads the already-updated left cell
    assert grid[0, 1] == pytest.approx(0.6)
    assert delta == pytest.approx(6.6)


def test_sweep_is_in_place_row_major() -> None:
    grid = [[0.0, 0.0, 1.0]]
    total = sweep(weighted_kernel(0.0, 1.0), grid, 1, 3, [], "clamped")
    assert grid == [[0.0, 1.0, 1.0]]
    assert total == pytest.approx(2.0)


@pytest.mark.parametrize("boundary", ["cyclic", "clamped"])
def test_sources_never_change(boundary: str) -> None:
    sources = [SourcePoint(1, 1, 100.0), SourcePoint(3, 4, -25.0), SourcePoint(4, 0, 12.5)]
    grid = allocate_grid(5, 5, sources)
    relax(make_heat_kernel(), grid, 5, 5, sources, 1.0e-6, 500, boundary)
    for src in sources:
        assert grid[src.row, src.col] == src.value


def test_unsorted_sources_match_sorted_run() -> None:
    sources = [SourcePoint(3, 2, 8.0), SourcePoint(0, 1, 4.0), SourcePoint(2, 0, -3.0)]
    ordered = sorted(sources, key=lambda s: (s.row, s.col))
    kernel = make_heat_kernel()

    grid_a = allocate_grid(4, 3, sources)
    grid_b = allocate_grid(4, 3, sources)
    delta_a = relax(kernel, grid_a, 3, 4, sources, 1.0e-9, 50, "clamped")
    delta_b = relax(kernel, grid_b, 3, 4, ordered, 1.0e-9, 50, "clamped")

    np.testing.assert_array_equal(grid_a, grid_b)
    assert delta_a == delta_b
    for src in sources:
        assert grid_a[src.row, src.col] == src.value


def test_duplicate_source_entries_still_skip_later_sources() -> None:
    sources = [SourcePoint(0, 0, 1.0), SourcePoint(0, 0, 1.0), SourcePoint(1, 1, 9.0)]
    grid = allocate_grid(2, 2, sources)
    relax(make_heat_kernel(), grid, 2, 2, sources, 0.0, 5, "cyclic")
    assert grid[0, 0] == 1.0
    assert grid[1, 1] == 9.0


def test_cyclic_uniform_grid_is_steady() -> None:
    grid = np.full((4, 5), 3.0)
    relax(weighted_kernel(0.2, 0.2), grid, 5, 4, [], 0.0, 1, "cyclic")
    np.testing.assert_allclose(grid, 3.0, rtol=1e-12)


def test_clamped_uniform_grid_loses_heat_at_corner() -> None:
    grid = np.full((4, 5), 2.0)
    relax(weighted_kernel(0.2, 0.2), grid, 5, 4, [], 0.0, 1, "clamped")
    assert grid[0, 0] == pytest.approx(1.2)
    assert grid[0, 0] < 2.0


def test_iteration_cap_runs_exactly_k_sweeps() -> None:
    sources = [SourcePoint(0, 0, 5.0), SourcePoint(2, 3, 1.0)]
    grid = allocate_grid(3, 4, sources)
    kernel = CountingKernel(make_heat_kernel())

    relax(kernel, grid, 4, 3, sources, 0.0, 7, "cyclic")

    assert kernel.calls == 7 * (3 * 4 - len(sources))


def test_at_least_one_sweep_even_with_loose_threshold() -> None:
    grid = np.zeros((2, 3))
    kernel = CountingKernel(make_heat_kernel())
    delta = relax(kernel, grid, 3, 2, [], 1.0e9, 100, "clamped")
    assert kernel.calls == 6
    assert delta == 0.0


def test_converged_grid_stays_converged() -> None:
    sources = [SourcePoint(2, 2, 50.0)]
    grid = allocate_grid(5, 6, sources)
    kernel = make_heat_kernel()
    terminate = 1.0e-6

    delta = relax(kernel, grid, 6, 5, sources, terminate, 10_000, "clamped")
    assert delta < terminate

    # second sweep of a fresh call is compared with the first
    again = relax(kernel, grid, 6, 5, sources, terminate, 2, "clamped")
    assert again < terminate


def test_source_energy_counted_only_on_request() -> None:
    sources = [SourcePoint(0, 1, 5.0)]
    kernel = weighted_kernel(0.5, 0.25)

    grid = allocate_grid(1, 3, sources)
    assert sweep(kernel, grid, 1, 3, sources, "clamped") == pytest.approx(2.5)

    grid = allocate_grid(1, 3, sources)
    assert sweep(kernel, grid, 1, 3, sources, "clamped", include_sources=True) == pytest.approx(7.5)
    assert grid[0, 1] == 5.0


def test_relaxation_state_tracks_last_two_sums() -> None:
    state = RelaxationState()
    state.advance(4.0)
    assert (state.prev_sum, state.curr_sum, state.rounds) == (0.0, 4.0, 1)
    state.advance(3.5)
    assert state.delta == pytest.approx(0.5)
    assert state.rounds == 2


def test_nan_delta_stops_after_one_sweep() -> None:
    grid = np.zeros((2, 3))
    kernel = CountingKernel(lambda x, right, top, left, bottom: float("nan"))
    delta = relax(kernel, grid, 3, 2, [], 0.1, 100, "clamped")
    assert kernel.calls == 6
    assert np.isnan(delta)


@pytest.mark.parametrize("n_iter", [0, -3])
def test_non_positive_cap_runs_one_sweep(n_iter: int) -> None:
    grid = np.zeros((2, 2))
    kernel = CountingKernel(make_heat_kernel())
    relax(kernel, grid, 2, 2, [], 0.0, n_iter, "cyclic")
    assert kernel.calls == 4
