"""In-place Gauss-Seidel relaxation with energy-delta convergence.

Every sweep walks the grid row-major and overwrites each cell as soon as
its new value is known, so cells later in the same sweep read the updated
values of earlier ones. A two-buffer (Jacobi) update converges differently
and is not offered here.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

import numpy as np

from .grid import SourcePoint, sort_sources
from .neighbors import BoundaryMode, resolve_neighbors

logger = logging.getLogger(__name__)

UpdateFunction = Callable[[float, float, float, float, float], float]
GridLike = np.ndarray | list[list[float]]


@dataclass(slots=True)
class RelaxationState:
    """Sums of the last two sweeps and the number of sweeps done."""

    prev_sum: float = 0.0
    curr_sum: float = 0.0
    rounds: int = 0

    @property
    def delta(self) -> float:
        return abs(self.curr_sum - self.prev_sum)

    def advance(self, sweep_sum: float) -> None:
        self.prev_sum = self.curr_sum
        self.curr_sum = float(sweep_sum)
        self.rounds += 1


def sweep(
    update_fn: UpdateFunction,
    grid: GridLike,
    m: int,
    n: int,
    sources: Sequence[SourcePoint],
    boundary: BoundaryMode,
    *,
    include_sources: bool = False,
) -> float:
    """Update every non-source cell once and return the sum of new values.

    `sources` must be sorted row-major: a cursor into it moves in lockstep
    with the scan and a cell is skipped when it matches the cursor.
    With `include_sources` the fixed source values count toward the sum.
    """
    count = len(sources)
    cursor = 0
    total = 0.0

    for i in range(m):
        for j in range(n):
            if cursor < count and sources[cursor].row == i and sources[cursor].col == j:
                while cursor < count and sources[cursor].row == i and sources[cursor].col == j:
                    cursor += 1
                if include_sources:
                    total += float(grid[i][j])
                continue

            nb = resolve_neighbors(grid, i, j, m, n, boundary)
            result = float(update_fn(float(grid[i][j]), nb.right, nb.top, nb.left, nb.bottom))
            grid[i][j] = result
            total += result

    return total


def relax(
    update_fn: UpdateFunction,
    grid: GridLike,
    n: int,
    m: int,
    sources: Sequence[SourcePoint],
    terminate: float,
    n_iter: int,
    boundary: BoundaryMode,
    *,
    include_sources: bool = False,
) -> float:
    """Sweep until the sum delta drops below `terminate` or `n_iter` sweeps ran.

    The first sweep is compared against a zero sum, so at least one sweep
    always happens. Reaching `n_iter` returns immediately, whatever the
    delta; `n_iter` below 1 behaves as 1. A NaN delta also stops the loop.
    Returns the final |curr_sum - prev_sum|.
    """
    ordered = sort_sources(sources)
    state = RelaxationState()

    while True:
        state.advance(
            sweep(update_fn, grid, m, n, ordered, boundary, include_sources=include_sources)
        )
        if state.rounds >= n_iter:
            break
        if not state.delta >= terminate:
            break

    logger.debug("relax: %d sweep(s), delta=%g, sum=%g", state.rounds, state.delta, state.curr_sum)
    return state.delta
