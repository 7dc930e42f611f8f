"""Console rendering of grid snapshots."""

from __future__ import annotations

from typing import Iterable


def render_grid(grid: Iterable[Iterable[float]]) -> str:
    """One line per row, every cell as `%2.4f,`."""
    return "\n".join("".join(f"{float(v):2.4f}," for v in row) for row in grid)


def render_block(delta: float, grid: Iterable[Iterable[float]]) -> str:
    """Delta of a relax call followed by the grid it left behind."""
    return f"{float(delta):f}\n{render_grid(grid)}"
