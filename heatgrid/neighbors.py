"""Four-neighbor lookup with cyclic or clamped edges."""

from __future__ import annotations

from typing import Literal, NamedTuple, Sequence

BoundaryMode = Literal["cyclic", "clamped"]

BOUNDARY_MODES: tuple[str, ...] = ("cyclic", "clamped")


class Neighbors(NamedTuple):
    top: float
    bottom: float
    left: float
    right: float


def resolve_neighbors(
    grid: Sequence[Sequence[float]],
    i: int,
    j: int,
    m: int,
    n: int,
    boundary: BoundaryMode,
) -> Neighbors:
    """Read the von Neumann neighbors of cell (i, j).

    Indices always wrap around the grid. In clamped mode every neighbor
    that needed the wrap is then replaced by zero; each edge is checked on
    its own, so a single-row grid zeroes both top and bottom.
    """
    top = grid[(i - 1) % m][j]
    bottom = grid[(i + 1) % m][j]
    left = grid[i][(j - 1) % n]
    right = grid[i][(j + 1) % n]

    if boundary == "clamped":
        if i == 0:
            top = 0.0
        if i == m - 1:
            bottom = 0.0
        if j == 0:
            left = 0.0
        if j == n - 1:
            right = 0.0

    return Neighbors(top=float(top), bottom=float(bottom), left=float(left), right=float(right))
