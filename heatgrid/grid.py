"""Heat grid allocation and source points."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import numpy as np


@dataclass(frozen=True)
class SourcePoint:
    """Grid cell pinned to a fixed value.

    Coordinates follow the input convention:
    - row: line index, 0 at the top
    - col: column index, 0 at the left
    """

    row: int
    col: int
    value: float

    @property
    def coord(self) -> tuple[int, int]:
        return (self.row, self.col)


def sort_sources(sources: Iterable[SourcePoint]) -> list[SourcePoint]:
    """Return sources ordered row-major, as the sweep visits them."""
    return sorted(sources, key=lambda s: (s.row, s.col))


def allocate_grid(m: int, n: int, sources: Iterable[SourcePoint] = ()) -> np.ndarray:
    """Zero-filled (m, n) grid with source cells set to their values."""
    if m < 1:
        raise ValueError(f"m must be >= 1, got {m}.")
    if n < 1:
        raise ValueError(f"n must be >= 1, got {n}.")

    grid = np.zeros((int(m), int(n)), dtype=float)
    for src in sources:
        if not (0 <= src.row < m and 0 <= src.col < n):
            raise ValueError(f"Source ({src.row}, {src.col}) lies outside a {m}x{n} grid.")
        grid[src.row, src.col] = float(src.value)
    return grid


def source_mask(m: int, n: int, sources: Iterable[SourcePoint]) -> np.ndarray:
    """Boolean (m, n) mask, True on source cells."""
    mask = np.zeros((int(m), int(n)), dtype=bool)
    for src in sources:
        mask[src.row, src.col] = True
    return mask
