"""CSV writer for grid snapshots."""

from __future__ import annotations

import csv
from pathlib import Path

import numpy as np


def _ensure_outdir(outdir: str | Path) -> Path:
    path = Path(outdir)
    path.mkdir(parents=True, exist_ok=True)
    return path


def save_grid_csv(grid: np.ndarray, outdir: str | Path, filename: str = "grid.csv") -> Path:
    """Save grid values as one CSV row per grid row."""
    arr = np.asarray(grid, dtype=float)
    if arr.ndim != 2:
        raise ValueError(f"grid must be 2D, got shape {arr.shape}.")

    path = _ensure_outdir(outdir) / filename
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        for row in arr:
            writer.writerow([f"{float(v):.12g}" for v in row])
    return path
