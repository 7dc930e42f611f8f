"""NumPy grid writer."""

from __future__ import annotations

from pathlib import Path

import numpy as np


def save_grid_npy(grid: np.ndarray, outdir: str | Path, filename: str = "grid.npy") -> Path:
    """Save the relaxed grid as .npy."""
    out = Path(outdir)
    out.mkdir(parents=True, exist_ok=True)
    path = out / filename
    np.save(path, np.asarray(grid, dtype=float))
    return path
