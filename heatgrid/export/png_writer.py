"""PNG heatmap writer."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

import matplotlib

matplotlib.use("Agg", force=True)
import matplotlib.pyplot as plt
import numpy as np

from ..grid import SourcePoint, source_mask


def save_heatmap_png(
    grid: np.ndarray,
    outdir: str | Path,
    filename: str = "grid.png",
    sources: Iterable[SourcePoint] = (),
    title: str = "Heat distribution",
) -> Path:
    """Save grid heatmap as PNG, marking source cells."""
    out = Path(outdir)
    out.mkdir(parents=True, exist_ok=True)
    path = out / filename

    arr = np.asarray(grid, dtype=float)
    m, n = arr.shape
    fig, ax = plt.subplots(figsize=(max(3.0, 0.4 * n + 2.0), max(2.5, 0.4 * m + 1.0)), dpi=140)
    im = ax.imshow(arr, origin="upper", cmap="inferno", interpolation="nearest", aspect="equal")

    rows, cols = np.nonzero(source_mask(m, n, sources))
    if rows.size:
        ax.scatter(
            cols,
            rows,
            marker="s",
            facecolors="none",
            edgecolors="#1f77b4",
            s=60,
            lw=1.2,
            label="source",
        )
        ax.legend(loc="upper right", fontsize="small")

    ax.set_xlabel("column")
    ax.set_ylabel("row")
    ax.set_title(title)
    cbar = fig.colorbar(im, ax=ax)
    cbar.set_label("value")
    fig.tight_layout()
    fig.savefig(path)
    plt.close(fig)
    return path
