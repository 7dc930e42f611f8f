"""Per-block convergence history writers."""

from __future__ import annotations

import csv
from pathlib import Path

import matplotlib

matplotlib.use("Agg", force=True)
import matplotlib.pyplot as plt
import numpy as np


def _ensure_outdir(outdir: str | Path) -> Path:
    path = Path(outdir)
    path.mkdir(parents=True, exist_ok=True)
    return path


def save_history_csv(history: list[dict[str, float]], outdir: str | Path, filename: str = "history.csv") -> Path:
    """Save block history list into CSV."""
    path = _ensure_outdir(outdir) / filename
    fieldnames: list[str] = []
    for row in history:
        for key in row.keys():
            if key not in fieldnames:
                fieldnames.append(key)
    if not fieldnames:
        fieldnames = ["block", "delta", "energy"]

    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for row in history:
            writer.writerow(row)
    return path


def save_history_png(
    history: list[dict[str, float]],
    outdir: str | Path,
    filename: str = "history.png",
    terminate: float | None = None,
) -> Path:
    """Save delta and grid energy per block."""
    if not history:
        raise ValueError("History is empty; nothing to plot.")

    block = np.asarray([float(row.get("block", np.nan)) for row in history], dtype=float)
    delta = np.asarray([float(row.get("delta", np.nan)) for row in history], dtype=float)
    energy = np.asarray([float(row.get("energy", np.nan)) for row in history], dtype=float)

    path = _ensure_outdir(outdir) / filename
    fig, axes = plt.subplots(nrows=2, ncols=1, figsize=(7.2, 5.0), dpi=140, sharex=True)

    if np.any(delta > 0.0):
        # log scale needs positive values; exact zeros are dropped from the plot
        axes[0].semilogy(block, np.where(delta > 0.0, delta, np.nan), color="#1f77b4", lw=1.8, marker="o", ms=3)
    else:
        axes[0].plot(block, delta, color="#1f77b4", lw=1.8, marker="o", ms=3)
    if terminate is not None and terminate > 0.0:
        axes[0].axhline(terminate, color="#d62728", ls="--", lw=1.0, label="terminate")
        axes[0].legend(loc="upper right", fontsize="small")
    axes[0].set_ylabel("delta")
    axes[0].grid(alpha=0.3)

    axes[1].plot(block, energy, color="#ff7f0e", lw=1.6, marker="o", ms=3)
    axes[1].set_ylabel("grid energy")
    axes[1].set_xlabel("block")
    axes[1].grid(alpha=0.3)

    fig.suptitle("Relaxation history", y=0.995)
    fig.tight_layout()
    fig.savefig(path)
    plt.close(fig)
    return path
