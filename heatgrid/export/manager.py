"""Export manager orchestrating format-specific writers."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from ..simulation import SimulationResult
from .csv_writer import save_grid_csv
from .history_writer import save_history_csv, save_history_png
from .npy_writer import save_grid_npy
from .png_writer import save_heatmap_png
from .summary_writer import save_summary_json

EXPORT_FORMATS: tuple[str, ...] = ("npy", "csv", "png", "history", "summary")


def _ensure_outdir(outdir: str | Path) -> Path:
    path = Path(outdir)
    path.mkdir(parents=True, exist_ok=True)
    return path


def build_summary(result: SimulationResult) -> dict:
    """Plain-data description of a finished run."""
    cfg = result.config
    return {
        "rows": cfg.m,
        "cols": cfg.n,
        "boundary": cfg.boundary,
        "terminate": cfg.terminate,
        "n_iter": cfg.n_iter,
        "sources": [{"row": s.row, "col": s.col, "value": s.value} for s in cfg.sources],
        "kernel": {"name": cfg.kernel.name, **cfg.kernel.params},
        "include_sources": cfg.include_sources,
        "blocks": result.blocks,
        "converged": result.converged,
        "final_delta": result.final_delta,
    }


def export_results(result: SimulationResult, outdir: str | Path, formats: Iterable[str]) -> list[Path]:
    """Export a finished run in the requested formats."""
    requested = {str(fmt).lower() for fmt in formats}
    unknown = requested - set(EXPORT_FORMATS)
    if unknown:
        raise ValueError(f"Unsupported export format(s): {sorted(unknown)}")

    out = _ensure_outdir(outdir)
    written: list[Path] = []

    if "npy" in requested:
        written.append(save_grid_npy(result.grid, out))

    if "csv" in requested:
        written.append(save_grid_csv(result.grid, out))

    if "png" in requested:
        written.append(save_heatmap_png(result.grid, out, sources=result.config.sources))

    if "history" in requested:
        written.append(save_history_csv(result.history, out))
        if result.history:
            written.append(save_history_png(result.history, out, terminate=result.config.terminate))

    if "summary" in requested:
        written.append(save_summary_json(build_summary(result), out))

    return written
