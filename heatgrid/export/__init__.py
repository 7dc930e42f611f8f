"""Export manager and format-specific writers."""

from .csv_writer import save_grid_csv
from .history_writer import save_history_csv, save_history_png
from .manager import EXPORT_FORMATS, build_summary, export_results
from .npy_writer import save_grid_npy
from .png_writer import save_heatmap_png
from .summary_writer import save_summary_json

__all__ = [
    "EXPORT_FORMATS",
    "build_summary",
    "export_results",
    "save_grid_csv",
    "save_grid_npy",
    "save_heatmap_png",
    "save_history_csv",
    "save_history_png",
    "save_summary_json",
]
