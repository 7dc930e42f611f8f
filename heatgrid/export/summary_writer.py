"""Run summary writer."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def save_summary_json(summary: dict[str, Any], outdir: str | Path, filename: str = "summary.json") -> Path:
    """Save run summary in JSON format."""
    out = Path(outdir)
    out.mkdir(parents=True, exist_ok=True)
    path = out / filename
    with path.open("w", encoding="utf-8") as f:
        json.dump(summary, f, ensure_ascii=False, indent=2)
    return path
