from __future__ import annotations

import importlib
import tempfile
from dataclasses import dataclass
from pathlib import Path

from .config import parse_deck_mapping
from .export import export_results
from .simulation import run_simulation


@dataclass
class CheckRow:
    name: str
    ok: bool
    detail: str


@dataclass
class SelfCheckReport:
    rows: list[CheckRow]

    @property
    def ok(self) -> bool:
        return all(row.ok for row in self.rows)

    def to_text(self) -> str:
        lines: list[str] = []
        for row in self.rows:
            status = "OK" if row.ok else "FAIL"
            lines.append(f"[{status}] {row.name}: {row.detail}")
        lines.append(f"overall: {'OK' if self.ok else 'FAIL'}")
        return "\n".join(lines)


def run_selfcheck(*, smoke: bool = True) -> SelfCheckReport:
    rows: list[CheckRow] = []

    for module_name in ("numpy", "yaml", "matplotlib"):
        try:
            mod = importlib.import_module(module_name)
            version = getattr(mod, "__version__", "unknown")
            rows.append(CheckRow(module_name, True, f"version={version}"))
        except Exception as exc:
            rows.append(CheckRow(module_name, False, str(exc)))

    if smoke and all(row.ok for row in rows):
        deck = {
            "grid": {"rows": 6, "cols": 8},
            "sources": [[1, 1, 100.0], [4, 6, -20.0]],
            "terminate": 1.0e-3,
            "n_iter": 50,
            "boundary": "clamped",
            "max_blocks": 200,
        }

        try:
            config = parse_deck_mapping(deck)
            result = run_simulation(config)
            pinned = all(result.grid[s.row, s.col] == s.value for s in config.sources)
            with tempfile.TemporaryDirectory(prefix="heatgrid-selfcheck-") as tmp:
                outdir = Path(tmp) / "out"
                written = export_results(result, outdir, ["npy", "csv", "png", "history"])
                missing = [path.name for path in written if not path.exists()]
            if missing:
                rows.append(CheckRow("smoke", False, f"missing artifacts: {', '.join(missing)}"))
            elif not pinned:
                rows.append(CheckRow("smoke", False, "source cells changed during relaxation"))
            elif not result.converged:
                rows.append(CheckRow("smoke", False, f"no convergence after {result.blocks} block(s)"))
            else:
                rows.append(
                    CheckRow(
                        "smoke",
                        True,
                        f"grid={result.grid.shape}, blocks={result.blocks}, delta={result.final_delta:.3g}",
                    )
                )
        except Exception as exc:
            rows.append(CheckRow("smoke", False, str(exc)))

    return SelfCheckReport(rows=rows)
