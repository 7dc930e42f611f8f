"""Input parsing: the plain-text grid description and YAML decks."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Mapping, cast

import yaml

from ..errors import InputError
from ..grid import SourcePoint
from ..kernels import build_kernel
from ..neighbors import BOUNDARY_MODES, BoundaryMode
from .models import ExportConfig, KernelConfig, SimulationConfig
from .validators import as_mapping, ensure_choice, ensure_nonnegative, opt_mapping, required, to_float, to_int

SEPARATOR = "----"
YAML_SUFFIXES = (".yaml", ".yml")


def validate_sources(sources: Iterable[SourcePoint], m: int, n: int, context: str = "sources") -> tuple[SourcePoint, ...]:
    """Check sources are in bounds and unique; return them as a tuple."""
    seen: set[tuple[int, int]] = set()
    out: list[SourcePoint] = []
    for idx, src in enumerate(sources):
        if not (0 <= src.row < m and 0 <= src.col < n):
            raise ValueError(
                f"{context}[{idx}] ({src.row}, {src.col}) is outside the {m}x{n} grid."
            )
        if src.coord in seen:
            raise ValueError(f"{context}[{idx}] duplicates source at ({src.row}, {src.col}).")
        seen.add(src.coord)
        out.append(src)
    return tuple(out)


def _check_run_params(terminate: float, n_iter: int, max_blocks: int | None) -> None:
    ensure_nonnegative("terminate", terminate)
    if n_iter < 1:
        raise ValueError(f"n_iter must be >= 1, got {n_iter}.")
    if max_blocks is not None and max_blocks < 1:
        raise ValueError(f"max_blocks must be >= 1, got {max_blocks}.")


def _split_fields(line: str, count: int, context: str) -> list[str]:
    fields = [part.strip() for part in line.split(",")]
    if len(fields) != count or not all(fields):
        raise ValueError(f"{context} must hold {count} comma-separated values, got {line!r}.")
    return fields


def parse_input_text(text: str) -> SimulationConfig:
    """Parse the line-oriented grid description.

    Layout::

        m, n
        ----
        row, col, value      (zero or more)
        ----
        terminate
        n_iter
        is_cyclic
    """
    lines = [line.strip() for line in text.splitlines()]
    pos = 0

    def next_line(what: str) -> str:
        nonlocal pos
        if pos >= len(lines):
            raise InputError(f"Bad file format: unexpected end of input, expected {what}.")
        line = lines[pos]
        pos += 1
        return line

    try:
        dims = _split_fields(next_line("grid dimensions"), 2, "line 1")
        m = to_int(dims[0], "m", "line 1")
        n = to_int(dims[1], "n", "line 1")
        if m < 1 or n < 1:
            raise ValueError(f"line 1 grid dimensions must be positive, got {m}, {n}.")

        if next_line("separator") != SEPARATOR:
            raise ValueError(f"line 2 must be '{SEPARATOR}'.")

        sources: list[SourcePoint] = []
        while True:
            line = next_line("source point or separator")
            if line == SEPARATOR:
                break
            context = f"line {pos}"
            row_s, col_s, value_s = _split_fields(line, 3, context)
            sources.append(
                SourcePoint(
                    row=to_int(row_s, "row", context),
                    col=to_int(col_s, "col", context),
                    value=to_float(value_s, "value", context),
                )
            )

        terminate = to_float(next_line("terminate"), "terminate", f"line {pos}")
        n_iter = to_int(next_line("n_iter"), "n_iter", f"line {pos}")
        is_cyclic = to_int(next_line("is_cyclic"), "is_cyclic", f"line {pos}")

        _check_run_params(terminate, n_iter, None)
        valid_sources = validate_sources(sources, m, n)
    except InputError:
        raise
    except ValueError as exc:
        raise InputError(f"Bad file format: {exc}") from exc

    return SimulationConfig(
        m=m,
        n=n,
        sources=valid_sources,
        terminate=terminate,
        n_iter=n_iter,
        boundary="cyclic" if is_cyclic else "clamped",
    )


def _parse_source_entry(raw: Any, context: str) -> SourcePoint:
    if isinstance(raw, Mapping):
        return SourcePoint(
            row=to_int(required(raw, "row", context), "row", context),
            col=to_int(required(raw, "col", context), "col", context),
            value=to_float(required(raw, "value", context), "value", context),
        )
    if isinstance(raw, (list, tuple)) and len(raw) == 3:
        return SourcePoint(
            row=to_int(raw[0], "row", context),
            col=to_int(raw[1], "col", context),
            value=to_float(raw[2], "value", context),
        )
    raise ValueError(f"{context} must be a [row, col, value] triple or a mapping.")


def _parse_boundary(deck: Mapping[str, Any]) -> BoundaryMode:
    if "boundary" in deck:
        return cast(BoundaryMode, ensure_choice("deck.boundary", deck["boundary"], BOUNDARY_MODES))
    if "cyclic" in deck:
        return "cyclic" if bool(deck["cyclic"]) else "clamped"
    return "clamped"


def parse_deck_mapping(deck: Mapping[str, Any]) -> SimulationConfig:
    """Build a config from a YAML deck payload."""
    try:
        payload = as_mapping(deck, "deck")
        grid_cfg = as_mapping(required(payload, "grid", "deck"), "deck.grid")
        m = to_int(required(grid_cfg, "rows", "deck.grid"), "rows", "deck.grid")
        n = to_int(required(grid_cfg, "cols", "deck.grid"), "cols", "deck.grid")
        if m < 1 or n < 1:
            raise ValueError(f"deck.grid rows/cols must be positive, got {m}, {n}.")

        raw_sources = payload.get("sources") or []
        if not isinstance(raw_sources, list):
            raise ValueError("deck.sources must be a list.")
        sources = validate_sources(
            [_parse_source_entry(raw, f"deck.sources[{idx}]") for idx, raw in enumerate(raw_sources)],
            m,
            n,
            context="deck.sources",
        )

        terminate = to_float(required(payload, "terminate", "deck"), "terminate", "deck")
        n_iter = to_int(required(payload, "n_iter", "deck"), "n_iter", "deck")
        max_blocks_raw = payload.get("max_blocks")
        max_blocks = None if max_blocks_raw is None else to_int(max_blocks_raw, "max_blocks", "deck")
        _check_run_params(terminate, n_iter, max_blocks)

        kernel_cfg = opt_mapping(payload.get("kernel"), "deck.kernel")
        kernel_params = {k: v for k, v in kernel_cfg.items() if k != "name"}
        kernel = KernelConfig(name=str(kernel_cfg.get("name", "heat")).lower(), params=kernel_params)
        build_kernel(kernel.name, **kernel.params)

        export_cfg = opt_mapping(payload.get("export"), "deck.export")
        formats = export_cfg.get("formats", [])
        if not isinstance(formats, list):
            raise ValueError("deck.export.formats must be a list.")
        outdir = export_cfg.get("outdir")
        export = ExportConfig(
            outdir=None if outdir is None else str(outdir),
            formats=[str(fmt).lower() for fmt in formats],
        )

        return SimulationConfig(
            m=m,
            n=n,
            sources=sources,
            terminate=terminate,
            n_iter=n_iter,
            boundary=_parse_boundary(payload),
            include_sources=bool(payload.get("include_sources", False)),
            max_blocks=max_blocks,
            kernel=kernel,
            export=export,
        )
    except InputError:
        raise
    except ValueError as exc:
        raise InputError(str(exc)) from exc


def load_input(path: str | Path) -> SimulationConfig:
    """Load a simulation config from a text description or YAML deck."""
    p = Path(path)
    if not p.is_file():
        raise InputError(f"Problem with file: {p} not found.")
    try:
        text = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise InputError(f"Problem with file: {p}: {exc}") from exc

    if p.suffix.lower() not in YAML_SUFFIXES:
        return parse_input_text(text)

    try:
        payload = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise InputError(f"Failed to parse YAML deck: {p}") from exc
    if payload is None:
        raise InputError(f"Deck is empty: {p}")
    return parse_deck_mapping(payload)
