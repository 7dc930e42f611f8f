"""Application-layer CLI adapter."""

from __future__ import annotations

import argparse
import dataclasses
import logging
from pathlib import Path

from ..config import KernelConfig, SimulationConfig, load_input
from ..errors import InputError
from ..export import EXPORT_FORMATS, export_results
from ..render import render_block
from ..selfcheck import run_selfcheck
from ..kernels import build_kernel
from ..simulation import run_simulation


def build_parser() -> argparse.ArgumentParser:
    """Create CLI parser."""
    parser = argparse.ArgumentParser(
        prog="heatgrid", description="heatgrid steady-state heat relaxation"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    run_p = sub.add_parser("run", help="Relax a grid described by a text file or YAML deck")
    run_p.add_argument("input", type=str, help="Path to grid description (.txt) or deck (.yaml)")
    run_p.add_argument(
        "--out",
        type=str,
        default=None,
        help="Override export output directory",
    )
    run_p.add_argument(
        "--format",
        dest="formats",
        action="append",
        choices=EXPORT_FORMATS,
        default=None,
        help="Export format, repeatable (default: none, or the deck's export.formats)",
    )
    run_p.add_argument(
        "--max-blocks",
        type=int,
        default=None,
        help="Stop after this many relax calls even if not converged.",
    )
    run_p.add_argument(
        "--alpha",
        type=float,
        default=None,
        help="Use the heat-equation kernel with this diffusion factor.",
    )
    run_p.add_argument(
        "--include-sources",
        action="store_true",
        help="Count source cells toward the per-sweep energy sum.",
    )
    run_p.add_argument(
        "--quiet",
        action="store_true",
        help="Do not print grid snapshots.",
    )
    run_p.add_argument("-v", "--verbose", action="count", default=0, help="Log progress (-vv for sweeps).")

    selfcheck_p = sub.add_parser(
        "selfcheck", help="Run dependency and smoke self-check"
    )
    selfcheck_p.add_argument(
        "--no-smoke",
        action="store_true",
        help="Run import checks only (skip smoke simulation).",
    )

    return parser


def _configure_logging(verbosity: int) -> None:
    if verbosity <= 0:
        return
    level = logging.INFO if verbosity == 1 else logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _apply_overrides(config: SimulationConfig, args: argparse.Namespace) -> SimulationConfig:
    changes: dict = {}
    if args.alpha is not None:
        changes["kernel"] = KernelConfig(name="heat", params={"alpha": float(args.alpha)})
    if args.include_sources:
        changes["include_sources"] = True
    if args.max_blocks is not None:
        if args.max_blocks < 1:
            raise InputError(f"--max-blocks must be >= 1, got {args.max_blocks}.")
        changes["max_blocks"] = int(args.max_blocks)
    return dataclasses.replace(config, **changes) if changes else config


def _resolve_outdir(input_path: Path, outdir_cfg: str | None, out_override: str | None) -> Path:
    if out_override is not None:
        return Path(out_override).resolve()
    path = Path("outputs/run") if outdir_cfg is None else Path(outdir_cfg)
    if not path.is_absolute():
        path = (input_path.parent / path).resolve()
    return path


def _run(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    _configure_logging(args.verbose)
    input_path = Path(args.input)
    try:
        config = _apply_overrides(load_input(input_path), args)
    except InputError as exc:
        parser.exit(2, f"Error: {exc}\n")

    def print_block(block: int, delta: float, grid) -> None:
        print(render_block(delta, grid))

    try:
        kernel = build_kernel(config.kernel.name, **config.kernel.params)
    except ValueError as exc:
        parser.exit(2, f"Error: {exc}\n")

    result = run_simulation(config, kernel=kernel, on_block=None if args.quiet else print_block)

    formats = args.formats if args.formats is not None else config.export.formats
    if formats:
        outdir = _resolve_outdir(input_path, config.export.outdir, args.out)
        written = export_results(result, outdir, formats)
        print(f"Done. Grid={result.grid.shape}, blocks={result.blocks}, exports={len(written)}")
        print(f"Output: {outdir}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "run":
        return _run(parser, args)

    if args.command == "selfcheck":
        report = run_selfcheck(smoke=not bool(args.no_smoke))
        print(report.to_text())
        return 0 if report.ok else 1

    parser.exit(2, "Unknown command\n")
    return 2
