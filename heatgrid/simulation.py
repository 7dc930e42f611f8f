"""Reporting-block driver around the relaxation engine."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

import numpy as np

from .config.models import SimulationConfig
from .grid import allocate_grid, sort_sources
from .kernels import build_kernel
from .relax import UpdateFunction, relax

logger = logging.getLogger(__name__)

BlockCallback = Callable[[int, float, np.ndarray], None]


@dataclass
class SimulationResult:
    """Grid and per-block deltas after a run."""

    config: SimulationConfig
    grid: np.ndarray
    history: list[dict[str, float]] = field(default_factory=list)
    converged: bool = False

    @property
    def blocks(self) -> int:
        return len(self.history)

    @property
    def final_delta(self) -> float:
        if not self.history:
            return float("nan")
        return float(self.history[-1]["delta"])


def run_simulation(
    config: SimulationConfig,
    *,
    kernel: UpdateFunction | None = None,
    on_block: BlockCallback | None = None,
    max_blocks: int | None = None,
) -> SimulationResult:
    """Relax the configured grid block by block until a block converges.

    Each block is one `relax` call of up to `config.n_iter` sweeps. The run
    stops when a block returns a delta below `config.terminate`, or after
    `max_blocks` blocks (falling back to `config.max_blocks`).
    """
    update_fn = kernel if kernel is not None else build_kernel(config.kernel.name, **config.kernel.params)
    limit = max_blocks if max_blocks is not None else config.max_blocks
    sources = sort_sources(config.sources)
    grid = allocate_grid(config.m, config.n, sources)
    result = SimulationResult(config=config, grid=grid)

    while limit is None or result.blocks < limit:
        delta = relax(
            update_fn,
            grid,
            config.n,
            config.m,
            sources,
            config.terminate,
            config.n_iter,
            config.boundary,
            include_sources=config.include_sources,
        )
        block = result.blocks + 1
        result.history.append(
            {"block": float(block), "delta": float(delta), "energy": float(np.sum(grid))}
        )
        logger.info("block %d: delta=%g", block, delta)
        if on_block is not None:
            on_block(block, delta, grid)
        if not delta >= config.terminate:
            result.converged = delta < config.terminate
            break

    if not result.converged:
        logger.warning("stopped after %d block(s) without reaching terminate=%g", result.blocks, config.terminate)
    return result
