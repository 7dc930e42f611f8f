"""Typed models for simulation input."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..grid import SourcePoint
from ..neighbors import BoundaryMode


@dataclass(frozen=True)
class KernelConfig:
    """Update kernel selection."""

    name: str = "heat"
    params: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ExportConfig:
    """Artifacts to write after the run."""

    outdir: str | None = None
    formats: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class SimulationConfig:
    """Grid geometry, heat sources and stopping rules for one run.

    m is the number of rows, n the number of columns. `n_iter` caps the
    sweeps of a single relax call; `max_blocks` caps the number of relax
    calls (None runs until a call converges).
    """

    m: int
    n: int
    sources: tuple[SourcePoint, ...] = ()
    terminate: float = 0.0
    n_iter: int = 1
    boundary: BoundaryMode = "clamped"
    include_sources: bool = False
    max_blocks: int | None = None
    kernel: KernelConfig = field(default_factory=KernelConfig)
    export: ExportConfig = field(default_factory=ExportConfig)

    @property
    def shape(self) -> tuple[int, int]:
        return (self.m, self.n)
