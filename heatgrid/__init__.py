"""Steady-state heat relaxation on a 2D grid."""

from .errors import InputError
from .grid import SourcePoint, allocate_grid, sort_sources
from .kernels import build_kernel, heat_equation, make_heat_kernel, weighted_kernel
from .neighbors import BoundaryMode, Neighbors, resolve_neighbors
from .relax import RelaxationState, relax, sweep
from .simulation import SimulationResult, run_simulation

__all__ = [
    "BoundaryMode",
    "InputError",
    "Neighbors",
    "RelaxationState",
    "SimulationResult",
    "SourcePoint",
    "allocate_grid",
    "build_kernel",
    "heat_equation",
    "make_heat_kernel",
    "relax",
    "resolve_neighbors",
    "run_simulation",
    "sort_sources",
    "sweep",
    "weighted_kernel",
]
