"""Cell update kernels.

A kernel maps (self, right, top, left, bottom) to the cell's next value.
The relaxation engine is generic over it.
"""

from __future__ import annotations

from typing import Any, Callable

from .relax import UpdateFunction


def heat_equation(x: float, right: float, top: float, left: float, bottom: float, alpha: float = 0.25) -> float:
    """Explicit discrete heat-equation step.

    x + alpha * (right + top + left + bottom - 4x); alpha=0.25 gives the
    plain mean of the four neighbors.
    """
    return x + alpha * (right + top + left + bottom - 4.0 * x)


def make_heat_kernel(alpha: float = 0.25) -> UpdateFunction:
    """Heat-equation kernel with a fixed diffusion factor."""
    a = float(alpha)
    if not 0.0 < a <= 0.25:
        raise ValueError(f"alpha must be in (0, 0.25], got {alpha}.")

    def kernel(x: float, right: float, top: float, left: float, bottom: float) -> float:
        return heat_equation(x, right, top, left, bottom, alpha=a)

    return kernel


def weighted_kernel(self_weight: float, neighbor_weight: float) -> UpdateFunction:
    """Linear kernel: self_weight * x + neighbor_weight * sum(neighbors)."""
    ws = float(self_weight)
    wn = float(neighbor_weight)

    def kernel(x: float, right: float, top: float, left: float, bottom: float) -> float:
        return ws * x + wn * (right + top + left + bottom)

    return kernel


KERNELS: dict[str, Callable[..., UpdateFunction]] = {
    "heat": make_heat_kernel,
    "weighted": weighted_kernel,
}


def build_kernel(name: str, **params: Any) -> UpdateFunction:
    """Build a registered kernel by name."""
    key = str(name).lower()
    factory = KERNELS.get(key)
    if factory is None:
        joined = ", ".join(KERNELS)
        raise ValueError(f"kernel must be one of: {joined}. Got '{name}'.")
    try:
        return factory(**params)
    except TypeError as exc:
        raise ValueError(f"Invalid parameters for kernel '{key}': {exc}") from exc
