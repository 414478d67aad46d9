"""Weight sum, spoke gap and spin of the stochastic-universal-sampling wheel."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from sus.errors import InvalidWeightsError
from sus.precision import Precision
from sus.uniform import UniformSource


@dataclass(frozen=True)
class SpokeWheel:
    """
    Wheel parameters of one sampling call, all in the call's dtype.

    Spoke k sits at spin + k * gap; the walk reaches it by repeated addition of gap.
    """

    total: np.floating
    gap: np.floating
    spin: np.floating
    n: int

    @property
    def dtype(self) -> np.dtype:
        return np.asarray(self.total).dtype


def coerce_weights(weights: ArrayLike, precision: Precision) -> NDArray[np.floating]:
    """Convert weights once, on entry, to a 1-D array of the call precision."""
    w = np.asarray(weights, dtype=precision.dtype)
    if w.ndim != 1:
        raise InvalidWeightsError(f"weights must be 1-D, got shape {w.shape}")
    return w


def weight_sum(weights: NDArray[np.floating]) -> np.floating:
    """
    Sequential left fold of the weights in their own dtype.

    np.add.accumulate keeps the order of the walk; np.sum would use pairwise
    summation and round differently.
    """
    if weights.shape[0] == 0:
        return weights.dtype.type(0)
    return np.add.accumulate(weights)[-1]


def spoke_gap(total: np.floating, n: int) -> np.floating:
    """Distance between consecutive spokes, total / n."""
    dtype = np.asarray(total).dtype
    return dtype.type(total / dtype.type(n))


def spin_offset(gap: np.floating, source: UniformSource) -> np.floating:
    """Scale one uniform draw into [0, gap) to randomize the wheel phase."""
    dtype = np.asarray(gap).dtype
    u = dtype.type(source.draw(dtype))
    return dtype.type(u * gap)


def build_wheel(weights: NDArray[np.floating], n: int, source: UniformSource) -> SpokeWheel:
    """Reduce weights to total, gap and spin; consumes exactly one draw from source."""
    total = weight_sum(weights)
    gap = spoke_gap(total, n)
    spin = spin_offset(gap, source)
    return SpokeWheel(total=total, gap=gap, spin=spin, n=n)


def validate_weights(weights: NDArray[np.floating]) -> None:
    """Eager checks used by the checked entry points."""
    if not np.all(np.isfinite(weights)):
        raise InvalidWeightsError("weights must be finite")
    if np.any(weights < 0):
        raise InvalidWeightsError("weights must be non-negative")
    with np.errstate(over="ignore"):
        total = weight_sum(weights)
    if not np.isfinite(total):
        raise InvalidWeightsError(f"weight sum overflows {weights.dtype.name}")
    if total <= 0:
        raise InvalidWeightsError("weights must have a positive sum")


def last_positive_index(weights: NDArray[np.floating]) -> int:
    """Index of the last strictly positive weight (-1 if there is none)."""
    positive = np.flatnonzero(weights > 0)
    if positive.size == 0:
        return -1
    return int(positive[-1])
