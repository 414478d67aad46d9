"""Vectorized systematic resampling over the same spoke wheel.

Spokes are computed as spin + k * gap instead of by repeated addition, so a
spoke lying within rounding of an interval boundary may land on the other
side of it compared with `sus.selection.walk_spokes`. Elsewhere the picks agree.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from sus.errors import InvalidInputError
from sus.precision import Precision, PrecisionLike, resolve_precision
from sus.uniform import UniformSource, default_source
from sus.wheel import build_wheel, coerce_weights, last_positive_index, validate_weights


def systematic_indices(
    weights: ArrayLike,
    n: int,
    *,
    precision: PrecisionLike = Precision.FLOAT64,
    source: UniformSource | None = None,
    checked: bool = False,
) -> NDArray[np.intp]:
    """Indices picked by n evenly spaced spokes, via cumulative sums and a binary search."""
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")
    w = coerce_weights(weights, resolve_precision(precision))
    if w.shape[0] == 0 or n == 0:
        return np.empty(0, dtype=np.intp)
    if checked:
        validate_weights(w)
    wheel = build_wheel(w, n, source if source is not None else default_source())
    cumulative_sum = np.add.accumulate(w)
    positions = wheel.spin + np.arange(n, dtype=w.dtype) * wheel.gap
    # first i with cumulative_sum[i] > position, i.e. position in [c_{i-1}, c_i)
    indices = np.searchsorted(cumulative_sum, positions, side="right").astype(np.intp)
    overrun = indices >= w.shape[0]
    if np.any(overrun):
        if not (np.isfinite(wheel.total) and wheel.total > 0):
            raise InvalidInputError(
                f"weights exhausted before the last spoke (total weight {float(wheel.total)!r}); "
                "weights must be non-negative with a positive finite sum"
            )
        indices[overrun] = last_positive_index(w)
    return indices


def resample_array(
    samples: NDArray,
    weights: ArrayLike,
    *,
    precision: PrecisionLike = Precision.FLOAT64,
    source: UniformSource | None = None,
    checked: bool = False,
) -> NDArray:
    """Return a new array of len(weights) rows drawn from samples by systematic resampling."""
    samples = np.asarray(samples)
    w = coerce_weights(weights, resolve_precision(precision))
    indices = systematic_indices(w, w.shape[0], precision=precision, source=source, checked=checked)
    if indices.size and indices.max() >= samples.shape[0]:
        raise InvalidInputError(f"walk selected index {int(indices.max())} but only {samples.shape[0]} samples were given")
    return samples[indices]
