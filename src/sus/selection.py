"""Stochastic universal sampling: the cumulative walk and its two output sinks.

`random_choice` allocates a new list of n picks; `random_choice_in_place`
resamples a buffer onto itself, keeping its length. Both place n evenly spaced
spokes over the cumulative weight axis, shifted by one random spin, and pick
the item whose interval holds each spoke. Item i owns [c_{i-1}, c_i), so an
item with zero weight is never picked.
"""

from __future__ import annotations

import copy
import logging
from collections import deque
from typing import Any, Callable, Deque, Iterator, List, MutableSequence, Sequence, Tuple, TypeVar

import numpy as np
from numpy.typing import ArrayLike, NDArray

from sus.errors import InvalidInputError
from sus.precision import Precision, PrecisionLike, resolve_precision
from sus.uniform import UniformSource, default_source
from sus.wheel import SpokeWheel, build_wheel, coerce_weights, last_positive_index, validate_weights

logger = logging.getLogger(__name__)

T = TypeVar("T")


def walk_spokes(weights: NDArray[np.floating], wheel: SpokeWheel) -> Iterator[int]:
    """
    Yield the selected weight index under each of the wheel's n spokes, in spoke order.

    The accumulator and the spoke only move forward. When every weight has been
    consumed and a spoke still lies past the accumulated total, a positive finite
    total means the spoke overshot through rounding and the last positive-weight
    item is picked; otherwise InvalidInputError is raised.
    """
    last = weights.shape[0] - 1
    i = 0
    accumulated = weights[0]
    current_spoke = wheel.spin
    fallback: int | None = None
    for _ in range(wheel.n):
        while accumulated <= current_spoke and i < last:
            i += 1
            accumulated += weights[i]
        if accumulated <= current_spoke:
            if fallback is None:
                fallback = _overrun_index(weights, wheel, current_spoke)
            yield fallback
        else:
            yield i
        current_spoke += wheel.gap


def _overrun_index(weights: NDArray[np.floating], wheel: SpokeWheel, spoke: np.floating) -> int:
    if not (np.isfinite(wheel.total) and wheel.total > 0):
        raise InvalidInputError(
            f"weights exhausted before spoke {float(spoke)!r} (total weight {float(wheel.total)!r}); "
            "weights must be non-negative with a positive finite sum"
        )
    index = last_positive_index(weights)
    logger.debug(
        "Spoke %r overshot total %r by rounding; clamping to index %d", float(spoke), float(wheel.total), index
    )
    return index


def _prepare(
    weights: ArrayLike,
    precision: PrecisionLike,
    source: UniformSource | None,
) -> Tuple[NDArray[np.floating], UniformSource]:
    w = coerce_weights(weights, resolve_precision(precision))
    return w, source if source is not None else default_source()


def _check_sample_count(samples: Sequence[Any], weights: NDArray[np.floating], *, exact: bool) -> None:
    size = len(samples)
    if size < weights.shape[0] or (exact and size != weights.shape[0]):
        raise InvalidInputError(f"{size} samples for {weights.shape[0]} weights")


def _item(samples: Sequence[T], index: int) -> T:
    try:
        return samples[index]
    except IndexError as err:
        raise InvalidInputError(f"walk selected index {index} but only {len(samples)} samples were given") from err


def _spin_wheel(w: NDArray[np.floating], n: int, source: UniformSource) -> SpokeWheel:
    wheel = build_wheel(w, n, source)
    logger.debug(
        "SUS wheel: %d spokes over %d weights (%s), total=%r gap=%r spin=%r",
        n,
        w.shape[0],
        w.dtype.name,
        float(wheel.total),
        float(wheel.gap),
        float(wheel.spin),
    )
    return wheel


def random_choice(
    samples: Sequence[T],
    weights: ArrayLike,
    n: int,
    *,
    precision: PrecisionLike = Precision.FLOAT64,
    source: UniformSource | None = None,
    checked: bool = False,
) -> List[T]:
    """
    Choose n samples by weight with one spin of an evenly spaced spoke wheel.

    Weight i pairs with samples[i]; weights may be shorter than samples. The
    result holds the very objects stored in samples (no copies), in spoke order.
    Empty weights or n == 0 return [] without drawing from the source.

    Args:
        samples: Items to choose from.
        weights: Non-negative weights; one may exceed 1, they need not be normalized.
        n: Number of picks.
        precision: float64 or float32 arithmetic for the whole call.
        source: Uniform source for the spin; defaults to the thread-local source.
        checked: Validate weights and lengths before sampling.

    Returns:
        List of exactly n picks.

    Raises:
        InvalidWeightsError: Malformed weights (any mode) or invalid values (checked mode).
        InvalidInputError: The walk ran past the weights or samples.
    """
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")
    w, source = _prepare(weights, precision, source)
    if w.shape[0] == 0 or n == 0:
        return []
    if checked:
        validate_weights(w)
        _check_sample_count(samples, w, exact=False)
    wheel = _spin_wheel(w, n, source)
    return [_item(samples, i) for i in walk_spokes(w, wheel)]


def choice_indices(
    weights: ArrayLike,
    n: int,
    *,
    precision: PrecisionLike = Precision.FLOAT64,
    source: UniformSource | None = None,
    checked: bool = False,
) -> NDArray[np.intp]:
    """Same walk as random_choice, returning the selected indices instead of the items."""
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")
    w, source = _prepare(weights, precision, source)
    if w.shape[0] == 0 or n == 0:
        return np.empty(0, dtype=np.intp)
    if checked:
        validate_weights(w)
    wheel = _spin_wheel(w, n, source)
    return np.fromiter(walk_spokes(w, wheel), dtype=np.intp, count=n)


def _default_duplicate(samples: MutableSequence[T]) -> Callable[[T], T]:
    if isinstance(samples, np.ndarray):
        # element assignment already copies into the buffer
        return lambda value: value
    return copy.copy


def _snapshot(samples: MutableSequence[T], index: int) -> T:
    value = _item(samples, index)
    if isinstance(samples, np.ndarray):
        # rows of a 2-D buffer are views and would change on overwrite
        return np.array(value, copy=True)
    return value


def random_choice_in_place(
    samples: MutableSequence[T],
    weights: ArrayLike,
    *,
    precision: PrecisionLike = Precision.FLOAT64,
    source: UniformSource | None = None,
    checked: bool = False,
    duplicate: Callable[[T], T] | None = None,
) -> None:
    """
    Resample samples onto itself: samples[k] becomes a duplicate of the pre-call item under spoke k.

    The number of spokes is len(weights) and the buffer keeps its length. Fewer
    than two weights leave the buffer untouched.

    The selected source index j may run ahead of or lag behind the slot i being
    written. A slot overwritten while j < i can still be selected later, so its
    pre-call value is staged until j moves past it.

    Args:
        samples: Mutable buffer, one item per weight.
        weights: Non-negative weights, same length as samples.
        precision: float64 or float32 arithmetic for the whole call.
        source: Uniform source for the spin; defaults to the thread-local source.
        checked: Validate weights and require len(samples) == len(weights).
            Unchecked calls still reject a buffer shorter than weights before
            writing any slot.
        duplicate: Makes the value written into each slot; copy.copy by default,
            identity for numpy buffers.
    """
    w, source = _prepare(weights, precision, source)
    n = w.shape[0]
    if n < 2:
        return
    if checked:
        validate_weights(w)
    _check_sample_count(samples, w, exact=checked)
    duplicate = duplicate if duplicate is not None else _default_duplicate(samples)
    wheel = _spin_wheel(w, n, source)

    staged: Deque[Tuple[int, T]] = deque()
    for i, j in enumerate(walk_spokes(w, wheel)):
        while staged and staged[0][0] < j:
            staged.popleft()
        if staged and staged[0][0] == j:
            value = staged[0][1]
        else:
            value = _item(samples, j)
        if j < i:
            staged.append((i, _snapshot(samples, i)))
        try:
            samples[i] = duplicate(value)
        except IndexError as err:
            raise InvalidInputError(f"cannot write slot {i} of {len(samples)} samples") from err


def random_choice_checked(
    samples: Sequence[T],
    weights: ArrayLike,
    n: int,
    *,
    precision: PrecisionLike = Precision.FLOAT64,
    source: UniformSource | None = None,
) -> List[T]:
    """random_choice with eager validation of weights and sample count."""
    return random_choice(samples, weights, n, precision=precision, source=source, checked=True)


def random_choice_in_place_checked(
    samples: MutableSequence[T],
    weights: ArrayLike,
    *,
    precision: PrecisionLike = Precision.FLOAT64,
    source: UniformSource | None = None,
    duplicate: Callable[[T], T] | None = None,
) -> None:
    """random_choice_in_place with eager validation of weights and buffer length."""
    random_choice_in_place(
        samples, weights, precision=precision, source=source, checked=True, duplicate=duplicate
    )


def random_choice_f64(
    samples: Sequence[T], weights: ArrayLike, n: int, source: UniformSource | None = None
) -> List[T]:
    return random_choice(samples, weights, n, precision=Precision.FLOAT64, source=source)


def random_choice_f32(
    samples: Sequence[T], weights: ArrayLike, n: int, source: UniformSource | None = None
) -> List[T]:
    return random_choice(samples, weights, n, precision=Precision.FLOAT32, source=source)


def random_choice_in_place_f64(
    samples: MutableSequence[T], weights: ArrayLike, source: UniformSource | None = None
) -> None:
    random_choice_in_place(samples, weights, precision=Precision.FLOAT64, source=source)


def random_choice_in_place_f32(
    samples: MutableSequence[T], weights: ArrayLike, source: UniformSource | None = None
) -> None:
    random_choice_in_place(samples, weights, precision=Precision.FLOAT32, source=source)
