"""Uniform random sources that set the phase (spin) of the spoke wheel.

Each top-level sampling call asks its source for exactly one value in [0, 1)
at the call's precision. Sources are passed in explicitly; `default_source()`
returns the process-wide thread-local source used when none is given.
"""

from __future__ import annotations

import threading
from typing import Protocol, Sequence, runtime_checkable

import numpy as np
from numpy.typing import DTypeLike


@runtime_checkable
class UniformSource(Protocol):
    """Anything that can return one uniform draw in [0, 1) of a given dtype."""

    def draw(self, dtype: DTypeLike) -> np.floating: ...


def _below_one(value: np.floating) -> np.floating:
    # narrowing a float64 just under 1.0 can round up to 1.0 in float32
    if value >= 1:
        return np.nextafter(value.dtype.type(1), value.dtype.type(0))
    return value


class GeneratorSource:
    """Draws from a numpy Generator (PCG64 by default)."""

    def __init__(self, rng: np.random.Generator | None = None, seed: int | None = None) -> None:
        if rng is not None and seed is not None:
            raise ValueError("Pass either rng or seed, not both")
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def draw(self, dtype: DTypeLike) -> np.floating:
        dtype = np.dtype(dtype)
        return dtype.type(self.rng.random(dtype=dtype))


class ThreadLocalSource:
    """
    One independent Generator per thread, spawned from a shared SeedSequence.

    Concurrent callers never share generator state, so sampling needs no locks;
    only spawning a child seed for a new thread is serialized.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._seed_sequence = np.random.SeedSequence(seed)
        self._spawn_lock = threading.Lock()
        self._local = threading.local()

    def _generator(self) -> np.random.Generator:
        rng = getattr(self._local, "rng", None)
        if rng is None:
            with self._spawn_lock:
                child = self._seed_sequence.spawn(1)[0]
            rng = np.random.default_rng(child)
            self._local.rng = rng
        return rng

    def draw(self, dtype: DTypeLike) -> np.floating:
        dtype = np.dtype(dtype)
        return dtype.type(self._generator().random(dtype=dtype))


class FixedSource:
    """Cycles through fixed values; makes the wheel phase deterministic."""

    def __init__(self, values: float | Sequence[float]) -> None:
        vals = np.atleast_1d(np.asarray(values, dtype=np.float64))
        if vals.ndim != 1 or vals.size == 0:
            raise ValueError("FixedSource needs a non-empty 1-D sequence of values")
        if np.any(~np.isfinite(vals)) or np.any((vals < 0.0) | (vals >= 1.0)):
            raise ValueError(f"FixedSource values must lie in [0, 1), got {vals.tolist()}")
        self._values = vals
        self._cursor = 0
        self.calls = 0

    def draw(self, dtype: DTypeLike) -> np.floating:
        dtype = np.dtype(dtype)
        value = self._values[self._cursor]
        self._cursor = (self._cursor + 1) % self._values.size
        self.calls += 1
        return _below_one(dtype.type(value))


_DEFAULT_SOURCE = ThreadLocalSource()


def default_source() -> ThreadLocalSource:
    """Return the process-wide thread-local source."""
    return _DEFAULT_SOURCE
