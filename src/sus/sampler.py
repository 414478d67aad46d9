"""Sampler object binding precision, validation mode and a uniform source."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, MutableSequence, Sequence, TypeVar

import numpy as np
from numpy.typing import ArrayLike, NDArray

from sus.precision import resolve_precision
from sus.resampling import systematic_indices
from sus.selection import choice_indices, random_choice, random_choice_in_place
from sus.uniform import GeneratorSource, UniformSource, default_source

T = TypeVar("T")


@dataclass
class SamplerConfig:
    """Options shared by every call made through one StochasticUniversalSampler."""

    precision: str = "float64"  # "float64" or "float32"
    checked: bool = False  # validate weights before walking
    seed: int | None = None  # private seeded Generator instead of the thread-local default


class StochasticUniversalSampler:
    """
    Stochastic universal sampling with fixed settings.

    A sampler built with a seed owns its Generator and must not be shared across
    threads; without a seed it draws from the process-wide thread-local source.
    """

    def __init__(self, config: SamplerConfig | None = None, source: UniformSource | None = None) -> None:
        self.config = config or SamplerConfig()
        self.precision = resolve_precision(self.config.precision)
        if source is None:
            source = GeneratorSource(seed=self.config.seed) if self.config.seed is not None else default_source()
        self.source = source

    def choice(self, samples: Sequence[T], weights: ArrayLike, n: int) -> List[T]:
        """Pick n samples by weight (allocating)."""
        return random_choice(
            samples, weights, n, precision=self.precision, source=self.source, checked=self.config.checked
        )

    def choice_in_place(
        self,
        samples: MutableSequence[T],
        weights: ArrayLike,
        duplicate: Callable[[T], T] | None = None,
    ) -> None:
        """Resample samples onto itself, one spoke per weight."""
        random_choice_in_place(
            samples,
            weights,
            precision=self.precision,
            source=self.source,
            checked=self.config.checked,
            duplicate=duplicate,
        )

    def indices(self, weights: ArrayLike, n: int) -> NDArray[np.intp]:
        return choice_indices(weights, n, precision=self.precision, source=self.source, checked=self.config.checked)

    def systematic_indices(self, weights: ArrayLike, n: int) -> NDArray[np.intp]:
        return systematic_indices(
            weights, n, precision=self.precision, source=self.source, checked=self.config.checked
        )
