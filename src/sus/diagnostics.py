"""Selection-frequency diagnostics: expected counts, goodness of fit and count spread."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.stats import chisquare

from sus.selection import choice_indices
from sus.uniform import GeneratorSource


def selection_counts(indices: ArrayLike, size: int) -> NDArray[np.int64]:
    """How often each of size items was selected."""
    idx = np.asarray(indices, dtype=np.intp)
    return np.bincount(idx, minlength=size).astype(np.int64)


def expected_counts(weights: ArrayLike, n: int) -> NDArray[np.float64]:
    """n * w_i / sum(w): the mean count of each item over n picks."""
    w = np.asarray(weights, dtype=float)
    total = np.sum(w)
    if total <= 0:
        raise ValueError("weights must have a positive sum")
    return n * w / total


def max_count_deviation(counts: ArrayLike, expected: ArrayLike) -> float:
    """
    Largest |count - expected| over all items.

    A single SUS spin keeps this below 1 (each item gets the floor or the ceiling
    of its expected count); independent draws do not.
    """
    c = np.asarray(counts, dtype=float)
    e = np.asarray(expected, dtype=float)
    if c.size == 0:
        return 0.0
    return float(np.max(np.abs(c - e)))


def frequency_pvalue(counts: ArrayLike, weights: ArrayLike) -> float:
    """
    Chi-square goodness-of-fit p-value of counts against the weight proportions.

    Only positive-weight items enter the test; any pick of a zero-weight item gives 0.0.
    """
    c = np.asarray(counts, dtype=float)
    w = np.asarray(weights, dtype=float)
    if c.shape != w.shape:
        raise ValueError(f"counts shape {c.shape} does not match weights shape {w.shape}")
    support = w > 0
    if np.any(c[~support] > 0):
        return 0.0
    c = c[support]
    w = w[support]
    if c.size < 2:
        return 1.0
    f_exp = c.sum() * w / w.sum()
    return float(chisquare(f_obs=c, f_exp=f_exp).pvalue)


@dataclass
class SpreadReport:
    """Per-item standard deviation of counts across repeated trials."""

    expected: NDArray[np.float64]
    sus_std: NDArray[np.float64]
    multinomial_std: NDArray[np.float64]

    @property
    def variance_ratio(self) -> float:
        """Mean SUS variance over mean multinomial variance (below 1 means SUS is tighter)."""
        denom = float(np.mean(self.multinomial_std**2))
        if denom == 0.0:
            return 0.0
        return float(np.mean(self.sus_std**2)) / denom


def compare_spread(
    weights: ArrayLike,
    n: int,
    trials: int = 200,
    rng: np.random.Generator | None = None,
) -> SpreadReport:
    """Repeat SUS and independent multinomial sampling and compare how much the counts scatter."""
    if trials < 1:
        raise ValueError(f"trials must be >= 1, got {trials}")
    rng = rng or np.random.default_rng()
    w = np.asarray(weights, dtype=float)
    p = w / np.sum(w)
    source = GeneratorSource(rng=rng)
    sus_counts = np.zeros((trials, w.size))
    multinomial_counts = np.zeros((trials, w.size))
    for t in range(trials):
        sus_counts[t] = selection_counts(choice_indices(w, n, source=source), w.size)
        multinomial_counts[t] = rng.multinomial(n, p)
    return SpreadReport(
        expected=expected_counts(w, n),
        sus_std=sus_counts.std(axis=0),
        multinomial_std=multinomial_counts.std(axis=0),
    )
