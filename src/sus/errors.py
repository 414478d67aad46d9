"""Exceptions raised by the spoke-wheel samplers."""

from __future__ import annotations


class SamplingError(ValueError):
    """Base class for sampling failures."""


class InvalidWeightsError(SamplingError):
    """Weights are not a 1-D sequence of finite, non-negative values with a positive sum."""


class InvalidInputError(SamplingError, IndexError):
    """
    The walk ran out of weights or samples before every spoke was placed.

    Also an IndexError so callers treating it as an out-of-bounds access keep working.
    """
