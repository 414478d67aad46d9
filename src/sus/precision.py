"""Floating-point widths supported by the samplers."""

from __future__ import annotations

from enum import Enum
from typing import Union

import numpy as np
from numpy.typing import DTypeLike


class Precision(str, Enum):
    """Arithmetic width used for sum, gap, spin, accumulator and spokes of one call."""

    FLOAT64 = "float64"
    FLOAT32 = "float32"

    @property
    def dtype(self) -> np.dtype:
        return np.dtype(self.value)


PrecisionLike = Union[Precision, str, DTypeLike]


def resolve_precision(value: PrecisionLike) -> Precision:
    """Map a Precision, dtype name, dtype or Python float type onto a Precision."""
    if isinstance(value, Precision):
        return value
    if value is None:
        raise ValueError("Unsupported precision: None")
    try:
        return Precision(np.dtype(value).name)
    except (TypeError, ValueError) as err:
        raise ValueError(f"Unsupported precision: {value!r}") from err
