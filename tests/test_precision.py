"""Tests for precision resolution."""

import numpy as np
import pytest

from sus.precision import Precision, resolve_precision


def test_precision_dtypes() -> None:
    """Each precision maps onto the matching numpy dtype."""
    assert Precision.FLOAT64.dtype == np.dtype(np.float64)
    assert Precision.FLOAT32.dtype == np.dtype(np.float32)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("float64", Precision.FLOAT64),
        ("float32", Precision.FLOAT32),
        (np.float32, Precision.FLOAT32),
        (np.dtype("f8"), Precision.FLOAT64),
        (float, Precision.FLOAT64),
        (Precision.FLOAT32, Precision.FLOAT32),
    ],
)
def test_resolve_precision_accepts_dtype_likes(value, expected) -> None:
    """Names, dtypes and Python float all resolve."""
    assert resolve_precision(value) is expected


@pytest.mark.parametrize("value", ["float16", "int64", "not-a-dtype", np.complex128])
def test_resolve_precision_rejects_other_types(value) -> None:
    """Only float32 and float64 are supported."""
    with pytest.raises(ValueError, match="Unsupported precision"):
        resolve_precision(value)


def test_resolve_precision_rejects_none() -> None:
    """None is not read as the numpy default dtype."""
    with pytest.raises(ValueError, match="Unsupported precision: None"):
        resolve_precision(None)
