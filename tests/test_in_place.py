"""Tests for in-place resampling."""

import numpy as np
import pytest

from sus.errors import InvalidInputError, InvalidWeightsError
from sus.selection import (
    random_choice,
    random_choice_in_place,
    random_choice_in_place_checked,
    random_choice_in_place_f32,
    random_choice_in_place_f64,
)
from sus.uniform import FixedSource, GeneratorSource


def test_single_item_buffer_is_left_alone() -> None:
    """Fewer than two weights: nothing to resample, no draw."""
    source = FixedSource(0.5)
    buf = ["a"]
    random_choice_in_place(buf, [1.0], source=source)
    assert buf == ["a"]
    empty: list = []
    random_choice_in_place(empty, [], source=source)
    assert empty == []
    assert source.calls == 0


@pytest.mark.parametrize("resample", [random_choice_in_place_f64, random_choice_in_place_f32])
def test_mass_on_last_item_fills_every_slot(resample) -> None:
    """Weights [0, 0, 0, 1] turn every slot into the last sample."""
    source = GeneratorSource(seed=9)
    for _ in range(20):
        buf = ["a", "b", "c", "d"]
        resample(buf, [0.0, 0.0, 0.0, 1.0], source=source)
        assert buf == ["d", "d", "d", "d"]


def test_worked_example_in_place() -> None:
    """Four spokes at 0.5125 + k * 1.25 select [1, 1, 2, 3]."""
    buf = list("abcd")
    random_choice_in_place(buf, [0.3, 1.7, 2.2, 0.8], source=FixedSource(0.41))
    assert buf == ["b", "b", "c", "d"]


def test_overwritten_slot_is_read_from_its_pre_call_value() -> None:
    """
    Weights [2, 1, 0] with spin 0.5 select [0, 0, 1].

    Slot 1 is overwritten with "a" before spoke 2 selects it, so slot 2 must
    receive the original "b".
    """
    buf = ["a", "b", "c"]
    random_choice_in_place(buf, [2.0, 1.0, 0.0], source=FixedSource(0.5))
    assert buf == ["a", "a", "b"]


def test_overwritten_rows_of_numpy_buffer() -> None:
    """Rows of a 2-D buffer are staged by value, not as views."""
    buf = np.array([[0.0, 0.0], [1.0, 1.0], [2.0, 2.0]])
    random_choice_in_place(buf, [2.0, 1.0, 0.0], source=FixedSource(0.5))
    np.testing.assert_array_equal(buf, [[0.0, 0.0], [0.0, 0.0], [1.0, 1.0]])


def test_numpy_vector_buffer() -> None:
    """A 1-D float buffer is resampled in place."""
    buf = np.array([10.0, 20.0, 30.0, 40.0])
    original = buf
    random_choice_in_place(buf, [0.3, 1.7, 2.2, 0.8], source=FixedSource(0.41))
    assert buf is original
    np.testing.assert_array_equal(buf, [20.0, 20.0, 30.0, 40.0])


@pytest.mark.parametrize("u", [0.0, 0.05, 0.37, 0.5, 0.81, 0.999])
def test_in_place_matches_allocating_result(u) -> None:
    """Resampling onto the buffer gives what the allocating walk would return."""
    samples = list(range(8))
    weights = [3.0, 0.0, 0.5, 2.5, 0.0, 0.0, 1.0, 0.25]
    expected = random_choice(samples, weights, len(weights), source=FixedSource(u))
    buf = list(samples)
    random_choice_in_place(buf, weights, source=FixedSource(u))
    assert buf == expected


def test_length_preserved_and_values_from_input() -> None:
    """The buffer keeps its length and only holds pre-call values."""
    source = GeneratorSource(seed=4)
    weights = np.arange(1, 51, dtype=float)
    for _ in range(20):
        buf = list(range(50))
        random_choice_in_place(buf, weights, source=source)
        assert len(buf) == 50
        assert set(buf) <= set(range(50))
        assert buf == sorted(buf)


def test_default_duplicate_copies_values() -> None:
    """Slots filled from the same source hold equal but distinct objects."""
    buf = [{"id": i} for i in range(4)]
    random_choice_in_place(buf, [0.0, 0.0, 0.0, 1.0], source=FixedSource(0.3))
    assert buf == [{"id": 3}] * 4
    assert len({id(item) for item in buf}) == 4


def test_custom_duplicate_called_once_per_slot() -> None:
    """The duplicate hook produces every written value."""
    calls = []

    def dup(value):
        calls.append(value)
        return value.upper()

    buf = ["a", "b", "c"]
    random_choice_in_place(buf, [1.0, 1.0, 1.0], source=FixedSource(0.5), duplicate=dup)
    assert buf == ["A", "B", "C"]
    assert calls == ["a", "b", "c"]


def test_checked_in_place_requires_matching_lengths() -> None:
    """Checked mode needs one sample per weight."""
    with pytest.raises(InvalidInputError):
        random_choice_in_place_checked(["a", "b", "c"], [1.0, 1.0])


def test_checked_in_place_validates_weights() -> None:
    """Checked mode rejects negative weights."""
    with pytest.raises(InvalidWeightsError):
        random_choice_in_place_checked(["a", "b"], [1.0, -1.0])


def test_short_buffer_fails_unchecked() -> None:
    """Reading past the buffer is an input error."""
    with pytest.raises(InvalidInputError):
        random_choice_in_place(["a"], [1.0, 1.0], source=FixedSource(0.5))


def test_short_buffer_is_untouched_when_rejected() -> None:
    """A buffer shorter than the weights is rejected before any slot is written."""
    buf = ["a", "b"]
    source = FixedSource(0.5)
    with pytest.raises(InvalidInputError):
        random_choice_in_place(buf, [2.0, 1.0, 0.0], source=source)
    assert buf == ["a", "b"]
    assert source.calls == 0


def test_longer_buffer_keeps_its_tail_unchecked() -> None:
    """Unchecked calls resample the first len(weights) slots of a longer buffer."""
    buf = ["a", "b", "c", "z"]
    random_choice_in_place(buf, [2.0, 1.0, 0.0], source=FixedSource(0.5))
    assert buf == ["a", "a", "b", "z"]


def test_zero_total_fails_in_place() -> None:
    """All-zero weights cannot be resampled."""
    buf = ["a", "b"]
    with pytest.raises(InvalidInputError):
        random_choice_in_place(buf, [0.0, 0.0], source=FixedSource(0.5))
