import numpy as np
import pytest

from coldet.types import (
    microseconds,
    milliseconds,
    nanoseconds,
    normalize,
    seconds,
    time_diff,
    to_dt,
    vector3,
)


def test_vector3_is_float_array():
    v = vector3(1, 2, 3)
    assert v.dtype == np.float64
    assert v.tolist() == [1.0, 2.0, 3.0]


def test_units_agree():
    assert seconds(1) == milliseconds(1000)
    assert milliseconds(1) == microseconds(1000)
    assert microseconds(1) == nanoseconds(1000)
    assert seconds(1) == 1_000_000_000


def test_fractional_duration():
    assert milliseconds(1.5) == microseconds(1500)


def test_to_dt_round_trip():
    assert to_dt(seconds(3)) == 3.0
    assert to_dt(milliseconds(16)) == pytest.approx(0.016)


def test_time_diff():
    t0 = 123_456
    t1 = t0 + seconds(2)
    assert time_diff(t1, t0) == seconds(2)
    assert time_diff(t0, t1) == -seconds(2)


def test_normalize_unit_length_and_direction():
    v = vector3(3, -4, 12)
    n = normalize(v)
    assert np.linalg.norm(n) == pytest.approx(1.0)
    assert np.allclose(np.cross(n, v), 0.0)
    assert np.dot(n, v) > 0


def test_normalize_zero_vector_unchanged():
    assert normalize(vector3(0, 0, 0)).tolist() == [0.0, 0.0, 0.0]


def test_normalize_does_not_modify_input():
    v = vector3(2, 0, 0)
    normalize(v)
    assert v.tolist() == [2.0, 0.0, 0.0]