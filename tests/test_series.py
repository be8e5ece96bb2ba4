import numpy as np
import pytest
from pydantic import ValidationError

from datacomm import Series


def test_construction():
    s = Series(x=[0, 1, 2], y=[1, -1, 1], name="demo")
    assert len(s) == 3
    assert s.x.dtype == np.float64
    assert s.points() == [(0.0, 1.0), (1.0, -1.0), (2.0, 1.0)]
    assert s.to_records()[1] == {"x": 1.0, "y": -1.0}


def test_immutable():
    s = Series(x=[0, 1], y=[0, 1])
    with pytest.raises(ValueError):
        s.y[0] = 5
    with pytest.raises(ValidationError):
        s.name = "other"


def test_validation():
    with pytest.raises(ValidationError):
        Series(x=[0, 1], y=[0])
    with pytest.raises(ValidationError):
        Series(x=[[0, 1]], y=[[0, 1]])


def test_from_points_and_equality():
    s = Series.from_points([(0, 1), (0.5, 1), (0.5, -1)], name="a")
    assert s == Series(x=[0, 0.5, 0.5], y=[1, 1, -1], name="a")
    assert s != s.with_name("b")
    assert len(Series.from_points([])) == 0
