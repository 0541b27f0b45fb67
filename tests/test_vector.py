import math

import numpy as np
import pytest

from glider_sim.core.vector import Vector2


def test_arithmetic():
    a = Vector2(1.0, 2.0)
    b = Vector2(3.0, -1.0)
    assert a + b == Vector2(4.0, 1.0)
    assert a - b == Vector2(-2.0, 3.0)
    assert a * 2 == Vector2(2.0, 4.0)
    assert 2 * a == Vector2(2.0, 4.0)
    assert a / 2 == Vector2(0.5, 1.0)
    assert -a == Vector2(-1.0, -2.0)


def test_products_and_norms():
    a = Vector2(3.0, 4.0)
    assert a.sq_magnitude() == 25.0
    assert a.magnitude() == 5.0
    assert a.normalized().magnitude() == pytest.approx(1.0)
    assert a.dot(Vector2(1.0, 0.0)) == 3.0
    assert Vector2(1.0, 0.0).cross(Vector2(0.0, 1.0)) == 1.0
    assert Vector2(0.0, 1.0).cross(Vector2(1.0, 0.0)) == -1.0


def test_angle_and_perpendicular():
    assert Vector2(0.0, 2.0).angle() == pytest.approx(math.pi / 2)
    assert Vector2(-1.0, 0.0).angle() == pytest.approx(math.pi)
    p = Vector2(2.0, 1.0).perpendicular()
    assert p == Vector2(-1.0, 2.0)
    assert p.dot(Vector2(2.0, 1.0)) == 0.0


def test_zero_vector_normalizes_to_nan_without_raising():
    n = Vector2(0.0, 0.0).normalized()
    assert math.isnan(n.x) and math.isnan(n.y)
    assert not n.is_finite()


def test_conversions():
    v = Vector2(1.5, -2.0)
    x, y = v
    assert (x, y) == (1.5, -2.0)
    assert v.as_tuple() == (1.5, -2.0)
    np.testing.assert_array_equal(v.as_array(), np.array([1.5, -2.0]))
    assert Vector2.from_array(np.array([1.5, -2.0])) == v


def test_is_immutable():
    v = Vector2(1.0, 1.0)
    with pytest.raises(AttributeError):
        v.x = 2.0
