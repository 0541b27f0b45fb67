import math

import numpy as np
import pytest

from glider_sim.core.integrator import (
    INTEGRATORS,
    explicit_euler,
    get_integrator,
    midpoint,
    runge_kutta4,
)
from glider_sim.core.vector import Vector2


def identity(x):
    return x


def test_single_step_on_exponential_growth():
    assert explicit_euler(1.0, identity, 0.1) == pytest.approx(1.1)
    assert midpoint(1.0, identity, 0.1) == pytest.approx(1.105)
    assert runge_kutta4(1.0, identity, 0.1) == pytest.approx(math.exp(0.1), abs=1e-6)


def test_rk4_keeps_rotation_on_circle():
    def rotate(v: Vector2) -> Vector2:
        return v.perpendicular()

    pos = Vector2(1.0, 0.0)
    for _ in range(100):
        pos = runge_kutta4(pos, rotate, 0.05)
    assert pos.magnitude() == pytest.approx(1.0, abs=1e-6)
    assert pos.angle() == pytest.approx(5.0 - 2.0 * math.pi, abs=1e-5)


def test_euler_spirals_out_on_rotation():
    pos = Vector2(1.0, 0.0)
    for _ in range(10):
        pos = explicit_euler(pos, Vector2.perpendicular, 0.1)
    assert pos.magnitude() == pytest.approx(1.01 ** 5)


def test_solvers_accept_numpy_arrays():
    start = np.array([1.0, 2.0])
    out = runge_kutta4(start, lambda v: -v, 0.01)
    np.testing.assert_allclose(out, start * math.exp(-0.01), rtol=1e-9)


def test_registry_lookup():
    assert set(INTEGRATORS) == {"euler", "midpoint", "rk4"}
    assert get_integrator("rk4") is runge_kutta4
    with pytest.raises(ValueError):
        get_integrator("leapfrog")
