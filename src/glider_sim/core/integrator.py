"""Fixed-step ODE solvers over any vector-like type.

Each solver takes a start value, a velocity function ``f`` and a step size and
returns the value one step later. The value type only needs ``+`` and scalar
``*``/``/``, so :class:`~glider_sim.core.vector.Vector2`, numpy arrays and
plain floats all work.
"""
from __future__ import annotations

from typing import Callable, TypeVar

from .config import INTEGRATOR_NAMES


V = TypeVar("V")
Integrator = Callable[[V, Callable[[V], V], float], V]


def explicit_euler(start: V, f: Callable[[V], V], stepsize: float) -> V:
    k1 = stepsize * f(start)
    return start + k1


def midpoint(start: V, f: Callable[[V], V], stepsize: float) -> V:
    k1 = stepsize * f(start)
    k2 = stepsize * f(start + k1 / 2)
    return start + k2


def runge_kutta4(start: V, f: Callable[[V], V], stepsize: float) -> V:
    """Classical fourth order Runge-Kutta step."""

    k1 = stepsize * f(start)
    k2 = stepsize * f(start + k1 / 2)
    k3 = stepsize * f(start + k2 / 2)
    k4 = stepsize * f(start + k3)
    return start + (k1 + 2 * k2 + 2 * k3 + k4) / 6


INTEGRATORS: dict[str, Integrator] = dict(
    zip(INTEGRATOR_NAMES, (explicit_euler, midpoint, runge_kutta4))
)


def get_integrator(name: str) -> Integrator:
    try:
        return INTEGRATORS[name]
    except KeyError:
        raise ValueError(
            f"Unknown integrator {name!r}, expected one of {sorted(INTEGRATORS)}"
        ) from None


__all__ = [
    "INTEGRATORS",
    "Integrator",
    "explicit_euler",
    "get_integrator",
    "midpoint",
    "runge_kutta4",
]
