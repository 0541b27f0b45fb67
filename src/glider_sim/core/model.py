"""Data models for planets and the planetary system they form.

The system is a "solar system" only loosely: planets never move and their
masses do not act on each other. They only shape the fields gliders follow.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from .config import SYSTEM_CFG, SystemCfg, bounds_to_vectors
from .vector import Vector2


_NAN_VECTOR = Vector2(math.nan, math.nan)
_TWO_PI = 2.0 * math.pi


@dataclass(frozen=True)
class Planet:
    """Stationary point mass with a spin direction for the angular field."""

    position: Vector2
    mass: float
    ccw: bool

    @property
    def spin(self) -> float:
        return 1.0 if self.ccw else -1.0


def random_point(bounds: tuple[Vector2, Vector2], rng: np.random.Generator) -> Vector2:
    """Uniformly sample a point inside ``bounds``."""

    lo, hi = bounds
    x = rng.uniform(lo.x, hi.x)
    y = rng.uniform(lo.y, hi.y)
    return Vector2(float(x), float(y))


@dataclass(frozen=True)
class PlanetarySystem:
    """Immutable set of planets inside a bounding rectangle.

    All probes are pure. Probing exactly at a planet's position gives
    non-finite results instead of raising; callers treat that as the end of a
    trajectory. Probes loop over plain-float planet terms; the cached arrays
    serve grid sampling and scoring.
    """

    bounds: tuple[Vector2, Vector2]
    planets: tuple[Planet, ...]
    gravitational_constant: float = SYSTEM_CFG.gravitational_constant

    _positions: np.ndarray = field(init=False, repr=False, compare=False)
    _masses: np.ndarray = field(init=False, repr=False, compare=False)
    _spins: np.ndarray = field(init=False, repr=False, compare=False)
    # Plain-float (x, y, mass, spin) per planet for the per-step probes.
    _terms: tuple[tuple[float, float, float, float], ...] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        planets = tuple(self.planets)
        object.__setattr__(self, "planets", planets)
        positions = np.array(
            [(p.position.x, p.position.y) for p in planets], dtype=float
        ).reshape(-1, 2)
        object.__setattr__(self, "_positions", positions)
        object.__setattr__(self, "_masses", np.array([p.mass for p in planets], dtype=float))
        object.__setattr__(self, "_spins", np.array([p.spin for p in planets], dtype=float))
        object.__setattr__(
            self,
            "_terms",
            tuple((p.position.x, p.position.y, p.mass, p.spin) for p in planets),
        )

    # ------------------------------------------------------------------
    @classmethod
    def generate(
        cls,
        planet_count: int,
        bounds: tuple[Vector2, Vector2],
        rng: np.random.Generator,
        *,
        max_mass: float = SYSTEM_CFG.max_mass,
        gravitational_constant: float = SYSTEM_CFG.gravitational_constant,
    ) -> "PlanetarySystem":
        """Draw ``planet_count`` planets from ``rng``.

        Per planet the draws are: spin coin, position (x then y), mass.
        """

        if planet_count < 1:
            raise ValueError("A planetary system needs at least one planet")
        if max_mass < 0.0:
            raise ValueError("Maximum planet mass must not be negative")
        lo, hi = bounds
        if not (hi.x > lo.x and hi.y > lo.y):
            raise ValueError(f"Bounds must span a positive area, got {bounds}")

        planets = []
        for _ in range(planet_count):
            ccw = bool(rng.random() < 0.5)
            position = random_point(bounds, rng)
            mass = float(rng.uniform(0.0, max_mass))
            planets.append(Planet(position=position, mass=mass, ccw=ccw))
        return cls(bounds=bounds, planets=tuple(planets), gravitational_constant=gravitational_constant)

    @classmethod
    def from_config(cls, cfg: SystemCfg = SYSTEM_CFG) -> "PlanetarySystem":
        rng = np.random.default_rng(cfg.seed)
        return cls.generate(
            cfg.planet_count,
            bounds_to_vectors(cfg.bounds),
            rng,
            max_mass=cfg.max_mass,
            gravitational_constant=cfg.gravitational_constant,
        )

    # ------------------------------------------------------------------
    @property
    def positions(self) -> np.ndarray:
        """Planet positions as an ``(N, 2)`` array (read-only view)."""

        view = self._positions.view()
        view.flags.writeable = False
        return view

    @property
    def masses(self) -> np.ndarray:
        view = self._masses.view()
        view.flags.writeable = False
        return view

    @property
    def spins(self) -> np.ndarray:
        view = self._spins.view()
        view.flags.writeable = False
        return view

    def contains(self, pos: Vector2) -> bool:
        lo, hi = self.bounds
        return lo.x <= pos.x <= hi.x and lo.y <= pos.y <= hi.y

    # ------------------------------------------------------------------
    def probe_gravity(self, pos: Vector2) -> Vector2:
        """Gravity at ``pos``: the negative gradient of :meth:`probe_potential`."""

        x = y = 0.0
        for px, py, mass, _ in self._terms:
            rx, ry = pos.x - px, pos.y - py
            sq = rx * rx + ry * ry
            if sq == 0.0:
                return _NAN_VECTOR
            inv = 1.0 / math.sqrt(sq)
            w = mass * inv * inv * inv
            x -= rx * w
            y -= ry * w
        g = self.gravitational_constant
        return Vector2(x * g, y * g)

    def probe_potential(self, pos: Vector2) -> float:
        total = 0.0
        for px, py, mass, _ in self._terms:
            rx, ry = pos.x - px, pos.y - py
            sq = rx * rx + ry * ry
            if sq == 0.0:
                return -math.inf
            total += mass / math.sqrt(sq)
        return -total * self.gravitational_constant

    def probe_angular_potential_gradient(self, pos: Vector2) -> Vector2:
        """Rotational field circling each planet in the planet's spin direction."""

        x = y = 0.0
        for px, py, mass, spin in self._terms:
            rx, ry = pos.x - px, pos.y - py
            sq = rx * rx + ry * ry
            if sq == 0.0:
                return _NAN_VECTOR
            inv = 1.0 / math.sqrt(sq)
            w = mass * spin * inv * inv
            x += ry * w
            y -= rx * w
        return Vector2(x, y)

    def probe_combined_gradient(self, pos: Vector2, spiral_factor: float) -> Vector2:
        """``-gravity - spiral_factor * angular_gradient`` in a single pass."""

        g = self.gravitational_constant
        x = y = 0.0
        for px, py, mass, spin in self._terms:
            rx, ry = pos.x - px, pos.y - py
            sq = rx * rx + ry * ry
            if sq == 0.0:
                return _NAN_VECTOR
            inv = 1.0 / math.sqrt(sq)
            grav_w = mass * inv * inv * inv * g
            ang_w = mass * spin * inv * inv * spiral_factor
            x += rx * grav_w - ry * ang_w
            y += ry * grav_w + rx * ang_w
        return Vector2(x, y)

    def probe_weighted_angle_diff(self, a: Vector2, b: Vector2) -> float:
        """Net rotation from ``a`` to ``b`` around the planets.

        Each planet contributes the change in polar angle, wrapped into
        ``(-pi, pi]`` and weighted by ``mass * spin``.
        """

        total = 0.0
        for px, py, mass, spin in self._terms:
            diff = math.atan2(b.y - py, b.x - px) - math.atan2(a.y - py, a.x - px)
            diff = math.pi - (math.pi - diff) % _TWO_PI
            total += diff * mass * spin
        return total


__all__ = ["Planet", "PlanetarySystem", "random_point"]
