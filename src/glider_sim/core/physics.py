"""Glider motion: level-curve following steps and trajectory generation."""
from __future__ import annotations

import math
from enum import Enum
from typing import Iterator

import numpy as np

from .config import TRAJECTORY_CFG, CorrectionScheme, TrajectoryCfg
from .integrator import get_integrator
from .model import PlanetarySystem, random_point
from .vector import Vector2


_NAN_VECTOR = Vector2(math.nan, math.nan)


class Handedness(Enum):
    """Direction a glider travels along its level curve.

    Named as seen on a y-down screen: ``CLOCKWISE`` moves along
    ``(-t.y, t.x)`` for the total gradient ``t``.
    """

    CLOCKWISE = 1
    COUNTER_CLOCKWISE = -1

    @property
    def sign(self) -> float:
        return float(self.value)

    def flipped(self) -> "Handedness":
        if self is Handedness.CLOCKWISE:
            return Handedness.COUNTER_CLOCKWISE
        return Handedness.CLOCKWISE

    @classmethod
    def draw(cls, rng: np.random.Generator) -> "Handedness":
        """Unbiased coin flip from the caller's generator."""

        return cls.COUNTER_CLOCKWISE if rng.random() < 0.5 else cls.CLOCKWISE


def _level_direction(gradient: Vector2, handedness: Handedness) -> Vector2:
    return gradient.perpendicular().normalized() * handedness.sign


def _along_gravity(gravity: Vector2, amount: float) -> Vector2:
    sq = gravity.sq_magnitude()
    if sq == 0.0 or not math.isfinite(sq):
        return _NAN_VECTOR
    return gravity * (amount / sq)


class GliderStepper:
    """Advances one glider by one step under a correction scheme.

    Subclasses override :meth:`direction` and, where they correct or carry
    state, :meth:`step` and :meth:`accept`.
    """

    def __init__(
        self,
        system: PlanetarySystem,
        cfg: TrajectoryCfg,
        handedness: Handedness,
    ) -> None:
        self.system = system
        self.cfg = cfg
        self.handedness = handedness
        self._integrate = get_integrator(cfg.integrator)

    def direction(self, pos: Vector2) -> Vector2:
        """Unit motion direction perpendicular to gravity."""

        return _level_direction(-self.system.probe_gravity(pos), self.handedness)

    def step(self, pos: Vector2) -> Vector2:
        return self._integrate(pos, self.direction, self.cfg.stepsize)

    def accept(self, last: Vector2, new: Vector2) -> None:
        """Hook called once ``new`` has been appended to the trajectory."""


class UncorrectedStepper(GliderStepper):
    """Integrates the gravity level curve without any correction."""


class GradientStepper(GliderStepper):
    """Follows the level curve of gravity bent by the spiral term."""

    def direction(self, pos: Vector2) -> Vector2:
        total = self.system.probe_combined_gradient(pos, self.cfg.spiral_factor)
        return _level_direction(total, self.handedness)


class PotentialStepper(GliderStepper):
    """Steps along the gravity level curve, then snaps back to a target potential.

    The target drifts by the weighted angle swept each step, times the
    spiral factor, which turns closed orbits into spirals.
    """

    def __init__(
        self,
        system: PlanetarySystem,
        cfg: TrajectoryCfg,
        handedness: Handedness,
        start: Vector2,
    ) -> None:
        super().__init__(system, cfg, handedness)
        self.desired_potential = system.probe_potential(start)

    def step(self, pos: Vector2) -> Vector2:
        guess = super().step(pos)
        if not guess.is_finite():
            return guess
        # Linearise: moving by diff * g / |g|^2 lowers the potential by diff.
        diff = self.system.probe_potential(guess) - self.desired_potential
        halfway = guess + _along_gravity(self.system.probe_gravity(guess), diff / 2.0)
        if not halfway.is_finite():
            return halfway
        return guess + _along_gravity(self.system.probe_gravity(halfway), diff)

    def accept(self, last: Vector2, new: Vector2) -> None:
        if self.cfg.spiral_factor != 0.0:
            swept = self.system.probe_weighted_angle_diff(last, new)
            self.desired_potential += swept * self.cfg.spiral_factor


def make_stepper(
    system: PlanetarySystem,
    start: Vector2,
    cfg: TrajectoryCfg = TRAJECTORY_CFG,
    handedness: Handedness = Handedness.CLOCKWISE,
) -> GliderStepper:
    if cfg.scheme is CorrectionScheme.GRADIENT:
        return GradientStepper(system, cfg, handedness)
    if cfg.scheme is CorrectionScheme.POTENTIAL:
        return PotentialStepper(system, cfg, handedness, start)
    return UncorrectedStepper(system, cfg, handedness)


def iter_trajectory(
    system: PlanetarySystem,
    start: Vector2,
    cfg: TrajectoryCfg = TRAJECTORY_CFG,
    handedness: Handedness = Handedness.CLOCKWISE,
) -> Iterator[Vector2]:
    """Yield the glider's positions, starting with ``start``.

    At most ``cfg.max_steps`` points are produced. The path ends early when
    a step yields a non-finite point (which is dropped) or when the squared
    step length leaves ``(sq_lower_step_limit, sq_upper_step_limit)``
    (that last point is kept).
    """

    yield start
    stepper = make_stepper(system, start, cfg, handedness)
    last = start
    for _ in range(cfg.max_steps - 1):
        new = stepper.step(last)
        if not new.is_finite():
            return
        sq_step = (new - last).sq_magnitude()
        yield new
        stepper.accept(last, new)
        if not cfg.sq_lower_step_limit < sq_step < cfg.sq_upper_step_limit:
            return
        last = new


def generate_trajectory(
    system: PlanetarySystem,
    start: Vector2,
    cfg: TrajectoryCfg = TRAJECTORY_CFG,
    handedness: Handedness = Handedness.CLOCKWISE,
) -> list[Vector2]:
    return list(iter_trajectory(system, start, cfg, handedness))


GLIDER_SEED_OFFSET = 10_000


def background_trajectories(
    system: PlanetarySystem,
    seed: int,
    count: int,
    cfg: TrajectoryCfg = TRAJECTORY_CFG,
) -> list[list[Vector2]]:
    """Trajectories from ``count`` random starts, each with its own handedness coin."""

    rng = np.random.default_rng(seed + GLIDER_SEED_OFFSET)
    trajectories = []
    for _ in range(count):
        start = random_point(system.bounds, rng)
        handedness = Handedness.draw(rng)
        trajectories.append(generate_trajectory(system, start, cfg, handedness))
    return trajectories


__all__ = [
    "GLIDER_SEED_OFFSET",
    "GliderStepper",
    "GradientStepper",
    "Handedness",
    "PotentialStepper",
    "UncorrectedStepper",
    "background_trajectories",
    "generate_trajectory",
    "iter_trajectory",
    "make_stepper",
]
