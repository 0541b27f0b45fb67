"""Grid sampling of the planetary fields for overlays and figures."""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .model import PlanetarySystem


@dataclass(frozen=True)
class FieldGrid:
    """Vector field sampled at ``xs`` x ``ys``; ``u``/``v`` have shape ``(len(ys), len(xs))``."""

    xs: np.ndarray
    ys: np.ndarray
    u: np.ndarray
    v: np.ndarray

    def magnitude(self) -> np.ndarray:
        return np.hypot(self.u, self.v)

    def normalized(self) -> tuple[np.ndarray, np.ndarray]:
        mag = self.magnitude()
        with np.errstate(divide="ignore", invalid="ignore"):
            u = np.where(mag > 0.0, self.u / mag, 0.0)
            v = np.where(mag > 0.0, self.v / mag, 0.0)
        return u, v


@dataclass(frozen=True)
class ScalarGrid:
    xs: np.ndarray
    ys: np.ndarray
    values: np.ndarray


def grid_axes(
    system: PlanetarySystem, spacing: float
) -> tuple[np.ndarray, np.ndarray]:
    """Cell-centred sample coordinates covering the system bounds."""

    if spacing <= 0.0:
        raise ValueError("Grid spacing must be positive")
    lo, hi = system.bounds
    xs = np.arange(lo.x + spacing / 2.0, hi.x, spacing)
    ys = np.arange(lo.y + spacing / 2.0, hi.y, spacing)
    return xs, ys


def _offsets(system: PlanetarySystem, xs: np.ndarray, ys: np.ndarray):
    gx, gy = np.meshgrid(np.asarray(xs, dtype=float), np.asarray(ys, dtype=float))
    positions = system.positions
    rx = gx[..., None] - positions[:, 0]
    ry = gy[..., None] - positions[:, 1]
    return rx, ry, rx * rx + ry * ry


def sample_gravity(system: PlanetarySystem, xs, ys) -> FieldGrid:
    rx, ry, sq = _offsets(system, xs, ys)
    with np.errstate(divide="ignore", invalid="ignore"):
        w = system.masses / (sq * np.sqrt(sq))
        u = -(rx * w).sum(axis=-1) * system.gravitational_constant
        v = -(ry * w).sum(axis=-1) * system.gravitational_constant
    return FieldGrid(np.asarray(xs, dtype=float), np.asarray(ys, dtype=float), u, v)


def sample_angular_gradient(system: PlanetarySystem, xs, ys) -> FieldGrid:
    rx, ry, sq = _offsets(system, xs, ys)
    with np.errstate(divide="ignore", invalid="ignore"):
        w = system.masses * system.spins / sq
        u = (ry * w).sum(axis=-1)
        v = (-rx * w).sum(axis=-1)
    return FieldGrid(np.asarray(xs, dtype=float), np.asarray(ys, dtype=float), u, v)


def sample_potential(system: PlanetarySystem, xs, ys) -> ScalarGrid:
    _, _, sq = _offsets(system, xs, ys)
    with np.errstate(divide="ignore", invalid="ignore"):
        values = -(system.masses / np.sqrt(sq)).sum(axis=-1) * system.gravitational_constant
    return ScalarGrid(np.asarray(xs, dtype=float), np.asarray(ys, dtype=float), values)


__all__ = [
    "FieldGrid",
    "ScalarGrid",
    "grid_axes",
    "sample_angular_gradient",
    "sample_gravity",
    "sample_potential",
]
