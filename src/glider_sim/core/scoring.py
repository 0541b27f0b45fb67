"""Scoring of glider trajectories.

A good trajectory tours several planets while staying in view and out of
planets. Path length is tracked but weighted zero by default, so a long
orbit around a single planet does not beat a multi-planet tour.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .config import SCORING_CFG, ScoringCfg
from .model import PlanetarySystem
from .vector import Vector2


@dataclass(frozen=True)
class PathStats:
    score: float
    planet_switches: int
    path_length: float
    penalty: float
    out_of_bounds: int
    collisions: int


def evaluate_path(
    system: PlanetarySystem,
    trajectory: Sequence[Vector2],
    cfg: ScoringCfg = SCORING_CFG,
) -> PathStats:
    """Walk consecutive point pairs and collect score components.

    The first point only anchors the path length. For every later point:

    * outside the bounds it costs ``out_of_bounds_penalty`` and nothing else
      is checked;
    * otherwise the step length is added and the closest planet tracked.
      A new closest planet is only taken when its squared distance times
      ``switch_hysteresis`` undercuts the current one's.
    * closer than ``collision_sq_distance`` to the tracked planet costs
      ``collision_penalty``.
    """

    points = np.array([(p.x, p.y) for p in trajectory], dtype=float).reshape(-1, 2)
    has_planets = len(system.planets) > 0
    if has_planets and len(points) > 1:
        deltas = points[:, None, :] - system.positions[None, :, :]
        sq_dists = (deltas * deltas).sum(axis=-1)
    else:
        sq_dists = None

    planet_switches = 0
    path_length = 0.0
    penalty = 0.0
    out_of_bounds = 0
    collisions = 0
    closest: int | None = None

    for i in range(1, len(trajectory)):
        point = trajectory[i]
        if not system.contains(point):
            penalty += cfg.out_of_bounds_penalty
            out_of_bounds += 1
            continue

        prev = trajectory[i - 1]
        path_length += math.hypot(point.x - prev.x, point.y - prev.y)

        if sq_dists is None:
            continue
        row = sq_dists[i]
        candidate = int(np.argmin(row))
        if closest is None:
            closest = candidate
        elif candidate != closest and row[candidate] * cfg.switch_hysteresis < row[closest]:
            closest = candidate
            planet_switches += 1

        if row[closest] < cfg.collision_sq_distance:
            penalty += cfg.collision_penalty
            collisions += 1

    score = (
        planet_switches * cfg.planet_switch_weight
        + path_length * cfg.path_length_weight
        - penalty
    )
    return PathStats(
        score=float(score),
        planet_switches=planet_switches,
        path_length=path_length,
        penalty=penalty,
        out_of_bounds=out_of_bounds,
        collisions=collisions,
    )


def score_path(
    system: PlanetarySystem,
    trajectory: Sequence[Vector2],
    cfg: ScoringCfg = SCORING_CFG,
) -> float:
    return evaluate_path(system, trajectory, cfg).score


__all__ = ["PathStats", "evaluate_path", "score_path"]
