"""Random multi-start search for an interesting glider trajectory."""
from __future__ import annotations

import math
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from functools import partial
from typing import Iterable, Optional

import numpy as np

from .config import (
    SCORING_CFG,
    SEARCH_CFG,
    TRAJECTORY_CFG,
    ScoringCfg,
    SearchCfg,
    TrajectoryCfg,
)
from .logging_utils import RunLogger
from .model import PlanetarySystem, random_point
from .physics import Handedness, generate_trajectory
from .scoring import PathStats, evaluate_path
from .vector import Vector2


@dataclass(frozen=True)
class ScoredCandidate:
    start: Vector2
    score: float
    handedness: Handedness = Handedness.CLOCKWISE


def best_candidate(candidates: Iterable[ScoredCandidate]) -> ScoredCandidate:
    """Reduce to the highest score; on a tie the later candidate wins."""

    best: ScoredCandidate | None = None
    for candidate in candidates:
        if best is None or candidate.score >= best.score:
            best = candidate
    if best is None:
        raise ValueError("No candidates to choose from")
    return best


def _evaluate_start(
    system: PlanetarySystem,
    trajectory_cfg: TrajectoryCfg,
    scoring_cfg: ScoringCfg,
    attempt: tuple[Vector2, Handedness],
) -> PathStats:
    start, handedness = attempt
    trajectory = generate_trajectory(system, start, trajectory_cfg, handedness)
    return evaluate_path(system, trajectory, scoring_cfg)


def sample_attempts(
    bounds: tuple[Vector2, Vector2],
    seed: int,
    search_cfg: SearchCfg = SEARCH_CFG,
    handedness: Optional[Handedness] = Handedness.CLOCKWISE,
) -> list[tuple[Vector2, Handedness]]:
    """Draw every start point (and handedness when not fixed) up front."""

    rng = np.random.default_rng(seed + search_cfg.seed_offset)
    attempts = []
    for _ in range(search_cfg.max_attempts):
        start = random_point(bounds, rng)
        attempts.append((start, handedness if handedness is not None else Handedness.draw(rng)))
    return attempts


def search_best_candidate(
    system: PlanetarySystem,
    seed: int,
    *,
    trajectory_cfg: TrajectoryCfg = TRAJECTORY_CFG,
    search_cfg: SearchCfg = SEARCH_CFG,
    scoring_cfg: ScoringCfg = SCORING_CFG,
    bounds: Optional[tuple[Vector2, Vector2]] = None,
    handedness: Optional[Handedness] = Handedness.CLOCKWISE,
    logger: Optional[RunLogger] = None,
) -> ScoredCandidate:
    """Score ``search_cfg.max_attempts`` random starts and keep the best.

    ``handedness=None`` draws one per attempt from the search generator; the
    returned candidate carries whichever was used.
    """

    attempts = sample_attempts(bounds or system.bounds, seed, search_cfg, handedness)
    evaluate = partial(_evaluate_start, system, trajectory_cfg, scoring_cfg)

    if search_cfg.workers > 1:
        chunksize = max(1, math.ceil(len(attempts) / (search_cfg.workers * 4)))
        with ProcessPoolExecutor(max_workers=search_cfg.workers) as pool:
            results = list(pool.map(evaluate, attempts, chunksize=chunksize))
    else:
        results = map(evaluate, attempts)

    candidates: list[ScoredCandidate] = []
    top_score = -math.inf
    for index, ((start, hand), stats) in enumerate(zip(attempts, results)):
        candidates.append(ScoredCandidate(start=start, score=stats.score, handedness=hand))
        if logger is not None:
            logger.log_candidate(
                [
                    index,
                    start.x,
                    start.y,
                    hand.name.lower(),
                    stats.score,
                    stats.planet_switches,
                    stats.path_length,
                    stats.penalty,
                ]
            )
        if stats.score > top_score:
            top_score = stats.score
            if search_cfg.verbose:
                print(
                    f"score: {stats.score:g}  (attempt {index}, switches "
                    f"{stats.planet_switches}, path length {stats.path_length:.1f})"
                )

    return best_candidate(candidates)


def find_best_start(
    system: PlanetarySystem,
    seed: int,
    **kwargs,
) -> Vector2:
    """Start point of the best trajectory found by :func:`search_best_candidate`."""

    return search_best_candidate(system, seed, **kwargs).start


__all__ = [
    "ScoredCandidate",
    "best_candidate",
    "find_best_start",
    "sample_attempts",
    "search_best_candidate",
]
