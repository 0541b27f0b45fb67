"""Field model, glider integration and path search."""

from .config import (
    RENDER_CFG,
    SCORING_CFG,
    SEARCH_CFG,
    SYSTEM_CFG,
    TRAJECTORY_CFG,
    CorrectionScheme,
    RenderCfg,
    ScoringCfg,
    SearchCfg,
    SystemCfg,
    TrajectoryCfg,
)
from .model import Planet, PlanetarySystem
from .physics import Handedness, generate_trajectory, iter_trajectory
from .scoring import PathStats, evaluate_path, score_path
from .search import ScoredCandidate, find_best_start, search_best_candidate
from .vector import Vector2

__all__ = [
    "CorrectionScheme",
    "Handedness",
    "PathStats",
    "Planet",
    "PlanetarySystem",
    "RENDER_CFG",
    "RenderCfg",
    "SCORING_CFG",
    "SEARCH_CFG",
    "SYSTEM_CFG",
    "ScoredCandidate",
    "ScoringCfg",
    "SearchCfg",
    "SystemCfg",
    "TRAJECTORY_CFG",
    "TrajectoryCfg",
    "Vector2",
    "evaluate_path",
    "find_best_start",
    "generate_trajectory",
    "iter_trajectory",
    "score_path",
    "search_best_candidate",
]
