"""Configuration dataclasses for the glider simulation."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .vector import Vector2


Bounds = tuple[tuple[float, float], tuple[float, float]]


class CorrectionScheme(str, Enum):
    """How a glider step keeps the glider on its level curve."""

    NONE = "none"
    POTENTIAL = "potential"
    GRADIENT = "gradient"


INTEGRATOR_NAMES = ("euler", "midpoint", "rk4")


def bounds_to_vectors(bounds: Bounds) -> tuple[Vector2, Vector2]:
    (x0, y0), (x1, y1) = bounds
    return Vector2(float(x0), float(y0)), Vector2(float(x1), float(y1))


@dataclass(frozen=True)
class SystemCfg:
    bounds: Bounds = ((0.0, 0.0), (1080.0, 720.0))
    planet_count: int = 4
    max_mass: float = 1.0
    gravitational_constant: float = 2000.0
    seed: int = 23

    def __post_init__(self) -> None:
        (x0, y0), (x1, y1) = self.bounds
        if not (x1 > x0 and y1 > y0):
            raise ValueError(f"Bounds must span a positive area, got {self.bounds}")
        if self.planet_count < 1:
            raise ValueError("A planetary system needs at least one planet")
        if self.max_mass < 0.0:
            raise ValueError("Maximum planet mass must not be negative")

    @property
    def bounds_vectors(self) -> tuple[Vector2, Vector2]:
        return bounds_to_vectors(self.bounds)


@dataclass(frozen=True)
class TrajectoryCfg:
    spiral_factor: float = 0.0
    stepsize: float = 10.0
    max_steps: int = 1000
    # Squared per-step displacement window; leaving it ends the trajectory.
    sq_lower_step_limit: float = 0.005
    sq_upper_step_limit: float = 400.0
    integrator: str = "rk4"
    scheme: CorrectionScheme = CorrectionScheme.GRADIENT

    def __post_init__(self) -> None:
        if self.stepsize <= 0.0:
            raise ValueError("Step size must be positive")
        if self.max_steps < 0:
            raise ValueError("Maximum step count must not be negative")
        if self.integrator not in INTEGRATOR_NAMES:
            raise ValueError(
                f"Unknown integrator {self.integrator!r}, expected one of {INTEGRATOR_NAMES}"
            )
        # Accept plain strings such as "potential" from the command line.
        object.__setattr__(self, "scheme", CorrectionScheme(self.scheme))


@dataclass(frozen=True)
class ScoringCfg:
    planet_switch_weight: float = 100.0
    path_length_weight: float = 0.0
    out_of_bounds_penalty: float = 3.0
    collision_penalty: float = 500.0
    collision_sq_distance: float = 100.0
    switch_hysteresis: float = 1.2


@dataclass(frozen=True)
class SearchCfg:
    max_attempts: int = 1000
    # Keeps the search stream apart from the one that placed the planets.
    seed_offset: int = 2000
    workers: int = 1
    verbose: bool = False

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("Path search needs at least one attempt")
        if self.workers < 1:
            raise ValueError("Worker count must be at least one")


@dataclass(frozen=True)
class RenderCfg:
    width: int = 1080
    height: int = 720
    fps: int = 60
    window_title: str = "Asteroid Gliders"
    background_color: tuple[int, int, int] = (30, 30, 30)
    planet_color: tuple[int, int, int] = (180, 200, 210)
    planet_ccw_color: tuple[int, int, int] = (210, 190, 170)
    planet_radius_scale: float = 10.0
    planet_min_radius: int = 2
    best_path_color: tuple[int, int, int, int] = (255, 214, 130, 230)
    glider_color: tuple[int, int, int, int] = (200, 200, 200, 100)
    user_glider_color: tuple[int, int, int, int] = (120, 220, 255, 200)
    start_marker_color: tuple[int, int, int] = (255, 120, 80)
    start_marker_radius: int = 4
    path_line_width: int = 2
    background_gliders: int = 100
    max_rendered_points: int = 4_000
    overlay_spacing: int = 36
    overlay_arrow_length: float = 14.0
    overlay_arrow_color: tuple[int, int, int, int] = (120, 170, 255, 150)
    overlay_arrow_head_length: int = 4
    overlay_arrow_head_angle_deg: int = 26
    potential_overlay_alpha: int = 110
    # Screen pixels per potential colour sample before smoothing.
    potential_overlay_step: int = 4
    hud_text_color: tuple[int, int, int] = (234, 241, 255)
    hud_font_size: int = 15
    screenshot_dir: str = "screenshots"
    min_zoom: float = 0.1
    max_zoom: float = 20.0


SYSTEM_CFG = SystemCfg()
TRAJECTORY_CFG = TrajectoryCfg()
SCORING_CFG = ScoringCfg()
SEARCH_CFG = SearchCfg()
RENDER_CFG = RenderCfg()


__all__ = [
    "Bounds",
    "CorrectionScheme",
    "INTEGRATOR_NAMES",
    "RENDER_CFG",
    "RenderCfg",
    "SCORING_CFG",
    "SEARCH_CFG",
    "SYSTEM_CFG",
    "ScoringCfg",
    "SearchCfg",
    "SystemCfg",
    "TRAJECTORY_CFG",
    "TrajectoryCfg",
    "bounds_to_vectors",
]
