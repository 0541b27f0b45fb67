"""Render a glider scene to an image file without opening a window."""
from __future__ import annotations

import argparse
from dataclasses import asdict
from pathlib import Path
from typing import Optional, Sequence

import numpy as np

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from glider_sim.cli import RunSettings, add_generation_arguments, settings_from_args
from glider_sim.core.config import RENDER_CFG
from glider_sim.core.fields import grid_axes, sample_potential
from glider_sim.core.logging_utils import RunLogger
from glider_sim.core.model import PlanetarySystem
from glider_sim.core.physics import background_trajectories, generate_trajectory
from glider_sim.core.search import ScoredCandidate, search_best_candidate
from glider_sim.core.vector import Vector2


POTENTIAL_GRID_SPACING = 6.0


def _xy(trajectory: Sequence[Vector2]) -> tuple[np.ndarray, np.ndarray]:
    points = np.array([(p.x, p.y) for p in trajectory], dtype=float).reshape(-1, 2)
    return points[:, 0], points[:, 1]


def plot_scene(
    out_path: Path,
    system: PlanetarySystem,
    best: Optional[Sequence[Vector2]] = None,
    gliders: Sequence[Sequence[Vector2]] = (),
    *,
    title: str = "",
    show_potential: bool = True,
    dpi: int = 150,
) -> Path:
    lo, hi = system.bounds
    width, height = hi.x - lo.x, hi.y - lo.y
    fig, ax = plt.subplots(figsize=(10, 10 * height / width))
    ax.set_facecolor("#1e1e1e")

    if show_potential:
        xs, ys = grid_axes(system, POTENTIAL_GRID_SPACING)
        potential = sample_potential(system, xs, ys)
        depth = np.log1p(np.clip(-np.nan_to_num(potential.values, neginf=-1e12), 0.0, None))
        ax.contour(xs, ys, depth, levels=24, cmap="magma", linewidths=0.6, alpha=0.6)

    for trajectory in gliders:
        x, y = _xy(trajectory)
        ax.plot(x, y, color="#c8c8c8", lw=0.5, alpha=0.4)

    if best:
        x, y = _xy(best)
        ax.plot(x, y, color="#ffd682", lw=1.6, label="Best glider")
        ax.scatter([x[0]], [y[0]], color="#ff7850", s=25, zorder=4, label="Start")

    for planet in system.planets:
        color = "#d2beaa" if planet.ccw else "#b4c8d2"
        radius = max(2.0, np.sqrt(planet.mass) * RENDER_CFG.planet_radius_scale)
        ax.add_patch(plt.Circle(planet.position.as_tuple(), radius, color=color, zorder=3))

    ax.set_xlim(lo.x, hi.x)
    # y grows downward, as on screen
    ax.set_ylim(hi.y, lo.y)
    ax.set_aspect("equal", "box")
    ax.set_xticks([])
    ax.set_yticks([])
    if title:
        ax.set_title(title)
    if best:
        ax.legend(loc="lower right", fontsize=8)
    fig.tight_layout()
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_path, dpi=dpi)
    plt.close(fig)
    return out_path


def record_run(
    logger: RunLogger,
    settings: RunSettings,
    system: PlanetarySystem,
    best: ScoredCandidate,
    trajectory: Sequence[Vector2],
) -> None:
    for step, point in enumerate(trajectory):
        logger.log_point([step, point.x, point.y, system.probe_potential(point)])
    logger.write_meta(
        {
            "system": asdict(settings.system),
            "trajectory": asdict(settings.trajectory),
            "search": asdict(settings.search),
            "planets": [
                {"x": p.position.x, "y": p.position.y, "mass": p.mass, "ccw": p.ccw}
                for p in system.planets
            ],
            "best": {
                "x": best.start.x,
                "y": best.start.y,
                "score": best.score,
                "handedness": best.handedness.name.lower(),
            },
            "points": len(trajectory),
        }
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Export a glider scene as an image.")
    add_generation_arguments(parser)
    parser.add_argument("--out", type=Path, default=None, help="Output image path")
    parser.add_argument("--gliders", type=int, default=RENDER_CFG.background_gliders)
    parser.add_argument("--no-potential", action="store_true", help="Skip the contour overlay")
    parser.add_argument("--record", action="store_true", help="Write a run folder under --runs-dir")
    parser.add_argument("--runs-dir", type=Path, default=Path("data/runs"))
    args = parser.parse_args(argv)

    settings = settings_from_args(args, parser)
    seed = settings.system.seed
    system = PlanetarySystem.from_config(settings.system)

    logger = RunLogger(args.runs_dir) if args.record else None
    try:
        best = search_best_candidate(
            system,
            seed,
            trajectory_cfg=settings.trajectory,
            search_cfg=settings.search,
            handedness=settings.handedness,
            logger=logger,
        )
        trajectory = generate_trajectory(system, best.start, settings.trajectory, best.handedness)
        if logger is not None:
            record_run(logger, settings, system, best, trajectory)
    finally:
        if logger is not None:
            logger.close()

    gliders = background_trajectories(system, seed, args.gliders, settings.trajectory)
    out_path = args.out or Path("figures") / f"gliders_seed{seed}.png"
    plot_scene(
        out_path,
        system,
        trajectory,
        gliders,
        title=f"{args.preset} | seed {seed} | score {best.score:g}",
        show_potential=not args.no_potential,
    )
    print(f"Saved {out_path}")
    if logger is not None:
        print(f"Recorded run in {logger.run_dir}")


if __name__ == "__main__":
    main()
