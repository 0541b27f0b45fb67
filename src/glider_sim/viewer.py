"""Interactive pygame viewer for glider scenes.

Keys: Q/Esc quit, R next seed, S screenshot, F cycle field overlay,
H flip handedness, Space rerun the search. Left click launches a glider,
the wheel zooms and a right drag pans.
"""
from __future__ import annotations

import argparse
import os
import time
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field, replace
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

import pygame

from glider_sim.cli import RunSettings, add_generation_arguments, settings_from_args
from glider_sim.core.config import RENDER_CFG, RenderCfg
from glider_sim.core.fields import (
    grid_axes,
    sample_angular_gradient,
    sample_gravity,
    sample_potential,
)
from glider_sim.core.model import PlanetarySystem
from glider_sim.core.physics import Handedness, background_trajectories, generate_trajectory
from glider_sim.core.search import ScoredCandidate, search_best_candidate
from glider_sim.core.vector import Vector2
from glider_sim.render import (
    Viewport,
    draw_hud,
    draw_planets,
    draw_potential_field,
    draw_start_marker,
    draw_trajectory,
    draw_vector_field,
)


OVERLAY_MODES = ("none", "gravity", "angular", "potential")


@dataclass
class Scene:
    settings: RunSettings
    system: PlanetarySystem
    best: ScoredCandidate
    best_path: list[Vector2]
    gliders: list[list[Vector2]]
    user_paths: list[list[Vector2]] = field(default_factory=list)
    handedness: Handedness = Handedness.CLOCKWISE
    search_seconds: float = 0.0

    @property
    def seed(self) -> int:
        return self.settings.system.seed


def build_scene(settings: RunSettings, glider_count: int) -> Scene:
    seed = settings.system.seed
    system = PlanetarySystem.from_config(settings.system)
    began = time.perf_counter()
    best = search_best_candidate(
        system,
        seed,
        trajectory_cfg=settings.trajectory,
        search_cfg=settings.search,
        handedness=settings.handedness,
    )
    elapsed = time.perf_counter() - began
    best_path = generate_trajectory(system, best.start, settings.trajectory, best.handedness)
    gliders = background_trajectories(system, seed, glider_count, settings.trajectory)
    return Scene(
        settings=settings,
        system=system,
        best=best,
        best_path=best_path,
        gliders=gliders,
        handedness=best.handedness,
        search_seconds=elapsed,
    )


class SceneBuilder:
    """Builds scenes on a background thread; the event loop polls for the result.

    Only the latest request counts: a newer request replaces one still queued,
    and a finished scene for an outdated request is discarded.
    """

    def __init__(self, glider_count: int) -> None:
        self.glider_count = glider_count
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="scene")
        self._pending: Optional[Future] = None
        self.requested: Optional[RunSettings] = None

    @property
    def busy(self) -> bool:
        return self._pending is not None

    def request(self, settings: RunSettings) -> None:
        if self._pending is not None:
            self._pending.cancel()
        self.requested = settings
        self._pending = self._executor.submit(build_scene, settings, self.glider_count)

    def poll(self, timeout: float = 0.0) -> Optional[Scene]:
        """The finished scene, or ``None`` while the build is still running.

        Errors raised by the build are re-raised here.
        """

        if self._pending is None:
            return None
        done, _ = wait([self._pending], timeout=timeout)
        if not done:
            return None
        future, self._pending = self._pending, None
        if future.cancelled():
            return None
        return future.result()

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)


def viewer_settings(args: argparse.Namespace, parser: argparse.ArgumentParser) -> RunSettings:
    """Generation settings; the search uses every core unless ``--workers`` says otherwise."""

    settings = settings_from_args(args, parser)
    if args.workers is None:
        search = replace(settings.search, workers=os.cpu_count() or 1)
        settings = replace(settings, search=search)
    return settings


def render_scene(
    surface: pygame.Surface,
    scene: Scene,
    viewport: Viewport,
    overlay: str,
    *,
    render_cfg: RenderCfg,
) -> None:
    surface.fill(render_cfg.background_color)
    system = scene.system
    bounds = scene.settings.system.bounds
    if overlay != "none":
        xs, ys = grid_axes(system, render_cfg.overlay_spacing)
        if overlay == "potential":
            draw_potential_field(
                surface, sample_potential(system, xs, ys), viewport, bounds, render_cfg=render_cfg
            )
        else:
            sample = sample_gravity if overlay == "gravity" else sample_angular_gradient
            draw_vector_field(surface, sample(system, xs, ys), viewport, render_cfg=render_cfg)

    for path in scene.gliders:
        draw_trajectory(
            surface, path, viewport, render_cfg.glider_color, max_points=render_cfg.max_rendered_points
        )
    for path in scene.user_paths:
        draw_trajectory(
            surface,
            path,
            viewport,
            render_cfg.user_glider_color,
            width=render_cfg.path_line_width,
            max_points=render_cfg.max_rendered_points,
        )
    draw_trajectory(
        surface,
        scene.best_path,
        viewport,
        render_cfg.best_path_color,
        width=render_cfg.path_line_width,
        max_points=render_cfg.max_rendered_points,
    )
    draw_planets(surface, system, viewport, render_cfg=render_cfg)
    draw_start_marker(surface, scene.best.start, viewport, render_cfg=render_cfg)


def save_screenshot(surface: pygame.Surface, seed: int, directory: Path) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    path = directory / f"gliders_seed{seed}_{stamp}.png"
    pygame.image.save(surface, path.as_posix())
    return path


def hud_lines(scene: Optional[Scene], builder: SceneBuilder, overlay: str) -> list[str]:
    lines = []
    if builder.busy and builder.requested is not None:
        lines.append(f"searching seed {builder.requested.system.seed} ...")
    if scene is not None:
        trajectory = scene.settings.trajectory
        lines += [
            f"seed {scene.seed}  score {scene.best.score:g}  planets {len(scene.system.planets)}",
            f"spiral {trajectory.spiral_factor:g}  {trajectory.scheme.value}/{trajectory.integrator}",
            f"overlay {overlay}  launch {scene.handedness.name.lower()}",
        ]
    return lines


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Interactive asteroid glider viewer.")
    add_generation_arguments(parser)
    parser.add_argument("--gliders", type=int, default=RENDER_CFG.background_gliders)
    args = parser.parse_args(argv)
    settings = viewer_settings(args, parser)
    render_cfg = RENDER_CFG

    pygame.init()
    pygame.display.set_caption(render_cfg.window_title)
    screen = pygame.display.set_mode((render_cfg.width, render_cfg.height), pygame.RESIZABLE)
    font = pygame.font.SysFont("consolas", render_cfg.hud_font_size)
    clock = pygame.time.Clock()

    viewport = Viewport(
        screen.get_size(),
        settings.system.bounds,
        min_zoom=render_cfg.min_zoom,
        max_zoom=render_cfg.max_zoom,
    )

    builder = SceneBuilder(args.gliders)
    print(f"Generating seed {settings.system.seed} ...")
    builder.request(settings)
    scene: Optional[Scene] = None
    overlay_index = 0
    scene_layer = pygame.Surface(screen.get_size())
    layer_dirty = True

    def launch_glider(screen_pos: tuple[int, int]) -> None:
        nonlocal layer_dirty
        start = Vector2(*viewport.screen_to_world(*screen_pos))
        scene.user_paths.append(
            generate_trajectory(scene.system, start, scene.settings.trajectory, scene.handedness)
        )
        layer_dirty = True

    running = True
    try:
        while running:
            finished = builder.poll()
            if finished is not None:
                if scene is None or finished.settings.system.bounds != scene.settings.system.bounds:
                    viewport.reset(finished.settings.system.bounds)
                scene = finished
                layer_dirty = True
                print(
                    f"Seed {scene.seed}: best score {scene.best.score:g} "
                    f"({scene.search_seconds:.1f} s)"
                )

            current = scene.settings if scene is not None else settings
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.VIDEORESIZE:
                    screen = pygame.display.set_mode(event.size, pygame.RESIZABLE)
                    viewport.update_size(screen.get_size())
                    scene_layer = pygame.Surface(screen.get_size())
                    layer_dirty = True
                elif event.type == pygame.KEYDOWN:
                    if event.key in (pygame.K_q, pygame.K_ESCAPE):
                        running = False
                    elif event.key == pygame.K_r:
                        base = builder.requested or current
                        next_system = replace(base.system, seed=base.system.seed + 1)
                        print(f"Regenerating with seed {next_system.seed}")
                        builder.request(replace(base, system=next_system))
                    elif event.key == pygame.K_SPACE:
                        builder.request(current)
                    elif event.key == pygame.K_s and scene is not None:
                        path = save_screenshot(screen, scene.seed, Path(render_cfg.screenshot_dir))
                        print(f"Saved screenshot {path}")
                    elif event.key == pygame.K_f:
                        overlay_index = (overlay_index + 1) % len(OVERLAY_MODES)
                        layer_dirty = True
                    elif event.key == pygame.K_h and scene is not None:
                        scene.handedness = scene.handedness.flipped()
                elif event.type == pygame.MOUSEBUTTONDOWN:
                    if event.button == 1 and scene is not None:
                        launch_glider(event.pos)
                    elif event.button == 3:
                        viewport.begin_pan(event.pos)
                elif event.type == pygame.MOUSEBUTTONUP and event.button == 3:
                    viewport.end_pan()
                elif event.type == pygame.MOUSEMOTION and event.buttons[2]:
                    viewport.pan(event.pos)
                    layer_dirty = True
                elif event.type == pygame.MOUSEWHEEL:
                    viewport.zoom_by_factor(1.1 if event.y > 0 else 1 / 1.1)
                    layer_dirty = True

            if layer_dirty:
                if scene is None:
                    scene_layer.fill(render_cfg.background_color)
                else:
                    render_scene(
                        scene_layer, scene, viewport, OVERLAY_MODES[overlay_index], render_cfg=render_cfg
                    )
                layer_dirty = False

            screen.blit(scene_layer, (0, 0))
            draw_hud(
                screen,
                font,
                hud_lines(scene, builder, OVERLAY_MODES[overlay_index]),
                render_cfg=render_cfg,
            )
            pygame.display.flip()
            clock.tick(render_cfg.fps)
    finally:
        builder.shutdown()
        pygame.quit()


if __name__ == "__main__":
    main()
