import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import numpy as np
import pygame
import pytest

from glider_sim.core.config import RENDER_CFG
from glider_sim.core.fields import grid_axes, sample_potential
from glider_sim.core.vector import Vector2
from glider_sim.render import (
    Viewport,
    downsample_points,
    draw_planets,
    draw_potential_field,
    draw_trajectory,
    potential_colors,
    potential_overlay_cells,
)


BOUNDS = ((0.0, 0.0), (1080.0, 720.0))


def make_viewport(size=(1080, 720)):
    return Viewport(size, BOUNDS, min_zoom=RENDER_CFG.min_zoom, max_zoom=RENDER_CFG.max_zoom)


def test_default_bounds_map_one_to_one():
    viewport = make_viewport()
    assert viewport.scale == pytest.approx(1.0)
    assert viewport.world_to_screen(0.0, 0.0) == (0, 0)
    assert viewport.world_to_screen(1080.0, 720.0) == (1080, 720)
    assert viewport.screen_to_world(300, 200) == pytest.approx((300.0, 200.0))


def test_fit_keeps_aspect_ratio():
    viewport = make_viewport((540, 720))
    assert viewport.scale == pytest.approx(0.5)
    assert viewport.world_to_screen(540.0, 360.0) == (270, 360)


def test_zoom_is_clamped_and_reset():
    viewport = make_viewport()
    for _ in range(100):
        viewport.zoom_by_factor(2.0)
    assert viewport.zoom == RENDER_CFG.max_zoom
    viewport.reset()
    assert viewport.zoom == 1.0


def test_pan_moves_the_world_with_the_mouse():
    viewport = make_viewport()
    viewport.begin_pan((100, 100))
    viewport.pan((110, 95))
    viewport.end_pan()
    assert viewport.world_to_screen(540.0, 360.0) == (550, 355)
    viewport.pan((500, 500))
    assert viewport.world_to_screen(540.0, 360.0) == (550, 355)


def test_downsample_keeps_last_point():
    points = [(float(i), 0.0) for i in range(11)]
    sampled = downsample_points(points, 4)
    assert sampled[0] == points[0]
    assert sampled[-1] == points[-1]
    assert len(sampled) < len(points)
    assert downsample_points(points[:3], 4) == points[:3]


def test_potential_colors_brighten_deep_wells():
    rgb = potential_colors(np.array([[-1.0, -100.0], [np.nan, -np.inf]]))
    assert rgb.shape == (2, 2, 3)
    assert rgb.dtype == np.uint8
    assert rgb[1, 1, 0] == 240
    assert rgb[1, 0, 0] == 40
    assert rgb[0, 1, 0] > rgb[0, 0, 0]


def test_draw_planets_and_paths(single_planet):
    surface = pygame.Surface((200, 200))
    viewport = Viewport(
        (200, 200),
        ((-100.0, -100.0), (100.0, 100.0)),
        min_zoom=RENDER_CFG.min_zoom,
        max_zoom=RENDER_CFG.max_zoom,
    )
    draw_planets(surface, single_planet, viewport, render_cfg=RENDER_CFG)
    assert tuple(surface.get_at((100, 100)))[:3] == RENDER_CFG.planet_ccw_color

    path = [Vector2(-80.0, -80.0), Vector2(-80.0, -40.0)]
    draw_trajectory(surface, path, viewport, (255, 0, 0), width=3)
    assert tuple(surface.get_at((20, 40)))[:3] == (255, 0, 0)


def test_potential_overlay_stays_window_sized_at_max_zoom(twin_planets):
    bounds = ((-200.0, -200.0), (200.0, 200.0))
    viewport = Viewport((200, 200), bounds, min_zoom=RENDER_CFG.min_zoom, max_zoom=RENDER_CFG.max_zoom)
    for _ in range(100):
        viewport.zoom_by_factor(2.0)
    xs, ys = grid_axes(twin_planets, RENDER_CFG.overlay_spacing)
    grid = sample_potential(twin_planets, xs, ys)

    surface = pygame.Surface((200, 200))
    cells = potential_overlay_cells(grid, viewport, surface.get_rect(), 4)
    assert cells.shape == (50, 50, 3)

    draw_potential_field(surface, grid, viewport, bounds, render_cfg=RENDER_CFG)
    assert tuple(surface.get_at((100, 100)))[:3] != (0, 0, 0)


def test_potential_overlay_skips_offscreen_world(twin_planets):
    bounds = ((-200.0, -200.0), (200.0, 200.0))
    viewport = Viewport((200, 200), bounds, min_zoom=RENDER_CFG.min_zoom, max_zoom=RENDER_CFG.max_zoom)
    viewport.begin_pan((0, 0))
    viewport.pan((1000, 0))
    xs, ys = grid_axes(twin_planets, RENDER_CFG.overlay_spacing)
    surface = pygame.Surface((200, 200))
    draw_potential_field(
        surface, sample_potential(twin_planets, xs, ys), viewport, bounds, render_cfg=RENDER_CFG
    )
    assert tuple(surface.get_at((100, 100)))[:3] == (0, 0, 0)
