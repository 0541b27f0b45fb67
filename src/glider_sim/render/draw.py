from __future__ import annotations

import math
from collections import OrderedDict
from typing import Iterable, Sequence, TYPE_CHECKING

import numpy as np
import pygame

from .camera import Viewport

if TYPE_CHECKING:  # pragma: no cover
    from glider_sim.core.config import RenderCfg
    from glider_sim.core.fields import FieldGrid, ScalarGrid
    from glider_sim.core.model import PlanetarySystem
    from glider_sim.core.vector import Vector2


Color = tuple[int, int, int] | tuple[int, int, int, int]

_TEXT_CACHE_MAX_SIZE = 128
_TEXT_CACHE: OrderedDict[tuple[int, str, Color], pygame.Surface] = OrderedDict()


def get_text_surface(font: pygame.font.Font, text: str, color: Color) -> pygame.Surface:
    """Rendered text, cached by font, string and colour."""

    key = (id(font), text, color)
    cached = _TEXT_CACHE.get(key)
    if cached is not None:
        _TEXT_CACHE.move_to_end(key)
        return cached
    rendered = font.render(text, True, color)
    _TEXT_CACHE[key] = rendered
    if len(_TEXT_CACHE) > _TEXT_CACHE_MAX_SIZE:
        _TEXT_CACHE.popitem(last=False)
    return rendered


def planet_radius(mass: float, scale: float, *, render_cfg: RenderCfg) -> int:
    radius = math.sqrt(max(mass, 0.0)) * render_cfg.planet_radius_scale * scale
    return max(render_cfg.planet_min_radius, int(radius))


def draw_planets(
    surface: pygame.Surface,
    system: PlanetarySystem,
    viewport: Viewport,
    *,
    render_cfg: RenderCfg,
) -> None:
    for planet in system.planets:
        center = viewport.world_to_screen(planet.position.x, planet.position.y)
        radius = planet_radius(planet.mass, viewport.scale, render_cfg=render_cfg)
        color = render_cfg.planet_ccw_color if planet.ccw else render_cfg.planet_color
        pygame.draw.circle(surface, color, center, radius)


def downsample_points(
    points: Sequence[tuple[float, float]], max_points: int
) -> list[tuple[float, float]]:
    if len(points) <= max_points:
        return list(points)
    step = max(1, math.ceil(len(points) / max_points))
    sampled = list(points[::step])
    if sampled[-1] != points[-1]:
        sampled.append(points[-1])
    return sampled


def draw_trajectory(
    surface: pygame.Surface,
    trajectory: Sequence[Vector2],
    viewport: Viewport,
    color: Color,
    *,
    width: int = 1,
    max_points: int = 4_000,
) -> None:
    if len(trajectory) < 2:
        return
    world = downsample_points([(p.x, p.y) for p in trajectory], max_points)
    points = [viewport.world_to_screen(x, y) for x, y in world]
    if width <= 1:
        pygame.draw.aalines(surface, color, False, points)
    else:
        pygame.draw.lines(surface, color, False, points, width)
        pygame.draw.aalines(surface, color, False, points)


def draw_start_marker(
    surface: pygame.Surface,
    position: Vector2,
    viewport: Viewport,
    *,
    render_cfg: RenderCfg,
) -> None:
    center = viewport.world_to_screen(position.x, position.y)
    pygame.draw.circle(surface, render_cfg.start_marker_color, center, render_cfg.start_marker_radius)


def draw_arrow(
    surface: pygame.Surface,
    start: tuple[int, int],
    end: tuple[int, int],
    color: Color,
    *,
    head_length: int,
    head_angle_deg: int,
) -> None:
    pygame.draw.line(surface, color, start, end, 1)
    angle = math.atan2(end[1] - start[1], end[0] - start[0])
    head_angle = math.radians(head_angle_deg)
    left = (
        int(end[0] - head_length * math.cos(angle - head_angle)),
        int(end[1] - head_length * math.sin(angle - head_angle)),
    )
    right = (
        int(end[0] - head_length * math.cos(angle + head_angle)),
        int(end[1] - head_length * math.sin(angle + head_angle)),
    )
    pygame.draw.polygon(surface, color, [end, left, right])


def draw_vector_field(
    surface: pygame.Surface,
    grid: FieldGrid,
    viewport: Viewport,
    *,
    render_cfg: RenderCfg,
) -> None:
    """Unit arrows showing field direction; magnitudes span too many decades to draw."""

    u, v = grid.normalized()
    length = render_cfg.overlay_arrow_length
    for j, y in enumerate(grid.ys):
        for i, x in enumerate(grid.xs):
            du, dv = u[j, i], v[j, i]
            if du == 0.0 and dv == 0.0:
                continue
            start = viewport.world_to_screen(x, y)
            end = (int(start[0] + du * length), int(start[1] + dv * length))
            draw_arrow(
                surface,
                start,
                end,
                render_cfg.overlay_arrow_color,
                head_length=render_cfg.overlay_arrow_head_length,
                head_angle_deg=render_cfg.overlay_arrow_head_angle_deg,
            )


def potential_colors(values: np.ndarray) -> np.ndarray:
    """Map potential samples to an RGB ramp, deep wells brightest."""

    depth = np.log1p(np.clip(-np.nan_to_num(values, nan=0.0, neginf=-1e12), 0.0, None))
    top = depth.max() if depth.size else 0.0
    level = depth / top if top > 0.0 else np.zeros_like(depth)
    rgb = np.empty(values.shape + (3,), dtype=np.uint8)
    rgb[..., 0] = (40 + 200 * level).astype(np.uint8)
    rgb[..., 1] = (30 + 120 * level**2).astype(np.uint8)
    rgb[..., 2] = (90 + 60 * (1.0 - level)).astype(np.uint8)
    return rgb


def _nearest_cell(axis: np.ndarray, coords: np.ndarray) -> np.ndarray:
    if len(axis) < 2:
        return np.zeros(len(coords), dtype=int)
    index = np.rint((coords - axis[0]) / (axis[1] - axis[0])).astype(int)
    return np.clip(index, 0, len(axis) - 1)


def potential_overlay_cells(
    grid: ScalarGrid,
    viewport: Viewport,
    area: pygame.Rect,
    step: int,
) -> np.ndarray:
    """Colours under the screen rectangle ``area``, one sample every ``step`` pixels.

    The result has shape ``(rows, cols, 3)`` with at most ``area / step``
    samples per side, however far the view is zoomed in.
    """

    sx = np.arange(area.left, area.right, step) + step / 2.0
    sy = np.arange(area.top, area.bottom, step) + step / 2.0
    wx, _ = viewport.screen_to_world(sx, np.zeros_like(sx))
    _, wy = viewport.screen_to_world(np.zeros_like(sy), sy)
    rows = _nearest_cell(grid.ys, wy)
    cols = _nearest_cell(grid.xs, wx)
    return potential_colors(grid.values)[np.ix_(rows, cols)]


def draw_potential_field(
    surface: pygame.Surface,
    grid: ScalarGrid,
    viewport: Viewport,
    bounds: tuple[tuple[float, float], tuple[float, float]],
    *,
    render_cfg: RenderCfg,
) -> None:
    if grid.values.size == 0:
        return
    (x0, y0), (x1, y1) = bounds
    left, top = viewport.world_to_screen(x0, y0)
    right, bottom = viewport.world_to_screen(x1, y1)
    area = pygame.Rect(left, top, right - left, bottom - top).clip(surface.get_rect())
    if area.width == 0 or area.height == 0:
        return
    cells = potential_overlay_cells(grid, viewport, area, max(1, render_cfg.potential_overlay_step))
    # surfarray wants (width, height, 3)
    small = pygame.surfarray.make_surface(np.ascontiguousarray(cells.transpose(1, 0, 2)))
    layer = pygame.transform.smoothscale(small, area.size)
    layer.set_alpha(render_cfg.potential_overlay_alpha)
    surface.blit(layer, area.topleft)


def draw_hud(
    surface: pygame.Surface,
    font: pygame.font.Font,
    lines: Iterable[str],
    *,
    render_cfg: RenderCfg,
    margin: int = 10,
) -> None:
    y = margin
    for line in lines:
        text = get_text_surface(font, line, render_cfg.hud_text_color)
        surface.blit(text, (margin, y))
        y += text.get_height() + 2
