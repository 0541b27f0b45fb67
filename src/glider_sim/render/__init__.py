"""Rendering helpers for the glider viewer."""

from .camera import Viewport
from .draw import (
    downsample_points,
    draw_arrow,
    draw_hud,
    draw_planets,
    draw_potential_field,
    draw_start_marker,
    draw_trajectory,
    draw_vector_field,
    get_text_surface,
    planet_radius,
    potential_colors,
    potential_overlay_cells,
)

__all__ = [
    "Viewport",
    "downsample_points",
    "draw_arrow",
    "draw_hud",
    "draw_planets",
    "draw_potential_field",
    "draw_start_marker",
    "draw_trajectory",
    "draw_vector_field",
    "get_text_surface",
    "planet_radius",
    "potential_colors",
    "potential_overlay_cells",
]
