from __future__ import annotations

from dataclasses import dataclass

import numpy as np


def _clamp(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(maximum, value))


@dataclass
class ViewportState:
    center: np.ndarray
    zoom: float


class Viewport:
    """Maps system coordinates (y pointing down) to window pixels.

    At zoom 1 a world unit fits the system bounds to the window, so the
    default 1080x720 bounds map one-to-one onto a 1080x720 window.
    """

    def __init__(
        self,
        size: tuple[int, int],
        bounds: tuple[tuple[float, float], tuple[float, float]],
        *,
        min_zoom: float,
        max_zoom: float,
    ) -> None:
        self._size = size
        self._min_zoom = min_zoom
        self._max_zoom = max_zoom
        self._bounds = bounds
        self._state = ViewportState(center=np.zeros(2, dtype=float), zoom=1.0)
        self._pan_anchor: tuple[int, int] | None = None
        self.reset()

    @property
    def size(self) -> tuple[int, int]:
        return self._size

    def update_size(self, size: tuple[int, int]) -> None:
        self._size = size

    @property
    def zoom(self) -> float:
        return self._state.zoom

    @property
    def center(self) -> np.ndarray:
        return self._state.center

    @property
    def scale(self) -> float:
        """Pixels per world unit."""

        (x0, y0), (x1, y1) = self._bounds
        width, height = self._size
        fit = min(width / max(x1 - x0, 1e-9), height / max(y1 - y0, 1e-9))
        return fit * self._state.zoom

    def reset(self, bounds: tuple[tuple[float, float], tuple[float, float]] | None = None) -> None:
        if bounds is not None:
            self._bounds = bounds
        (x0, y0), (x1, y1) = self._bounds
        self._state.center[:] = ((x0 + x1) / 2.0, (y0 + y1) / 2.0)
        self._state.zoom = 1.0

    def zoom_by_factor(self, factor: float) -> None:
        self._state.zoom = _clamp(self._state.zoom * factor, self._min_zoom, self._max_zoom)

    def begin_pan(self, position: tuple[int, int]) -> None:
        self._pan_anchor = position

    def pan(self, position: tuple[int, int]) -> None:
        if self._pan_anchor is None:
            return
        dx = position[0] - self._pan_anchor[0]
        dy = position[1] - self._pan_anchor[1]
        if dx == 0 and dy == 0:
            return
        scale = max(self.scale, 1e-9)
        self._state.center[0] -= dx / scale
        self._state.center[1] -= dy / scale
        self._pan_anchor = position

    def end_pan(self) -> None:
        self._pan_anchor = None

    def world_to_screen(self, x: float, y: float) -> tuple[int, int]:
        width, height = self._size
        cx, cy = self._state.center
        scale = self.scale
        sx = width // 2 + int(round((x - cx) * scale))
        sy = height // 2 + int(round((y - cy) * scale))
        return sx, sy

    def screen_to_world(self, sx: float, sy: float) -> tuple[float, float]:
        width, height = self._size
        cx, cy = self._state.center
        scale = max(self.scale, 1e-9)
        x = (sx - width // 2) / scale + cx
        y = (sy - height // 2) / scale + cy
        return x, y

    def view_rect(self) -> tuple[float, float, float, float]:
        x0, y0 = self.screen_to_world(0, 0)
        x1, y1 = self.screen_to_world(*self._size)
        return x0, y0, x1, y1
