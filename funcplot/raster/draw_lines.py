from __future__ import annotations

from typing import Sequence

import numpy as np

from funcplot.raster.canvas import RGBA, draw_hline, draw_pixel, draw_vline


Point = tuple[float, float]


def draw_polyline(dst: np.ndarray, points: Sequence[Point], color: RGBA, width: int = 1) -> None:
    if len(points) < 2:
        return
    height, w = dst.shape[0], dst.shape[1]
    # Anything further out than the brush radius cannot touch the surface.
    margin = max(1, width)
    bounds = (-margin, -margin, w - 1 + margin, height - 1 + margin)
    for (x0, y0), (x1, y1) in zip(points[:-1], points[1:]):
        clipped = clip_segment(x0, y0, x1, y1, bounds)
        if clipped is None:
            continue
        cx0, cy0, cx1, cy1 = (int(round(v)) for v in clipped)
        _draw_line_segment(dst, cx0, cy0, cx1, cy1, color=color, width=width)


def clip_segment(
    x0: float,
    y0: float,
    x1: float,
    y1: float,
    bounds: tuple[float, float, float, float],
) -> tuple[float, float, float, float] | None:
    """Liang-Barsky clip of a segment against ``(xmin, ymin, xmax, ymax)``; None when fully outside."""
    xmin, ymin, xmax, ymax = bounds
    if not all(np.isfinite((x0, y0, x1, y1))):
        return None
    dx = x1 - x0
    dy = y1 - y0
    t0, t1 = 0.0, 1.0
    for p, q in ((-dx, x0 - xmin), (dx, xmax - x0), (-dy, y0 - ymin), (dy, ymax - y0)):
        if p == 0:
            if q < 0:
                return None
            continue
        t = q / p
        if p < 0:
            if t > t1:
                return None
            t0 = max(t0, t)
        else:
            if t < t0:
                return None
            t1 = min(t1, t)
    return (x0 + t0 * dx, y0 + t0 * dy, x0 + t1 * dx, y0 + t1 * dy)


def _draw_line_segment(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA, width: int) -> None:
    if width <= 1:
        if y0 == y1:
            draw_hline(dst, x0, x1, y0, color)
            return
        if x0 == x1:
            draw_vline(dst, x0, y0, y1, color)
            return

    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    while True:
        _draw_square_brush(dst, x0, y0, color=color, width=width)
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def _draw_square_brush(dst: np.ndarray, x: int, y: int, color: RGBA, width: int) -> None:
    radius = max(0, width // 2)
    for yy in range(y - radius, y + radius + 1):
        for xx in range(x - radius, x + radius + 1):
            draw_pixel(dst, xx, yy, color)
