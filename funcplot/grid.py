from __future__ import annotations

import logging
import math

from funcplot.config import PlotConfig
from funcplot.context import DrawingContext, saved_state


LOGGER = logging.getLogger(__name__)

GRID_COLOR = "#CCF"


def grid_lines(lo: float, hi: float, step: float) -> list[float]:
    """Multiples of ``step`` from the first one at or below ``lo`` up to, excluding, ``hi``."""
    if step <= 0 or not math.isfinite(step):
        raise ValueError("grid step must be a positive finite number")
    # Python's modulo follows the divisor's sign, so ``start`` never exceeds ``lo``.
    start = lo - (lo % step)
    lines: list[float] = []
    i = 0
    while True:
        value = start + i * step
        if value >= hi:
            return lines
        lines.append(value)
        i += 1


def draw_grid(ctx: DrawingContext, config: PlotConfig) -> None:
    """Stroke the background grid in logical units on a context with the plot transform installed."""
    if not config.grid_visible:
        return
    step = config.grid_step
    # Each direction is skipped on its own once its lines would be under a pixel apart.
    vertical = _visible_step(step, config.x_scale, "vertical")
    horizontal = _visible_step(step, config.y_scale, "horizontal")
    if not (vertical or horizontal):
        return
    with saved_state(ctx):
        ctx.stroke_style = GRID_COLOR
        if vertical:
            ctx.begin_path()
            for x in grid_lines(config.x_min, config.x_max, step):
                ctx.move_to(x, config.y_min)
                ctx.line_to(x, config.y_max)
            ctx.stroke()

        if horizontal:
            ctx.begin_path()
            for y in grid_lines(config.y_min, config.y_max, step):
                ctx.move_to(config.x_min, y)
                ctx.line_to(config.x_max, y)
            ctx.stroke()


def _visible_step(step: float, scale: float, direction: str) -> bool:
    if step * scale < 1.0:
        LOGGER.warning("%s grid step %g is finer than one pixel, lines skipped", direction, step)
        return False
    return True
