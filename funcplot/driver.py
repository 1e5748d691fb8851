from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

import numpy as np

from funcplot.axes import draw_axes
from funcplot.config import PlotConfig, resolve_config
from funcplot.curve import draw_curve
from funcplot.functions import Evaluator, PlottableFunction, as_plottable
from funcplot.grid import draw_grid
from funcplot.surface import DEFAULT_REGISTRY, SurfaceRegistry
from funcplot.transform import PlotTransform


LOGGER = logging.getLogger(__name__)


def render(
    container_id: str,
    settings: Mapping[str, Any] | None = None,
    functions: Sequence[PlottableFunction | Evaluator] = (),
    *,
    provider: SurfaceRegistry | None = None,
) -> None:
    """Plot ``functions`` on the surface bound to ``container_id``.

    Order is fixed: grid, axes, then each function as given, so later curves
    paint over earlier ones. Configuration and container errors propagate;
    failing samples break the curve and are logged.
    """
    config = resolve_config(settings)
    plottables = [as_plottable(fn) for fn in functions]
    registry = provider if provider is not None else DEFAULT_REGISTRY
    ctx = registry.acquire(container_id, config.canvas_width, config.canvas_height)
    LOGGER.debug(
        "rendering %d function(s) into %r: x=[%s, %s] y=[%s, %s] %dx%d",
        len(plottables),
        container_id,
        config.x_min,
        config.x_max,
        config.y_min,
        config.y_max,
        config.canvas_width,
        config.canvas_height,
    )
    PlotTransform(config).install(ctx)
    if config.grid_visible:
        draw_grid(ctx, config)
    draw_axes(ctx, config)
    for fn in plottables:
        draw_curve(ctx, config, fn)


def render_to_array(
    settings: Mapping[str, Any] | None = None,
    functions: Sequence[PlottableFunction | Evaluator] = (),
    *,
    container_id: str = "plot",
) -> np.ndarray:
    """Render into a private registry and return a copy of the RGBA pixels."""
    registry = SurfaceRegistry([container_id])
    render(container_id, settings, functions, provider=registry)
    surface = registry.surface(container_id)
    assert surface is not None
    return surface.pixels.copy()


def describe(config: PlotConfig) -> dict[str, Any]:
    transform = PlotTransform(config)
    return {
        "window": (config.x_min, config.x_max, config.y_min, config.y_max),
        "canvas": (config.canvas_width, config.canvas_height),
        "scale": (config.x_scale, config.y_scale),
        "origin_px": transform.forward(0.0, 0.0),
        "grid_step": config.grid_step if config.grid_visible else None,
    }
