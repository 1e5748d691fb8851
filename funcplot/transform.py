from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from funcplot.config import PlotConfig
from funcplot.context import DrawingContext


@dataclass(frozen=True)
class PlotTransform:
    """Maps logical plot coordinates (y up) to surface pixels (origin top-left, y down).

    ``px = (x - x_min) * x_scale`` and ``py = canvas_height - (y - y_min) * y_scale``.
    """

    config: PlotConfig

    def forward(self, x: float, y: float) -> tuple[float, float]:
        cfg = self.config
        return ((x - cfg.x_min) * cfg.x_scale, cfg.canvas_height - (y - cfg.y_min) * cfg.y_scale)

    def inverse(self, px: float, py: float) -> tuple[float, float]:
        cfg = self.config
        return (cfg.x_min + px / cfg.x_scale, cfg.y_min + (cfg.canvas_height - py) / cfg.y_scale)

    def pixel_to_x(self, px: float) -> float:
        return self.config.x_min + px / self.config.x_scale

    def map_to_pixels(self, x: np.ndarray, y: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        cfg = self.config
        px = (np.asarray(x, dtype=np.float64) - cfg.x_min) * cfg.x_scale
        py = cfg.canvas_height - (np.asarray(y, dtype=np.float64) - cfg.y_min) * cfg.y_scale
        return px, py

    def install(self, ctx: DrawingContext) -> None:
        """Compose the logical-to-pixel mapping onto ``ctx`` so renderers draw in plot units."""
        cfg = self.config
        ctx.scale(1.0, -1.0)
        ctx.translate(0.0, -float(cfg.canvas_height))
        ctx.scale(cfg.x_scale, cfg.y_scale)
        ctx.translate(-cfg.x_min, -cfg.y_min)

    def upright_text(self, ctx: DrawingContext, x: float, y: float) -> None:
        """Move the origin to logical (x, y) and return to unflipped pixel units for text.

        Must be called inside a saved state on a context where :meth:`install` ran.
        """
        cfg = self.config
        ctx.translate(x, y)
        ctx.scale(1.0 / cfg.x_scale, -1.0 / cfg.y_scale)
