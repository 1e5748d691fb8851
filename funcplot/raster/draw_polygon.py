from __future__ import annotations

from typing import Sequence

import numpy as np
from PIL import Image, ImageDraw

from funcplot.raster.canvas import RGBA, blend_mask


def fill_polygon(dst: np.ndarray, points: Sequence[tuple[float, float]], color: RGBA) -> None:
    if len(points) < 3:
        return
    pts = np.asarray(points, dtype=np.float64)
    if not np.all(np.isfinite(pts)):
        return
    height, width = dst.shape[0], dst.shape[1]
    x0 = max(0, int(np.floor(pts[:, 0].min())))
    y0 = max(0, int(np.floor(pts[:, 1].min())))
    x1 = min(width, int(np.ceil(pts[:, 0].max())) + 1)
    y1 = min(height, int(np.ceil(pts[:, 1].max())) + 1)
    if x1 <= x0 or y1 <= y0:
        return

    # Rasterize only the clipped bounding box of the polygon.
    mask = Image.new("L", (x1 - x0, y1 - y0), 0)
    ImageDraw.Draw(mask).polygon([(float(px - x0), float(py - y0)) for px, py in pts], fill=255, outline=255)
    blend_mask(dst, x0, y0, np.asarray(mask, dtype=np.uint8), color)
