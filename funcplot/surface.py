from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from PIL import Image

from funcplot.context import RasterContext
from funcplot.errors import ContainerNotFound
from funcplot.raster.canvas import new_canvas


LOGGER = logging.getLogger(__name__)


class Surface:
    """RGBA pixel buffer bound to one container; cleared to transparent on every resize."""

    def __init__(self, width: int, height: int) -> None:
        self.pixels: np.ndarray = new_canvas(1, 1)
        self.resize(width, height)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def resize(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("surface width/height must be > 0")
        self.pixels = new_canvas(width, height)

    def context(self) -> RasterContext:
        return RasterContext(self)

    def to_image(self) -> Image.Image:
        return Image.fromarray(np.ascontiguousarray(self.pixels))

    def save_png(self, path: Path | str) -> Path:
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        self.to_image().save(out, format="PNG")
        return out


class SurfaceRegistry:
    """Resolves container ids to surfaces, creating the surface on first acquire."""

    def __init__(self, container_ids: tuple[str, ...] | list[str] = ()) -> None:
        self._containers: dict[str, Surface | None] = {}
        for container_id in container_ids:
            self.register(container_id)

    def register(self, container_id: str) -> None:
        if not container_id or not isinstance(container_id, str):
            raise ValueError("container id must be a non-empty string")
        self._containers.setdefault(container_id, None)

    def unregister(self, container_id: str) -> None:
        self._containers.pop(container_id, None)

    def __contains__(self, container_id: object) -> bool:
        return container_id in self._containers

    def container_ids(self) -> list[str]:
        return sorted(self._containers)

    def surface(self, container_id: str) -> Surface | None:
        if container_id not in self._containers:
            raise ContainerNotFound(container_id)
        return self._containers[container_id]

    def acquire(self, container_id: str, width: int, height: int) -> RasterContext:
        if container_id not in self._containers:
            raise ContainerNotFound(container_id)
        surface = self._containers[container_id]
        if surface is None:
            LOGGER.debug("creating %dx%d surface for %r", width, height, container_id)
            surface = Surface(width, height)
            self._containers[container_id] = surface
        else:
            # Resizing always resets the pixels, as a canvas does when its size is assigned.
            surface.resize(width, height)
        return surface.context()


DEFAULT_REGISTRY = SurfaceRegistry()
