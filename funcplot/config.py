from __future__ import annotations

from dataclasses import dataclass, field
import logging
import math
from types import MappingProxyType
from typing import Any, Mapping

from funcplot.errors import ConfigurationError


LOGGER = logging.getLogger(__name__)

DEFAULT_SETTINGS: Mapping[str, Any] = MappingProxyType(
    {
        "Xmin": 0.0,
        "Xmax": 10.0,
        "Ymin": 0.0,
        "Ymax": 3.0,
        "xLabel": "x",
        "yLabel": "y",
        "canvasHeight": 500,
        "canvasWidth": 500,
        "gridDensity": 0,
        "gridVisible": True,
    }
)

# Settings key -> PlotConfig field. Field names are accepted as aliases.
SETTING_FIELDS: Mapping[str, str] = MappingProxyType(
    {
        "Xmin": "x_min",
        "Xmax": "x_max",
        "Ymin": "y_min",
        "Ymax": "y_max",
        "xLabel": "x_label",
        "yLabel": "y_label",
        "canvasHeight": "canvas_height",
        "canvasWidth": "canvas_width",
        "gridDensity": "grid_density",
        "gridVisible": "grid_visible",
    }
)
_FIELD_KEYS = {v: k for k, v in SETTING_FIELDS.items()}


@dataclass(frozen=True)
class PlotConfig:
    x_min: float
    x_max: float
    y_min: float
    y_max: float
    x_label: str
    y_label: str
    canvas_width: int
    canvas_height: int
    grid_density: int = 0
    grid_visible: bool = True
    x_extent: float = field(init=False)
    y_extent: float = field(init=False)
    x_scale: float = field(init=False)
    y_scale: float = field(init=False)

    def __post_init__(self) -> None:
        for name in ("x_min", "x_max", "y_min", "y_max"):
            if not math.isfinite(getattr(self, name)):
                raise ConfigurationError(f"{_FIELD_KEYS[name]} must be finite")
        if self.x_max <= self.x_min:
            raise ConfigurationError(f"Xmax ({self.x_max}) must be greater than Xmin ({self.x_min})")
        if self.y_max <= self.y_min:
            raise ConfigurationError(f"Ymax ({self.y_max}) must be greater than Ymin ({self.y_min})")
        if self.canvas_width <= 0 or self.canvas_height <= 0:
            raise ConfigurationError(
                f"canvas dimensions must be > 0, got {self.canvas_width}x{self.canvas_height}"
            )
        if abs(self.grid_density) > 300:
            raise ConfigurationError(f"gridDensity {self.grid_density} is out of range")
        object.__setattr__(self, "x_extent", self.x_max - self.x_min)
        object.__setattr__(self, "y_extent", self.y_max - self.y_min)
        object.__setattr__(self, "x_scale", self.canvas_width / self.x_extent)
        object.__setattr__(self, "y_scale", self.canvas_height / self.y_extent)
        if not (math.isfinite(self.x_scale) and math.isfinite(self.y_scale)):
            raise ConfigurationError("plot window is too small for the canvas size")

    @property
    def grid_step(self) -> float:
        """Grid spacing in logical units: ``5 ** grid_density``."""
        return 5.0**self.grid_density


def resolve_config(
    settings: Mapping[str, Any] | None = None,
    defaults: Mapping[str, Any] = DEFAULT_SETTINGS,
) -> PlotConfig:
    merged: dict[str, Any] = {SETTING_FIELDS[k]: v for k, v in defaults.items() if k in SETTING_FIELDS}
    for key, value in (settings or {}).items():
        name = SETTING_FIELDS.get(key, key if key in _FIELD_KEYS else None)
        if name is None:
            LOGGER.debug("ignoring unknown plot setting %r", key)
            continue
        merged[name] = value

    missing = sorted(_FIELD_KEYS[name] for name in _FIELD_KEYS if name not in merged)
    if missing:
        raise ConfigurationError(f"missing plot settings: {', '.join(missing)}")

    return PlotConfig(
        x_min=_as_float(merged["x_min"], "Xmin"),
        x_max=_as_float(merged["x_max"], "Xmax"),
        y_min=_as_float(merged["y_min"], "Ymin"),
        y_max=_as_float(merged["y_max"], "Ymax"),
        x_label=str(merged["x_label"]),
        y_label=str(merged["y_label"]),
        canvas_width=_as_int(merged["canvas_width"], "canvasWidth"),
        canvas_height=_as_int(merged["canvas_height"], "canvasHeight"),
        grid_density=_as_int(merged["grid_density"], "gridDensity"),
        grid_visible=bool(merged["grid_visible"]),
    )


def _as_float(value: Any, key: str) -> float:
    if isinstance(value, bool):
        raise ConfigurationError(f"{key} must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise ConfigurationError(f"{key} must be a number, got {value!r}") from exc


def _as_int(value: Any, key: str) -> int:
    number = _as_float(value, key)
    if not number.is_integer():
        raise ConfigurationError(f"{key} must be an integer, got {value!r}")
    return int(number)
