from funcplot.config import DEFAULT_SETTINGS, PlotConfig, resolve_config
from funcplot.context import DrawingContext, RasterContext, saved_state
from funcplot.driver import render, render_to_array
from funcplot.errors import ConfigurationError, ContainerNotFound, FuncPlotError, PlotDataError, SampleEvaluationError
from funcplot.functions import PlottableFunction, SampleFailure, SampleGap, SampleValue, as_plottable
from funcplot.surface import DEFAULT_REGISTRY, Surface, SurfaceRegistry
from funcplot.tools import dataset_to_function, load_dataset
from funcplot.transform import PlotTransform

__all__ = [
    "ConfigurationError",
    "ContainerNotFound",
    "DEFAULT_REGISTRY",
    "DEFAULT_SETTINGS",
    "DrawingContext",
    "FuncPlotError",
    "PlotConfig",
    "PlotDataError",
    "PlotTransform",
    "PlottableFunction",
    "RasterContext",
    "SampleEvaluationError",
    "SampleFailure",
    "SampleGap",
    "SampleValue",
    "Surface",
    "SurfaceRegistry",
    "as_plottable",
    "dataset_to_function",
    "load_dataset",
    "render",
    "render_to_array",
    "resolve_config",
    "saved_state",
]
