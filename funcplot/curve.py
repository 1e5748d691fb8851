from __future__ import annotations

import logging
from typing import Sequence

from funcplot.config import PlotConfig
from funcplot.context import DrawingContext, saved_state
from funcplot.functions import (
    DEFAULT_STROKE_COLOR,
    Evaluator,
    PlottableFunction,
    Sample,
    SampleFailure,
    SampleGap,
    SampleValue,
    as_plottable,
)
from funcplot.transform import PlotTransform


LOGGER = logging.getLogger(__name__)

Segment = list[tuple[float, float]]


def sample_curve(fn: PlottableFunction | Evaluator, config: PlotConfig) -> list[Sample]:
    """Evaluate ``fn`` once per pixel column, ``canvas_width + 1`` samples in total."""
    fn = as_plottable(fn)
    transform = PlotTransform(config)
    return [fn.sample(transform.pixel_to_x(float(i))) for i in range(config.canvas_width + 1)]


def clamp_y(y: float, config: PlotConfig) -> float:
    # Keeps runaway values one unit outside the window instead of at huge pixel offsets.
    if y < config.y_min:
        return config.y_min - 1.0
    if y > config.y_max:
        return config.y_max + 1.0
    return y


def build_segments(samples: Sequence[Sample], config: PlotConfig) -> list[Segment]:
    """Group samples into polylines: a gap or a failed evaluation ends the current one."""
    segments: list[Segment] = []
    current: Segment = []
    for sample in samples:
        if isinstance(sample, SampleValue):
            current.append((sample.x, clamp_y(sample.y, config)))
        elif isinstance(sample, (SampleGap, SampleFailure)):
            if current:
                segments.append(current)
                current = []
        else:
            raise TypeError(f"unexpected sample type: {type(sample).__name__}")
    if current:
        segments.append(current)
    return segments


def draw_curve(ctx: DrawingContext, config: PlotConfig, fn: PlottableFunction | Evaluator) -> None:
    """Sample and stroke ``fn`` on a context with the plot transform installed."""
    fn = as_plottable(fn)
    samples = sample_curve(fn, config)
    _log_failures(fn, samples)
    segments = build_segments(samples, config)

    with saved_state(ctx):
        try:
            ctx.stroke_style = fn.stroke_color
        except ValueError:
            LOGGER.warning("function %s has unusable color %r, using %s", fn.label, fn.color, DEFAULT_STROKE_COLOR)
            ctx.stroke_style = DEFAULT_STROKE_COLOR
        ctx.line_width = 1
        ctx.begin_path()
        for segment in segments:
            x0, y0 = segment[0]
            ctx.move_to(x0, y0)
            for x, y in segment[1:]:
                ctx.line_to(x, y)
        ctx.stroke()


def _log_failures(fn: PlottableFunction, samples: Sequence[Sample]) -> None:
    failures = [s for s in samples if isinstance(s, SampleFailure)]
    if not failures:
        return
    first = failures[0]
    LOGGER.warning("function %s failed at x=%r: %r", fn.label, first.x, first.error.cause)
    for failure in failures[1:]:
        LOGGER.debug("function %s failed at x=%r: %r", fn.label, failure.x, failure.error.cause)
    LOGGER.info("function %s: skipped %d of %d samples", fn.label, len(failures), len(samples))
