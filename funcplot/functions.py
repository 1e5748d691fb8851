from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Callable, Union

from funcplot.errors import SampleEvaluationError


DEFAULT_STROKE_COLOR = "#000"

Evaluator = Callable[[float], Union[float, None]]


@dataclass(frozen=True)
class SampleValue:
    x: float
    y: float


@dataclass(frozen=True)
class SampleGap:
    """The function has no value at ``x``; the polyline breaks here."""

    x: float


@dataclass(frozen=True)
class SampleFailure:
    """Evaluating the function at ``x`` raised; the sample is dropped and the polyline breaks."""

    x: float
    error: SampleEvaluationError


Sample = Union[SampleValue, SampleGap, SampleFailure]


@dataclass(frozen=True)
class PlottableFunction:
    evaluate: Evaluator
    color: str | None = None
    name: str | None = None

    @property
    def label(self) -> str:
        if self.name:
            return self.name
        return getattr(self.evaluate, "__name__", repr(self.evaluate))

    @property
    def stroke_color(self) -> str:
        return self.color or DEFAULT_STROKE_COLOR

    def sample(self, x: float) -> Sample:
        try:
            y = self.evaluate(x)
        except Exception as exc:
            return SampleFailure(x=x, error=SampleEvaluationError(self.label, x, exc))
        if y is None:
            return SampleGap(x=x)
        try:
            value = float(y)
        except (TypeError, ValueError, OverflowError) as exc:
            return SampleFailure(x=x, error=SampleEvaluationError(self.label, x, exc))
        if math.isnan(value):
            return SampleGap(x=x)
        return SampleValue(x=x, y=value)


def as_plottable(fn: PlottableFunction | Evaluator) -> PlottableFunction:
    if isinstance(fn, PlottableFunction):
        return fn
    if not callable(fn):
        raise TypeError(f"plotted functions must be callable, got {type(fn).__name__}")
    return PlottableFunction(evaluate=fn)
