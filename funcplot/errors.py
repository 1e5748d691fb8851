from __future__ import annotations


class FuncPlotError(Exception):
    """Base class for every error raised by funcplot."""


class ConfigurationError(FuncPlotError, ValueError):
    """The resolved settings describe a degenerate window or canvas."""


class ContainerNotFound(FuncPlotError, LookupError):
    def __init__(self, container_id: str) -> None:
        super().__init__(f"no drawing container registered as {container_id!r}")
        self.container_id = container_id


class SampleEvaluationError(FuncPlotError):
    """A plotted function raised while being sampled at ``x``.

    Never propagated out of a render; it is carried by ``SampleFailure`` and logged.
    """

    def __init__(self, function_name: str, x: float, cause: BaseException) -> None:
        super().__init__(f"{function_name} failed at x={x!r}: {cause!r}")
        self.function_name = function_name
        self.x = x
        self.cause = cause


class PlotDataError(FuncPlotError, ValueError):
    """Input data cannot be turned into a plottable function."""
