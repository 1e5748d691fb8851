from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable, Sequence

import numpy as np

from funcplot.errors import PlotDataError
from funcplot.functions import PlottableFunction


def dataset_to_function(
    points: Iterable[Sequence[float]],
    color: str | None = None,
    name: str | None = None,
) -> PlottableFunction:
    """Turn ``(x, y)`` points into a piecewise-linear function.

    The function is undefined (returns None) outside ``[x_first, x_last]`` so the
    plotted line stops where the data stops.
    """
    data = np.asarray([tuple(p) for p in points], dtype=np.float64)
    if data.ndim != 2 or data.shape[1] != 2:
        raise PlotDataError("dataset points must be (x, y) pairs")
    if data.shape[0] < 2:
        raise PlotDataError("dataset needs at least two points")
    if not np.all(np.isfinite(data)):
        raise PlotDataError("dataset contains non-finite values")
    order = np.argsort(data[:, 0], kind="stable")
    xs = data[order, 0]
    ys = data[order, 1]
    if np.any(np.diff(xs) == 0):
        raise PlotDataError("dataset has duplicate x values")

    lo = float(xs[0])
    hi = float(xs[-1])

    def interpolate(x: float) -> float | None:
        if x < lo or x > hi:
            return None
        return float(np.interp(x, xs, ys))

    return PlottableFunction(evaluate=interpolate, color=color, name=name or "dataset")


def load_dataset(path: Path | str, color: str | None = None) -> PlottableFunction:
    """Read a two-column CSV of ``x,y`` rows; a non-numeric first row is taken as a header."""
    source = Path(path)
    rows: list[tuple[float, float]] = []
    with source.open(newline="", encoding="utf-8") as handle:
        for lineno, row in enumerate(csv.reader(handle), start=1):
            if not row or all(not cell.strip() for cell in row):
                continue
            if len(row) < 2:
                raise PlotDataError(f"{source}:{lineno}: expected two columns")
            try:
                rows.append((float(row[0]), float(row[1])))
            except ValueError as exc:
                if lineno == 1 and not rows:
                    continue
                raise PlotDataError(f"{source}:{lineno}: {exc}") from exc
    return dataset_to_function(rows, color=color, name=source.stem)
