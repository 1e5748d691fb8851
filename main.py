from __future__ import annotations

import argparse
import importlib
import json
import logging
from pathlib import Path
from typing import Any

from funcplot import PlottableFunction, SurfaceRegistry, load_dataset, render, resolve_config
from funcplot.driver import describe


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="funcplot")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("render", help="Plot functions and datasets into a PNG file.")
    run.add_argument("--out", type=Path, required=True)
    run.add_argument("--xmin", type=float, default=None)
    run.add_argument("--xmax", type=float, default=None)
    run.add_argument("--ymin", type=float, default=None)
    run.add_argument("--ymax", type=float, default=None)
    run.add_argument("--width", type=int, default=None, help="Canvas width in pixels (default 500).")
    run.add_argument("--height", type=int, default=None, help="Canvas height in pixels (default 500).")
    run.add_argument("--grid-density", type=int, default=None, help="Grid spacing is 5**density units.")
    run.add_argument("--no-grid", action="store_true")
    run.add_argument("--x-label", default=None)
    run.add_argument("--y-label", default=None)
    run.add_argument(
        "--function",
        action="append",
        default=[],
        metavar="MODULE:ATTR[@COLOR]",
        help="Importable callable to plot, e.g. math:sin@red. Repeatable.",
    )
    run.add_argument(
        "--dataset",
        action="append",
        default=[],
        metavar="CSV[@COLOR]",
        help="Two-column x,y CSV plotted piecewise-linearly. Repeatable.",
    )

    demo = sub.add_parser("demo", help="Render x and x**2 over [-5, 5] into a 250x250 PNG.")
    demo.add_argument("--out", type=Path, default=Path("demo.png"))
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "render":
        settings = _settings_from_args(args)
        functions = [_load_function(spec) for spec in args.function]
        functions.extend(_load_dataset_spec(spec) for spec in args.dataset)
        _render_png(args.out, settings, functions)
        return

    if args.command == "demo":
        settings = {"Xmin": -5, "Xmax": 5, "Ymin": -5, "Ymax": 5, "canvasWidth": 250, "canvasHeight": 250}
        functions = [
            PlottableFunction(evaluate=lambda x: x, name="x"),
            PlottableFunction(evaluate=lambda x: x * x, color="#c33", name="x2"),
        ]
        _render_png(args.out, settings, functions)
        return

    raise RuntimeError(f"unsupported command: {args.command}")


def _render_png(out: Path, settings: dict[str, Any], functions: list[PlottableFunction]) -> None:
    registry = SurfaceRegistry(["cli"])
    render("cli", settings, functions, provider=registry)
    surface = registry.surface("cli")
    assert surface is not None
    path = surface.save_png(out)
    summary = describe(resolve_config(settings))
    summary["functions"] = [fn.label for fn in functions]
    summary["out"] = str(path)
    print(json.dumps(summary, indent=2, sort_keys=True))


def _settings_from_args(args: argparse.Namespace) -> dict[str, Any]:
    pairs = {
        "Xmin": args.xmin,
        "Xmax": args.xmax,
        "Ymin": args.ymin,
        "Ymax": args.ymax,
        "canvasWidth": args.width,
        "canvasHeight": args.height,
        "gridDensity": args.grid_density,
        "xLabel": args.x_label,
        "yLabel": args.y_label,
    }
    settings = {k: v for k, v in pairs.items() if v is not None}
    if args.no_grid:
        settings["gridVisible"] = False
    return settings


def _split_color(spec: str) -> tuple[str, str | None]:
    target, sep, color = spec.partition("@")
    return target, (color if sep and color else None)


def _load_function(spec: str) -> PlottableFunction:
    target, color = _split_color(spec)
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise SystemExit(f"--function expects MODULE:ATTR[@COLOR], got {spec!r}")
    obj: Any = importlib.import_module(module_name)
    for part in attr.split("."):
        obj = getattr(obj, part)
    if not callable(obj):
        raise SystemExit(f"{target} is not callable")
    return PlottableFunction(evaluate=obj, color=color, name=target)


def _load_dataset_spec(spec: str) -> PlottableFunction:
    path, color = _split_color(spec)
    return load_dataset(Path(path), color=color)


if __name__ == "__main__":
    main()
