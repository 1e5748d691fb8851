from __future__ import annotations

from contextlib import redirect_stdout
import io
import json
from pathlib import Path
import tempfile
import unittest
from unittest import mock

import numpy as np
from PIL import Image

from funcplot import (
    ConfigurationError,
    ContainerNotFound,
    PlottableFunction,
    RasterContext,
    Surface,
    SurfaceRegistry,
    render,
    render_to_array,
)
import main as cli


SCENARIO = {"Xmin": -5, "Xmax": 5, "Ymin": -5, "Ymax": 5, "canvasWidth": 250, "canvasHeight": 250}


def _rgba(pixels: np.ndarray, x: int, y: int) -> tuple[int, ...]:
    return tuple(int(v) for v in pixels[y, x])


class RenderScenarioTests(unittest.TestCase):
    def setUp(self) -> None:
        self.registry = SurfaceRegistry(["c"])
        render(
            "c",
            SCENARIO,
            [lambda x: x, PlottableFunction(evaluate=lambda x: x * x, color="#c33")],
            provider=self.registry,
        )
        surface = self.registry.surface("c")
        assert surface is not None
        self.pixels = surface.pixels

    def test_surface_has_configured_size(self) -> None:
        self.assertEqual(self.pixels.shape, (250, 250, 4))

    def test_axes_cross_at_canvas_center(self) -> None:
        axis = (136, 136, 136, 255)
        self.assertEqual(_rgba(self.pixels, 40, 125), axis)
        self.assertEqual(_rgba(self.pixels, 125, 40), axis)
        self.assertEqual(_rgba(self.pixels, 125, 210), axis)

    def test_both_curves_are_stroked_in_their_colors(self) -> None:
        # y = x passes pixel (50, 200); y = x*x passes (75, 25) at x = -2.
        self.assertEqual(_rgba(self.pixels, 50, 200), (0, 0, 0, 255))
        self.assertEqual(_rgba(self.pixels, 75, 25), (204, 51, 51, 255))

    def test_grid_is_drawn_under_everything(self) -> None:
        self.assertEqual(_rgba(self.pixels, 50, 10), (204, 204, 255, 255))

    def test_arrowheads_are_filled(self) -> None:
        self.assertEqual(_rgba(self.pixels, 246, 125), (0, 0, 0, 255))
        self.assertEqual(_rgba(self.pixels, 125, 4), (0, 0, 0, 255))


class RenderBehaviourTests(unittest.TestCase):
    def test_hidden_grid_leaves_background_transparent(self) -> None:
        pixels = render_to_array(dict(SCENARIO, gridVisible=False), [])
        self.assertEqual(int(pixels[10, 50, 3]), 0)

    def test_later_curves_paint_over_earlier_ones(self) -> None:
        pixels = render_to_array(
            SCENARIO,
            [PlottableFunction(evaluate=lambda x: 2.0, color="red"), PlottableFunction(evaluate=lambda x: 2.0, color="blue")],
        )
        self.assertEqual(_rgba(pixels, 30, 75), (0, 0, 255, 255))

    def test_failing_function_does_not_abort_render(self) -> None:
        def reciprocal(x: float) -> float:
            return 1 / x

        with self.assertLogs("funcplot.curve", level="WARNING"):
            pixels = render_to_array({"Xmin": -1, "Xmax": 1, "Ymin": -5, "Ymax": 5}, [reciprocal, lambda x: 0.5])
        self.assertEqual(pixels.shape, (500, 500, 4))

    def test_unknown_container_propagates(self) -> None:
        with self.assertRaises(ContainerNotFound) as caught:
            render("missing", SCENARIO, [], provider=SurfaceRegistry())
        self.assertEqual(caught.exception.container_id, "missing")
        self.assertIsInstance(caught.exception, LookupError)

    def test_configuration_error_propagates_before_surface_is_created(self) -> None:
        registry = SurfaceRegistry(["c"])
        with self.assertRaises(ConfigurationError):
            render("c", {"Xmin": 3, "Xmax": 1}, [], provider=registry)
        self.assertIsNone(registry.surface("c"))

    def test_non_callable_function_is_rejected(self) -> None:
        with self.assertRaises(TypeError):
            render("c", SCENARIO, [42], provider=SurfaceRegistry(["c"]))  # type: ignore[list-item]

    def test_driver_acquires_surface_with_configured_size(self) -> None:
        provider = mock.Mock(spec=SurfaceRegistry)
        provider.acquire.return_value = RasterContext(Surface(320, 200))
        render("host", {"canvasWidth": 320, "canvasHeight": 200}, [lambda x: 1.0], provider=provider)
        provider.acquire.assert_called_once_with("host", 320, 200)

    def test_default_registry_is_used_without_provider(self) -> None:
        registry = SurfaceRegistry(["default-c"])
        with mock.patch("funcplot.driver.DEFAULT_REGISTRY", registry):
            render("default-c", {"canvasWidth": 20, "canvasHeight": 10}, [])
        surface = registry.surface("default-c")
        assert surface is not None
        self.assertEqual((surface.width, surface.height), (20, 10))


class SurfaceRegistryTests(unittest.TestCase):
    def test_acquire_reuses_and_resizes_surface(self) -> None:
        registry = SurfaceRegistry(["c"])
        first = registry.acquire("c", 30, 20)
        first.fill_style = "red"
        first.begin_path()
        first.move_to(0.0, 0.0)
        first.line_to(29.0, 0.0)
        first.line_to(29.0, 19.0)
        first.close_path()
        first.fill()
        self.assertTrue(np.any(first.surface.pixels))

        second = registry.acquire("c", 40, 10)
        self.assertIs(second.surface, first.surface)
        self.assertEqual(second.surface.pixels.shape, (10, 40, 4))
        self.assertFalse(np.any(second.surface.pixels))
        self.assertEqual(second.get_transform(), (1.0, 0.0, 0.0, 1.0, 0.0, 0.0))

    def test_register_and_lookup(self) -> None:
        registry = SurfaceRegistry()
        self.assertNotIn("a", registry)
        registry.register("a")
        self.assertIn("a", registry)
        self.assertEqual(registry.container_ids(), ["a"])
        registry.unregister("a")
        with self.assertRaises(ContainerNotFound):
            registry.acquire("a", 10, 10)
        with self.assertRaises(ValueError):
            registry.register("")

    def test_surface_rejects_non_positive_size(self) -> None:
        with self.assertRaises(ValueError):
            Surface(0, 10)

    def test_save_png_round_trip(self) -> None:
        registry = SurfaceRegistry(["c"])
        render("c", SCENARIO, [lambda x: x], provider=registry)
        surface = registry.surface("c")
        assert surface is not None
        with tempfile.TemporaryDirectory() as tmp:
            path = surface.save_png(Path(tmp) / "nested" / "plot.png")
            with Image.open(path) as image:
                self.assertEqual(image.size, (250, 250))
                self.assertEqual(image.mode, "RGBA")
                self.assertTrue(np.array_equal(np.asarray(image), surface.pixels))


class CommandLineTests(unittest.TestCase):
    def test_render_command_writes_png_and_summary(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            data = Path(tmp) / "points.csv"
            data.write_text("x,y\n-2,0\n0,3\n2,1\n", encoding="utf-8")
            out = Path(tmp) / "plot.png"
            buf = io.StringIO()
            with redirect_stdout(buf):
                cli.main(
                    [
                        "render",
                        "--out",
                        str(out),
                        "--xmin",
                        "-5",
                        "--xmax",
                        "5",
                        "--ymin",
                        "-5",
                        "--ymax",
                        "5",
                        "--width",
                        "250",
                        "--height",
                        "250",
                        "--function",
                        "math:sin@red",
                        "--dataset",
                        f"{data}@#0a0",
                    ]
                )
            summary = json.loads(buf.getvalue())
            self.assertTrue(out.exists())
            self.assertEqual(summary["origin_px"], [125.0, 125.0])
            self.assertEqual(summary["functions"], ["math:sin", "points"])
            with Image.open(out) as image:
                self.assertEqual(image.size, (250, 250))

    def test_demo_command(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            out = Path(tmp) / "demo.png"
            with redirect_stdout(io.StringIO()):
                cli.main(["demo", "--out", str(out)])
            with Image.open(out) as image:
                self.assertEqual(image.size, (250, 250))

    def test_bad_function_spec_exits(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(SystemExit):
                cli.main(["render", "--out", str(Path(tmp) / "x.png"), "--function", "math.sin"])


if __name__ == "__main__":
    unittest.main()
