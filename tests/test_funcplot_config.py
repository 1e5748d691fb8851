from __future__ import annotations

import unittest

from funcplot import DEFAULT_SETTINGS, ConfigurationError, PlotConfig, resolve_config


class ResolveConfigTests(unittest.TestCase):
    def test_defaults_fill_every_field(self) -> None:
        cfg = resolve_config()
        self.assertEqual((cfg.x_min, cfg.x_max, cfg.y_min, cfg.y_max), (0.0, 10.0, 0.0, 3.0))
        self.assertEqual((cfg.x_label, cfg.y_label), ("x", "y"))
        self.assertEqual((cfg.canvas_width, cfg.canvas_height), (500, 500))
        self.assertEqual(cfg.grid_density, 0)
        self.assertTrue(cfg.grid_visible)

    def test_derived_geometry(self) -> None:
        cfg = resolve_config({"Xmin": -5, "Xmax": 5, "Ymin": -2, "Ymax": 2, "canvasWidth": 250, "canvasHeight": 100})
        self.assertEqual(cfg.x_extent, 10.0)
        self.assertEqual(cfg.y_extent, 4.0)
        self.assertEqual(cfg.x_scale, 25.0)
        self.assertEqual(cfg.y_scale, 25.0)

    def test_user_settings_override_defaults_shallowly(self) -> None:
        cfg = resolve_config({"Ymax": 7, "xLabel": "time", "gridVisible": False})
        self.assertEqual(cfg.y_max, 7.0)
        self.assertEqual(cfg.x_label, "time")
        self.assertFalse(cfg.grid_visible)
        self.assertEqual(cfg.x_max, 10.0)

    def test_field_names_are_accepted_as_aliases(self) -> None:
        cfg = resolve_config({"x_min": 1, "canvas_width": 300})
        self.assertEqual(cfg.x_min, 1.0)
        self.assertEqual(cfg.canvas_width, 300)

    def test_unknown_settings_are_ignored(self) -> None:
        cfg = resolve_config({"colour": "blue", "Xmax": 4})
        self.assertEqual(cfg.x_max, 4.0)

    def test_defaults_table_is_read_only(self) -> None:
        with self.assertRaises(TypeError):
            DEFAULT_SETTINGS["Xmin"] = 3  # type: ignore[index]

    def test_custom_defaults_table(self) -> None:
        defaults = dict(DEFAULT_SETTINGS, Ymax=1.0)
        cfg = resolve_config({}, defaults=defaults)
        self.assertEqual(cfg.y_max, 1.0)

    def test_grid_step_is_power_of_five(self) -> None:
        self.assertEqual(resolve_config({"gridDensity": 0}).grid_step, 1.0)
        self.assertEqual(resolve_config({"gridDensity": 1}).grid_step, 5.0)
        self.assertAlmostEqual(resolve_config({"gridDensity": -1}).grid_step, 0.2)

    def test_config_is_immutable(self) -> None:
        cfg = resolve_config()
        with self.assertRaises(AttributeError):
            cfg.x_min = 4.0  # type: ignore[misc]


class ConfigValidationTests(unittest.TestCase):
    def test_rejects_empty_or_inverted_x_window(self) -> None:
        with self.assertRaises(ConfigurationError):
            resolve_config({"Xmin": 2, "Xmax": 2})
        with self.assertRaises(ConfigurationError):
            resolve_config({"Xmin": 5, "Xmax": 1})

    def test_rejects_empty_or_inverted_y_window(self) -> None:
        with self.assertRaises(ConfigurationError):
            resolve_config({"Ymin": 3, "Ymax": 3})
        with self.assertRaises(ConfigurationError):
            resolve_config({"Ymin": 1, "Ymax": -1})

    def test_rejects_non_positive_canvas(self) -> None:
        with self.assertRaises(ConfigurationError):
            resolve_config({"canvasWidth": 0})
        with self.assertRaises(ConfigurationError):
            resolve_config({"canvasHeight": -10})

    def test_rejects_non_numeric_and_non_finite_bounds(self) -> None:
        with self.assertRaises(ConfigurationError):
            resolve_config({"Xmin": "left"})
        with self.assertRaises(ConfigurationError):
            resolve_config({"Xmax": float("inf")})
        with self.assertRaises(ConfigurationError):
            resolve_config({"Ymin": True})

    def test_rejects_fractional_integers(self) -> None:
        with self.assertRaises(ConfigurationError):
            resolve_config({"gridDensity": 0.5})
        with self.assertRaises(ConfigurationError):
            resolve_config({"canvasWidth": 100.5})
        with self.assertRaises(ConfigurationError):
            resolve_config({"gridDensity": 5000})

    def test_rejects_numbers_too_large_for_a_float(self) -> None:
        with self.assertRaises(ConfigurationError):
            resolve_config({"canvasWidth": 10**400})
        with self.assertRaises(ConfigurationError):
            resolve_config({"Xmax": 10**400})

    def test_configuration_error_is_a_value_error(self) -> None:
        with self.assertRaises(ValueError):
            PlotConfig(x_min=0, x_max=0, y_min=0, y_max=1, x_label="x", y_label="y", canvas_width=1, canvas_height=1)


if __name__ == "__main__":
    unittest.main()
