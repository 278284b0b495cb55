from __future__ import annotations

from pathlib import Path
import tempfile
import textwrap
import unittest

from funcplot import chart
from funcplot.config import ChartConfig, ChartStyle, chart_config_from_mapping, load_chart_config
from funcplot.errors import ChartConfigError
from funcplot.interpolation import InterpolationMode


class ChartConfigTests(unittest.TestCase):
    def test_defaults(self) -> None:
        cfg = ChartConfig()
        self.assertEqual(cfg.jump_threshold, 10.0)
        self.assertEqual(cfg.y_visual_limit, 10.0)
        self.assertEqual(cfg.padding_ratio, 0.1)
        self.assertEqual(cfg.fallback_viewport, (800, 600))
        self.assertIs(cfg.interpolation, InterpolationMode.LINEAR)
        self.assertFalse(cfg.aspect_locked)
        self.assertEqual(cfg.title, "Function Plot")
        self.assertEqual(cfg.style.function_color, (70, 130, 180, 255))

    def test_interpolation_string_is_parsed(self) -> None:
        self.assertIs(ChartConfig(interpolation="smoothed").interpolation, InterpolationMode.SMOOTHED)

    def test_with_overrides_revalidates(self) -> None:
        cfg = ChartConfig().with_overrides(aspect_locked=True)
        self.assertTrue(cfg.aspect_locked)
        with self.assertRaises(ChartConfigError):
            ChartConfig().with_overrides(jump_threshold=0.0)

    def test_invalid_values(self) -> None:
        for kwargs in (
            {"jump_threshold": -1.0},
            {"jump_threshold": float("nan")},
            {"y_visual_limit": 0.0},
            {"y_visual_limit": float("inf")},
            {"flat_epsilon": 0.0},
            {"padding_ratio": -0.1},
            {"fallback_viewport": (0, 600)},
            {"integral_precision": 20},
            {"interpolation": "cubic"},
        ):
            with self.subTest(kwargs=kwargs):
                with self.assertRaises(ChartConfigError):
                    ChartConfig(**kwargs)

    def test_infinite_jump_threshold_is_allowed(self) -> None:
        self.assertEqual(ChartConfig(jump_threshold=float("inf")).jump_threshold, float("inf"))

    def test_style_validation(self) -> None:
        with self.assertRaises(ChartConfigError):
            ChartStyle(function_color=(0, 0, 300, 255))
        with self.assertRaises(ChartConfigError):
            ChartStyle(tangent_dash=(4, 0))
        with self.assertRaises(ChartConfigError):
            ChartStyle(line_width=0)


class ChartConfigLoadingTests(unittest.TestCase):
    def _write(self, td: str, body: str) -> Path:
        path = Path(td) / "chart.toml"
        path.write_text(textwrap.dedent(body), encoding="utf-8")
        return path

    def test_loads_chart_and_style_tables(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = self._write(
                td,
                """
                [chart]
                jump_threshold = 25
                aspect_locked = true
                interpolation = "smoothed"
                fallback_viewport = [1024, 768]
                title = "sin(x)"

                [chart.style]
                function_color = [0, 0, 255, 255]
                show_minor_grid = false
                """,
            )
            cfg = load_chart_config(path)
        self.assertEqual(cfg.jump_threshold, 25.0)
        self.assertTrue(cfg.aspect_locked)
        self.assertIs(cfg.interpolation, InterpolationMode.SMOOTHED)
        self.assertEqual(cfg.fallback_viewport, (1024, 768))
        self.assertEqual(cfg.title, "sin(x)")
        self.assertEqual(cfg.style.function_color, (0, 0, 255, 255))
        self.assertFalse(cfg.style.show_minor_grid)

    def test_missing_chart_table_gives_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            cfg = load_chart_config(self._write(td, "[other]\nvalue = 1\n"))
        self.assertEqual(cfg, ChartConfig())

    def test_missing_file(self) -> None:
        with self.assertRaises(FileNotFoundError):
            load_chart_config("/nonexistent/chart.toml")

    def test_invalid_toml(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            with self.assertRaises(ChartConfigError):
                load_chart_config(self._write(td, "[chart\n"))

    def test_unknown_and_mistyped_keys(self) -> None:
        with self.assertRaises(ChartConfigError):
            chart_config_from_mapping({"jump": 3})
        with self.assertRaises(ChartConfigError):
            chart_config_from_mapping({"aspect_locked": "yes"})
        with self.assertRaises(ChartConfigError):
            chart_config_from_mapping({"jump_threshold": True})
        with self.assertRaises(ChartConfigError):
            chart_config_from_mapping({"style": {"function_color": [1, 2, 3]}})
        with self.assertRaises(ChartConfigError):
            chart_config_from_mapping({"style": {"glow": 1}})

    def test_api_chart_accepts_config_path(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = self._write(td, "[chart]\naspect_locked = true\n")
            c = chart(200, 100, config_path=path)
        self.assertTrue(c.aspect_locked)
        self.assertEqual(c.surface.viewport, (200, 100))
        with self.assertRaises(ValueError):
            chart(config=ChartConfig(), config_path=path)


if __name__ == "__main__":
    unittest.main()
