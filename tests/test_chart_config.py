from __future__ import annotations

import os
from pathlib import Path
import tempfile
import unittest
from unittest import mock

from dashing_charts import DEFAULT_VISIBLE_DATA_POINTS, ChartConfig, load_chart_config


class ChartConfigTests(unittest.TestCase):
    def test_defaults(self) -> None:
        config = ChartConfig()
        self.assertEqual(config.visible_data_points_num, DEFAULT_VISIBLE_DATA_POINTS)
        self.assertEqual(config.visible_data_points_num, 80)
        self.assertTrue(config.best_effort)
        self.assertTrue(config.strict_series_arity)

    def test_rejects_invalid_values(self) -> None:
        with self.assertRaises(ValueError):
            ChartConfig(visible_data_points_num=0)
        with self.assertRaises(ValueError):
            ChartConfig(failure_policy="ignore")  # type: ignore[arg-type]

    def test_with_overrides_returns_new_config(self) -> None:
        base = ChartConfig()
        changed = base.with_overrides(visible_data_points_num=None, failure_policy="raise")
        self.assertIsNone(changed.visible_data_points_num)
        self.assertFalse(changed.best_effort)
        self.assertEqual(base.visible_data_points_num, 80)

    def test_from_env_defaults_when_unset(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            config = ChartConfig.from_env()
        self.assertEqual(config, ChartConfig())

    def test_from_env_reads_overrides(self) -> None:
        env = {
            "DASHING_VISIBLE_DATA_POINTS": "120",
            "DASHING_FAILURE_POLICY": "raise",
            "DASHING_STRICT_SERIES_ARITY": "0",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            config = ChartConfig.from_env()
        self.assertEqual(config.visible_data_points_num, 120)
        self.assertEqual(config.failure_policy, "raise")
        self.assertFalse(config.strict_series_arity)

    def test_from_env_visible_points_parsing(self) -> None:
        cases = {"0": None, "none": None, "-5": None, "abc": 80, " 42 ": 42}
        for raw, expected in cases.items():
            with mock.patch.dict(os.environ, {"DASHING_VISIBLE_DATA_POINTS": raw}, clear=True):
                self.assertEqual(ChartConfig.from_env().visible_data_points_num, expected, raw)

    def test_load_chart_config_from_toml(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "chart.toml"
            path.write_text(
                "[chart]\nvisible_data_points_num = 30\nfailure_policy = \"raise\"\nstrict_series_arity = false\n",
                encoding="utf-8",
            )
            config = load_chart_config(path)
        self.assertEqual(config.visible_data_points_num, 30)
        self.assertEqual(config.failure_policy, "raise")
        self.assertFalse(config.strict_series_arity)

    def test_load_chart_config_zero_means_unbounded(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "chart.toml"
            path.write_text("[chart]\nvisible_data_points_num = 0\n", encoding="utf-8")
            self.assertIsNone(load_chart_config(path).visible_data_points_num)

    def test_load_chart_config_errors(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            with self.assertRaises(FileNotFoundError):
                load_chart_config(Path(td) / "missing.toml")
            path = Path(td) / "chart.toml"
            path.write_text("[chart]\nvisible_data_points_num = \"many\"\n", encoding="utf-8")
            with self.assertRaises(ValueError):
                load_chart_config(path)
            path.write_text("[chart]\nstrict_series_arity = 1\n", encoding="utf-8")
            with self.assertRaises(ValueError):
                load_chart_config(path)


if __name__ == "__main__":
    unittest.main()
