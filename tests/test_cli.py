from __future__ import annotations

import contextlib
import io
import json
from pathlib import Path
import tempfile
import unittest

from main import main


POINTS = [{"x": i, "y": [i, i * 10]} for i in range(1, 6)]


class CliTests(unittest.TestCase):
    def _run(self, argv: list[str]) -> str:
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            main(argv)
        return out.getvalue()

    def _write_points(self, td: str) -> Path:
        path = Path(td) / "points.json"
        path.write_text(json.dumps(POINTS), encoding="utf-8")
        return path

    def test_split_reports_window_sizes(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = self._write_points(td)
            output = self._run(["split", str(path), "--visible", "2"])
        self.assertEqual(json.loads(output), {"newer": 3, "older": 2})

    def test_replay_prints_final_window(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = self._write_points(td)
            output = self._run(
                ["replay", str(path), "--visible", "3", "--batch", "2", "--series-name", "a", "--series-name", "b"]
            )
        option = json.loads(output)
        self.assertEqual(option["xAxis"][0]["data"], [3, 4, 5])
        self.assertEqual(option["series"][1]["data"], [30.0, 40.0, 50.0])
        self.assertEqual(option["visibleDataPointsNum"], 3)

    def test_replay_reads_cap_from_config_file(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = self._write_points(td)
            config = Path(td) / "chart.toml"
            config.write_text("[chart]\nvisible_data_points_num = 2\n", encoding="utf-8")
            output = self._run(
                ["replay", str(path), "--config", str(config), "--axis", "time", "--series-name", "a", "--series-name", "b"]
            )
        option = json.loads(output)
        self.assertEqual(option["series"][0]["data"], [[4, 4.0], [5, 5.0]])

    def test_missing_points_file(self) -> None:
        with self.assertRaises(FileNotFoundError):
            main(["split", "/nonexistent/points.json"])


if __name__ == "__main__":
    unittest.main()
