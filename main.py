from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Sequence

from dashing_charts import (
    ChartConfig,
    InMemoryRenderer,
    JsonlFailureSink,
    LineChartOptions,
    line_chart,
    load_chart_config,
    split_initial_data,
)
from dashing_charts.adapters import normalize_points


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="dashing-charts")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    split = sub.add_parser("split", help="Show how a points file splits into initial window and pending queue.")
    split.add_argument("points", type=Path)
    split.add_argument("--visible", type=int, default=None, help="Visible points per series. Default: from config.")
    split.add_argument("--config", type=Path, default=None, help="TOML file with a [chart] table.")

    replay = sub.add_parser("replay", help="Stream a points file through a live chart and print the final option.")
    replay.add_argument("points", type=Path)
    replay.add_argument("--visible", type=int, default=None, help="Visible points per series. Default: from config.")
    replay.add_argument("--batch", type=int, default=1, help="Points delivered per update.")
    replay.add_argument("--axis", choices=["category", "time"], default="category")
    replay.add_argument("--series-name", action="append", default=None, dest="series_names")
    replay.add_argument("--config", type=Path, default=None, help="TOML file with a [chart] table.")
    replay.add_argument("--failure-log", type=Path, default=None, help="JSONL file receiving swallowed failures.")
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")
    config = _resolve_config(args.config, args.visible)

    if args.command == "split":
        window = split_initial_data(_load_points(args.points), config.visible_data_points_num)
        print(json.dumps({"older": len(window.older), "newer": len(window.newer)}, sort_keys=True))
        return

    if args.command == "replay":
        if args.batch <= 0:
            raise ValueError("batch must be > 0")
        points = _load_points(args.points)
        if not points:
            raise RuntimeError(f"no data points in {args.points}")
        batches = [points[i : i + args.batch] for i in range(0, len(points), args.batch)]
        renderer = InMemoryRenderer()
        sink = JsonlFailureSink(args.failure_log, chart_id=args.points.stem) if args.failure_log else None
        chart = line_chart(
            renderer,
            LineChartOptions(
                series_names=args.series_names,
                data=batches[0],
                x_axis_type=args.axis,
            ),
            config=config,
            on_error=sink,
        )
        for batch in batches[1:]:
            chart.add_data_points(batch)
        print(json.dumps(renderer.get_option(), indent=2, sort_keys=True, default=str))
        return

    raise RuntimeError(f"unsupported command: {args.command}")


def _resolve_config(config_path: Path | None, visible: int | None) -> ChartConfig:
    config = load_chart_config(config_path) if config_path is not None else ChartConfig.from_env()
    if visible is not None:
        config = config.with_overrides(visible_data_points_num=visible if visible > 0 else None)
    return config


def _load_points(path: Path) -> list[Any]:
    if not path.exists():
        raise FileNotFoundError(f"points file not found: {path}")
    raw = json.loads(path.read_text(encoding="utf-8"))
    return normalize_points(raw)


if __name__ == "__main__":
    main()
