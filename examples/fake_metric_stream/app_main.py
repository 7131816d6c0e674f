from __future__ import annotations

import logging
import math
import os

import numpy as np

from dashing_charts import ChartConfig, InMemoryRenderer, LineChartOptions, line_chart


def run(ticks: int | None = None) -> InMemoryRenderer:
    rng = np.random.default_rng(int(os.getenv("DASHING_FAKE_STREAM_SEED", "42")))
    ticks = ticks if ticks is not None else max(1, int(os.getenv("DASHING_FAKE_STREAM_TICKS", "200")))
    points_per_tick = max(1, int(os.getenv("DASHING_FAKE_STREAM_POINTS_PER_TICK", "3")))
    config = ChartConfig.from_env()

    renderer = InMemoryRenderer()
    chart = line_chart(
        renderer,
        LineChartOptions(series_names=["rx", "tx"], x_axis_type="time"),
        config=config,
    )
    t_ms = 0
    for _ in range(ticks):
        batch = []
        for _ in range(points_per_tick):
            t_ms += 1000
            phase = t_ms / 15_000.0
            rx = 50.0 + 30.0 * math.sin(phase) + float(rng.normal(0.0, 2.0))
            tx = 20.0 + 10.0 * math.cos(0.5 * phase) + float(rng.normal(0.0, 1.0))
            batch.append({"x": t_ms, "y": [rx, tx]})
        peak = max(max(p["y"]) for p in batch)
        chart.add_data_points(batch, new_y_axis_max=math.ceil(peak / 10.0) * 10.0)
    return renderer


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    renderer = run()
    visible = len(renderer.series_data(0))
    print(f"stream complete: visible_points={visible} latest={renderer.series_data(0)[-1]}")
