from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any, Callable, Literal, Sequence

from dashing_charts.adapters import normalize_points
from dashing_charts.chart import ChartUpdateFailure, LiveChart
from dashing_charts.config import ChartConfig
from dashing_charts.renderer import ChartRenderer
from dashing_charts.window import VISIBLE_POINTS_KEY

LOGGER = logging.getLogger(__name__)

TITLE_HEIGHT = 20
LEGEND_HEIGHT = 16


@dataclass
class LineChartOptions:
    series_names: Sequence[str] | None = None
    data: Any = None
    # None defers to the chart config cap.
    max_data_num: int | None = None
    x_axis_type: Literal["category", "time"] = "category"
    stacked: bool = True
    smooth: bool = False
    show_legend: bool = True
    y_axis_values_num: int = 3
    y_axis_label_width: int = 60
    y_axis_split_line: bool = True
    scale: bool = False
    title: str | None = None
    height: str | None = None
    width: str | None = None
    grid: dict[str, Any] = field(default_factory=dict)


def build_line_chart_option(opts: LineChartOptions) -> dict[str, Any]:
    if opts.max_data_num is not None and opts.max_data_num <= 0:
        raise ValueError("max_data_num must be > 0")
    points = normalize_points(opts.data)
    names = list(opts.series_names) if opts.series_names else _default_series_names(points)

    grid: dict[str, Any] = {"borderWidth": 0, "x": opts.y_axis_label_width, "y": 20, "x2": 5, "y2": 23}
    grid.update(opts.grid)
    option: dict[str, Any] = {
        "dataZoom": {"show": False},
        "grid": grid,
        "xAxis": [
            {
                "type": opts.x_axis_type,
                "boundaryGap": False,
                "axisLabel": {"show": True},
                "splitLine": False,
            }
        ],
        "yAxis": [
            {
                "splitNumber": opts.y_axis_values_num,
                "splitLine": {"show": opts.y_axis_split_line},
                "axisLine": {"show": False},
                "scale": opts.scale,
            }
        ],
        "series": [_line_series(name, opts) for name in names],
        "data": points,
    }
    if opts.max_data_num is not None:
        option[VISIBLE_POINTS_KEY] = opts.max_data_num
    if opts.height:
        option["height"] = opts.height
    if opts.width:
        option["width"] = opts.width

    if opts.title:
        option["title"] = {"text": opts.title, "x": 0, "y": 3}
        grid["y"] += TITLE_HEIGHT

    add_legend = len(names) > 1 and opts.show_legend
    if add_legend:
        option["legend"] = {"show": True, "itemWidth": 8, "data": list(names), "y": 6}
        if opts.title:
            option["legend"]["y"] += TITLE_HEIGHT
            grid["y"] += LEGEND_HEIGHT

    if add_legend or opts.title:
        grid["y"] += 12
    return option


def line_chart(
    renderer: ChartRenderer,
    opts: LineChartOptions,
    *,
    config: ChartConfig | None = None,
    on_error: Callable[[ChartUpdateFailure], None] | None = None,
) -> LiveChart:
    return LiveChart(renderer, build_line_chart_option(opts), config=config, on_error=on_error)


def _line_series(name: str, opts: LineChartOptions) -> dict[str, Any]:
    series: dict[str, Any] = {"name": name, "type": "line", "symbol": "circle", "smooth": opts.smooth, "data": []}
    if opts.stacked:
        series["stack"] = "total"
    return series


def _default_series_names(points: list[Any]) -> list[str]:
    if not points:
        raise ValueError("series_names are required when no initial data is given")
    LOGGER.warning("series_names not defined, naming %d series by index", points[0].arity)
    return [f"Series {i + 1}" for i in range(points[0].arity)]
