from dashing_charts.append import AppendRecord, ChartSnapshot, plan_append
from dashing_charts.chart import ChartUpdateFailure, LiveChart
from dashing_charts.config import DEFAULT_VISIBLE_DATA_POINTS, ChartConfig, load_chart_config
from dashing_charts.errors import ChartDataError, SeriesArityError
from dashing_charts.line import LineChartOptions, build_line_chart_option, line_chart
from dashing_charts.points import AxisMode, DataPoint
from dashing_charts.renderer import ChartRenderer, EChartsBridge, InMemoryRenderer
from dashing_charts.sinks import JsonlFailureSink
from dashing_charts.window import WindowSplit, fill_axis_data, split_initial_data

__all__ = [
    "AppendRecord",
    "AxisMode",
    "ChartConfig",
    "ChartDataError",
    "ChartRenderer",
    "ChartSnapshot",
    "ChartUpdateFailure",
    "DEFAULT_VISIBLE_DATA_POINTS",
    "DataPoint",
    "EChartsBridge",
    "InMemoryRenderer",
    "JsonlFailureSink",
    "LineChartOptions",
    "LiveChart",
    "SeriesArityError",
    "WindowSplit",
    "build_line_chart_option",
    "fill_axis_data",
    "line_chart",
    "load_chart_config",
    "plan_append",
    "split_initial_data",
]
