from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
import logging
from typing import Any

from dashing_charts.adapters import normalize_points
from dashing_charts.points import AxisMode, DataPoint

LOGGER = logging.getLogger(__name__)

VISIBLE_POINTS_KEY = "visibleDataPointsNum"


@dataclass(frozen=True)
class WindowSplit:
    older: list[DataPoint]
    newer: list[DataPoint]


def split_initial_data(data: Any, visible_points: int | None) -> WindowSplit:
    """Split ``data`` into the part shown on first render and the overflow.

    ``older`` is the prefix that fits the visible window and is rendered when
    the chart is created; ``newer`` is appended afterwards so the renderer's
    eviction keeps only the most recent ``visible_points`` on screen.
    """
    points = normalize_points(data)
    if visible_points is None or len(points) <= visible_points:
        return WindowSplit(older=points, newer=[])
    return WindowSplit(older=points[:visible_points], newer=points[visible_points:])


def resolve_visible_points(option: Mapping[str, Any], default: int | None) -> int | None:
    if VISIBLE_POINTS_KEY not in option:
        return default
    raw = option[VISIBLE_POINTS_KEY]
    if raw is None or int(raw) <= 0:
        return None
    return int(raw)


def first_x_axis(option: Mapping[str, Any]) -> MutableMapping[str, Any] | None:
    axis = option.get("xAxis")
    if isinstance(axis, list):
        return axis[0] if axis else None
    return axis


def fill_axis_data(
    options: MutableMapping[str, Any],
    data: Any,
    visible_points: int | None,
    *,
    strict: bool = True,
) -> list[DataPoint]:
    """Reset axis and series data in ``options`` and seed them from ``data``.

    Returns the pending queue: points beyond the visible window that must be
    appended once the renderer has applied ``options``.
    """
    x_axis = first_x_axis(options)
    if x_axis is None:
        raise ValueError("options must define xAxis")
    series_list = options.setdefault("series", [])
    series_count = len(series_list)

    options[VISIBLE_POINTS_KEY] = visible_points
    window = split_initial_data(data, visible_points)
    for index, point in enumerate(window.older):
        if strict:
            point.ensure_arity(series_count, index=index)
        elif point.arity != series_count:
            LOGGER.warning("seed point %d has %d y value(s) for %d series", index, point.arity, series_count)

    for series in series_list:
        series["data"] = []

    if AxisMode.from_axis_type(x_axis.get("type")) is AxisMode.TIME:
        x_axis.pop("boundaryGap", None)
        x_axis.pop("data", None)
        for point in window.older:
            for series_index, series in enumerate(series_list):
                series["data"].append([point.x, point.value_for(series_index)])
    else:
        x_axis["data"] = []
        for point in window.older:
            x_axis["data"].append(point.x)
            for series_index, series in enumerate(series_list):
                series["data"].append(point.value_for(series_index))

    LOGGER.debug("seeded %d point(s), %d pending", len(window.older), len(window.newer))
    return window.newer
