from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import logging
from typing import Any

from dashing_charts.adapters import normalize_points
from dashing_charts.points import AxisMode
from dashing_charts.window import first_x_axis, resolve_visible_points

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppendRecord:
    series_index: int
    value: Any
    # Reserved for prepend support; always False today.
    is_head: bool = False
    grows_window: bool = True
    x_label: Any = None

    @property
    def has_x_label(self) -> bool:
        return self.x_label is not None

    def as_params(self) -> list[Any]:
        params = [self.series_index, self.value, self.is_head, self.grows_window]
        if self.has_x_label:
            params.append(self.x_label)
        return params


@dataclass(frozen=True)
class ChartSnapshot:
    """Immutable view of the renderer state that planning depends on."""

    series_count: int
    point_count: int
    axis_mode: AxisMode
    visible_points: int | None
    configured: bool
    y_axis_max: Any = None

    @classmethod
    def from_option(cls, option: Mapping[str, Any], default_visible: int | None) -> "ChartSnapshot":
        series = option.get("series") or []
        point_count = len(series[0].get("data") or []) if series else 0
        x_axis = first_x_axis(option)
        y_axis = option.get("yAxis")
        if isinstance(y_axis, list):
            y_axis = y_axis[0] if y_axis else None
        return cls(
            series_count=len(series),
            point_count=point_count,
            axis_mode=AxisMode.from_axis_type(x_axis.get("type") if x_axis is not None else None),
            visible_points=resolve_visible_points(option, default_visible),
            configured=x_axis is not None,
            y_axis_max=y_axis.get("max") if y_axis else None,
        )

    def remaining_growth(self) -> int | None:
        if self.visible_points is None:
            return None
        return max(0, self.visible_points - self.point_count)


def plan_append(data: Any, snapshot: ChartSnapshot, *, strict: bool = True) -> list[AppendRecord]:
    """Compute the per-series append records for ``data``.

    The growth budget is spent once per data point, not per series, so all
    series of a point either grow the window together or evict together.
    Strict mode rejects points whose y arity differs from the series count;
    otherwise values are mapped by index and the surplus is dropped.
    """
    points = normalize_points(data)
    remaining = snapshot.remaining_growth()
    is_time = snapshot.axis_mode is AxisMode.TIME
    records: list[AppendRecord] = []
    dropped = 0

    for index, point in enumerate(points):
        if strict:
            point.ensure_arity(snapshot.series_count, index=index)
        grows = remaining is None or remaining > 0
        if remaining is not None:
            remaining = max(0, remaining - 1)

        count = min(point.arity, snapshot.series_count)
        dropped += point.arity - count
        for series_index in range(count):
            y = point.values[series_index]
            if is_time:
                records.append(AppendRecord(series_index, [point.x, y], False, grows))
                continue
            # Category labels are one shared array, so only the last series carries it.
            label = point.x if series_index == count - 1 else None
            records.append(AppendRecord(series_index, y, False, grows, label))

    if dropped:
        LOGGER.warning("dropped %d y value(s) beyond %d series", dropped, snapshot.series_count)
    LOGGER.debug("planned %d append record(s) for %d point(s)", len(records), len(points))
    return records
