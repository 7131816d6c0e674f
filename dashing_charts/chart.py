from __future__ import annotations

from dataclasses import dataclass
import logging
import time
from typing import Any, Callable, MutableMapping

from dashing_charts.adapters import normalize_points
from dashing_charts.append import ChartSnapshot, plan_append
from dashing_charts.config import ChartConfig
from dashing_charts.points import DataPoint
from dashing_charts.renderer import ChartRenderer
from dashing_charts.window import fill_axis_data, resolve_visible_points

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChartUpdateFailure:
    operation: str
    error: Exception
    ts_ns: int


class LiveChart:
    """Keeps a renderer fed with a bounded window of live data points.

    Construction seeds the renderer with the first ``visibleDataPointsNum``
    points of ``options["data"]`` and queues the rest; every later
    ``add_data_points`` call appends incrementally. Calls must be serialized
    per chart.

    With the default ``best_effort`` failure policy nothing raised while
    adding data reaches the caller: the error is logged, kept as
    ``last_error`` and passed to ``on_error``.
    """

    def __init__(
        self,
        renderer: ChartRenderer,
        options: MutableMapping[str, Any],
        *,
        config: ChartConfig | None = None,
        on_error: Callable[[ChartUpdateFailure], None] | None = None,
    ) -> None:
        self._renderer = renderer
        self._options = options
        self._config = config or ChartConfig()
        self._on_error = on_error
        self._pending: list[DataPoint] = []
        self._last_error: Exception | None = None
        self._loading_hidden = False

        self._visible = resolve_visible_points(options, self._config.visible_data_points_num)
        seed = normalize_points(options.pop("data", None))
        if seed:
            self._pending = fill_axis_data(options, seed, self._visible, strict=self._config.strict_series_arity)
        renderer.set_option(options, overwrite=True)
        # A renderer without data reports no x axis; the first batch re-seeds it.
        self._initialized = self._snapshot().configured
        if self._initialized:
            self._guarded("flush_pending", self._flush_pending)

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def pending(self) -> tuple[DataPoint, ...]:
        return tuple(self._pending)

    @property
    def last_error(self) -> Exception | None:
        return self._last_error

    @property
    def config(self) -> ChartConfig:
        return self._config

    def add_data_points(self, data: Any, new_y_axis_max: float | None = None) -> None:
        if data is None:
            return
        self._guarded("add_data_points", lambda: self._add(data, new_y_axis_max))

    def _add(self, data: Any, new_y_axis_max: float | None) -> None:
        points = normalize_points(data)
        if not points:
            return
        if not self._initialized:
            self._initialize_with(points, new_y_axis_max)
            return
        self._flush_pending()
        self._append(points, new_y_axis_max)

    def _initialize_with(self, points: list[DataPoint], new_y_axis_max: float | None) -> None:
        self._pending = fill_axis_data(
            self._options, points, self._visible, strict=self._config.strict_series_arity
        )
        if new_y_axis_max is not None:
            _set_y_axis_max(self._options, new_y_axis_max)
        self._renderer.set_option(self._options, overwrite=True)
        self._initialized = self._snapshot().configured
        if not self._initialized:
            return
        if not self._loading_hidden:
            self._renderer.hide_loading()
            self._loading_hidden = True
        self._flush_pending()

    def _flush_pending(self) -> None:
        if not self._pending:
            return
        self._append(self._pending, None)
        # Only dropped once applied, so a failed flush is retried on the next call.
        self._pending = []

    def _append(self, points: list[DataPoint], new_y_axis_max: float | None) -> None:
        snapshot = self._snapshot()
        records = plan_append(points, snapshot, strict=self._config.strict_series_arity)
        if not records:
            return
        if new_y_axis_max is not None:
            self._renderer.set_option({"yAxis": [{"max": new_y_axis_max}]}, overwrite=False)
        try:
            self._renderer.add_data(records)
        except Exception:
            if new_y_axis_max is not None:
                self._restore_y_axis_max(snapshot.y_axis_max)
            raise

    def _restore_y_axis_max(self, previous: float | None) -> None:
        if previous is not None:
            self._renderer.set_option({"yAxis": [{"max": previous}]}, overwrite=False)
            return
        # A merge cannot drop a key, so rewrite the option without the ceiling.
        option = self._renderer.get_option()
        _clear_y_axis_max(option)
        self._renderer.set_option(option, overwrite=True)

    def _snapshot(self) -> ChartSnapshot:
        return ChartSnapshot.from_option(self._renderer.get_option(), self._visible)

    def _guarded(self, operation: str, action: Callable[[], None]) -> None:
        try:
            action()
        except Exception as exc:  # noqa: BLE001
            self._last_error = exc
            LOGGER.exception("LiveChart %s failed: %s", operation, exc)
            self._notify(ChartUpdateFailure(operation=operation, error=exc, ts_ns=time.time_ns()))
            if not self._config.best_effort:
                raise

    def _notify(self, failure: ChartUpdateFailure) -> None:
        if self._on_error is None:
            return
        try:
            self._on_error(failure)
        except Exception as exc:  # noqa: BLE001
            LOGGER.exception("LiveChart error observer failed: %s", exc)


def _clear_y_axis_max(options: MutableMapping[str, Any]) -> None:
    y_axis = options.get("yAxis")
    if isinstance(y_axis, list) and y_axis:
        y_axis[0].pop("max", None)
    elif isinstance(y_axis, dict):
        y_axis.pop("max", None)


def _set_y_axis_max(options: MutableMapping[str, Any], value: float) -> None:
    y_axis = options.get("yAxis")
    if isinstance(y_axis, list) and y_axis:
        y_axis[0]["max"] = value
    elif isinstance(y_axis, dict):
        y_axis["max"] = value
    else:
        options["yAxis"] = [{"max": value}]
