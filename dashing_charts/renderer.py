from __future__ import annotations

from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Mapping, Sequence
import copy
from dataclasses import dataclass
from typing import Any, Protocol

from dashing_charts.append import AppendRecord
from dashing_charts.window import first_x_axis


class ChartRenderer(ABC):
    @abstractmethod
    def set_option(self, options: Mapping[str, Any], overwrite: bool = False) -> None:
        raise NotImplementedError

    @abstractmethod
    def get_option(self) -> dict[str, Any]:
        raise NotImplementedError

    @abstractmethod
    def add_data(self, records: Sequence[AppendRecord]) -> None:
        raise NotImplementedError

    def hide_loading(self) -> None:
        """Optional hook for renderers that show a loading overlay until data arrives."""
        return


class InMemoryRenderer(ChartRenderer):
    """Renderer that keeps the option tree in memory and applies appends to it.

    Mirrors what a canvas renderer does with the data: ``get_option`` reports
    no x axis while no series holds data, and an append that does not grow
    the window evicts the oldest value of that series.

    ``calls`` keeps only the most recent ``call_history`` renderer calls.
    """

    def __init__(self, call_history: int = 64) -> None:
        if call_history <= 0:
            raise ValueError("call_history must be > 0")
        self._option: dict[str, Any] = {}
        self.calls: deque[tuple[str, Any]] = deque(maxlen=call_history)
        self.loading_hidden = 0

    def set_option(self, options: Mapping[str, Any], overwrite: bool = False) -> None:
        self.calls.append(("set_option", copy.deepcopy(dict(options))))
        if overwrite:
            self._option = copy.deepcopy(dict(options))
        else:
            merge_option(self._option, options)

    def get_option(self) -> dict[str, Any]:
        option = copy.deepcopy(self._option)
        if not any(series.get("data") for series in option.get("series") or []):
            option.pop("xAxis", None)
        return option

    def add_data(self, records: Sequence[AppendRecord]) -> None:
        self.calls.append(("add_data", list(records)))
        # Stage on a copy so a bad record leaves the committed option untouched.
        staged = copy.deepcopy(self._option)
        series_list = staged.get("series") or []
        x_axis = first_x_axis(staged)
        for record in records:
            if record.is_head:
                raise NotImplementedError("prepend appends are not supported")
            if record.series_index < 0 or record.series_index >= len(series_list):
                raise IndexError(f"series index out of range: {record.series_index}")
            data = series_list[record.series_index].setdefault("data", [])
            if not record.grows_window and data:
                data.pop(0)
            data.append(copy.deepcopy(record.value))
            if record.has_x_label and x_axis is not None:
                labels = x_axis.setdefault("data", [])
                if not record.grows_window and labels:
                    labels.pop(0)
                labels.append(record.x_label)
        self._option = staged

    def hide_loading(self) -> None:
        self.calls.append(("hide_loading", None))
        self.loading_hidden += 1

    def series_data(self, series_index: int) -> list[Any]:
        return list(self._option["series"][series_index].get("data") or [])

    def x_labels(self) -> list[Any]:
        x_axis = first_x_axis(self._option)
        if x_axis is None:
            return []
        return list(x_axis.get("data") or [])

    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]


class EChartsInstance(Protocol):
    def setOption(self, options: Mapping[str, Any], overwrite: bool) -> Any:  # noqa: N802
        ...

    def getOption(self) -> dict[str, Any]:  # noqa: N802
        ...

    def addData(self, params: list[list[Any]]) -> Any:  # noqa: N802
        ...


@dataclass
class EChartsBridge(ChartRenderer):
    """Adapts an ECharts-style chart object (camelCase API) to ``ChartRenderer``."""

    chart: EChartsInstance

    def set_option(self, options: Mapping[str, Any], overwrite: bool = False) -> None:
        self.chart.setOption(options, overwrite)

    def get_option(self) -> dict[str, Any]:
        return self.chart.getOption()

    def add_data(self, records: Sequence[AppendRecord]) -> None:
        self.chart.addData([record.as_params() for record in records])

    def hide_loading(self) -> None:
        if hasattr(self.chart, "hideLoading"):
            self.chart.hideLoading()


def merge_option(base: dict[str, Any], patch: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``patch`` into ``base`` in place.

    Lists of mappings (``xAxis``, ``yAxis``, ``series``) merge index-wise;
    any other value replaces the current one.
    """
    for key, value in patch.items():
        current = base.get(key)
        if isinstance(value, Mapping) and isinstance(current, dict):
            merge_option(current, value)
        elif _is_component_list(value) and isinstance(current, list):
            for i, item in enumerate(value):
                if i < len(current) and isinstance(current[i], dict):
                    merge_option(current[i], item)
                elif i < len(current):
                    current[i] = copy.deepcopy(dict(item))
                else:
                    current.append(copy.deepcopy(dict(item)))
        else:
            base[key] = copy.deepcopy(value)
    return base


def _is_component_list(value: Any) -> bool:
    return isinstance(value, list) and bool(value) and all(isinstance(item, Mapping) for item in value)
