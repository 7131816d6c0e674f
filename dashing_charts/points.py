from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from dashing_charts.errors import SeriesArityError


class AxisMode(str, Enum):
    TIME = "time"
    CATEGORY = "category"

    @classmethod
    def from_axis_type(cls, axis_type: Any) -> "AxisMode":
        if axis_type == cls.TIME.value:
            return cls.TIME
        return cls.CATEGORY


@dataclass(frozen=True)
class DataPoint:
    """One sample on the x axis with a value per series.

    ``scalar`` remembers that the raw ``y`` was a bare number, i.e. the point
    belongs to a single-series chart.
    """

    x: Any
    values: tuple[float | None, ...]
    scalar: bool = False

    @property
    def arity(self) -> int:
        return len(self.values)

    def ensure_arity(self, series_count: int, *, index: int = 0) -> None:
        if self.arity != series_count:
            raise SeriesArityError(point_index=index, expected=series_count, actual=self.arity)

    def value_for(self, series_index: int) -> float | None:
        if series_index >= self.arity:
            return None
        return self.values[series_index]

    def raw_y(self) -> float | None | list[float | None]:
        if self.scalar:
            return self.values[0]
        return list(self.values)

    def to_dict(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.raw_y()}
