from __future__ import annotations


class ChartDataError(ValueError):
    """Raised when incoming chart data cannot be normalized."""


class SeriesArityError(ChartDataError):
    def __init__(self, *, point_index: int, expected: int, actual: int) -> None:
        self.point_index = point_index
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"data point {point_index} carries {actual} y value(s) but the chart has {expected} series"
        )
