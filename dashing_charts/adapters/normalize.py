from __future__ import annotations

from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any

import numpy as np
import pandas as pd

from dashing_charts.errors import ChartDataError
from dashing_charts.points import DataPoint


try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


def normalize_points(data: Any, *, x_column: str = "x") -> list[DataPoint]:
    """Turn any accepted input shape into a flat list of ``DataPoint``.

    Accepted shapes: ``None``, a single point (mapping, ``DataPoint`` or an
    ``(x, y)`` tuple), a sequence of points, or a ``pandas.DataFrame`` whose
    ``x_column`` (or index) holds the x labels and whose remaining numeric
    columns hold one series each.
    """
    if data is None:
        return []
    if isinstance(data, pd.DataFrame):
        return _points_from_frame(data, x_column=x_column)
    if _looks_like_single_point(data):
        return [normalize_point(data)]
    if isinstance(data, Sequence) and not isinstance(data, (str, bytes, bytearray)):
        return [normalize_point(item, index=i) for i, item in enumerate(data)]
    raise ChartDataError(f"unsupported data input type: {type(data)!r}")


def normalize_point(raw: Any, *, index: int = 0) -> DataPoint:
    if isinstance(raw, DataPoint):
        return raw
    if isinstance(raw, Mapping):
        if "y" not in raw:
            raise ChartDataError(f"data point {index} has no y value")
        x_raw, y_raw = raw.get("x"), raw["y"]
    elif isinstance(raw, tuple) and len(raw) == 2:
        x_raw, y_raw = raw
    else:
        raise ChartDataError(f"unsupported data point at index {index}: {raw!r}")
    values, scalar = _coerce_y(y_raw, index=index)
    return DataPoint(x=_coerce_x(x_raw), values=values, scalar=scalar)


def first_series_data(data: Any) -> list[DataPoint]:
    """Copy of ``data`` reduced to the value of the first series."""
    return [
        DataPoint(x=point.x, values=(point.values[0],), scalar=True)
        for point in normalize_points(data)
    ]


def _looks_like_single_point(data: Any) -> bool:
    if isinstance(data, (DataPoint, Mapping)):
        return True
    # (x, y) tuple; a tuple of points starts with a point-like element instead.
    if isinstance(data, tuple) and len(data) == 2:
        return not isinstance(data[0], (DataPoint, Mapping, tuple, list))
    return False


def _points_from_frame(frame: pd.DataFrame, *, x_column: str) -> list[DataPoint]:
    if x_column in frame.columns:
        x_values = frame[x_column].tolist()
        y_frame = frame.drop(columns=[x_column])
    else:
        x_values = frame.index.tolist()
        y_frame = frame
    y_columns = [c for c in y_frame.columns if _is_numeric_dtype(y_frame[c])]
    if not y_columns:
        raise ChartDataError("DataFrame input must contain at least one numeric y column")
    y_arr = y_frame[y_columns].to_numpy(dtype=np.float64)
    scalar = len(y_columns) == 1
    return [
        DataPoint(x=_coerce_x(x), values=tuple(float(v) for v in row), scalar=scalar)
        for x, row in zip(x_values, y_arr)
    ]


def _is_numeric_dtype(series: Any) -> bool:
    try:
        return bool(pd.api.types.is_numeric_dtype(series))
    except Exception:
        return False


def _coerce_x(value: Any) -> Any:
    if isinstance(value, np.datetime64):
        return pd.Timestamp(value).to_pydatetime()
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if isinstance(value, np.generic):
        return value.item()
    return value


def _coerce_y(value: Any, *, index: int) -> tuple[tuple[float | None, ...], bool]:
    if torch is not None and isinstance(value, torch.Tensor):
        tensor = value.detach()
        if tensor.is_cuda:
            tensor = tensor.cpu()
        value = tensor.to(torch.float64).numpy()

    if isinstance(value, pd.Series):
        value = value.to_numpy()

    if isinstance(value, np.ndarray):
        if value.ndim == 0:
            return (_coerce_value(value.item(), index=index),), True
        if value.ndim != 1:
            raise ChartDataError(f"y of data point {index} must be a scalar or 1-D")
        items: Sequence[Any] = value.tolist()
    elif isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        items = value
    else:
        return (_coerce_value(value, index=index),), True

    if len(items) == 0:
        raise ChartDataError(f"y of data point {index} carries no values")
    return tuple(_coerce_value(v, index=index) for v in items), False


def _coerce_value(raw: Any, *, index: int) -> float | None:
    if raw is None:
        return None
    if isinstance(raw, Decimal):
        return float(raw)
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise ChartDataError(f"y of data point {index} contains non-numeric value: {raw!r}") from exc
