from __future__ import annotations

import json
import logging
from pathlib import Path
import threading
from typing import Any

from dashing_charts.chart import ChartUpdateFailure

LOGGER = logging.getLogger(__name__)


class JsonlFailureSink:
    """``on_error`` observer that appends one JSON line per swallowed failure."""

    def __init__(self, path: str | Path, *, chart_id: str = "") -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.chart_id = chart_id
        self._lock = threading.Lock()

    def __call__(self, failure: ChartUpdateFailure) -> None:
        self.log(failure)

    def log(self, failure: ChartUpdateFailure) -> None:
        entry = {
            "ts_ns": failure.ts_ns,
            "chart_id": self.chart_id,
            "operation": failure.operation,
            "error_type": type(failure.error).__name__,
            "message": str(failure.error),
        }
        with self._lock:
            with self.path.open("a", encoding="utf-8") as f:
                f.write(json.dumps(entry, separators=(",", ":"), sort_keys=True))
                f.write("\n")

    def summarize(self) -> dict[str, Any]:
        """Failure counts per chart id, with each chart's latest error.

        Several charts may share one log file, each with its own ``chart_id``.
        """
        charts: dict[str, dict[str, Any]] = {}
        for row in self._rows():
            chart = charts.setdefault(
                str(row.get("chart_id", "")),
                {"failures": 0, "operations": {}, "last_error": None, "last_ts_ns": -1},
            )
            chart["failures"] += 1
            operation = str(row.get("operation", ""))
            chart["operations"][operation] = chart["operations"].get(operation, 0) + 1
            ts_ns = int(row.get("ts_ns", 0))
            if ts_ns >= chart["last_ts_ns"]:
                chart["last_ts_ns"] = ts_ns
                chart["last_error"] = f"{row.get('error_type', '')}: {row.get('message', '')}"
        return {"total": sum(c["failures"] for c in charts.values()), "charts": charts}

    def _rows(self) -> list[dict[str, Any]]:
        if not self.path.exists():
            return []
        rows = []
        for line in self.path.read_text(encoding="utf-8").splitlines():
            if not line.strip():
                continue
            try:
                rows.append(json.loads(line))
            except json.JSONDecodeError:
                LOGGER.warning("skipping malformed failure log line in %s", self.path)
        return rows
