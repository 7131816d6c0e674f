from __future__ import annotations

from dataclasses import dataclass, replace
import os
from pathlib import Path
import tomllib
from typing import Any, Literal


DEFAULT_VISIBLE_DATA_POINTS = 80

FailurePolicy = Literal["best_effort", "raise"]
FAILURE_POLICIES: tuple[str, ...] = ("best_effort", "raise")


@dataclass(frozen=True)
class ChartConfig:
    # None means unbounded: nothing is ever evicted.
    visible_data_points_num: int | None = DEFAULT_VISIBLE_DATA_POINTS
    failure_policy: FailurePolicy = "best_effort"
    strict_series_arity: bool = True

    def __post_init__(self) -> None:
        if self.visible_data_points_num is not None and self.visible_data_points_num <= 0:
            raise ValueError("visible_data_points_num must be > 0")
        if self.failure_policy not in FAILURE_POLICIES:
            raise ValueError(f"unsupported failure_policy: {self.failure_policy}")

    @property
    def best_effort(self) -> bool:
        return self.failure_policy == "best_effort"

    def with_overrides(self, **changes: Any) -> "ChartConfig":
        return replace(self, **changes)

    @classmethod
    def from_env(
        cls,
        *,
        visible_env_var: str = "DASHING_VISIBLE_DATA_POINTS",
        policy_env_var: str = "DASHING_FAILURE_POLICY",
        strict_env_var: str = "DASHING_STRICT_SERIES_ARITY",
    ) -> "ChartConfig":
        visible = _parse_visible(os.getenv(visible_env_var, "").strip())
        policy = os.getenv(policy_env_var, "best_effort").strip() or "best_effort"
        strict = os.getenv(strict_env_var, "1").strip() != "0"
        return cls(
            visible_data_points_num=visible,
            failure_policy=policy,  # type: ignore[arg-type]
            strict_series_arity=strict,
        )


def load_chart_config(path: str | Path) -> ChartConfig:
    """Read the ``[chart]`` table of a TOML file into a ``ChartConfig``."""
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"chart config not found: {config_path}")
    with config_path.open("rb") as f:
        raw = tomllib.load(f)
    table = raw.get("chart", {})
    if not isinstance(table, dict):
        raise ValueError("chart config field `chart` must be a table")

    visible_raw = table.get("visible_data_points_num", DEFAULT_VISIBLE_DATA_POINTS)
    if visible_raw is not None and (isinstance(visible_raw, bool) or not isinstance(visible_raw, int)):
        raise ValueError("chart config field `visible_data_points_num` must be an integer")
    # 0 in a file reads as "no cap", the same as the env var.
    visible = visible_raw if visible_raw else None

    policy = table.get("failure_policy", "best_effort")
    if not isinstance(policy, str):
        raise ValueError("chart config field `failure_policy` must be a string")
    strict = table.get("strict_series_arity", True)
    if not isinstance(strict, bool):
        raise ValueError("chart config field `strict_series_arity` must be a boolean")
    return ChartConfig(
        visible_data_points_num=visible,
        failure_policy=policy,  # type: ignore[arg-type]
        strict_series_arity=strict,
    )


def _parse_visible(raw: str) -> int | None:
    if raw == "":
        return DEFAULT_VISIBLE_DATA_POINTS
    if raw.lower() in {"0", "none", "unbounded"}:
        return None
    try:
        value = int(raw)
    except ValueError:
        return DEFAULT_VISIBLE_DATA_POINTS
    if value <= 0:
        return None
    return value
