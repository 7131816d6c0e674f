from dashing_charts.adapters.normalize import first_series_data, normalize_point, normalize_points

__all__ = ["first_series_data", "normalize_point", "normalize_points"]
