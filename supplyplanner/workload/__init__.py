"""Demand series construction and loading."""

from .demand_series import (
    aggregate_daily_series,
    bucket_weekly,
    build_weekly_series,
    iso_week_start,
    retain_positive,
)
from .series_loader import SeriesLoader

__all__ = [
    "aggregate_daily_series",
    "bucket_weekly",
    "build_weekly_series",
    "iso_week_start",
    "retain_positive",
    "SeriesLoader",
]
