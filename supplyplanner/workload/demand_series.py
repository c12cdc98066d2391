"""Build daily and weekly demand series from order records."""

from datetime import date, timedelta
from typing import Dict, Iterable, List, Mapping, Optional

import numpy as np
import pandas as pd

from ..core.numeric import sanitize, sanitize_count
from ..models.demand import DemandObservation

DATE_FIELDS = ('order_date', 'OrderDate')
FALLBACK_DATE_FIELDS = ('created_at', 'CreatedAt')
TOTAL_FIELDS = ('total', 'Total')
ITEM_FIELDS = ('item_count', 'ItemCount')

INVALID_PERIODS = {'', 'null', 'None', 'NaT', 'nan'}


def _column(frame: pd.DataFrame, names) -> Optional[pd.Series]:
    """Return the first column present among ``names``, merging later ones into gaps."""
    result = None
    for name in names:
        if name not in frame.columns:
            continue
        result = frame[name] if result is None else result.where(result.notna(), frame[name])
    return result


def _numeric(frame: pd.DataFrame, names) -> pd.Series:
    column = _column(frame, names)
    if column is None:
        return pd.Series(0.0, index=frame.index)
    values = pd.to_numeric(column, errors='coerce').replace([np.inf, -np.inf], np.nan)
    return values.fillna(0.0)


def aggregate_daily_series(orders: Iterable[Mapping], limit: int = 90) -> List[DemandObservation]:
    """Aggregate raw order records into a per-day demand series.

    Args:
        orders: Order records with a date, total and item count
        limit: Number of most recent days to keep

    Returns:
        Daily observations in ascending period order
    """
    limit = max(1, int(limit))
    frame = pd.DataFrame([dict(order) for order in orders or []])
    if frame.empty:
        return []

    dates = _column(frame, DATE_FIELDS + FALLBACK_DATE_FIELDS)
    if dates is None:
        return []

    frame = pd.DataFrame({
        'period': dates.map(lambda dt: '' if pd.isna(dt) else str(dt)[:10]),
        'total': _numeric(frame, TOTAL_FIELDS),
        'items': _numeric(frame, ITEM_FIELDS),
    })
    frame = frame[(frame['items'] > 0) & ~frame['period'].isin(INVALID_PERIODS)]
    if frame.empty:
        return []

    daily = (
        frame.groupby('period')
        .agg(orders=('items', 'size'), items=('items', 'sum'), revenue=('total', 'sum'))
        .sort_index(ascending=False)
        .head(limit)
        .sort_index()
    )

    series = [
        DemandObservation(
            period=row.Index,
            order_count=sanitize_count(row.orders),
            item_count=sanitize_count(row.items),
            revenue=sanitize(row.revenue),
        )
        for row in daily.itertuples()
    ]
    return retain_positive(series)


def iso_week_start(period: str) -> Optional[str]:
    """Monday of the ISO week containing a ``YYYY-MM-DD`` period, or None."""
    if not isinstance(period, str) or not period.strip():
        return None
    try:
        day = date.fromisoformat(period.strip()[:10])
    except ValueError:
        return None
    return (day - timedelta(days=day.weekday())).isoformat()


def bucket_weekly(daily: Iterable[DemandObservation],
                  limit_weeks: Optional[int] = None) -> List[DemandObservation]:
    """Sum daily observations into ISO weeks keyed by their Monday.

    Args:
        daily: Daily observations in any order
        limit_weeks: Keep only the most recent weeks when given

    Returns:
        Weekly observations in ascending period order
    """
    totals: Dict[str, Dict[str, float]] = {}
    for obs in daily or []:
        week_start = iso_week_start(obs.period)
        if week_start is None:
            continue
        bucket = totals.setdefault(week_start, {'orders': 0, 'items': 0, 'revenue': 0.0})
        bucket['orders'] += sanitize_count(obs.order_count)
        bucket['items'] += sanitize_count(obs.item_count)
        bucket['revenue'] += sanitize(obs.revenue)

    series = [
        DemandObservation(
            period=week_start,
            order_count=int(bucket['orders']),
            item_count=int(bucket['items']),
            revenue=bucket['revenue'],
        )
        for week_start, bucket in sorted(totals.items())
    ]

    if limit_weeks is not None:
        series = series[max(0, len(series) - max(1, int(limit_weeks))):]
    return series


def build_weekly_series(orders: Iterable[Mapping], limit_weeks: int = 26) -> List[DemandObservation]:
    """Aggregate order records into the most recent ``limit_weeks`` ISO weeks."""
    limit_weeks = max(1, int(limit_weeks))
    daily = aggregate_daily_series(orders, limit=limit_weeks * 14)
    return bucket_weekly(daily, limit_weeks=limit_weeks)


def retain_positive(observations: Iterable[DemandObservation]) -> List[DemandObservation]:
    """Drop observations without a period or without any demand."""
    return [
        obs for obs in observations or []
        if obs.period and sanitize(obs.item_count) > 0
    ]
