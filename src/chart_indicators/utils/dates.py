"""
Date Handling Utilities

Calendar-date normalisation and the date-matching strategies used to align
derived indicator series with a display window.

Two matching strategies exist and each call site uses exactly one of them:
- find_exact_date_index: first point whose date equals the target
  (Bollinger, RSI and Stochastic alignment, moving-average row filling)
- find_first_on_or_before: first point, scanning from index 0, whose date
  is <= the target (Date-Range Indicator Filter). On a newest-first series
  this is the latest point at or before the target; on an oldest-first
  series it is index 0 whenever the first point qualifies.
"""

from datetime import date, datetime
from typing import Any, Mapping, Sequence, Union

import numpy as np
import pandas as pd

DateLike = Union[str, date, datetime, pd.Timestamp, np.datetime64]


def normalize_date(value: DateLike) -> date:
    """
    Convert a date-like value to a calendar date

    Timezone-aware timestamps are converted to UTC before the calendar date
    is taken, so "2024-01-15T10:30:00.000Z" becomes 2024-01-15.

    Raises:
        ValueError: value is empty or cannot be parsed as a date
    """
    if isinstance(value, date) and not isinstance(value, datetime):
        return value

    timestamp = pd.Timestamp(value)
    if pd.isna(timestamp):
        raise ValueError(f"Cannot interpret {value!r} as a date")

    if timestamp.tzinfo is not None:
        timestamp = timestamp.tz_convert("UTC")

    return timestamp.date()


def point_date(point: Any) -> date:
    """Calendar date of a point exposing `date` as an attribute or mapping key"""
    raw = point["date"] if isinstance(point, Mapping) else point.date
    return normalize_date(raw)


def is_usable_series(values: Any) -> bool:
    """True when values is a sized collection of points that lookback computations can index"""
    if values is None or isinstance(values, (str, bytes, Mapping)):
        return False
    return hasattr(values, "__len__") and hasattr(values, "__getitem__")


def find_exact_date_index(points: Sequence[Any], target: DateLike) -> int:
    """
    Index of the first point whose date equals target

    Returns:
        Index of the match, or -1 when no point carries that date
    """
    wanted = normalize_date(target)
    for index, point in enumerate(points):
        if point.date == wanted:
            return index
    return -1


def find_first_on_or_before(points: Sequence[Any], target: DateLike) -> int:
    """
    Index of the first point, scanning from index 0, whose date is <= target

    The scan stops at the first hit and does not look for the closest date.

    Returns:
        Index of the hit, or -1 when every point is later than target
    """
    wanted = normalize_date(target)
    for index, point in enumerate(points):
        if point_date(point) <= wanted:
            return index
    return -1


def is_newest_first(points: Sequence[Any]) -> bool:
    """True when the last point is dated before the one preceding it"""
    if len(points) < 2:
        return False
    return point_date(points[-1]) < point_date(points[-2])


__all__ = [
    "DateLike",
    "normalize_date",
    "point_date",
    "is_usable_series",
    "find_exact_date_index",
    "find_first_on_or_before",
    "is_newest_first",
]
