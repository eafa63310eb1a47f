"""
Utilities for chart_indicators

Date normalisation / matching and trailing-window math shared by the engines.
"""

from .dates import (
    DateLike,
    normalize_date,
    point_date,
    is_usable_series,
    find_exact_date_index,
    find_first_on_or_before,
    is_newest_first,
)

from .math_utils import (
    rolling_mean,
    rolling_std,
    rolling_max,
    rolling_min,
    ema_series,
    wilder_means,
)

__all__ = [
    "DateLike",
    "normalize_date",
    "point_date",
    "is_usable_series",
    "find_exact_date_index",
    "find_first_on_or_before",
    "is_newest_first",
    "rolling_mean",
    "rolling_std",
    "rolling_max",
    "rolling_min",
    "ema_series",
    "wilder_means",
]
