"""
Date-Range Indicator Filter

Cuts a pre-computed, newest-first indicator series (Williams %R bars in
practice) down to a [start_date, end_date] range.

Both bounds are resolved with find_first_on_or_before: the first point,
scanning from index 0, whose calendar date is <= the bound. On a
newest-first series that is the latest point at or before the bound. On an
oldest-first series it is index 0 whenever the first point qualifies, so the
filter is only meaningful for newest-first input.

Points are emitted from the start index down to the end index, i.e. oldest
first, as deep copies.
"""

import copy
import logging
from typing import Any, List, Optional, Sequence

from ..utils.dates import DateLike, find_first_on_or_before, is_usable_series

logger = logging.getLogger(__name__)


class DateRangeIndicatorFilter:
    """
    Date-range view over a newest-first indicator series

    Args:
        series: Points exposing `date` as an attribute or mapping key, newest first
        start_date: Earliest date to include
        end_date: Latest date to include
    """

    def __init__(self, series: Sequence[Any], start_date: DateLike, end_date: DateLike):
        self.series = series
        self.start_date = start_date
        self.end_date = end_date

    def values(self) -> Optional[List[Any]]:
        """
        Deep copies of the points between the resolved bounds

        Returns:
            Points ordered from start_date towards end_date, an empty list when
            either bound resolves to no point, or None for malformed input
        """
        if not is_usable_series(self.series):
            logger.warning("Date-range filter received unusable input")
            return None

        start_index = find_first_on_or_before(self.series, self.start_date)
        end_index = find_first_on_or_before(self.series, self.end_date)
        logger.debug(f"Date range {self.start_date}..{self.end_date} resolved to {start_index}..{end_index}")

        if start_index == -1 or end_index == -1:
            return []

        return [copy.deepcopy(self.series[index]) for index in range(start_index, end_index - 1, -1)]


def filter_date_range(
    series: Sequence[Any],
    start_date: DateLike,
    end_date: DateLike,
) -> Optional[List[Any]]:
    """Points of a newest-first series within a date range (see DateRangeIndicatorFilter.values)"""
    return DateRangeIndicatorFilter(series, start_date, end_date).values()


__all__ = ["DateRangeIndicatorFilter", "filter_date_range"]
