"""
Price/earnings series from quarterly key-metric records
"""

import logging
from typing import Any, List, Mapping, Optional, Sequence

from ..models import KeyMetricsPoint
from ..utils.dates import is_usable_series, normalize_date

logger = logging.getLogger(__name__)


def key_metrics_point(record: Mapping[str, Any]) -> KeyMetricsPoint:
    """
    Chart entry for one key-metric record

    Args:
        record: Mapping with symbol, date, period, calendarYear and peRatio

    Returns:
        KeyMetricsPoint labelled "<period> <calendarYear>" with the P/E
        ratio formatted to two decimals (a missing ratio charts as 0.00)
    """
    period = str(record["period"])
    calendar_year = str(record["calendarYear"])
    pe_ratio = float(record.get("peRatio") or 0.0)

    return KeyMetricsPoint(
        symbol=str(record["symbol"]),
        date=normalize_date(record["date"]),
        period=period,
        calendar_year=calendar_year,
        x_axis_label=f"{period} {calendar_year}",
        price_to_earnings=f"{pe_ratio:.2f}",
    )


def price_to_earnings_series(
    key_metrics: Optional[Sequence[Mapping[str, Any]]],
    entries: int = 8,
) -> List[KeyMetricsPoint]:
    """
    Most recent `entries` P/E values in chronological order

    Args:
        key_metrics: Key-metric records, newest first
        entries: Number of records to chart

    Returns:
        KeyMetricsPoints oldest first; empty unless more than `entries`
        records are available
    """
    if not is_usable_series(key_metrics):
        logger.warning("Price/earnings series received unusable input")
        return []
    if len(key_metrics) <= entries:
        logger.debug(f"Price/earnings series needs more than {entries} records, got {len(key_metrics)}")
        return []

    points = [key_metrics_point(record) for record in key_metrics[:entries]]
    points.reverse()
    return points


__all__ = ["key_metrics_point", "price_to_earnings_series"]
