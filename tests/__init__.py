"""
Test Suite for Chart Indicators

Shared bar generators and assertion helpers for the engine and facade tests.
"""

from datetime import date, timedelta
from typing import List, Sequence

import numpy as np

from chart_indicators import PriceBar, WilliamsPoint


def make_bars(
    count: int,
    start_date: date = date(2024, 1, 1),
    start_price: float = 100.0,
    step: float = 1.0,
) -> List[PriceBar]:
    """Daily bars on consecutive calendar days with a linear close ramp"""
    bars = []
    for offset in range(count):
        close = start_price + step * offset
        bars.append(PriceBar(
            date=start_date + timedelta(days=offset),
            open=close,
            high=close + 1.0,
            low=close - 1.0,
            close=close,
            volume=1000 + offset,
        ))
    return bars


def bars_from_closes(closes: Sequence[float], start_date: date = date(2024, 1, 1)) -> List[PriceBar]:
    """Daily bars whose open/high/low all equal the given closes"""
    return [
        PriceBar(
            date=start_date + timedelta(days=offset),
            open=close,
            high=close,
            low=close,
            close=close,
            volume=0,
        )
        for offset, close in enumerate(closes)
    ]


def generate_random_bars(count: int = 300, start_date: date = date(2023, 1, 1), seed: int = 42) -> List[PriceBar]:
    """Random-walk bars with a consistent low <= close <= high range"""
    rng = np.random.RandomState(seed)
    closes = 100.0 * np.cumprod(1.0 + rng.normal(0.0005, 0.02, count))

    bars = []
    for offset, close in enumerate(closes):
        spread = close * rng.uniform(0.001, 0.02)
        bars.append(PriceBar(
            date=start_date + timedelta(days=offset),
            open=float(close * (1 + rng.normal(0, 0.005))),
            high=float(close + spread),
            low=float(close - spread),
            close=float(close),
            volume=int(rng.lognormal(10, 1)),
        ))
    return bars


def make_williams_series(count: int, newest: date = date(2024, 3, 31)) -> List[WilliamsPoint]:
    """Williams %R points stored newest first"""
    return [
        WilliamsPoint(
            date=newest - timedelta(days=offset),
            open=50.0,
            high=55.0,
            low=45.0,
            close=50.0 + offset,
            volume=100,
            williams=-float(offset % 100),
        )
        for offset in range(count)
    ]


def make_key_metrics(count: int, symbol: str = "AAPL") -> List[dict]:
    """Quarterly key-metric records, newest first"""
    records = []
    for offset in range(count):
        year = 2024 - offset // 4
        quarter = 4 - offset % 4
        records.append({
            "symbol": symbol,
            "date": f"{year}-{quarter * 3:02d}-28",
            "period": f"Q{quarter}",
            "calendarYear": str(year),
            "peRatio": 20.0 + offset * 0.5,
        })
    return records


# Test utilities
def assert_within_bounds(values, lower: float = 0.0, upper: float = 100.0):
    """Assert every value lies in [lower, upper]"""
    for value in values:
        assert lower <= value <= upper, f"{value} outside [{lower}, {upper}]"


def assert_dates_match(points, bars):
    """Assert points are dated one-for-one with bars"""
    assert [point.date for point in points] == [bar.date for bar in bars]


__all__ = [
    "make_bars",
    "bars_from_closes",
    "generate_random_bars",
    "make_williams_series",
    "make_key_metrics",
    "assert_within_bounds",
    "assert_dates_match",
]
