"""
Value Types

Price bars consumed by the engines and the points they produce. Every type
is a frozen dataclass; merge steps build new instances with
dataclasses.replace so a point's date never changes once created.

All points export to JSON-serializable records (dates as ISO strings) and,
in bulk, to pandas DataFrames for charting collaborators.
"""

from dataclasses import dataclass, fields
from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional

import pandas as pd

from .utils.dates import DateLike, normalize_date


class _RecordMixin:
    """JSON-friendly export shared by all point types"""

    def to_dict(self) -> Dict[str, Any]:
        record = {}
        for item in fields(self):
            value = getattr(self, item.name)
            record[item.name] = value.isoformat() if isinstance(value, date) else value
        return record


@dataclass(frozen=True)
class PriceBar(_RecordMixin):
    """Daily OHLCV bar"""
    date: date
    open: float
    high: float
    low: float
    close: float
    volume: int = 0

    def __post_init__(self):
        object.__setattr__(self, "date", normalize_date(self.date))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PriceBar":
        """
        Build a bar from a fetched record

        Args:
            data: Mapping with date, open, high, low, close and optional volume

        Raises:
            KeyError: a price field is missing
            ValueError: the date cannot be parsed
        """
        return cls(
            date=normalize_date(data["date"]),
            open=float(data["open"]),
            high=float(data["high"]),
            low=float(data["low"]),
            close=float(data["close"]),
            volume=int(data.get("volume") or 0),
        )


@dataclass(frozen=True)
class IndicatorPoint(_RecordMixin):
    """Date-stamped value produced by the Moving Average Generator"""
    date: date
    value: float


@dataclass(frozen=True)
class ChartSeriesPoint(_RecordMixin):
    """Per-day row a price chart consumes; None marks a value that could not be calculated"""
    date: date
    closing_price: float
    simple_moving_average: Optional[float] = None
    exponential_moving_average: Optional[float] = None
    two_hundred_day_moving_average: Optional[float] = None
    fifty_day_moving_average: Optional[float] = None
    lower_bollinger_band: Optional[float] = None
    upper_bollinger_band: Optional[float] = None
    bollinger_mean: Optional[float] = None


@dataclass(frozen=True)
class BollingerPoint(_RecordMixin):
    """
    Bollinger band values for one day

    moving_average is the value of the wrapped series (the extended close)
    at this date; current_price is the display series' close.
    """
    date: date
    lower_band_value: float
    upper_band_value: float
    current_price: float
    moving_average: float
    standard_deviation: float
    mean: float


@dataclass(frozen=True)
class RSIPoint(_RecordMixin):
    """RSI value plus the smoothed means it was derived from"""
    date: date
    closing_price: float
    upward_mean: float
    downward_mean: float
    rsi_value: float


@dataclass(frozen=True)
class StochasticPoint(_RecordMixin):
    """Fast (%K) and slow (%D) stochastic values"""
    date: date
    fast_value: float
    slow_value: float


@dataclass(frozen=True)
class WilliamsPoint(_RecordMixin):
    """Bar from a pre-computed Williams %R series"""
    date: date
    open: float
    high: float
    low: float
    close: float
    volume: int
    williams: float

    def __post_init__(self):
        object.__setattr__(self, "date", normalize_date(self.date))


@dataclass(frozen=True)
class KeyMetricsPoint(_RecordMixin):
    """Quarterly price/earnings entry"""
    symbol: str
    date: date
    period: str
    calendar_year: str
    x_axis_label: str
    price_to_earnings: str


def closing_prices(bars: Iterable[PriceBar]) -> List[IndicatorPoint]:
    """Convert bars to IndicatorPoints keyed by closing price"""
    return [IndicatorPoint(bar.date, bar.close) for bar in bars]


def to_records(points: Iterable[Any]) -> List[Dict[str, Any]]:
    """JSON-serializable records for any sequence of points"""
    return [point.to_dict() for point in points]


def to_dataframe(points: Iterable[Any]) -> pd.DataFrame:
    """
    DataFrame of points indexed by date

    Returns:
        pd.DataFrame with a DatetimeIndex named "date" (empty when no points)
    """
    records = to_records(points)
    if not records:
        return pd.DataFrame()

    df = pd.DataFrame.from_records(records)
    df["date"] = pd.to_datetime(df["date"])
    return df.set_index("date")


def make_price_bars(records: Iterable[Mapping[str, Any]]) -> List[PriceBar]:
    """Parse fetched records into PriceBars"""
    return [PriceBar.from_dict(record) for record in records]


__all__ = [
    "DateLike",
    "PriceBar",
    "IndicatorPoint",
    "ChartSeriesPoint",
    "BollingerPoint",
    "RSIPoint",
    "StochasticPoint",
    "WilliamsPoint",
    "KeyMetricsPoint",
    "closing_prices",
    "to_records",
    "to_dataframe",
    "make_price_bars",
]
