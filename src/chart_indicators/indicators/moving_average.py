"""
Moving Average Generator

Simple and exponential moving averages over daily closes, in two call modes:
- point: the average at exactly one index
- unrestricted: every computable index as date-stamped IndicatorPoints

The value at index i averages the lookback closes ending at and including i
(indices i - lookback + 1 .. i) and is defined for i >= lookback. For closes
[10, 20, 30, 40, 50] and lookback 3 the series is 30.0 at index 3 and 40.0 at
index 4.

The exponential average is seeded with the simple average at index lookback
and then applies ema_i = (close_i - ema_{i-1}) * k + ema_{i-1}, k = 2 / (lookback + 1).

Inputs may be PriceBars (their close is averaged) or IndicatorPoints (their
value is averaged), so the same generator smooths %K into %D.
"""

import logging
from dataclasses import replace
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np

from ..models import ChartSeriesPoint, IndicatorPoint
from ..utils.dates import is_usable_series
from ..utils.math_utils import ema_series, rolling_mean

logger = logging.getLogger(__name__)


class MovingAverageMethod(str, Enum):
    SIMPLE = "simple"
    EXPONENTIAL = "exponential"


def _point_value(point: Any) -> float:
    close = getattr(point, "close", None)
    return float(point.value if close is None else close)


def _series_arrays(values: Sequence[Any]) -> Tuple[list, np.ndarray]:
    """Dates and averaged values of a bar or IndicatorPoint sequence"""
    dates = [point.date for point in values]
    closes = np.array([_point_value(point) for point in values], dtype=np.float64)
    return dates, closes


class MovingAverageGenerator:
    """
    Moving average over a fixed lookback

    Holds only its lookback and method; every call is a pure function of its
    arguments.

    Args:
        lookback: Window length (number of trailing closes)
        method: MovingAverageMethod.SIMPLE or MovingAverageMethod.EXPONENTIAL
    """

    def __init__(self, lookback: int, method: MovingAverageMethod = MovingAverageMethod.SIMPLE):
        self.lookback = lookback
        self.method = MovingAverageMethod(method)

    def __repr__(self) -> str:
        return f"MovingAverageGenerator(lookback={self.lookback}, method={self.method.value})"

    def _averages(self, closes: np.ndarray) -> np.ndarray:
        """Averages for indices lookback .. N-1 of closes (N >= lookback + 1)"""
        lookback = self.lookback
        simple = rolling_mean(closes[1:], lookback)
        if self.method is MovingAverageMethod.SIMPLE:
            return simple
        return ema_series(closes, lookback, simple[0])

    def point(self, values: Sequence[Any], index: int) -> float:
        """
        Moving average at a single index

        Args:
            values: PriceBars or IndicatorPoints, oldest first
            index: 0-based position to evaluate

        Returns:
            The average at index, or 0.0 when lookback <= 0 or index < lookback

        Raises:
            IndexError: index is negative or beyond the end of values
            TypeError: values is not an indexable series of points
        """
        if not is_usable_series(values):
            raise TypeError(f"Moving average needs an indexable series, got {type(values).__name__}")
        if self.lookback <= 0:
            return 0.0
        if index < 0 or index >= len(values):
            raise IndexError(f"index {index} out of range for {len(values)} values")
        if index < self.lookback:
            return 0.0

        _, closes = _series_arrays(values[: index + 1])
        return float(self._averages(closes)[-1])

    def unrestricted(self, values: Sequence[Any]) -> Optional[List[IndicatorPoint]]:
        """
        Every computable moving-average point

        Returns:
            IndicatorPoints for indices lookback .. N-1, or None when the input
            is malformed, lookback <= 0, or there are fewer than lookback + 1 values
        """
        if not is_usable_series(values):
            logger.warning(f"Moving average received unusable input: {type(values).__name__}")
            return None
        if self.lookback <= 0:
            return None
        if len(values) < self.lookback + 1:
            logger.debug(f"{self!r}: {len(values)} values cannot seed the window")
            return None

        dates, closes = _series_arrays(values)
        averages = self._averages(closes)
        return [
            IndicatorPoint(day, float(average))
            for day, average in zip(dates[self.lookback:], averages)
        ]

    def apply_to_rows(
        self,
        rows: Sequence[ChartSeriesPoint],
        extended: Sequence[Any],
        field_name: str,
    ) -> List[ChartSeriesPoint]:
        """
        Fill one ChartSeriesPoint field from the average over the extended series

        Each row takes the value whose date exactly matches its own; rows
        without a match (or every row, when the average is unavailable) get None.

        Returns:
            New rows; the input rows are not modified
        """
        series = self.unrestricted(extended)
        by_date: Dict[Any, float] = {}
        for point in series or []:
            by_date.setdefault(point.date, point.value)

        return [replace(row, **{field_name: by_date.get(row.date)}) for row in rows]


def calculate_sma_series(values: Sequence[Any], lookback: int) -> Optional[List[IndicatorPoint]]:
    """Unrestricted simple moving average (see MovingAverageGenerator.unrestricted)"""
    return MovingAverageGenerator(lookback, MovingAverageMethod.SIMPLE).unrestricted(values)


def calculate_ema_series(values: Sequence[Any], lookback: int) -> Optional[List[IndicatorPoint]]:
    """Unrestricted exponential moving average (see MovingAverageGenerator.unrestricted)"""
    return MovingAverageGenerator(lookback, MovingAverageMethod.EXPONENTIAL).unrestricted(values)


def calculate_sma(values: Sequence[Any], lookback: int, index: int) -> float:
    """Simple moving average at one index (see MovingAverageGenerator.point)"""
    return MovingAverageGenerator(lookback, MovingAverageMethod.SIMPLE).point(values, index)


def calculate_ema(values: Sequence[Any], lookback: int, index: int) -> float:
    """Exponential moving average at one index (see MovingAverageGenerator.point)"""
    return MovingAverageGenerator(lookback, MovingAverageMethod.EXPONENTIAL).point(values, index)


__all__ = [
    "MovingAverageMethod",
    "MovingAverageGenerator",
    "calculate_sma_series",
    "calculate_ema_series",
    "calculate_sma",
    "calculate_ema",
]
