"""
Stochastic Oscillator Engine

%K = (close - lowest low) / (highest high - lowest low) * 100 over the
`fast_lookback` bars ending at and including each bar, 0 when the range is
flat. %D is the simple moving average of %K over `slow_lookback` points.
"""

import logging
from typing import List, Optional, Sequence

import numpy as np

from ..models import IndicatorPoint, PriceBar, StochasticPoint
from ..utils.dates import find_exact_date_index, is_usable_series
from ..utils.math_utils import rolling_max, rolling_min
from .moving_average import MovingAverageGenerator, MovingAverageMethod

logger = logging.getLogger(__name__)


class StochasticEngine:
    """
    Fast (%K) and slow (%D) stochastic for a (standard, extended) pair

    Args:
        fast_lookback: Bars per %K window (default 14)
        slow_lookback: %K points averaged into %D (default 3)
    """

    def __init__(self, fast_lookback: int = 14, slow_lookback: int = 3):
        self.fast_lookback = fast_lookback
        self.slow_lookback = slow_lookback

    def fast_series(self, extended: Sequence[PriceBar]) -> Optional[List[IndicatorPoint]]:
        """%K for every bar with a full window behind it"""
        if not is_usable_series(extended) or self.fast_lookback <= 0:
            logger.warning("Stochastic received unusable input")
            return None
        if len(extended) < self.fast_lookback:
            return None

        highs = np.array([bar.high for bar in extended], dtype=np.float64)
        lows = np.array([bar.low for bar in extended], dtype=np.float64)
        closes = np.array([bar.close for bar in extended], dtype=np.float64)

        highest = rolling_max(highs, self.fast_lookback)
        lowest = rolling_min(lows, self.fast_lookback)
        latest = closes[self.fast_lookback - 1:]
        spread = highest - lowest

        flat = spread == 0
        fast = np.where(flat, 0.0, (latest - lowest) / np.where(flat, 1.0, spread) * 100.0)

        return [
            IndicatorPoint(bar.date, float(value))
            for bar, value in zip(extended[self.fast_lookback - 1:], fast)
        ]

    def calculate(
        self,
        standard: Sequence[PriceBar],
        extended: Sequence[PriceBar],
    ) -> Optional[List[StochasticPoint]]:
        """
        One StochasticPoint per standard bar

        Returns:
            StochasticPoints aligned with standard, or None when either series
            is unavailable, the first standard date is missing from %K or %D,
            or they cannot cover every standard bar
        """
        if not is_usable_series(standard) or len(standard) == 0:
            logger.warning("Stochastic received an unusable display window")
            return None

        fast = self.fast_series(extended)
        if fast is None:
            logger.warning(f"Stochastic %K needs {self.fast_lookback} bars")
            return None

        slow = MovingAverageGenerator(self.slow_lookback, MovingAverageMethod.SIMPLE).unrestricted(fast)
        if slow is None:
            logger.warning(f"Stochastic %D unavailable for {len(fast)} %K points")
            return None

        first_date = standard[0].date
        fast_start = find_exact_date_index(fast, first_date)
        slow_start = find_exact_date_index(slow, first_date)
        if fast_start == -1 or slow_start == -1:
            logger.warning(f"Stochastic has no value for {first_date}")
            return None

        count = len(standard)
        if fast_start + count > len(fast) or slow_start + count > len(slow):
            logger.warning(f"Stochastic cannot cover {count} display bars")
            return None

        return [
            StochasticPoint(
                date=fast[fast_start + offset].date,
                fast_value=fast[fast_start + offset].value,
                slow_value=slow[slow_start + offset].value,
            )
            for offset in range(count)
        ]


def calculate_stochastic_series(
    standard: Sequence[PriceBar],
    extended: Sequence[PriceBar],
    fast_lookback: int = 14,
    slow_lookback: int = 3,
) -> Optional[List[StochasticPoint]]:
    """Stochastic for the display window (see StochasticEngine.calculate)"""
    return StochasticEngine(fast_lookback, slow_lookback).calculate(standard, extended)


__all__ = ["StochasticEngine", "calculate_stochastic_series"]
