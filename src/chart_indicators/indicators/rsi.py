"""
RSI Engine (Wilder's method)

Bootstrap: extended[0].close is the reference close, the next `lookback` bars
form the first window and the first point is dated extended[lookback]. Both
means divide by lookback regardless of how many days moved up or down.

Recurrence: every later bar folds its gain / loss into the previous means,
new_mean = (prev_mean * (lookback - 1) + change) / lookback.

RSI = 100 - 100 / (1 + upward_mean / downward_mean). When downward_mean is 0
the ratio is undefined; the result is then `full_uptrend_rsi`, which defaults
to 0 for compatibility with existing charts. Conventional RSI reports a pure
uptrend as 100, so pass full_uptrend_rsi=100 for textbook values.
"""

import logging
from typing import List, Optional, Sequence

import numpy as np

from ..config import FULL_UPTREND_RSI_CHOICES
from ..models import PriceBar, RSIPoint
from ..utils.dates import find_exact_date_index, is_usable_series
from ..utils.math_utils import wilder_means

logger = logging.getLogger(__name__)


def rsi_from_means(upward_mean: float, downward_mean: float, full_uptrend_rsi: float = 0.0) -> float:
    """RSI for one pair of smoothed means"""
    if downward_mean == 0:
        return full_uptrend_rsi
    relative_strength = upward_mean / downward_mean
    return 100.0 - 100.0 / (1.0 + relative_strength)


class RSIEngine:
    """
    Relative Strength Index for a (standard, extended) pair of bar series

    Args:
        lookback: Smoothing window (default 14)
        full_uptrend_rsi: RSI reported when the downward mean is 0 (0 or 100)
    """

    def __init__(self, lookback: int = 14, full_uptrend_rsi: float = 0.0):
        if float(full_uptrend_rsi) not in FULL_UPTREND_RSI_CHOICES:
            raise ValueError(
                f"full_uptrend_rsi must be one of {FULL_UPTREND_RSI_CHOICES}, got {full_uptrend_rsi}"
            )
        self.lookback = lookback
        self.full_uptrend_rsi = float(full_uptrend_rsi)

    def series(self, extended: Sequence[PriceBar]) -> Optional[List[RSIPoint]]:
        """
        RSI for every computable extended bar

        Returns:
            RSIPoints for extended[lookback:], or None when the input is
            malformed or holds fewer than lookback + 1 bars
        """
        if not is_usable_series(extended) or self.lookback <= 0:
            logger.warning("RSI received unusable input")
            return None
        if len(extended) < self.lookback + 1:
            logger.warning(f"RSI needs {self.lookback + 1} bars, extended series has {len(extended)}")
            return None

        closes = np.array([bar.close for bar in extended], dtype=np.float64)
        upward, downward = wilder_means(closes, self.lookback)

        return [
            RSIPoint(
                date=bar.date,
                closing_price=bar.close,
                upward_mean=float(up),
                downward_mean=float(down),
                rsi_value=rsi_from_means(float(up), float(down), self.full_uptrend_rsi),
            )
            for bar, up, down in zip(extended[self.lookback:], upward, downward)
        ]

    def calculate(
        self,
        standard: Sequence[PriceBar],
        extended: Sequence[PriceBar],
    ) -> Optional[List[RSIPoint]]:
        """
        One RSIPoint per standard bar

        Returns:
            RSIPoints aligned with standard, or None when the RSI series is
            unavailable, the first standard date is not in it, or it cannot
            cover every standard bar
        """
        if not is_usable_series(standard) or len(standard) == 0:
            logger.warning("RSI received an unusable display window")
            return None

        points = self.series(extended)
        if points is None:
            return None

        start = find_exact_date_index(points, standard[0].date)
        if start == -1:
            logger.warning(f"RSI has no value for {standard[0].date}")
            return None
        if start + len(standard) > len(points):
            logger.warning(f"RSI covers {len(points) - start} of {len(standard)} display bars")
            return None

        return points[start:start + len(standard)]


def calculate_rsi_series(
    standard: Sequence[PriceBar],
    extended: Sequence[PriceBar],
    lookback: int = 14,
    full_uptrend_rsi: float = 0.0,
) -> Optional[List[RSIPoint]]:
    """RSI for the display window (see RSIEngine.calculate)"""
    return RSIEngine(lookback, full_uptrend_rsi).calculate(standard, extended)


__all__ = ["RSIEngine", "rsi_from_means", "calculate_rsi_series"]
