"""
Bollinger Band Engine

Trailing mean and population standard deviation of the extended series'
closes, cut down to the display window.

For every run of `lookback` consecutive extended closes the band is
mean +/- multiplier * std, dated by the last bar of the run. The band series
is aligned to the display window by exact match on the first display date and
then walked one-for-one with the display bars.
"""

import logging
from typing import List, Optional, Sequence

import numpy as np

from ..models import BollingerPoint, PriceBar, closing_prices
from ..utils.dates import find_exact_date_index, is_usable_series
from ..utils.math_utils import rolling_mean, rolling_std

logger = logging.getLogger(__name__)


class BollingerBandEngine:
    """
    Bollinger bands for a (standard, extended) pair of bar series

    Args:
        lookback: Bars per window (default 20)
        multiplier: Standard deviations between the mean and each band (default 2.0)
    """

    def __init__(self, lookback: int = 20, multiplier: float = 2.0):
        if multiplier < 0:
            raise ValueError(f"multiplier must be >= 0, got {multiplier}")
        self.lookback = lookback
        self.multiplier = multiplier

    def calculate(
        self,
        standard: Sequence[PriceBar],
        extended: Sequence[PriceBar],
    ) -> Optional[List[BollingerPoint]]:
        """
        One BollingerPoint per standard bar

        Args:
            standard: Display window, oldest first
            extended: Display window plus preceding history, oldest first

        Returns:
            BollingerPoints aligned with standard, or None when either input is
            malformed, extended holds fewer than lookback + 1 bars, the first
            standard date has no band, or the bands cannot cover every standard bar
        """
        if not is_usable_series(standard) or not is_usable_series(extended):
            logger.warning("Bollinger bands received unusable input")
            return None
        if len(standard) == 0 or self.lookback <= 0:
            return None
        if len(extended) < self.lookback + 1:
            logger.warning(
                f"Bollinger bands need {self.lookback + 1} bars, extended series has {len(extended)}"
            )
            return None

        points = closing_prices(extended)
        closes = np.array([point.value for point in points], dtype=np.float64)
        means = rolling_mean(closes, self.lookback)
        deviations = rolling_std(closes, self.lookback, means)
        band_points = points[self.lookback - 1:]

        start = find_exact_date_index(band_points, standard[0].date)
        if start == -1:
            logger.warning(f"Bollinger bands have no value for {standard[0].date}")
            return None
        if start + len(standard) > len(band_points):
            logger.warning(
                f"Bollinger bands cover {len(band_points) - start} of {len(standard)} display bars"
            )
            return None

        result = []
        for offset, bar in enumerate(standard):
            index = start + offset
            mean = float(means[index])
            deviation = float(deviations[index])
            width = self.multiplier * deviation
            result.append(BollingerPoint(
                date=band_points[index].date,
                lower_band_value=mean - width,
                upper_band_value=mean + width,
                current_price=bar.close,
                moving_average=band_points[index].value,
                standard_deviation=deviation,
                mean=mean,
            ))

        return result


def calculate_bollinger_bands(
    standard: Sequence[PriceBar],
    extended: Sequence[PriceBar],
    lookback: int = 20,
    multiplier: float = 2.0,
) -> Optional[List[BollingerPoint]]:
    """Bollinger bands for the display window (see BollingerBandEngine.calculate)"""
    return BollingerBandEngine(lookback, multiplier).calculate(standard, extended)


__all__ = ["BollingerBandEngine", "calculate_bollinger_bands"]
