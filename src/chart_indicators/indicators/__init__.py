"""
Indicator engines

Moving averages, Bollinger bands, RSI, stochastic, the date-range filter
and the price/earnings series.
"""

from .moving_average import (
    MovingAverageMethod,
    MovingAverageGenerator,
    calculate_sma_series,
    calculate_ema_series,
    calculate_sma,
    calculate_ema,
)

from .bollinger import BollingerBandEngine, calculate_bollinger_bands

from .rsi import RSIEngine, rsi_from_means, calculate_rsi_series

from .stochastic import StochasticEngine, calculate_stochastic_series

from .date_range import DateRangeIndicatorFilter, filter_date_range

from .key_metrics import key_metrics_point, price_to_earnings_series

__all__ = [
    "MovingAverageMethod",
    "MovingAverageGenerator",
    "calculate_sma_series",
    "calculate_ema_series",
    "calculate_sma",
    "calculate_ema",
    "BollingerBandEngine",
    "calculate_bollinger_bands",
    "RSIEngine",
    "rsi_from_means",
    "calculate_rsi_series",
    "StochasticEngine",
    "calculate_stochastic_series",
    "DateRangeIndicatorFilter",
    "filter_date_range",
    "key_metrics_point",
    "price_to_earnings_series",
]
