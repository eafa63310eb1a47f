"""
Chart Indicators - technical-analysis series for daily price charts

Turns a display window of daily OHLCV bars ("standard") plus the same window
with preceding history ("extended") into chart-ready series.

Key Features:
- Simple and exponential moving averages (33/10 day, plus 200/50 day when
  history allows)
- Bollinger bands (population standard deviation)
- Wilder RSI with an explicit full-uptrend policy
- Stochastic %K / %D
- Date-range filtering of pre-computed Williams %R series
- Quarterly price/earnings series
- Record and pandas DataFrame export

Usage:
 from chart_indicators import ChartIndicatorCalculator, make_price_bars, to_dataframe

 calculator = ChartIndicatorCalculator()
 bundle = calculator.calculate(make_price_bars(display), make_price_bars(history))
 frame = to_dataframe(bundle.rows)
"""

__version__ = "1.0.0"
__author__ = "Chart Indicators Team"
__license__ = "MIT"

from .config import IndicatorConfig

from .models import (
    PriceBar,
    IndicatorPoint,
    ChartSeriesPoint,
    BollingerPoint,
    RSIPoint,
    StochasticPoint,
    WilliamsPoint,
    KeyMetricsPoint,
    closing_prices,
    make_price_bars,
    to_records,
    to_dataframe,
)

from .indicators import (
    MovingAverageMethod,
    MovingAverageGenerator,
    calculate_sma_series,
    calculate_ema_series,
    calculate_sma,
    calculate_ema,
    BollingerBandEngine,
    calculate_bollinger_bands,
    RSIEngine,
    calculate_rsi_series,
    StochasticEngine,
    calculate_stochastic_series,
    DateRangeIndicatorFilter,
    filter_date_range,
    price_to_earnings_series,
)

from .facade import (
    ChartIndicatorCalculator,
    ChartIndicatorBundle,
    Diagnostic,
    DiagnosticKind,
    ema_slope,
)

from .utils import normalize_date

__all__ = [
    "__version__",
    "IndicatorConfig",
    "PriceBar",
    "IndicatorPoint",
    "ChartSeriesPoint",
    "BollingerPoint",
    "RSIPoint",
    "StochasticPoint",
    "WilliamsPoint",
    "KeyMetricsPoint",
    "closing_prices",
    "make_price_bars",
    "to_records",
    "to_dataframe",
    "MovingAverageMethod",
    "MovingAverageGenerator",
    "calculate_sma_series",
    "calculate_ema_series",
    "calculate_sma",
    "calculate_ema",
    "BollingerBandEngine",
    "calculate_bollinger_bands",
    "RSIEngine",
    "calculate_rsi_series",
    "StochasticEngine",
    "calculate_stochastic_series",
    "DateRangeIndicatorFilter",
    "filter_date_range",
    "price_to_earnings_series",
    "ChartIndicatorCalculator",
    "ChartIndicatorBundle",
    "Diagnostic",
    "DiagnosticKind",
    "ema_slope",
    "normalize_date",
]
