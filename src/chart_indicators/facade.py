"""
Orchestration Facade

Sequences the engines into chart-ready output for one (standard, extended)
pair of bar series:

1. base ChartSeriesPoint rows from the standard closes
2. short SMA and EMA, always
3. long SMAs, only when the extended series covers the whole display window
   for that lookback; otherwise the field stays None on every row
4. optional Bollinger bands merged into the rows
5. RSI and stochastic as separate series

Expected data-shape problems never raise. They degrade the affected field or
series to None and are reported as Diagnostics on the call that hit them.
The calculator holds only its configuration, so one instance may serve any
number of concurrent calls.
"""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Sequence, Tuple

from .config import IndicatorConfig
from .indicators.bollinger import BollingerBandEngine
from .indicators.date_range import filter_date_range
from .indicators.key_metrics import price_to_earnings_series
from .indicators.moving_average import MovingAverageGenerator, MovingAverageMethod
from .indicators.rsi import RSIEngine
from .indicators.stochastic import StochasticEngine
from .models import (
    ChartSeriesPoint,
    KeyMetricsPoint,
    PriceBar,
    RSIPoint,
    StochasticPoint,
    to_records,
)
from .utils.dates import DateLike, is_newest_first, is_usable_series


class DiagnosticKind(str, Enum):
    INSUFFICIENT_HISTORY = "insufficient_history"
    SERIES_UNAVAILABLE = "series_unavailable"
    MALFORMED_INPUT = "malformed_input"


class Diagnostic(NamedTuple):
    """Non-fatal condition met while building one output"""
    kind: DiagnosticKind
    target: str
    message: str


@dataclass
class ChartIndicatorBundle:
    """Everything ChartIndicatorCalculator.calculate produces"""
    rows: List[ChartSeriesPoint] = field(default_factory=list)
    rsi: Optional[List[RSIPoint]] = None
    stochastic: Optional[List[StochasticPoint]] = None
    price_to_earnings: List[KeyMetricsPoint] = field(default_factory=list)
    slope: float = 0.0
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-serializable view for charting collaborators"""
        return {
            "rows": to_records(self.rows),
            "rsi": None if self.rsi is None else to_records(self.rsi),
            "stochastic": None if self.stochastic is None else to_records(self.stochastic),
            "price_to_earnings": to_records(self.price_to_earnings),
            "slope": self.slope,
            "diagnostics": [
                {"kind": item.kind.value, "target": item.target, "message": item.message}
                for item in self.diagnostics
            ],
        }


# ChartSeriesPoint field filled by each long SMA lookback
LONG_SMA_FIELDS = ("two_hundred_day_moving_average", "fifty_day_moving_average")


def ema_slope(rows: Sequence[ChartSeriesPoint]) -> float:
    """
    Change of the EMA over the last two rows, rounded to 2 decimals

    Returns:
        0.0 when fewer than two rows exist or either EMA is missing
    """
    if len(rows) < 2:
        return 0.0
    latest = rows[-1].exponential_moving_average
    previous = rows[-2].exponential_moving_average
    if latest is None or previous is None:
        return 0.0
    return round(latest - previous, 2)


class ChartIndicatorCalculator:
    """
    Chart indicator orchestration

    Every public method accepts an optional `diagnostics` list; conditions
    that degrade the output are appended to it.

    Args:
        config: Lookbacks and feature switches (defaults when None)
    """

    def __init__(self, config: Optional[IndicatorConfig] = None):
        self.config = config or IndicatorConfig()
        self.logger = logging.getLogger(__name__)

    def _report(
        self,
        diagnostics: Optional[List[Diagnostic]],
        kind: DiagnosticKind,
        target: str,
        message: str,
        level: int = logging.WARNING,
    ) -> None:
        if diagnostics is not None:
            diagnostics.append(Diagnostic(kind, target, message))
        if self.config.enable_logging:
            self.logger.log(level, f"{target}: {message}")

    def _chronological(
        self,
        standard: Sequence[PriceBar],
        extended: Sequence[PriceBar],
    ) -> Tuple[Sequence[PriceBar], Sequence[PriceBar]]:
        """Each series as an oldest-first copy when it arrives newest first"""
        return self._oldest_first(standard, "standard"), self._oldest_first(extended, "extended")

    def _oldest_first(self, bars: Sequence[PriceBar], name: str) -> Sequence[PriceBar]:
        if not is_usable_series(bars) or not is_newest_first(bars):
            return bars

        if self.config.enable_logging:
            self.logger.debug(f"Reversing newest-first {name} series")
        return list(reversed(bars))

    def daily_values(
        self,
        standard: Sequence[PriceBar],
        extended: Sequence[PriceBar],
        diagnostics: Optional[List[Diagnostic]] = None,
    ) -> Optional[List[ChartSeriesPoint]]:
        """
        Chart rows with closing price and every moving average

        Args:
            standard: Display window
            extended: Display window plus preceding history
            diagnostics: Collector for degraded fields

        Returns:
            One ChartSeriesPoint per standard bar, or None when standard is malformed
        """
        if not is_usable_series(standard):
            self._report(diagnostics, DiagnosticKind.MALFORMED_INPUT, "standard", "series is not usable")
            return None
        if not is_usable_series(extended):
            self._report(diagnostics, DiagnosticKind.MALFORMED_INPUT, "extended", "series is not usable")

        standard, extended = self._chronological(standard, extended)
        rows = [ChartSeriesPoint(date=bar.date, closing_price=bar.close) for bar in standard]
        if not rows:
            return rows

        config = self.config
        averages = [
            (MovingAverageGenerator(config.sma_lookback, MovingAverageMethod.SIMPLE), "simple_moving_average"),
            (MovingAverageGenerator(config.ema_lookback, MovingAverageMethod.EXPONENTIAL), "exponential_moving_average"),
        ]
        for generator, field_name in averages:
            rows = generator.apply_to_rows(rows, extended, field_name)
            if all(getattr(row, field_name) is None for row in rows):
                self._report(
                    diagnostics, DiagnosticKind.SERIES_UNAVAILABLE, field_name,
                    f"no value for {generator!r}",
                )

        available = len(extended) if is_usable_series(extended) else 0
        for lookback, field_name in zip(config.long_sma_lookbacks, LONG_SMA_FIELDS):
            if available < len(standard) + lookback:
                self._report(
                    diagnostics, DiagnosticKind.INSUFFICIENT_HISTORY, field_name,
                    f"{available} extended bars cannot cover {len(standard)} rows with lookback {lookback}",
                    level=logging.INFO,
                )
                continue
            generator = MovingAverageGenerator(lookback, MovingAverageMethod.SIMPLE)
            rows = generator.apply_to_rows(rows, extended, field_name)

        return rows

    def bollinger_bands(
        self,
        standard: Sequence[PriceBar],
        extended: Sequence[PriceBar],
        rows: Sequence[ChartSeriesPoint],
        diagnostics: Optional[List[Diagnostic]] = None,
    ) -> List[ChartSeriesPoint]:
        """
        Rows with the Bollinger band fields filled in

        Returns:
            New rows carrying lower/upper band and mean by date, or the rows
            unchanged when the bands are unavailable
        """
        standard, extended = self._chronological(standard, extended)
        engine = BollingerBandEngine(self.config.bollinger_lookback, self.config.bollinger_multiplier)
        bands = engine.calculate(standard, extended)
        if bands is None:
            self._report(diagnostics, DiagnosticKind.SERIES_UNAVAILABLE, "bollinger", "bands unavailable")
            return list(rows)

        by_date = {band.date: band for band in bands}
        merged = []
        for row in rows:
            band = by_date.get(row.date)
            if band is None:
                merged.append(row)
                continue
            merged.append(replace(
                row,
                lower_bollinger_band=band.lower_band_value,
                upper_bollinger_band=band.upper_band_value,
                bollinger_mean=band.mean,
            ))
        return merged

    def rsi(
        self,
        standard: Sequence[PriceBar],
        extended: Sequence[PriceBar],
        diagnostics: Optional[List[Diagnostic]] = None,
    ) -> Optional[List[RSIPoint]]:
        """RSI for the display window, or None when it cannot be charted"""
        standard, extended = self._chronological(standard, extended)
        engine = RSIEngine(self.config.rsi_lookback, self.config.full_uptrend_rsi)
        points = engine.calculate(standard, extended)
        if points is None:
            self._report(diagnostics, DiagnosticKind.SERIES_UNAVAILABLE, "rsi", "series unavailable")
        return points

    def stochastic(
        self,
        standard: Sequence[PriceBar],
        extended: Sequence[PriceBar],
        diagnostics: Optional[List[Diagnostic]] = None,
    ) -> Optional[List[StochasticPoint]]:
        """Stochastic %K/%D for the display window, or None when it cannot be charted"""
        standard, extended = self._chronological(standard, extended)
        engine = StochasticEngine(self.config.stochastic_fast_lookback, self.config.stochastic_slow_lookback)
        points = engine.calculate(standard, extended)
        if points is None:
            self._report(diagnostics, DiagnosticKind.SERIES_UNAVAILABLE, "stochastic", "series unavailable")
        return points

    def williams_range(
        self,
        series: Sequence[Any],
        start_date: DateLike,
        end_date: DateLike,
    ) -> Optional[List[Any]]:
        """Williams %R points within a date range (see filter_date_range)"""
        return filter_date_range(series, start_date, end_date)

    def price_to_earnings(self, key_metrics: Optional[Sequence[Mapping[str, Any]]]) -> List[KeyMetricsPoint]:
        """Recent P/E values oldest first (see price_to_earnings_series)"""
        return price_to_earnings_series(key_metrics, self.config.price_to_earnings_entries)

    def calculate(
        self,
        standard: Sequence[PriceBar],
        extended: Sequence[PriceBar],
        key_metrics: Optional[Sequence[Mapping[str, Any]]] = None,
    ) -> ChartIndicatorBundle:
        """
        Full indicator run honouring the configured feature switches

        Args:
            standard: Display window
            extended: Display window plus preceding history
            key_metrics: Optional key-metric records, newest first

        Returns:
            ChartIndicatorBundle; empty apart from diagnostics when standard is malformed
        """
        bundle = ChartIndicatorBundle()
        diagnostics = bundle.diagnostics

        rows = self.daily_values(standard, extended, diagnostics)
        if rows is None:
            return bundle

        standard, extended = self._chronological(standard, extended)
        if self.config.include_bollinger:
            rows = self.bollinger_bands(standard, extended, rows, diagnostics)

        bundle.rows = rows
        bundle.slope = ema_slope(rows)
        if self.config.include_rsi:
            bundle.rsi = self.rsi(standard, extended, diagnostics)
        if self.config.include_stochastic:
            bundle.stochastic = self.stochastic(standard, extended, diagnostics)
        if key_metrics is not None:
            bundle.price_to_earnings = self.price_to_earnings(key_metrics)

        if self.config.enable_logging:
            self.logger.debug(f"Calculated {len(rows)} rows with {len(diagnostics)} diagnostics")
        return bundle


__all__ = [
    "DiagnosticKind",
    "Diagnostic",
    "ChartIndicatorBundle",
    "ChartIndicatorCalculator",
    "LONG_SMA_FIELDS",
    "ema_slope",
]
