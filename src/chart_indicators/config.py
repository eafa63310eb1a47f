"""
Indicator Configuration

Every lookback and policy switch the engines and the facade read.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

# Accepted RSI values when the downward mean is zero
FULL_UPTREND_RSI_CHOICES = (0.0, 100.0)


@dataclass
class IndicatorConfig:
    """Configuration for the chart indicator engines"""

    # Moving averages
    sma_lookback: int = 33
    ema_lookback: int = 10
    long_sma_lookbacks: Tuple[int, int] = (200, 50)

    # Bollinger bands
    bollinger_lookback: int = 20
    bollinger_multiplier: float = 2.0

    # Momentum
    rsi_lookback: int = 14
    full_uptrend_rsi: float = 0.0
    clamp_full_uptrend_to: Optional[float] = None
    stochastic_fast_lookback: int = 14
    stochastic_slow_lookback: int = 3

    # Key metrics
    price_to_earnings_entries: int = 8

    # Facade switches
    include_bollinger: bool = True
    include_rsi: bool = True
    include_stochastic: bool = True

    # Monitoring
    enable_logging: bool = True

    def __post_init__(self):
        if self.clamp_full_uptrend_to is not None:
            self.full_uptrend_rsi = self.clamp_full_uptrend_to
        self.full_uptrend_rsi = float(self.full_uptrend_rsi)

        lookbacks = {
            "sma_lookback": self.sma_lookback,
            "ema_lookback": self.ema_lookback,
            "bollinger_lookback": self.bollinger_lookback,
            "rsi_lookback": self.rsi_lookback,
            "stochastic_fast_lookback": self.stochastic_fast_lookback,
            "stochastic_slow_lookback": self.stochastic_slow_lookback,
        }
        for name, value in lookbacks.items():
            if value < 1:
                raise ValueError(f"{name} must be >= 1, got {value}")

        self.long_sma_lookbacks = tuple(self.long_sma_lookbacks)
        if len(self.long_sma_lookbacks) != 2 or min(self.long_sma_lookbacks) < 1:
            raise ValueError(
                f"long_sma_lookbacks must hold two positive lookbacks, got {self.long_sma_lookbacks}"
            )

        if self.bollinger_multiplier < 0:
            raise ValueError(f"bollinger_multiplier must be >= 0, got {self.bollinger_multiplier}")

        if self.full_uptrend_rsi not in FULL_UPTREND_RSI_CHOICES:
            raise ValueError(
                f"full_uptrend_rsi must be one of {FULL_UPTREND_RSI_CHOICES}, got {self.full_uptrend_rsi}"
            )

        if self.price_to_earnings_entries < 1:
            raise ValueError(
                f"price_to_earnings_entries must be >= 1, got {self.price_to_earnings_entries}"
            )


__all__ = ["IndicatorConfig", "FULL_UPTREND_RSI_CHOICES"]
