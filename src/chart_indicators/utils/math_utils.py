"""
Mathematical Utilities Module

Trailing-window statistics and JIT-compiled recurrence kernels shared by
the indicator engines.

Window convention: for an input of length N and a window W, element k of
every rolling_* result covers values[k:k + W] and therefore belongs to the
point at index k + W - 1.
"""

import numpy as np
from numba import jit
from numpy.lib.stride_tricks import sliding_window_view
from typing import Tuple


@jit(nopython=True, cache=True)
def _fast_ema_series(values: np.ndarray, lookback: int, seed: float) -> np.ndarray:
    """
    Exponential smoothing for indices lookback .. N-1

    result[0] is the seed (the simple average ending at index lookback),
    every later element applies multiplier 2 / (lookback + 1).
    """
    count = max(values.shape[0] - lookback, 0)
    result = np.empty(count)
    if count <= 0:
        return result

    multiplier = 2.0 / (lookback + 1)
    result[0] = seed
    for k in range(1, count):
        result[k] = (values[lookback + k] - result[k - 1]) * multiplier + result[k - 1]

    return result


@jit(nopython=True, cache=True)
def _fast_wilder_means(closes: np.ndarray, lookback: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Wilder smoothing of gains and losses

    closes[0] is the reference close preceding the bootstrap window
    closes[1:lookback + 1]. Element 0 of each output holds the bootstrap
    averages (sum / lookback); element k folds in the change at
    closes[lookback + k] using the element before it.
    """
    count = max(closes.shape[0] - lookback, 0)
    upward = np.zeros(count)
    downward = np.zeros(count)
    if count <= 0:
        return upward, downward

    gains = 0.0
    losses = 0.0
    for i in range(1, lookback + 1):
        change = closes[i] - closes[i - 1]
        if change > 0.0:
            gains += change
        elif change < 0.0:
            losses -= change

    upward[0] = gains / lookback
    downward[0] = losses / lookback

    carried = lookback - 1
    for k in range(1, count):
        change = closes[lookback + k] - closes[lookback + k - 1]
        gain = change if change > 0.0 else 0.0
        loss = -change if change < 0.0 else 0.0
        upward[k] = (upward[k - 1] * carried + gain) / lookback
        downward[k] = (downward[k - 1] * carried + loss) / lookback

    return upward, downward


def rolling_mean(values: np.ndarray, window: int) -> np.ndarray:
    """Arithmetic mean of every full trailing window"""
    windows = sliding_window_view(values, window)
    means = windows.mean(axis=1)
    # Flat windows keep their exact value
    flat = windows.max(axis=1) == windows.min(axis=1)
    return np.where(flat, windows[:, 0], means)


def rolling_std(values: np.ndarray, window: int, means: np.ndarray) -> np.ndarray:
    """
    Population standard deviation of every full trailing window

    Args:
        values: Input series
        window: Window size (also the divisor)
        means: rolling_mean(values, window)

    Returns:
        sqrt(mean of squared deviations) per window
    """
    windows = sliding_window_view(values, window)
    deviations = windows - means[:, np.newaxis]
    return np.sqrt((deviations * deviations).mean(axis=1))


def rolling_max(values: np.ndarray, window: int) -> np.ndarray:
    """Highest value of every full trailing window"""
    return sliding_window_view(values, window).max(axis=1)


def rolling_min(values: np.ndarray, window: int) -> np.ndarray:
    """Lowest value of every full trailing window"""
    return sliding_window_view(values, window).min(axis=1)


def ema_series(values: np.ndarray, lookback: int, seed: float) -> np.ndarray:
    """Exponential moving average for indices lookback .. N-1 (see _fast_ema_series)"""
    return _fast_ema_series(np.ascontiguousarray(values, dtype=np.float64), lookback, float(seed))


def wilder_means(closes: np.ndarray, lookback: int) -> Tuple[np.ndarray, np.ndarray]:
    """Upward and downward Wilder means (see _fast_wilder_means)"""
    return _fast_wilder_means(np.ascontiguousarray(closes, dtype=np.float64), lookback)


__all__ = [
    "rolling_mean",
    "rolling_std",
    "rolling_max",
    "rolling_min",
    "ema_series",
    "wilder_means",
]
