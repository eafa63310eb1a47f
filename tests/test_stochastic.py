"""
Test Suite for the Stochastic Oscillator Engine
"""

from datetime import date

import pytest

from chart_indicators import StochasticEngine, calculate_sma_series, calculate_stochastic_series

from . import assert_dates_match, assert_within_bounds, bars_from_closes, generate_random_bars, make_bars


class TestFastStochastic:
    """%K over the trailing high/low range"""

    def test_close_at_high(self):
        """Test %K is 100 when the close is the window high"""
        fast = StochasticEngine(fast_lookback=3).fast_series(bars_from_closes([1.0, 2.0, 3.0, 4.0, 5.0]))

        assert [point.value for point in fast] == [100.0, 100.0, 100.0]
        assert fast[0].date == date(2024, 1, 3)

    def test_close_at_low(self):
        """Test %K is 0 when the close is the window low"""
        fast = StochasticEngine(fast_lookback=3).fast_series(bars_from_closes([5.0, 4.0, 3.0, 2.0, 1.0]))
        assert [point.value for point in fast] == [0.0, 0.0, 0.0]

    def test_mid_range(self):
        """Test %K scales the close within the range"""
        fast = StochasticEngine(fast_lookback=3).fast_series(bars_from_closes([1.0, 3.0, 2.0]))
        assert fast[0].value == 50.0

    def test_flat_range_is_zero(self):
        """Test a zero high-low range yields 0 instead of dividing"""
        fast = StochasticEngine(fast_lookback=5).fast_series(bars_from_closes([7.0] * 10))
        assert all(point.value == 0.0 for point in fast)

    def test_uses_highs_and_lows(self):
        """Test the range comes from highs and lows, not closes"""
        bars = make_bars(20)
        fast = StochasticEngine(fast_lookback=14).fast_series(bars)

        # close c, window high c + 1, window low c - 14
        assert fast[0].value == pytest.approx(14.0 / 15.0 * 100.0)


class TestStochasticEngine:
    """%K / %D pairing for the display window"""

    def test_slow_is_sma_of_fast(self):
        """Test %D is the simple average of %K"""
        extended = generate_random_bars(120)
        engine = StochasticEngine()
        fast = engine.fast_series(extended)
        slow = {point.date: point.value for point in calculate_sma_series(fast, 3)}

        points = engine.calculate(extended[-40:], extended)

        for point in points:
            assert point.slow_value == slow[point.date]

    def test_aligned_with_display_window(self):
        """Test output is aligned one-for-one with the standard series"""
        extended = generate_random_bars(120)
        standard = extended[-25:]

        points = calculate_stochastic_series(standard, extended)

        assert len(points) == 25
        assert_dates_match(points, standard)

    def test_bounds(self):
        """Test %K and %D stay within [0, 100]"""
        extended = generate_random_bars(300, seed=3)
        points = calculate_stochastic_series(extended[-150:], extended)

        assert_within_bounds(point.fast_value for point in points)
        assert_within_bounds(point.slow_value for point in points)

    def test_first_computable_date(self):
        """Test the display window may start at the first %D point"""
        extended = generate_random_bars(60)
        assert calculate_stochastic_series(extended[16:30], extended) is not None
        assert calculate_stochastic_series(extended[15:30], extended) is None

    def test_insufficient_history(self):
        """Test too few bars for %K or %D yields None"""
        assert calculate_stochastic_series(make_bars(5), make_bars(10)) is None
        assert calculate_stochastic_series(make_bars(1), make_bars(16)) is None

    def test_unknown_start_date(self):
        """Test a display date absent from the extended series yields None"""
        extended = make_bars(60)
        standard = make_bars(5, start_date=date(2030, 1, 1))
        assert calculate_stochastic_series(standard, extended) is None

    def test_short_coverage(self):
        """Test a display window running past the extended series yields None"""
        extended = make_bars(60)
        standard = make_bars(10, start_date=extended[-3].date)
        assert calculate_stochastic_series(standard, extended) is None

    @pytest.mark.parametrize("standard, extended", [
        (None, make_bars(40)),
        (make_bars(5), None),
        ([], make_bars(40)),
    ])
    def test_unusable_input(self, standard, extended):
        """Test malformed or empty input yields None"""
        assert calculate_stochastic_series(standard, extended) is None

    def test_idempotent(self):
        """Test identical inputs give identical outputs"""
        extended = generate_random_bars(150)
        engine = StochasticEngine()
        assert engine.calculate(extended[-40:], extended) == engine.calculate(extended[-40:], extended)
