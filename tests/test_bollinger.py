"""
Test Suite for the Bollinger Band Engine
"""

from datetime import date

import numpy as np
import pytest

from chart_indicators import BollingerBandEngine, PriceBar, calculate_bollinger_bands

from . import assert_dates_match, bars_from_closes, generate_random_bars, make_bars


class TestBollingerBands:
    """Band calculation and alignment with the display window"""

    def test_flat_series_collapses_bands(self):
        """Test constant prices give zero deviation and equal bands"""
        extended = bars_from_closes([50.0] * 40)
        standard = extended[-10:]

        result = calculate_bollinger_bands(standard, extended)

        assert len(result) == 10
        for point in result:
            assert point.standard_deviation == 0.0
            assert point.lower_band_value == point.upper_band_value == point.mean == 50.0

    def test_population_standard_deviation(self):
        """Test the deviation divides by the window size"""
        extended = bars_from_closes([1.0, 2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0])
        standard = extended[-1:]

        result = calculate_bollinger_bands(standard, extended, lookback=8)

        assert len(result) == 1
        point = result[0]
        assert point.mean == 5.0
        assert point.standard_deviation == 2.0
        assert point.lower_band_value == 1.0
        assert point.upper_band_value == 9.0

    def test_multiplier(self):
        """Test the band width scales with the multiplier"""
        extended = bars_from_closes([1.0, 2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0])
        point = BollingerBandEngine(lookback=8, multiplier=1.0).calculate(extended[-1:], extended)[0]

        assert point.lower_band_value == 3.0
        assert point.upper_band_value == 7.0

    def test_one_point_per_display_bar(self):
        """Test output is aligned one-for-one with the standard series"""
        extended = generate_random_bars(200)
        standard = extended[-60:]

        result = calculate_bollinger_bands(standard, extended)

        assert len(result) == 60
        assert_dates_match(result, standard)

    def test_band_ordering(self):
        """Test lower <= mean <= upper on noisy data"""
        extended = generate_random_bars(300)
        for point in calculate_bollinger_bands(extended[-100:], extended):
            assert point.lower_band_value <= point.mean <= point.upper_band_value

    def test_matches_pandas_rolling(self):
        """Test mean and deviation against a pandas rolling window"""
        import pandas as pd

        extended = generate_random_bars(120)
        standard = extended[-30:]
        closes = pd.Series([bar.close for bar in extended])
        means = closes.rolling(20).mean().to_numpy()[-30:]
        deviations = closes.rolling(20).std(ddof=0).to_numpy()[-30:]

        result = calculate_bollinger_bands(standard, extended)

        np.testing.assert_allclose([point.mean for point in result], means, rtol=1e-9)
        np.testing.assert_allclose([point.standard_deviation for point in result], deviations, rtol=1e-7)

    def test_current_price_from_standard_series(self):
        """Test the display bar's close is re-attached as current price"""
        extended = make_bars(60)
        standard = [
            PriceBar(bar.date, bar.open, bar.high, bar.low, bar.close * 0.5, bar.volume)
            for bar in extended[-5:]
        ]

        result = calculate_bollinger_bands(standard, extended)

        for point, display_bar, history_bar in zip(result, standard, extended[-5:]):
            assert point.current_price == display_bar.close
            assert point.moving_average == history_bar.close

    def test_width_grows_with_volatility(self):
        """Test a volatile half has wider bands than a calm half"""
        calm = [100.0 + (0.5 if i % 2 else -0.5) for i in range(60)]
        volatile = [100.0 + (5.0 if i % 2 else -5.0) for i in range(60)]
        extended = bars_from_closes(calm + volatile)
        standard = extended[20:]

        result = calculate_bollinger_bands(standard, extended)
        widths = [point.upper_band_value - point.lower_band_value for point in result]

        assert np.mean(widths[-30:]) > np.mean(widths[:30])

    def test_insufficient_history(self):
        """Test fewer than lookback + 1 bars yields None"""
        extended = make_bars(20)
        assert calculate_bollinger_bands(extended[-5:], extended) is None

    def test_display_precedes_coverage(self):
        """Test a display window starting before the first band yields None"""
        extended = make_bars(60)
        assert calculate_bollinger_bands(extended[:10], extended) is None

    def test_unknown_start_date(self):
        """Test a display date absent from the extended series yields None"""
        extended = make_bars(60)
        standard = make_bars(5, start_date=date(2030, 1, 1))
        assert calculate_bollinger_bands(standard, extended) is None

    def test_short_coverage(self):
        """Test a display window running past the extended series yields None"""
        extended = make_bars(60)
        standard = make_bars(10, start_date=extended[-5].date)
        assert calculate_bollinger_bands(standard, extended) is None

    @pytest.mark.parametrize("standard, extended", [
        (None, make_bars(40)),
        (make_bars(5), None),
        ([], make_bars(40)),
        ("abc", make_bars(40)),
        ({"date": "2024-01-01"}, make_bars(40)),
        (make_bars(5), b"bars"),
    ])
    def test_unusable_input(self, standard, extended):
        """Test malformed or empty input yields None"""
        assert calculate_bollinger_bands(standard, extended) is None

    def test_negative_multiplier(self):
        """Test a negative multiplier is rejected"""
        with pytest.raises(ValueError):
            BollingerBandEngine(multiplier=-1.0)

    def test_idempotent(self):
        """Test identical inputs give identical outputs"""
        extended = generate_random_bars(150)
        engine = BollingerBandEngine()
        assert engine.calculate(extended[-40:], extended) == engine.calculate(extended[-40:], extended)
