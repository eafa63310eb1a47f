"""
Test Suite for the price/earnings series
"""

from datetime import date

from chart_indicators import KeyMetricsPoint, price_to_earnings_series
from chart_indicators.indicators.key_metrics import key_metrics_point

from . import make_key_metrics


class TestPriceToEarnings:
    """Quarterly P/E entries for charting"""

    def test_single_record(self):
        """Test label and two-decimal formatting"""
        record = {
            "symbol": "AAPL",
            "date": "2024-01-15",
            "period": "Q4",
            "calendarYear": "2024",
            "peRatio": 28.5,
        }

        assert key_metrics_point(record) == KeyMetricsPoint(
            symbol="AAPL",
            date=date(2024, 1, 15),
            period="Q4",
            calendar_year="2024",
            x_axis_label="Q4 2024",
            price_to_earnings="28.50",
        )

    def test_most_recent_entries_oldest_first(self):
        """Test the newest eight records come back in chronological order"""
        records = make_key_metrics(12)

        result = price_to_earnings_series(records)

        assert len(result) == 8
        assert [point.x_axis_label for point in result] == [
            "Q1 2023", "Q2 2023", "Q3 2023", "Q4 2023",
            "Q1 2024", "Q2 2024", "Q3 2024", "Q4 2024",
        ]
        assert result[-1].price_to_earnings == "20.00"
        assert result[0].price_to_earnings == "23.50"

    def test_requires_more_records_than_entries(self):
        """Test exactly eight records is not enough"""
        assert price_to_earnings_series(make_key_metrics(8)) == []
        assert len(price_to_earnings_series(make_key_metrics(9))) == 8

    def test_custom_entry_count(self):
        """Test a different number of entries"""
        assert len(price_to_earnings_series(make_key_metrics(6), entries=4)) == 4

    def test_unusable_input(self):
        """Test None input yields an empty list"""
        assert price_to_earnings_series(None) == []

    def test_input_not_mutated(self):
        """Test the caller's records keep their order"""
        records = make_key_metrics(10)
        snapshot = list(records)
        price_to_earnings_series(records)
        assert records == snapshot
