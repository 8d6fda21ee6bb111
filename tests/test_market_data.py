"""
Tests for chart conversion and the cached market data service.
"""

import os
import sys
import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from externals import YahooFinanceAPIError
from services import MarketDataService
from utils.data_conversion import build_price_window, chart_to_frame


def make_chart(price=100.0, highs=None, lows=None, closes=None):
    highs = highs if highs is not None else [105.0, None, 110.0]
    lows = lows if lows is not None else [95.0, 92.0, None]
    closes = closes if closes is not None else [100.0, 101.0, 99.0]
    return {
        "meta": {
            "regularMarketPrice": price,
            "previousClose": 98.0,
            "longName": "Test Corp",
            "exchangeName": "NMS",
            "currency": "USD",
            "regularMarketVolume": 12345,
            "marketCap": 2.5e12,
            "regularMarketDayHigh": 101.0,
            "regularMarketDayLow": 97.0,
        },
        "timestamp": [1700000000 + i * 86400 for i in range(len(closes))],
        "indicators": {"quote": [{"high": highs, "low": lows, "close": closes}]},
    }


class FakeClock:
    def __init__(self):
        self.now = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self):
        return self.now


class TestDataConversion(unittest.TestCase):
    def test_window_skips_missing_bars(self):
        frame = chart_to_frame(make_chart())
        window = build_price_window(frame, 100.0)
        self.assertEqual(window.high, 110.0)
        self.assertEqual(window.low, 92.0)
        self.assertEqual(window.close, 99.0)
        self.assertEqual(window.current_price, 100.0)

    def test_window_uses_lookback(self):
        highs = [200.0] + [110.0] * 20
        lows = [10.0] + [90.0] * 20
        closes = [100.0] * 21
        frame = chart_to_frame(make_chart(highs=highs, lows=lows, closes=closes))
        window = build_price_window(frame, 100.0, lookback=20)
        self.assertEqual((window.high, window.low), (110.0, 90.0))

    def test_empty_history_uses_band(self):
        frame = chart_to_frame(make_chart(highs=[], lows=[], closes=[]))
        window = build_price_window(frame, 200.0)
        self.assertAlmostEqual(window.high, 210.0)
        self.assertAlmostEqual(window.low, 190.0)
        self.assertEqual(window.close, 200.0)

    def test_missing_indicators(self):
        frame = chart_to_frame({"meta": {}})
        window = build_price_window(frame, 50.0)
        self.assertEqual(window.close, 50.0)


class TestMarketDataService(unittest.TestCase):
    def setUp(self):
        self.clock = FakeClock()
        self.service = MarketDataService(ttl_seconds=300, clock=self.clock)

    @patch("services.market_data.fetch_chart")
    def test_snapshot_contents(self, mock_fetch):
        mock_fetch.return_value = make_chart()
        snapshot = self.service.get_snapshot("test")

        mock_fetch.assert_called_once_with("TEST")
        self.assertEqual(snapshot.symbol, "TEST")
        self.assertEqual(snapshot.company_name, "Test Corp")
        self.assertAlmostEqual(snapshot.change, 2.0)
        self.assertAlmostEqual(snapshot.change_pct, 2.0 / 98.0 * 100)
        self.assertFalse(snapshot.levels_fallback)
        self.assertLessEqual(len(snapshot.levels.support), 3)
        data = snapshot.to_dict()
        self.assertEqual(data["support_levels"], snapshot.levels.support_prices)
        self.assertEqual(data["data_source"], "Yahoo Finance")

    @patch("services.market_data.fetch_chart")
    def test_cache_hit_within_ttl(self, mock_fetch):
        mock_fetch.return_value = make_chart()
        first = self.service.get_snapshot("AAPL")
        self.clock.now += timedelta(seconds=299)
        second = self.service.get_snapshot("aapl")
        self.assertIs(first, second)
        self.assertEqual(mock_fetch.call_count, 1)

    @patch("services.market_data.fetch_chart")
    def test_cache_expires(self, mock_fetch):
        mock_fetch.return_value = make_chart()
        self.service.get_snapshot("AAPL")
        self.clock.now += timedelta(seconds=300)
        self.service.get_snapshot("AAPL")
        self.assertEqual(mock_fetch.call_count, 2)

    @patch("services.market_data.fetch_chart")
    def test_api_error_maps_to_none(self, mock_fetch):
        mock_fetch.side_effect = YahooFinanceAPIError("boom")
        self.assertIsNone(self.service.get_snapshot("AAPL"))

    @patch("services.market_data.fetch_chart")
    def test_malformed_payloads_map_to_none(self, mock_fetch):
        bad_quote = make_chart()
        bad_quote["indicators"] = {"quote": [[1, 2]]}
        payloads = [bad_quote, {"meta": [1]}, [1, 2, 3]]
        for payload in payloads:
            with self.subTest(payload=payload):
                mock_fetch.return_value = payload
                self.assertIsNone(self.service.get_snapshot("ODD"))

    @patch("services.market_data.search_symbols")
    def test_search_skips_non_dict_quotes(self, mock_search):
        mock_search.return_value = [["AAPL"], {"symbol": "MSFT"}]
        self.assertEqual([m.symbol for m in self.service.search("x")], ["MSFT"])

    @patch("services.market_data.fetch_chart")
    def test_unknown_symbol(self, mock_fetch):
        mock_fetch.return_value = None
        self.assertIsNone(self.service.get_snapshot("NOPE"))

    @patch("services.market_data.fetch_chart")
    def test_zero_price_not_cached(self, mock_fetch):
        mock_fetch.return_value = make_chart(price=0)
        self.assertIsNone(self.service.get_snapshot("ZERO"))
        self.assertIsNone(self.service.get_snapshot("ZERO"))
        self.assertEqual(mock_fetch.call_count, 2)

    @patch("services.market_data.fetch_chart")
    def test_invalid_window_uses_basic_levels(self, mock_fetch):
        # Negative lows make the window invalid.
        mock_fetch.return_value = make_chart(highs=[105.0], lows=[-1.0], closes=[100.0])
        snapshot = self.service.get_snapshot("BAD")
        self.assertTrue(snapshot.levels_fallback)
        self.assertEqual(snapshot.levels.support_prices, [98.0, 96.0, 94.0])

    @patch("services.market_data.search_symbols")
    def test_search(self, mock_search):
        mock_search.return_value = [
            {"symbol": "AAPL", "longname": "Apple Inc.", "exchDisp": "NASDAQ"},
            {"symbol": "APLE", "shortname": "Apple Hospitality", "exchDisp": "NYSE"},
        ]
        matches = self.service.search("apple")
        self.assertEqual([m.symbol for m in matches], ["AAPL", "APLE"])
        self.assertEqual(matches[1].name, "Apple Hospitality")

    @patch("services.market_data.search_symbols")
    def test_search_error(self, mock_search):
        mock_search.side_effect = YahooFinanceAPIError("down")
        self.assertEqual(self.service.search("apple"), [])

    @patch("services.market_data.fetch_chart")
    def test_world_indices_skip_failures(self, mock_fetch):
        def fake_fetch(symbol):
            if symbol == "^GSPC":
                return make_chart(price=5000.0)
            raise YahooFinanceAPIError("unavailable")

        mock_fetch.side_effect = fake_fetch
        quotes = self.service.get_world_indices()
        self.assertEqual(len(quotes), 1)
        self.assertEqual(quotes[0].name, "S&P 500 (US)")
        self.assertTrue(quotes[0].is_up)


if __name__ == "__main__":
    unittest.main()
