"""
Tests for the public level entry point: full regression scenario,
output invariants and the basic fallback.
"""

import math
import os
import sys
import unittest
from decimal import Decimal

import numpy as np

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from models import LevelSet, PriceWindow
from sr_levels import analyze_levels, basic_levels, compute_levels, generate_candidates

WINDOWS = [
    (110, 90, 100, 100),
    (110, 90, 100, 123.4),
    (1.2345, 1.1, 1.2, 1.21),
    (250.0, 180.0, 240.0, 238.5),
    (50, 50, 50, 50),
    (30000, 25000, 29000, 29500),
    (10, 0, 0, 5),
]


class TestRegressionScenario(unittest.TestCase):
    def setUp(self):
        self.levels = compute_levels(110, 90, 100, 100)

    def test_support(self):
        self.assertEqual([c.price for c in self.levels.support], [99.0, 97.64, 90.0])
        self.assertEqual([c.strength for c in self.levels.support], [5, 6, 5])
        self.assertEqual(
            self.levels.support[0].sources,
            ["MA20", "psych_00_below", "psych_50_below"],
        )
        self.assertEqual(self.levels.support[1].sources, ["fib_618", "MA50"])
        self.assertEqual(self.levels.support[2].sources, ["pivot_s1"])

    def test_resistance(self):
        self.assertEqual([c.price for c in self.levels.resistance], [100.0, 110.0, 120.0])
        self.assertEqual([c.strength for c in self.levels.resistance], [9, 5, 4])
        self.assertEqual(
            self.levels.resistance[0].sources,
            ["fib_500", "psych_00", "psych_50", "psych_00_above"],
        )

    def test_not_fallback(self):
        result = analyze_levels(110, 90, 100, 100)
        self.assertFalse(result.is_fallback)
        self.assertIsNone(result.error)


class TestNumericTypes(unittest.TestCase):
    def test_numpy_scalars_are_computed(self):
        result = analyze_levels(
            np.int64(110), np.int64(90), np.int64(100), np.int64(100)
        )
        self.assertFalse(result.is_fallback)
        self.assertEqual(
            result.levels.to_dict(), compute_levels(110, 90, 100, 100).to_dict()
        )

    def test_numpy_floats_are_computed(self):
        result = analyze_levels(
            np.float32(110), np.float64(90), np.float64(100), np.float32(100)
        )
        self.assertFalse(result.is_fallback)
        self.assertEqual(result.levels.resistance[0].price, 100.0)

    def test_decimals_are_computed(self):
        result = analyze_levels(
            Decimal("110"), Decimal("90"), Decimal("100"), Decimal("100")
        )
        self.assertFalse(result.is_fallback)
        self.assertEqual([c.price for c in result.levels.support], [99.0, 97.64, 90.0])

    def test_bool_is_rejected(self):
        self.assertTrue(analyze_levels(True, 0, 1, 1).is_fallback)


class TestInvariants(unittest.TestCase):
    def test_deterministic(self):
        for window in WINDOWS:
            self.assertEqual(
                compute_levels(*window).to_dict(), compute_levels(*window).to_dict()
            )

    def test_partition_cardinality_and_order(self):
        for high, low, close, price in WINDOWS:
            with self.subTest(window=(high, low, close, price)):
                levels = compute_levels(high, low, close, price)
                self.assertLessEqual(len(levels.support), 3)
                self.assertLessEqual(len(levels.resistance), 3)
                for cluster in levels.support:
                    self.assertLess(cluster.price, price)
                for cluster in levels.resistance:
                    self.assertGreaterEqual(cluster.price, price)

                support = [c.price for c in levels.support]
                resistance = [c.price for c in levels.resistance]
                self.assertTrue(all(a > b for a, b in zip(support, support[1:])))
                self.assertTrue(all(a < b for a, b in zip(resistance, resistance[1:])))

    def test_strength_is_sum_of_sources(self):
        for high, low, close, price in WINDOWS:
            with self.subTest(window=(high, low, close, price)):
                window = PriceWindow(high, low, close, price)
                weights = {c.label: c.weight for c in generate_candidates(window)}
                levels = compute_levels(high, low, close, price)
                for cluster in levels.support + levels.resistance:
                    self.assertEqual(
                        cluster.strength, sum(weights[s] for s in cluster.sources)
                    )

    def test_flat_window_is_not_an_error(self):
        result = analyze_levels(50, 50, 50, 50)
        self.assertFalse(result.is_fallback)
        self.assertEqual(result.levels.resistance[0].price, 50.0)

    def test_returns_new_lists(self):
        first = compute_levels(110, 90, 100, 100)
        first.support.clear()
        second = compute_levels(110, 90, 100, 100)
        self.assertEqual(len(second.support), 3)


class TestFallback(unittest.TestCase):
    def assert_basic(self, levels: LevelSet):
        self.assertEqual([c.price for c in levels.support], [98.0, 96.0, 94.0])
        self.assertEqual([c.strength for c in levels.support], [2, 1, 1])
        self.assertEqual([c.price for c in levels.resistance], [102.0, 104.0, 106.0])
        self.assertEqual([c.strength for c in levels.resistance], [2, 1, 1])
        for cluster in levels.support + levels.resistance:
            self.assertEqual(cluster.sources, ["basic"])

    def test_nan_high(self):
        self.assert_basic(compute_levels(float("nan"), 90, 100, 100))

    def test_high_below_low(self):
        result = analyze_levels(80, 90, 85, 100)
        self.assertTrue(result.is_fallback)
        self.assertIn("below low", result.error)
        self.assert_basic(result.levels)

    def test_negative_price(self):
        self.assert_basic(compute_levels(110, -5, 100, 100))

    def test_infinite_close(self):
        self.assert_basic(compute_levels(110, 90, float("inf"), 100))

    def test_negative_threshold(self):
        result = analyze_levels(110, 90, 100, 100, threshold_percent=-1)
        self.assertTrue(result.is_fallback)
        self.assert_basic(result.levels)

    def test_non_numeric_input(self):
        self.assert_basic(compute_levels("110", 90, 100, 100))

    def test_zero_current_price_never_raises(self):
        result = analyze_levels(110, 90, 100, 0)
        self.assertTrue(result.is_fallback)
        self.assertEqual([c.price for c in result.levels.support], [0.0, 0.0, 0.0])

    def test_non_finite_current_price_never_raises(self):
        levels = compute_levels(110, 90, 100, float("nan"))
        self.assertEqual(len(levels.support), 3)
        self.assertTrue(all(math.isnan(c.price) for c in levels.support))
        levels = compute_levels(110, 90, 100, None)
        self.assertEqual(len(levels.resistance), 3)

    def test_oversized_current_price_never_raises(self):
        result = analyze_levels(110, 90, 100, 10**400)
        self.assertTrue(result.is_fallback)
        self.assertEqual(len(result.levels.support), 3)
        self.assertTrue(all(math.isnan(c.price) for c in result.levels.resistance))

    def test_oversized_high_uses_basic_levels(self):
        self.assert_basic(compute_levels(10**400, 90, 100, 100))

    def test_basic_levels_rounding(self):
        levels = basic_levels(123.45)
        self.assertEqual(levels.support[0].price, 120.98)
        self.assertEqual(levels.resistance[0].price, 125.92)


if __name__ == "__main__":
    unittest.main()
