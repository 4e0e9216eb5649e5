"""
tests/test_portfolio_validator.py
---------------------------------
Unit tests for PortfolioValidator.
"""

import math
import unittest

from rebalancer.exceptions import InvalidAssetError
from rebalancer.models import Asset
from rebalancer.portfolio_validator import PortfolioValidator


def _targets(*targets):
    return [
        Asset(symbol=f"S{i}", name=f"S{i}", price=10.0, target_allocation=t)
        for i, t in enumerate(targets)
    ]


class TestValidate(unittest.TestCase):

    def test_sums_to_hundred(self):
        self.assertTrue(PortfolioValidator.validate(_targets(60, 40)))

    def test_short_of_hundred(self):
        self.assertFalse(PortfolioValidator.validate(_targets(60, 30)))

    def test_over_hundred(self):
        self.assertFalse(PortfolioValidator.validate(_targets(60, 50)))

    def test_empty_is_invalid(self):
        self.assertFalse(PortfolioValidator.validate([]))

    def test_rounding_within_tolerance(self):
        self.assertTrue(PortfolioValidator.validate(_targets(33.33, 33.33, 33.335)))

    def test_outside_tolerance(self):
        self.assertFalse(PortfolioValidator.validate(_targets(33.33, 33.33, 33.32)))

    def test_total_target_allocation(self):
        self.assertAlmostEqual(
            PortfolioValidator.total_target_allocation(_targets(10, 20, 30.5)), 60.5
        )

    def test_total_of_empty_is_zero(self):
        self.assertEqual(PortfolioValidator.total_target_allocation([]), 0)


class TestCheckAssets(unittest.TestCase):

    def _asset(self, symbol="A", price=10.0, current=0.0):
        return Asset(symbol=symbol, name=symbol, price=price, current_value=current)

    def test_valid_assets_pass(self):
        PortfolioValidator.check_assets([self._asset("A"), self._asset("B")])

    def test_empty_passes(self):
        PortfolioValidator.check_assets([])

    def test_zero_price(self):
        with self.assertRaises(InvalidAssetError) as ctx:
            PortfolioValidator.check_assets([self._asset(price=0)])
        self.assertEqual(ctx.exception.symbol, "A")

    def test_negative_price(self):
        with self.assertRaises(InvalidAssetError):
            PortfolioValidator.check_assets([self._asset(price=-1)])

    def test_nan_price(self):
        with self.assertRaises(InvalidAssetError):
            PortfolioValidator.check_assets([self._asset(price=math.nan)])

    def test_infinite_price(self):
        with self.assertRaises(InvalidAssetError):
            PortfolioValidator.check_assets([self._asset(price=math.inf)])

    def test_negative_current_value(self):
        with self.assertRaises(InvalidAssetError):
            PortfolioValidator.check_assets([self._asset(current=-5)])

    def test_duplicate_symbol(self):
        with self.assertRaises(InvalidAssetError) as ctx:
            PortfolioValidator.check_assets([self._asset("X"), self._asset("Y"), self._asset("X")])
        self.assertEqual(ctx.exception.symbol, "X")


if __name__ == "__main__":
    unittest.main()
