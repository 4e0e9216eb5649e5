"""
tests/test_data_loader.py
-------------------------
Unit tests for PortfolioLoader.load_csv().
"""

import tempfile
import unittest
from pathlib import Path

from rebalancer.data_loader import PortfolioLoader
from rebalancer.exceptions import PortfolioFileError


class TestLoadCsv(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def _write(self, text: str) -> Path:
        p = self.dir / "portfolio.csv"
        p.write_text(text, encoding="utf-8")
        return p

    def test_full_columns(self):
        p = self._write(
            "symbol,name,price,current_value,target_allocation,min_buy_price,exchange\n"
            "VTI,Vanguard Total Market,250.10,5000,60,,\n"
            "TEVA,Teva,38.5,0,40,77,TA\n"
        )
        assets = PortfolioLoader.load_csv(p)
        self.assertEqual([a.symbol for a in assets], ["VTI", "TEVA"])
        self.assertEqual(assets[0].name, "Vanguard Total Market")
        self.assertAlmostEqual(assets[0].price, 250.10)
        self.assertEqual(assets[0].current_value, 5000.0)
        self.assertIsNone(assets[0].min_buy_price)
        self.assertIsNone(assets[0].exchange)
        self.assertEqual(assets[1].min_buy_price, 77.0)
        self.assertEqual(assets[1].exchange, "TA")

    def test_minimal_columns_use_defaults(self):
        p = self._write("symbol,price,target_allocation\nvti ,250,100\n")
        asset = PortfolioLoader.load_csv(p)[0]
        self.assertEqual(asset.symbol, "VTI")
        self.assertEqual(asset.name, "VTI")
        self.assertEqual(asset.current_value, 0.0)
        self.assertEqual(asset.target_allocation, 100.0)

    def test_camel_case_headers(self):
        p = self._write("symbol,price,currentValue,targetAllocation,minBuyPrice\nA,10,100,100,20\n")
        asset = PortfolioLoader.load_csv(p)[0]
        self.assertEqual(asset.current_value, 100.0)
        self.assertEqual(asset.target_allocation, 100.0)
        self.assertEqual(asset.min_buy_price, 20.0)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            PortfolioLoader.load_csv(self.dir / "nope.csv")

    def test_missing_required_column(self):
        p = self._write("symbol,price\nA,10\n")
        with self.assertRaises(PortfolioFileError):
            PortfolioLoader.load_csv(p)

    def test_unparsable_price(self):
        p = self._write("symbol,price,target_allocation\nA,ten,100\n")
        with self.assertRaises(PortfolioFileError):
            PortfolioLoader.load_csv(p)

    def test_blank_price(self):
        p = self._write("symbol,price,target_allocation\nA,,100\n")
        with self.assertRaises(PortfolioFileError):
            PortfolioLoader.load_csv(p)

    def test_empty_file(self):
        p = self._write("")
        with self.assertRaises(PortfolioFileError):
            PortfolioLoader.load_csv(p)


if __name__ == "__main__":
    unittest.main()
