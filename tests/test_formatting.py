import unittest

from rebalancer.formatting import (
    currency_symbol,
    format_number,
    format_price,
    format_time_since_update,
    is_asset_stale,
)

NOW = 1_700_000_000.0


class TestNumbers(unittest.TestCase):

    def test_format_number(self):
        self.assertEqual(format_number(1234.5), "1,234.50")

    def test_format_number_small(self):
        self.assertEqual(format_number(0.125), "0.12")

    def test_format_price_dollar_default(self):
        self.assertEqual(format_price(1234567.891), "$1,234,567.89")

    def test_format_price_tel_aviv(self):
        self.assertEqual(format_price(99.9, "TA"), "₪99.90")

    def test_other_exchange_is_dollar(self):
        self.assertEqual(currency_symbol("US"), "$")


class TestTimeSinceUpdate(unittest.TestCase):

    def test_never(self):
        self.assertEqual(format_time_since_update(None, NOW), "Never updated")

    def test_just_now(self):
        self.assertEqual(format_time_since_update(NOW - 30, NOW), "Just now")

    def test_one_minute(self):
        self.assertEqual(format_time_since_update(NOW - 60, NOW), "1 minute ago")

    def test_minutes(self):
        self.assertEqual(format_time_since_update(NOW - 59 * 60, NOW), "59 minutes ago")

    def test_one_hour(self):
        self.assertEqual(format_time_since_update(NOW - 3600, NOW), "1 hour ago")

    def test_hours(self):
        self.assertEqual(format_time_since_update(NOW - 5 * 3600 - 10, NOW), "5 hours ago")

    def test_one_day(self):
        self.assertEqual(format_time_since_update(NOW - 86400, NOW), "1 day ago")

    def test_days_are_rounded(self):
        self.assertEqual(format_time_since_update(NOW - int(2.8 * 86400), NOW), "3 days ago")


class TestStaleness(unittest.TestCase):

    def test_never_updated_is_stale(self):
        self.assertTrue(is_asset_stale(None, NOW))

    def test_recent_is_fresh(self):
        self.assertFalse(is_asset_stale(NOW - 60, NOW))

    def test_exactly_one_hour_is_fresh(self):
        self.assertFalse(is_asset_stale(NOW - 3600, NOW))

    def test_older_than_one_hour_is_stale(self):
        self.assertTrue(is_asset_stale(NOW - 3601, NOW))


if __name__ == "__main__":
    unittest.main()
