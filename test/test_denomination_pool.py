# -*- coding: utf-8 -*-
"""
Unit tests for denomination pools and the money boundary.

- Configuration errors must surface before any computation runs.
- Pools are values: transitions return new pools and leave the old intact.
"""

import unittest
from decimal import Decimal

from till.denomination import Denomination, DenominationKind, DenominationPool
from till.errors import ConfigurationError, InsufficientStock, InvalidAmount
from till.money import as_money, fmt_money, from_minor_units, to_minor_units, validate_amount_non_negative


class TestMoney(unittest.TestCase):
    def test_minor_unit_conversion(self):
        self.assertEqual(to_minor_units("2.33"), 233)
        self.assertEqual(to_minor_units(Decimal("0.1")), 10)
        self.assertEqual(to_minor_units(0.1), 10)
        self.assertEqual(to_minor_units(5), 500)
        self.assertEqual(from_minor_units(5), Decimal("0.05"))
        self.assertEqual(str(from_minor_units(1000)), "10.00")

    def test_sub_cent_amounts_are_rejected(self):
        with self.assertRaises(InvalidAmount):
            to_minor_units("0.005")
        # more significant digits than the context precision still counts as sub-cent
        with self.assertRaises(InvalidAmount):
            to_minor_units("1.0000000000000000000000000001")
        with self.assertRaises(InvalidAmount):
            to_minor_units("1E+40")
        with self.assertRaises(InvalidAmount):
            to_minor_units("abc")
        with self.assertRaises(InvalidAmount):
            validate_amount_non_negative("-1.00")

    def test_as_money_and_display(self):
        self.assertEqual(str(as_money("10")), "10.00")
        self.assertEqual(fmt_money("1234.5"), "€1,234.50")


class TestDenominationPool(unittest.TestCase):
    def test_configure_sorts_descending(self):
        pool = DenominationPool.configure([
            ("0.01", 3, "coin", "1 Cent"),
            ("5.00", 1, "note", "5 Euro"),
            ("0.50", 2, "coin", "50 Cent"),
        ])
        self.assertEqual([d.value for d in pool], [Decimal("5.00"), Decimal("0.50"), Decimal("0.01")])
        self.assertIs(pool.denominations[0].kind, DenominationKind.NOTE)

    def test_configure_accepts_dicts_and_instances(self):
        pool = DenominationPool.configure([
            {"value": "0.20", "count": 4, "kind": "coin", "name": "20 Cent"},
            Denomination(Decimal("2"), 1, DenominationKind.COIN, "2 Euro"),
        ])
        self.assertEqual(pool.count_of("2.00"), 1)
        self.assertEqual(pool.count_of("0.20"), 4)
        self.assertEqual(pool.count_of("0.10"), 0)

    def test_configuration_errors(self):
        """Invalid denomination sets fail fast."""
        bad_sets = [
            [("0.00", 1, "coin", "zero")],
            [("-1.00", 1, "coin", "negative")],
            [("1.00", -1, "coin", "negative count")],
            [("1.00", 1.5, "coin", "fractional count")],
            [("0.005", 1, "coin", "sub-cent")],
            [("1.00", 1, "coupon", "unknown kind")],
            [("0.50", 1, "coin", "a"), (Decimal("0.5"), 2, "coin", "b")],
            [("1.00", 1)],
        ]
        for bad in bad_sets:
            with self.subTest(bad=bad):
                with self.assertRaises(ConfigurationError):
                    DenominationPool.configure(bad)

    def test_snapshot_skips_empty_denominations(self):
        pool = DenominationPool.configure([
            ("0.02", 1, "coin", "2 Cent"),
            ("0.01", 0, "coin", "1 Cent"),
        ])
        self.assertEqual(len(pool), 2)
        self.assertEqual([d.value for d in pool.snapshot()], [Decimal("0.02")])

    def test_with_usage_returns_new_pool(self):
        pool = DenominationPool.standard_euro_pool()
        used = pool.with_usage({Decimal("0.50"): 3, "2.00": 1})
        self.assertEqual(used.count_of("0.50"), 97)
        self.assertEqual(used.count_of("2.00"), 99)
        # original untouched
        self.assertEqual(pool.count_of("0.50"), 100)
        self.assertEqual(pool, DenominationPool.standard_euro_pool())
        self.assertNotEqual(pool, used)

    def test_with_usage_cannot_overdraw(self):
        pool = DenominationPool.configure([("0.50", 1, "coin", "50 Cent")])
        with self.assertRaises(InsufficientStock):
            pool.with_usage({"0.50": 2})
        with self.assertRaises(ConfigurationError):
            pool.with_usage({"0.20": 1})
        with self.assertRaises(ConfigurationError):
            pool.with_usage({"0.50": -1})

    def test_with_restock(self):
        pool = DenominationPool.configure([("0.01", 5, "coin", "1 Cent")])
        restocked = pool.with_restock({"0.01": 50})
        self.assertEqual(restocked.count_of("0.01"), 55)
        self.assertEqual(pool.count_of("0.01"), 5)

    def test_standard_euro_pool(self):
        pool = DenominationPool.standard_euro_pool()
        self.assertEqual(len(pool), 15)
        self.assertEqual(pool.total_value(), Decimal("6138.00"))
        self.assertEqual(pool.denominations[0].value, Decimal("500.00"))
        self.assertEqual(pool.denominations[-1].value, Decimal("0.01"))


if __name__ == '__main__':
    unittest.main(verbosity=2)
