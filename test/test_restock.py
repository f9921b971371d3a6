# -*- coding: utf-8 -*-
"""
Unit tests for restock suggestions and float planning.
"""

import unittest
from decimal import Decimal

from till.denomination import DenominationPool
from till.errors import InvalidAmount
from till.restock import optimize_denomination_stock, restock_delta, suggest_restock


class TestRestockAdvisor(unittest.TestCase):
    def test_low_one_cent_stock(self):
        pool = DenominationPool.configure([
            ("2.00", 100, "coin", "2 Euro"),
            ("0.10", 40, "coin", "10 Cent"),
            ("0.01", 100, "coin", "1 Cent"),
        ]).with_usage({"0.01": 95})
        suggestions = suggest_restock(pool, threshold=10)
        self.assertEqual(len(suggestions), 1)
        s = suggestions[0]
        self.assertEqual(s.denomination.value, Decimal("0.01"))
        self.assertEqual(s.current_count, 5)
        self.assertEqual(s.suggested_restock, 50)

    def test_default_threshold_includes_empty_and_boundary(self):
        pool = DenominationPool.configure([
            ("500.00", 2, "note", "500 Euro"),
            ("0.50", 10, "coin", "50 Cent"),
            ("0.20", 11, "coin", "20 Cent"),
            ("0.01", 0, "coin", "1 Cent"),
        ])
        got = {str(s.denomination.value): s.suggested_restock for s in suggest_restock(pool)}
        self.assertEqual(got, {"500.00": 50, "0.50": 50, "0.01": 50})

    def test_suggestion_doubles_larger_counts(self):
        pool = DenominationPool.configure([("1.00", 30, "coin", "1 Euro")])
        self.assertEqual(suggest_restock(pool, threshold=40)[0].suggested_restock, 60)

    def test_restock_delta_applies_to_pool(self):
        pool = DenominationPool.configure([("0.01", 5, "coin", "1 Cent"), ("1.00", 80, "coin", "1 Euro")])
        restocked = pool.with_restock(restock_delta(suggest_restock(pool)))
        self.assertEqual(restocked.count_of("0.01"), 55)
        self.assertEqual(restocked.count_of("1.00"), 80)

    def test_optimize_stock_piece_budget(self):
        plan = optimize_denomination_stock("38.00", 2, DenominationPool.standard_euro_pool())
        self.assertEqual([(str(l.value), l.count) for l in plan.lines], [("20.00", 1), ("10.00", 1)])
        self.assertEqual(plan.allocated_amount, Decimal("30.00"))
        self.assertEqual(plan.remaining_amount, Decimal("8.00"))
        self.assertEqual(plan.piece_count, 2)

    def test_optimize_stock_respects_counts(self):
        pool = DenominationPool.configure([
            ("5.00", 0, "note", "5 Euro"),
            ("2.00", 2, "coin", "2 Euro"),
            ("1.00", 10, "coin", "1 Euro"),
        ])
        plan = optimize_denomination_stock("7.00", 100, pool)
        self.assertEqual([(str(l.value), l.count) for l in plan.lines], [("2.00", 2), ("1.00", 3)])
        self.assertEqual(plan.remaining_amount, Decimal("0.00"))
        self.assertEqual(plan.piece_count, 5)

    def test_optimize_stock_defaults(self):
        plan = optimize_denomination_stock("100.00")
        self.assertEqual(plan.max_pieces, 100)
        self.assertEqual([(str(l.value), l.count) for l in plan.lines], [("100.00", 1)])
        with self.assertRaises(InvalidAmount):
            optimize_denomination_stock("-1.00")


if __name__ == '__main__':
    unittest.main(verbosity=2)
