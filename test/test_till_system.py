# -*- coding: utf-8 -*-
"""
Unit and Integration Tests for the till session.

- Previews and validations only read the current pool.
- Commits are serialized: concurrent dispensing must never pay out the
  same physical piece twice.
- A commit prepared against an older pool generation is rejected.
"""

import unittest
from decimal import Decimal
from threading import Thread

from till.errors import ConfigurationError, StalePoolError
from till.till_session import TillSession


class TestTillSession(unittest.TestCase):
    def test_open_standard_till(self):
        session = TillSession.open("T001")
        self.assertEqual(session.generation, 0)
        self.assertEqual(session.pool.total_value(), Decimal("6138.00"))

    def test_open_rejects_bad_configuration(self):
        with self.assertRaises(ConfigurationError):
            TillSession.open("T002", [("1.00", 1, "coin", "a"), ("1.00", 2, "coin", "b")])

    def test_preview_does_not_commit(self):
        session = TillSession.open("T003")
        b = session.preview_change("2.33")
        self.assertTrue(b.is_exact)
        self.assertEqual(session.generation, 0)
        self.assertEqual(session.pool.count_of("2.00"), 100)
        result = session.validate_payment("9.50", "10.00")
        self.assertTrue(result.is_valid)
        self.assertEqual(session.pool.count_of("0.50"), 100)

    def test_dispense_commits_exact_change(self):
        session = TillSession.open("T004")
        b = session.dispense("1.75")
        self.assertTrue(b.is_exact)
        self.assertEqual(session.generation, 1)
        self.assertEqual(session.pool.count_of("1.00"), 99)
        self.assertEqual(session.pool.total_value(), Decimal("6136.25"))

    def test_dispense_leaves_pool_when_inexact(self):
        session = TillSession.open("T005", [("0.02", 1, "coin", "2 Cent"), ("0.01", 0, "coin", "1 Cent")])
        b = session.dispense("0.03")
        self.assertFalse(b.is_exact)
        self.assertEqual(session.generation, 0)
        self.assertEqual(session.pool.count_of("0.02"), 1)

    def test_stale_commit_is_rejected(self):
        session = TillSession.open("T006")
        gen_a, pool_a = session.state()
        gen_b, pool_b = session.state()
        session.commit(gen_a, pool_a.with_usage({"0.50": 1}))
        with self.assertRaises(StalePoolError):
            session.commit(gen_b, pool_b.with_usage({"0.50": 1}))
        self.assertEqual(session.pool.count_of("0.50"), 99)

    def test_restock_and_suggestions(self):
        session = TillSession.open("T007", [("0.01", 5, "coin", "1 Cent"), ("1.00", 20, "coin", "1 Euro")])
        suggestions = session.suggest_restock()
        self.assertEqual([s.denomination.value for s in suggestions], [Decimal("0.01")])
        session.restock({"0.01": suggestions[0].suggested_restock})
        self.assertEqual(session.pool.count_of("0.01"), 55)
        self.assertEqual(session.generation, 1)

    def test_simulate_does_not_commit(self):
        session = TillSession.open("T008")
        summary = session.simulate([("9.50", "10.00")])
        self.assertEqual(summary.final_pool.count_of("0.50"), 99)
        self.assertEqual(session.pool.count_of("0.50"), 100)

    def test_concurrent_dispense_never_double_spends(self):
        """
        High-concurrency integrity test.
        100 fifty-cent coins and no way to make 0.50 otherwise: exactly 100
        of the 400 requests may succeed, whatever the interleaving.
        """
        session = TillSession.open("T_CONC", [
            ("0.50", 100, "coin", "50 Cent"),
            ("0.20", 50, "coin", "20 Cent"),
        ])
        users, ops_per_user = 8, 50
        results = []

        def worker():
            local = [session.dispense("0.50").is_exact for _ in range(ops_per_user)]
            results.extend(local)

        threads = [Thread(target=worker, daemon=True) for _ in range(users)]
        for th in threads: th.start()
        for th in threads: th.join()

        self.assertEqual(len(results), users * ops_per_user)
        self.assertEqual(sum(results), 100)
        self.assertEqual(session.pool.count_of("0.50"), 0)
        self.assertEqual(session.pool.count_of("0.20"), 50)
        self.assertEqual(session.generation, 100)
        self.assertEqual(session.pool.total_value(), Decimal("10.00"))


if __name__ == '__main__':
    unittest.main(verbosity=2)
