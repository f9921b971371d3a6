# -*- coding: utf-8 -*-
from __future__ import annotations
"""
Till Session - owner of the active pool

- Each terminal owns exactly one TillSession; there is no process-wide till.
- Reads hand out the current immutable pool, so previews never block commits.
- Commits swap the pool reference under an RLock (atomicity; no lost
  updates). A commit computed against an older generation is rejected, so
  the same physical pieces cannot be paid out twice.
"""

import logging
from threading import RLock
from typing import Iterable, List, Mapping, Optional, Tuple

from .cash_flow import CashFlowSummary, simulate
from .change_calculator import ChangeBreakdown, compute_change
from .denomination import DenominationPool
from .errors import StalePoolError
from .payment_validator import PaymentValidationResult, validate_payment
from .restock import RestockSuggestion, suggest_restock

logger = logging.getLogger(__name__)


class TillSession:
    def __init__(self, till_id: str, pool: DenominationPool):
        self.till_id = till_id
        self._pool = pool
        self._generation = 0
        self._lock = RLock()

    @classmethod
    def open(cls, till_id: str, denominations: Optional[Iterable] = None) -> "TillSession":
        """Open a till from a denomination set (standard Euro float by default)."""
        if denominations is None:
            pool = DenominationPool.standard_euro_pool()
        else:
            pool = DenominationPool.configure(denominations)
        logger.info("Opened till %s holding %s", till_id, pool.total_value())
        return cls(till_id, pool)

    def __repr__(self) -> str:
        return f"TillSession({self.till_id}, generation={self._generation}, total={self.pool.total_value()})"

    @property
    def pool(self) -> DenominationPool:
        with self._lock:
            return self._pool

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    def state(self) -> Tuple[int, DenominationPool]:
        """Generation and pool read together, for a later `commit`."""
        with self._lock:
            return self._generation, self._pool

    # -------- read-only queries --------
    def preview_change(self, amount) -> ChangeBreakdown:
        return compute_change(amount, self.pool)

    def validate_payment(self, amount_due, tendered) -> PaymentValidationResult:
        return validate_payment(amount_due, tendered, self.pool)

    def suggest_restock(self, threshold: Optional[int] = None) -> List[RestockSuggestion]:
        return suggest_restock(self.pool, threshold)

    def simulate(self, transactions: Iterable) -> CashFlowSummary:
        return simulate(transactions, self.pool)

    # -------- commits --------
    def _swap(self, new_pool: DenominationPool, reason: str) -> int:
        self._pool = new_pool
        self._generation += 1
        logger.info("Till %s -> generation %d (%s), total %s",
                    self.till_id, self._generation, reason, new_pool.total_value())
        return self._generation

    def commit(self, expected_generation: int, new_pool: DenominationPool) -> int:
        with self._lock:
            if expected_generation != self._generation:
                raise StalePoolError(
                    f"Till {self.till_id} is at generation {self._generation}, "
                    f"commit was prepared against {expected_generation}"
                )
            return self._swap(new_pool, "commit")

    def dispense(self, amount) -> ChangeBreakdown:
        """
        Compute change and take it out of the till in one step.

        The pool only changes when the change is exact; otherwise the
        breakdown is returned for the cashier to resolve.
        """
        with self._lock:
            breakdown = compute_change(amount, self._pool)
            if breakdown.is_exact and breakdown.piece_count:
                self._swap(self._pool.with_usage(breakdown.usage), f"dispensed {breakdown.total_covered}")
            return breakdown

    def restock(self, delta: Mapping) -> DenominationPool:
        with self._lock:
            self._swap(self._pool.with_restock(delta), "restock")
            return self._pool
