# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List

from .change_calculator import compute_change
from .denomination import DenominationPool
from .errors import InvalidAmount
from .money import as_money, from_minor_units, to_minor_units, validate_amount_non_negative

"""
Cash Flow Simulator

Purpose:
- Replay a session's payments, in order, against a working copy of the till.
- Change paid out by one transaction is no longer available to the next,
  which models the till running down across a shift.
- The caller's pool is never touched; the depleted pool is returned in the
  summary for the owning session to commit if it wants to.

Collected metrics:
- total_change_given / total_change_received / net_change
- per_denomination_usage: {value: pieces paid out}
- efficiency: given / (given + received) * 100, a cash ratio and NOT a
  measure of how few pieces were used
- attempted / dispensed / failed, failed.by_reason: {inexact_change}
"""

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transaction:
    amount_due: Decimal
    tendered: Decimal


@dataclass(frozen=True)
class CashFlowSummary:
    total_change_given: Decimal
    total_change_received: Decimal
    net_change: Decimal
    per_denomination_usage: Dict[Decimal, int]
    efficiency: Decimal
    attempted: int
    dispensed: int
    failed: int
    failed_by_reason: Dict[str, int]
    final_pool: DenominationPool

    def to_dict(self) -> Dict:
        return {
            'total_change_given': str(self.total_change_given),
            'total_change_received': str(self.total_change_received),
            'net_change': str(self.net_change),
            'per_denomination_usage': {str(k): v for k, v in self.per_denomination_usage.items()},
            'efficiency': str(self.efficiency),
            'attempted': self.attempted,
            'dispensed': self.dispensed,
            'failed': {
                'total': self.failed,
                'by_reason': dict(self.failed_by_reason),
            },
        }


def _as_transaction(item) -> Transaction:
    if isinstance(item, Transaction):
        due, tendered = item.amount_due, item.tendered
    else:
        try:
            due, tendered = item
        except (TypeError, ValueError):
            raise InvalidAmount(f"Cannot read transaction from {item!r}")
    return Transaction(validate_amount_non_negative(due), validate_amount_non_negative(tendered))


class CashFlowSimulator:
    """
    CashFlowSimulator runs an ordered list of (amount_due, tendered) payments
    through one till.

    - Overpayment: change is computed against the CURRENT working pool. Only
      exact change is paid out and committed to the working pool; an inexact
      result is counted as a failure and leaves the pool as it was.
    - Underpayment: the difference is booked as change received.
    - Exact payment: nothing moves.
    """

    def __init__(self, transactions: Iterable, initial_pool: DenominationPool):
        self.transactions: List[Transaction] = [_as_transaction(t) for t in transactions]
        self.initial_pool = initial_pool
        self._reset()

    def _reset(self) -> None:
        self._attempted = 0
        self._dispensed = 0
        self._failed = 0
        self._failed_by_reason = {
            'inexact_change': 0,
        }

    def run(self) -> CashFlowSummary:
        self._reset()
        pool = self.initial_pool
        given = 0
        received = 0
        usage: Dict[int, int] = {}

        for tx in self.transactions:
            self._attempted += 1
            due = to_minor_units(tx.amount_due)
            paid = to_minor_units(tx.tendered)

            if paid > due:
                breakdown = compute_change(from_minor_units(paid - due), pool)
                if not breakdown.is_exact:
                    self._failed += 1
                    self._failed_by_reason['inexact_change'] += 1
                    continue
                pool = pool.with_usage(breakdown.usage)
                given += paid - due
                self._dispensed += 1
                for line in breakdown.lines:
                    units = to_minor_units(line.value)
                    usage[units] = usage.get(units, 0) + line.count
            elif paid < due:
                received += due - paid

        total = given + received
        efficiency = as_money(Decimal(given) / Decimal(total) * 100) if total else as_money(0)

        summary = CashFlowSummary(
            total_change_given=from_minor_units(given),
            total_change_received=from_minor_units(received),
            net_change=from_minor_units(received - given),
            per_denomination_usage={from_minor_units(k): usage[k] for k in sorted(usage, reverse=True)},
            efficiency=efficiency,
            attempted=self._attempted,
            dispensed=self._dispensed,
            failed=self._failed,
            failed_by_reason=self._failed_by_reason.copy(),
            final_pool=pool,
        )
        logger.info("Simulated %d transactions: given=%s received=%s failed=%d",
                    summary.attempted, summary.total_change_given,
                    summary.total_change_received, summary.failed)
        return summary


def simulate(transactions: Iterable, initial_pool: DenominationPool) -> CashFlowSummary:
    return CashFlowSimulator(transactions, initial_pool).run()
