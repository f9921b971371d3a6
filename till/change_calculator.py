# -*- coding: utf-8 -*-
from __future__ import annotations
"""
Change Calculator

- Greedy allocation, largest denomination first, bounded by the pieces the
  till actually holds.
- When greedy leaves a remainder, a bounded perturbation search retries
  with one piece of a single denomination held back. This is a heuristic:
  it may miss a feasible combination that needs two or more pieces held back.
- All arithmetic runs on integer minor units; results are reported in Decimal.
"""

import logging
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Dict, List, Optional, Sequence, Tuple

import till.config as cfg
from .denomination import Denomination, DenominationKind, DenominationPool
from .errors import InvalidAmount
from .money import from_minor_units, to_minor_units

logger = logging.getLogger(__name__)

Allocation = List[Tuple[Denomination, int]]


@dataclass(frozen=True)
class ChangeLine:
    value: Decimal
    count: int
    kind: DenominationKind
    name: str

    @property
    def amount(self) -> Decimal:
        return from_minor_units(to_minor_units(self.value) * self.count)


@dataclass(frozen=True)
class ChangeBreakdown:
    """
    Result of one change computation.

    `lines` are ordered by value, descending. `alternatives` holds up to
    three exact breakdowns found by the perturbation search; it is only
    populated when the primary breakdown is not exact.
    """
    requested_amount: Decimal
    lines: Tuple[ChangeLine, ...]
    total_covered: Decimal
    piece_count: int
    is_exact: bool
    alternatives: Tuple["ChangeBreakdown", ...] = ()

    @property
    def shortfall(self) -> Decimal:
        return from_minor_units(to_minor_units(self.requested_amount) - to_minor_units(self.total_covered))

    @property
    def usage(self) -> Dict[Decimal, int]:
        """Pieces per denomination value, in the form `with_usage` accepts."""
        return {line.value: line.count for line in self.lines}

    def to_dict(self) -> Dict:
        return {
            'requested_amount': str(self.requested_amount),
            'lines': [
                {'value': str(l.value), 'count': l.count, 'kind': l.kind.value, 'name': l.name}
                for l in self.lines
            ],
            'total_covered': str(self.total_covered),
            'piece_count': self.piece_count,
            'is_exact': self.is_exact,
            'shortfall': str(self.shortfall),
            'alternatives': [a.to_dict() for a in self.alternatives],
        }


def greedy_allocate(amount_minor: int,
                    denominations: Sequence[Denomination],
                    max_pieces: Optional[int] = None) -> Tuple[Allocation, int]:
    """
    Take as many pieces of each denomination as fit, in the given order.

    `denominations` must already be sorted by value, descending. When
    `max_pieces` is set, the total number of pieces taken never exceeds it.
    Returns the (denomination, pieces) pairs taken and the uncovered remainder
    in minor units.
    """
    remaining = amount_minor
    budget = max_pieces
    taken: Allocation = []
    for d in denominations:
        if remaining <= 0 or (budget is not None and budget <= 0):
            break
        n = min(remaining // d.minor_value, d.count)
        if budget is not None:
            n = min(n, budget)
        if n > 0:
            taken.append((d, n))
            remaining -= n * d.minor_value
            if budget is not None:
                budget -= n
    return taken, remaining


def _build(requested: int, taken: Allocation, remaining: int,
           alternatives: Tuple[ChangeBreakdown, ...] = ()) -> ChangeBreakdown:
    lines = tuple(ChangeLine(d.value, n, d.kind, d.name) for d, n in taken)
    return ChangeBreakdown(
        requested_amount=from_minor_units(requested),
        lines=lines,
        total_covered=from_minor_units(requested - remaining),
        piece_count=sum(n for _, n in taken),
        is_exact=remaining == 0,
        alternatives=alternatives,
    )


def _find_alternatives(requested: int,
                       snapshot: Tuple[Denomination, ...]) -> Tuple[ChangeBreakdown, ...]:
    found: List[ChangeBreakdown] = []
    seen = set()
    # Every variant starts from the untouched snapshot; the smallest
    # denomination is never held back.
    for i in range(len(snapshot) - 1):
        variant = list(snapshot)
        variant[i] = replace(variant[i], count=variant[i].count - 1)
        taken, remaining = greedy_allocate(requested, variant)
        if remaining != 0:
            continue
        key = tuple((d.minor_value, n) for d, n in taken)
        if key in seen:
            continue
        seen.add(key)
        found.append(_build(requested, taken, remaining))
    found.sort(key=lambda b: b.piece_count)
    return tuple(found[:cfg.MAX_ALTERNATIVES])


def compute_change(amount, pool: DenominationPool) -> ChangeBreakdown:
    """
    Work out how to pay `amount` out of `pool`.

    Never over-dispenses: `total_covered <= requested_amount` always holds.
    A zero amount yields an empty, exact breakdown. The pool is only read.
    """
    requested = to_minor_units(amount)
    if requested < 0:
        raise InvalidAmount(f"Change amount must be >= 0.00, got {amount}")

    snapshot = pool.snapshot()
    taken, remaining = greedy_allocate(requested, snapshot)
    if remaining == 0:
        breakdown = _build(requested, taken, remaining)
        logger.debug("Exact change for %s in %d pieces", breakdown.requested_amount, breakdown.piece_count)
        return breakdown

    alternatives = _find_alternatives(requested, snapshot)
    breakdown = _build(requested, taken, remaining, alternatives)
    logger.info("No exact change for %s: short by %s, %d alternative(s) found",
                breakdown.requested_amount, breakdown.shortfall, len(alternatives))
    return breakdown
