# -*- coding: utf-8 -*-
from __future__ import annotations
"""
Restock Advisor

- `suggest_restock` flags low denominations and proposes how many pieces to
  bring in. It only reads the pool.
- `optimize_denomination_stock` plans which pieces would make up a float of
  a given size, reusing the greedy primitive of the change calculator.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple

import till.config as cfg
from .change_calculator import ChangeLine, greedy_allocate
from .denomination import Denomination, DenominationPool
from .errors import InvalidAmount
from .money import from_minor_units, to_minor_units

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RestockSuggestion:
    denomination: Denomination
    current_count: int
    suggested_restock: int


@dataclass(frozen=True)
class StockAllocation:
    target_amount: Decimal
    max_pieces: int
    lines: Tuple[ChangeLine, ...]
    allocated_amount: Decimal
    piece_count: int
    remaining_amount: Decimal


def suggest_restock(pool: DenominationPool,
                    threshold: Optional[int] = None) -> List[RestockSuggestion]:
    """Every denomination at or below `threshold` pieces, empty ones included."""
    if threshold is None:
        threshold = cfg.RESTOCK_THRESHOLD
    suggestions = [
        RestockSuggestion(
            denomination=d,
            current_count=d.count,
            suggested_restock=max(cfg.RESTOCK_MINIMUM, d.count * cfg.RESTOCK_MULTIPLIER),
        )
        for d in pool.denominations
        if d.count <= threshold
    ]
    if suggestions:
        logger.warning("%d denomination(s) at or below %d pieces: %s", len(suggestions), threshold,
                       ", ".join(str(s.denomination.value) for s in suggestions))
    return suggestions


def restock_delta(suggestions: Iterable[RestockSuggestion]) -> Dict[Decimal, int]:
    """Turn suggestions into a delta for `DenominationPool.with_restock`."""
    return {s.denomination.value: s.suggested_restock for s in suggestions}


def optimize_denomination_stock(target_amount,
                                max_pieces: Optional[int] = None,
                                pool: Optional[DenominationPool] = None) -> StockAllocation:
    """
    Greedy plan for `target_amount` using at most `max_pieces` pieces in total
    and no more of any denomination than `pool` holds (standard Euro pool when
    omitted). Stops when the target is reached or either budget runs out.
    """
    if max_pieces is None:
        max_pieces = cfg.DEFAULT_MAX_PIECES
    if pool is None:
        pool = DenominationPool.standard_euro_pool()
    target = to_minor_units(target_amount)
    if target < 0:
        raise InvalidAmount(f"Target amount must be >= 0.00, got {target_amount}")
    if max_pieces < 0:
        raise ValueError("max_pieces must be >= 0")

    taken, remaining = greedy_allocate(target, pool.denominations, max_pieces=max_pieces)
    return StockAllocation(
        target_amount=from_minor_units(target),
        max_pieces=max_pieces,
        lines=tuple(ChangeLine(d.value, n, d.kind, d.name) for d, n in taken),
        allocated_amount=from_minor_units(target - remaining),
        piece_count=sum(n for _, n in taken),
        remaining_amount=from_minor_units(remaining),
    )
