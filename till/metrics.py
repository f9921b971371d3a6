# -*- coding: utf-8 -*-
from __future__ import annotations
"""
Dispense metrics for a single change breakdown.

`dispense_efficiency` scores how valuable the average handed-out piece is.
It is unrelated to the given/received ratio reported by the cash flow
simulator; the two are kept apart under different names.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Tuple

import till.config as cfg
from .change_calculator import ChangeBreakdown, ChangeLine
from .denomination import DenominationKind
from .money import as_money, from_minor_units, to_minor_units

_HUNDRED = Decimal("100")


@dataclass(frozen=True)
class DispenseEfficiency:
    efficiency: Decimal
    average_value: Decimal
    coin_count: int
    note_count: int


@dataclass(frozen=True)
class KindSplit:
    coins: Tuple[ChangeLine, ...]
    notes: Tuple[ChangeLine, ...]
    total_coins: int
    total_notes: int
    coin_value: Decimal
    note_value: Decimal


def _pieces(lines) -> int:
    return sum(l.count for l in lines)


def _value(lines) -> Decimal:
    return from_minor_units(sum(to_minor_units(l.value) * l.count for l in lines))


def split_by_kind(breakdown: ChangeBreakdown) -> KindSplit:
    coins = tuple(l for l in breakdown.lines if l.kind is DenominationKind.COIN)
    notes = tuple(l for l in breakdown.lines if l.kind is DenominationKind.NOTE)
    return KindSplit(
        coins=coins,
        notes=notes,
        total_coins=_pieces(coins),
        total_notes=_pieces(notes),
        coin_value=_value(coins),
        note_value=_value(notes),
    )


def dispense_efficiency(breakdown: ChangeBreakdown) -> DispenseEfficiency:
    """
    efficiency = min(100, average piece value / reference value * 100)

    The reference value comes from config (10.00 by default). An empty
    breakdown scores zero everywhere.
    """
    split = split_by_kind(breakdown)
    if breakdown.piece_count == 0:
        zero = as_money(0)
        return DispenseEfficiency(zero, zero, 0, 0)

    average = as_money(breakdown.total_covered / breakdown.piece_count)
    reference = Decimal(cfg.EFFICIENCY_REFERENCE_VALUE)
    efficiency = as_money(min(_HUNDRED, breakdown.total_covered / breakdown.piece_count / reference * _HUNDRED))
    return DispenseEfficiency(
        efficiency=efficiency,
        average_value=average,
        coin_count=split.total_coins,
        note_count=split.total_notes,
    )
