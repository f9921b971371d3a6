# -*- coding: utf-8 -*-
from __future__ import annotations
"""
Payment Validator

Compares what is due against what the customer handed over. When change is
owed, the till must be able to pay it out exactly; otherwise the payment is
reported as not valid so the cashier can ask for a different tender.

Outcomes are result values. Only malformed amounts raise InvalidAmount.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_CEILING
from typing import List, Optional

import till.config as cfg
from .change_calculator import ChangeBreakdown, compute_change
from .denomination import DenominationPool
from .money import as_money, fmt_money, from_minor_units, to_minor_units, validate_amount_non_negative

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaymentValidationResult:
    amount_due: Decimal
    tendered: Decimal
    is_valid: bool
    change: Decimal
    shortfall: Decimal
    message: str
    breakdown: Optional[ChangeBreakdown] = None


def validate_payment(amount_due, tendered, pool: DenominationPool) -> PaymentValidationResult:
    due = validate_amount_non_negative(amount_due)
    paid = validate_amount_non_negative(tendered)
    zero = as_money(0)

    if paid < due:
        shortfall = due - paid
        logger.info("Tender %s below amount due %s", paid, due)
        return PaymentValidationResult(
            amount_due=due, tendered=paid, is_valid=False, change=zero, shortfall=shortfall,
            message=f"Payment insufficient. Shortfall: {fmt_money(shortfall)}",
        )

    if paid == due:
        return PaymentValidationResult(
            amount_due=due, tendered=paid, is_valid=True, change=zero, shortfall=zero,
            message="Exact payment received",
        )

    owed = paid - due
    breakdown = compute_change(owed, pool)
    if not breakdown.is_exact:
        shortfall = from_minor_units(to_minor_units(owed) - to_minor_units(breakdown.total_covered))
        return PaymentValidationResult(
            amount_due=due, tendered=paid, is_valid=False,
            change=breakdown.total_covered, shortfall=shortfall,
            message=f"Cannot provide exact change. Shortfall: {fmt_money(shortfall)}",
            breakdown=breakdown,
        )

    return PaymentValidationResult(
        amount_due=due, tendered=paid, is_valid=True, change=breakdown.total_covered, shortfall=zero,
        message=f"Change: {fmt_money(breakdown.total_covered)}",
        breakdown=breakdown,
    )


def suggest_tender_amounts(total) -> List[Decimal]:
    """Round banknote-style amounts a customer is likely to hand over for `total`."""
    base = validate_amount_non_negative(total).to_integral_value(rounding=ROUND_CEILING)
    return [as_money(base + step) for step in cfg.QUICK_TENDER_STEPS]
