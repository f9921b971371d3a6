# -*- coding: utf-8 -*-
"""
Package for the change-making core of a POS till.

Philosophy: This __init__ file sets the global `Decimal` context so every
monetary value crossing the package boundary is handled with exact decimal
arithmetic. Internally the engine works in integer minor units (cents);
`Decimal` is only the display and interchange type.
"""
from decimal import getcontext, ROUND_HALF_EVEN

# Banker's rounding is used as it minimizes statistical bias.
getcontext().prec = 28
getcontext().rounding = ROUND_HALF_EVEN
