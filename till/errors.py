# -*- coding: utf-8 -*-
"""
Custom Exception Classes for the Till Domain.

Purpose:
- Provide clear, domain-specific errors for till setup and pool commits.
- Business outcomes such as an underpayment or a till that cannot make
  exact change are NOT exceptions; they are reported through result values.
"""


class ConfigurationError(Exception):
    """
    Raised when a denomination set is invalid:
    - Non-positive value, or a value finer than the minor unit.
    - Negative or non-integer count.
    - Duplicate values within one pool.
    """
    pass


class InvalidAmount(Exception):
    """
    Raised when a monetary input cannot be represented exactly in minor
    units, or is negative where only non-negative amounts make sense.
    """
    pass


class InsufficientStock(Exception):
    """
    Raised when a usage delta asks for more pieces of a denomination than
    the pool holds.
    """
    pass


class StalePoolError(Exception):
    """
    Raised when a pool commit was computed against a generation of the till
    that has since been replaced by another commit.
    """
    pass
