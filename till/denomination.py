# -*- coding: utf-8 -*-
from __future__ import annotations
"""
Denominations and the immutable till pool.

- A pool is a value: every state transition returns a NEW pool and the
  old one stays valid, so previews never observe a half-applied commit.
- Configuration is validated once, up front. Invalid sets fail fast with
  ConfigurationError before any change is computed.
"""

import logging
from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum
from collections.abc import Mapping
from typing import Dict, Iterable, Iterator, Tuple

import till.config as cfg
from .errors import ConfigurationError, InsufficientStock, InvalidAmount
from .money import from_minor_units, to_minor_units

logger = logging.getLogger(__name__)


class DenominationKind(str, Enum):
    COIN = "coin"
    NOTE = "note"


@dataclass(frozen=True)
class Denomination:
    value: Decimal
    count: int
    kind: DenominationKind
    name: str

    @property
    def minor_value(self) -> int:
        return to_minor_units(self.value)


def _coerce(entry) -> Denomination:
    """Accept a Denomination, a (value, count, kind, name) tuple or a dict."""
    if isinstance(entry, Denomination):
        value, count, kind, name = entry.value, entry.count, entry.kind, entry.name
    elif isinstance(entry, Mapping):
        try:
            value, count = entry["value"], entry["count"]
        except KeyError as e:
            raise ConfigurationError(f"Denomination is missing {e.args[0]!r}: {entry!r}")
        kind, name = entry.get("kind", "coin"), entry.get("name", "")
    else:
        try:
            value, count, kind, name = entry
        except (TypeError, ValueError):
            raise ConfigurationError(f"Cannot read denomination from {entry!r}")

    try:
        units = to_minor_units(value)
    except InvalidAmount as e:
        raise ConfigurationError(f"Invalid denomination value {value!r}: {e}")
    if units <= 0:
        raise ConfigurationError(f"Denomination value must be > 0, got {value}")
    if isinstance(count, bool) or not isinstance(count, int):
        raise ConfigurationError(f"Denomination count must be an integer, got {count!r}")
    if count < 0:
        raise ConfigurationError(f"Denomination count must be >= 0, got {count} for {value}")
    try:
        kind = DenominationKind(kind)
    except ValueError:
        raise ConfigurationError(f"Unknown denomination kind {kind!r}")

    money = from_minor_units(units)
    return Denomination(value=money, count=count, kind=kind, name=name or str(money))


class DenominationPool:
    """
    Snapshot of the physical denominations held by one till.

    Denominations are kept sorted by value, descending. Values are unique and
    counts are never negative. The pool is never changed in place; use
    `with_usage` / `with_restock` to derive the next state.
    """

    __slots__ = ("_denominations",)

    def __init__(self, denominations: Tuple[Denomination, ...]):
        # Trusted constructor; external callers go through configure().
        self._denominations = denominations

    @classmethod
    def configure(cls, denominations: Iterable) -> "DenominationPool":
        items = [_coerce(d) for d in denominations]
        seen: Dict[int, Denomination] = {}
        for d in items:
            if d.minor_value in seen:
                raise ConfigurationError(f"Duplicate denomination value {d.value}")
            seen[d.minor_value] = d
        ordered = tuple(sorted(items, key=lambda d: d.minor_value, reverse=True))
        logger.debug("Configured pool with %d denominations", len(ordered))
        return cls(ordered)

    @classmethod
    def standard_euro_pool(cls) -> "DenominationPool":
        return cls.configure(cfg.STANDARD_EURO_DENOMINATIONS)

    def __repr__(self) -> str:
        body = ", ".join(f"{d.value}x{d.count}" for d in self._denominations)
        return f"DenominationPool({body})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, DenominationPool):
            return NotImplemented
        return self._denominations == other._denominations

    def __hash__(self) -> int:
        return hash(self._denominations)

    def __iter__(self) -> Iterator[Denomination]:
        return iter(self._denominations)

    def __len__(self) -> int:
        return len(self._denominations)

    @property
    def denominations(self) -> Tuple[Denomination, ...]:
        """All denominations, empty ones included."""
        return self._denominations

    def snapshot(self) -> Tuple[Denomination, ...]:
        """Denominations that can actually be paid out, largest value first."""
        return tuple(d for d in self._denominations if d.count > 0)

    def count_of(self, value) -> int:
        units = to_minor_units(value)
        for d in self._denominations:
            if d.minor_value == units:
                return d.count
        return 0

    def total_value(self) -> Decimal:
        return from_minor_units(sum(d.minor_value * d.count for d in self._denominations))

    # ---------- state transitions ----------
    def _normalize_delta(self, delta: Mapping) -> Dict[int, int]:
        known = {d.minor_value for d in self._denominations}
        out: Dict[int, int] = {}
        for value, count in delta.items():
            try:
                units = to_minor_units(value)
            except InvalidAmount as e:
                raise ConfigurationError(str(e))
            if units not in known:
                raise ConfigurationError(f"Denomination {value} is not part of this pool")
            if isinstance(count, bool) or not isinstance(count, int) or count < 0:
                raise ConfigurationError(f"Delta count must be a non-negative integer, got {count!r}")
            out[units] = out.get(units, 0) + count
        return out

    def with_usage(self, delta: Mapping) -> "DenominationPool":
        """Return a new pool with `delta` ({value: pieces}) taken out."""
        used = self._normalize_delta(delta)
        updated = []
        for d in self._denominations:
            take = used.get(d.minor_value, 0)
            if take > d.count:
                raise InsufficientStock(
                    f"Cannot take {take} x {d.value}: only {d.count} in the till"
                )
            updated.append(replace(d, count=d.count - take) if take else d)
        return DenominationPool(tuple(updated))

    def with_restock(self, delta: Mapping) -> "DenominationPool":
        """Return a new pool with `delta` ({value: pieces}) added."""
        added = self._normalize_delta(delta)
        return DenominationPool(tuple(
            replace(d, count=d.count + added[d.minor_value]) if added.get(d.minor_value) else d
            for d in self._denominations
        ))
