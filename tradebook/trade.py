"""
Trade: a requested, not-yet-realized buy or sell of one instrument.

Immutable. Quantity is always non-negative; direction comes from the kind.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from tradebook.errors import InvalidTrade


class TradeKind(Enum):
    BUY = "buy"
    SELL = "sell"

    @property
    def sign(self) -> int:
        """Direction in which a realized trade moves the balance."""
        return _SIGNS[self]


_SIGNS = {TradeKind.BUY: 1, TradeKind.SELL: -1}


@dataclass(frozen=True)
class Trade:
    """A request to trade. Validated at construction; never mutated."""

    kind: TradeKind
    instrument: str
    quantity: float

    def __post_init__(self) -> None:
        if not isinstance(self.kind, TradeKind):
            raise InvalidTrade(f"Unknown trade kind: {self.kind!r}")
        if not isinstance(self.instrument, str) or not self.instrument.strip():
            raise InvalidTrade(f"Instrument must be a non-empty string, got {self.instrument!r}")
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, (int, float)):
            raise InvalidTrade(f"Quantity must be a number, got {self.quantity!r}")
        if not math.isfinite(self.quantity) or self.quantity < 0:
            raise InvalidTrade(f"Quantity must be finite and non-negative, got {self.quantity}")
        object.__setattr__(self, "quantity", float(self.quantity))

    @classmethod
    def buy(cls, instrument: str, quantity: float) -> Trade:
        return cls(TradeKind.BUY, instrument, quantity)

    @classmethod
    def sell(cls, instrument: str, quantity: float) -> Trade:
        return cls(TradeKind.SELL, instrument, quantity)

    @property
    def signed_quantity(self) -> float:
        """Quantity with the kind's sign applied (positive = buy)."""
        return self.quantity * self.kind.sign
