"""
Transaction: the realized, signed effect of a successfully gated trade.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from tradebook.errors import InvalidTransaction

if TYPE_CHECKING:
    from tradebook.trade import Trade


@dataclass(frozen=True)
class Transaction:
    """
    Signed balance change for one instrument. Equal when instrument and
    signed_delta are equal.
    """

    instrument: str
    signed_delta: float

    def __post_init__(self) -> None:
        if not isinstance(self.instrument, str) or not self.instrument.strip():
            raise InvalidTransaction(f"Instrument must be a non-empty string, got {self.instrument!r}")
        if isinstance(self.signed_delta, bool) or not isinstance(self.signed_delta, (int, float)):
            raise InvalidTransaction(f"signed_delta must be a number, got {self.signed_delta!r}")
        if not math.isfinite(self.signed_delta):
            raise InvalidTransaction(f"signed_delta must be finite, got {self.signed_delta}")
        object.__setattr__(self, "signed_delta", float(self.signed_delta))

    @classmethod
    def from_trade(cls, trade: Trade) -> Transaction:
        """Full fill of the trade: quantity * sign(kind)."""
        return cls(instrument=trade.instrument, signed_delta=trade.signed_quantity)
