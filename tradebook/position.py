"""
Position: total holding of one instrument at a point in time.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """Immutable snapshot. Updates produce a new Position."""

    instrument: str
    quantity: float = 0.0

    def __post_init__(self) -> None:
        if not isinstance(self.instrument, str) or not self.instrument.strip():
            raise ValueError(f"Instrument must be a non-empty string, got {self.instrument!r}")
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, (int, float)):
            raise ValueError(f"Quantity must be a number, got {self.quantity!r}")
        if not math.isfinite(self.quantity):
            raise ValueError(f"Quantity must be finite, got {self.quantity}")
        object.__setattr__(self, "quantity", float(self.quantity))

    def adjusted(self, delta: float) -> Position:
        return Position(self.instrument, self.quantity + delta)
