"""
PortfolioStore: current holdings, one Position per instrument.

The single source of truth for what is owned. Callers only ever see immutable
Position snapshots; the mapping itself is mutated through apply() alone.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable

from tradebook.errors import DuplicatePositionError
from tradebook.position import Position
from tradebook.transaction import Transaction


class PortfolioStore:
    """
    Positions keyed by instrument. Seeded at construction; updated by applying
    transactions. An instrument stays present once seeded or traded, even at 0.
    """

    def __init__(self, positions: Iterable[Position] = ()) -> None:
        self._positions: dict[str, Position] = {}
        self._lock = threading.Lock()
        for position in positions:
            if position.instrument in self._positions:
                raise DuplicatePositionError(position.instrument)
            self._positions[position.instrument] = position

    @classmethod
    def replay(
        cls,
        seed: Iterable[Position],
        transactions: Iterable[Transaction],
    ) -> PortfolioStore:
        """Build a fresh store from seed positions and a transaction history."""
        store = cls(seed)
        for transaction in transactions:
            store.apply(transaction)
        return store

    def get(self, instrument: str) -> Position | None:
        """Current position, or None if the instrument was never seeded or traded."""
        return self._positions.get(instrument)

    def all(self) -> set[Position]:
        """Snapshot of every known position."""
        with self._lock:
            return set(self._positions.values())

    def quantity(self, instrument: str) -> float:
        """Quantity held in instrument. 0 if not present."""
        position = self._positions.get(instrument)
        return position.quantity if position is not None else 0.0

    def instruments(self) -> list[str]:
        with self._lock:
            return list(self._positions)

    def apply(self, transaction: Transaction) -> Position:
        """Add signed_delta to the instrument's quantity. Returns the new Position."""
        with self._lock:
            prior = self._positions.get(transaction.instrument) or Position(transaction.instrument)
            updated = prior.adjusted(transaction.signed_delta)
            self._positions[transaction.instrument] = updated
        return updated

    def __contains__(self, instrument: object) -> bool:
        return instrument in self._positions

    def __len__(self) -> int:
        return len(self._positions)

    def __repr__(self) -> str:
        held = ", ".join(f"{p.instrument}={p.quantity:g}" for p in self._positions.values())
        return f"PortfolioStore({held})"
