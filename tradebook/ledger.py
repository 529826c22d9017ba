"""
Ledger: append-only history of executed transactions.

Insertion order is execution order. Entries are never reordered, deduplicated
or checked against current holdings.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable

from tradebook.transaction import Transaction


class Ledger:
    """Ordered transaction history with balance-change queries."""

    def __init__(self, transactions: Iterable[Transaction] = ()) -> None:
        self._transactions: list[Transaction] = list(transactions)
        self._lock = threading.Lock()

    def record(self, *transactions: Transaction) -> None:
        """Append one or more transactions, preserving their order."""
        self.record_all(transactions)

    def record_all(self, transactions: Iterable[Transaction]) -> None:
        """Append a sequence of transactions as one contiguous block."""
        batch = list(transactions)
        with self._lock:
            self._transactions.extend(batch)

    def transactions(self) -> list[Transaction]:
        """Full history, oldest first."""
        with self._lock:
            return list(self._transactions)

    def change_in_balance(self, instrument: str) -> float:
        """Net signed change for instrument across history. 0 if never traded."""
        return sum(
            (t.signed_delta for t in self.transactions() if t.instrument == instrument),
            0.0,
        )

    def instruments(self) -> list[str]:
        """Instruments with history, in order of first appearance."""
        return list(dict.fromkeys(t.instrument for t in self.transactions()))

    def __len__(self) -> int:
        return len(self._transactions)
