"""
TradeCoordinator: accept trades, gate them, apply and record the results.

Flow per trade: gate → portfolio.apply → ledger.record → observers.
Trades in one submit() call are processed in order and fail fast on the first
MarketClosed. Trades already committed stay committed; nothing is retried.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Protocol

from tradebook.errors import ConfigurationError, MarketClosed
from tradebook.execution.gate import TradeGate
from tradebook.ledger import Ledger
from tradebook.market import MarketExecutor, MarketOracle
from tradebook.portfolio import PortfolioStore
from tradebook.position import Position
from tradebook.trade import Trade
from tradebook.transaction import Transaction

logger = logging.getLogger(__name__)


class TradeObserver(Protocol):
    """Post-trade callback, invoked after the transaction is applied and recorded."""

    def __call__(self, transaction: Transaction, portfolio: PortfolioStore) -> None:
        ...


class TradeCoordinator:
    """
    Composition root for the trading core: owns the gate, the portfolio store
    and the ledger, and keeps the last two consistent.

    If a fault escapes between portfolio.apply and ledger.record, the portfolio
    store is authoritative.
    """

    def __init__(
        self,
        gate: TradeGate,
        portfolio: PortfolioStore,
        ledger: Ledger,
        *,
        observers: Sequence[TradeObserver] = (),
    ) -> None:
        for name, value in (("gate", gate), ("portfolio", portfolio), ("ledger", ledger)):
            if value is None:
                raise ConfigurationError(f"TradeCoordinator requires a {name}")
        self._gate = gate
        self._portfolio = portfolio
        self._ledger = ledger
        self.observers: list[TradeObserver] = list(observers)

    @classmethod
    def create(
        cls,
        oracle: MarketOracle,
        executor: MarketExecutor,
        *,
        positions: Iterable[Position] = (),
        transactions: Iterable[Transaction] = (),
        observers: Sequence[TradeObserver] = (),
    ) -> TradeCoordinator:
        """Wire a coordinator from collaborators and seed state."""
        return cls(
            TradeGate(oracle, executor),
            PortfolioStore(positions),
            Ledger(transactions),
            observers=observers,
        )

    @property
    def gate(self) -> TradeGate:
        return self._gate

    @property
    def portfolio(self) -> PortfolioStore:
        return self._portfolio

    @property
    def ledger(self) -> Ledger:
        return self._ledger

    def submit(self, *trades: Trade) -> list[Transaction]:
        """
        Execute trades in order. Returns the transactions committed by this call.

        Raises MarketClosed at the first rejected trade; earlier trades remain
        applied and recorded, later trades are not attempted.

        Observer exceptions propagate unchanged and stop the batch the same
        way; the trade that triggered the observer is already committed.
        """
        executed: list[Transaction] = []
        for index, trade in enumerate(trades):
            try:
                transaction = self._gate.execute(trade)
            except MarketClosed:
                logger.info(
                    "Batch halted at trade %d of %d (%s); %d committed",
                    index + 1,
                    len(trades),
                    trade.instrument,
                    len(executed),
                )
                raise
            self._portfolio.apply(transaction)
            self._ledger.record(transaction)
            executed.append(transaction)
            for obs in self.observers:
                obs(transaction, self._portfolio)
        return executed
