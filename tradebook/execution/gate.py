"""
TradeGate: the only path from a Trade to a Transaction.

Checks the market oracle on every call and invokes the executor only while the
market is open. A rejected trade has no side effects.
"""

from __future__ import annotations

import logging

from tradebook.errors import ConfigurationError, ExecutionError, MarketClosed
from tradebook.market import MarketExecutor, MarketOracle
from tradebook.trade import Trade
from tradebook.transaction import Transaction

logger = logging.getLogger(__name__)


class TradeGate:
    """Composes a MarketOracle and a MarketExecutor behind an open-market check."""

    def __init__(self, oracle: MarketOracle, executor: MarketExecutor) -> None:
        if oracle is None:
            raise ConfigurationError("TradeGate requires a MarketOracle")
        if executor is None:
            raise ConfigurationError("TradeGate requires a MarketExecutor")
        self.oracle = oracle
        self.executor = executor

    def execute(self, trade: Trade) -> Transaction:
        """
        Execute trade if the market is open right now.

        Raises MarketClosed without touching the executor when it is not, and
        ExecutionError if the executor returns something other than a Transaction
        for the same instrument.
        """
        if not self.oracle.is_open():
            logger.warning(
                "Trade rejected, market closed: %s %s %s",
                trade.kind.value,
                trade.quantity,
                trade.instrument,
            )
            raise MarketClosed()

        transaction = self.executor.execute(trade)
        if not isinstance(transaction, Transaction):
            raise ExecutionError(f"Executor returned {transaction!r}, expected a Transaction")
        if transaction.instrument != trade.instrument:
            raise ExecutionError(
                f"Executor returned a transaction for {transaction.instrument!r}, "
                f"expected {trade.instrument!r}"
            )
        logger.debug("Trade executed: %s -> %s", trade, transaction)
        return transaction
