"""
Bookkeeping example: seed holdings, trade while the market is open, then try
again after the close.

Shows: TradeCoordinator wiring, observers, execution log, MarketClosed
handling and the holdings report.
"""

from __future__ import annotations

import logging

from tradebook import (
    FixedMarketOracle,
    MarketClosed,
    PortfolioStore,
    Position,
    SimulatedMarketExecutor,
    Trade,
    Transaction,
)
from tradebook.execution import TradeCoordinator
from tradebook.reporting import ledger_to_frame, print_report


def print_commit_observer(transaction: Transaction, portfolio: PortfolioStore) -> None:
    """Observer: post-trade log (e.g. journal, notifications)."""
    print(
        f"  [Observer] {transaction.instrument} {transaction.signed_delta:+g}"
        f" -> holding {portfolio.quantity(transaction.instrument):g}"
    )


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    oracle = FixedMarketOracle(is_open=True)
    executor = SimulatedMarketExecutor()
    coordinator = TradeCoordinator.create(
        oracle,
        executor,
        positions=[Position("MSFT", 100.0), Position("APPL", 150.0)],
        observers=[print_commit_observer],
    )

    print("--- Market open ---")
    coordinator.submit(Trade.sell("MSFT", 20.0))
    coordinator.submit(Trade.buy("APPL", 120.0), Trade.sell("APPL", 50.0))

    print("\n--- Market closed ---")
    oracle.set_open(False)
    try:
        coordinator.submit(Trade.buy("MSFT", 5.0))
    except MarketClosed as exc:
        print(f"  Rejected: {exc}")

    print("\n--- Execution log ---")
    for trade, transaction in executor.get_execution_log():
        print(f"  {trade.kind.value} {trade.quantity:g} {trade.instrument} -> {transaction.signed_delta:+g}")

    print("\n--- Ledger ---")
    print(ledger_to_frame(coordinator.ledger))
    print()
    print_report(coordinator.portfolio, coordinator.ledger)


if __name__ == "__main__":
    main()
