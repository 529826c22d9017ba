"""
Execution layer: market-open gate and trade coordination.

TradeGate admits trades only while the market is open; TradeCoordinator routes
admitted trades into the portfolio store and the ledger.
"""

from tradebook.execution.gate import TradeGate
from tradebook.execution.coordinator import TradeCoordinator, TradeObserver

__all__ = [
    "TradeGate",
    "TradeCoordinator",
    "TradeObserver",
]
