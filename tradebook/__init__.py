"""
tradebook: single-user holdings, market-gated trade execution and a
transaction ledger.

No persistence, no order books. Collaborators for market hours and settlement
are pluggable.
"""

__version__ = "0.1.0"

from tradebook.errors import (
    ConfigurationError,
    DuplicatePositionError,
    ExecutionError,
    InvalidTrade,
    InvalidTransaction,
    MarketClosed,
    TradebookError,
)
from tradebook.trade import Trade, TradeKind
from tradebook.transaction import Transaction
from tradebook.position import Position
from tradebook.portfolio import PortfolioStore
from tradebook.ledger import Ledger
from tradebook.market import (
    FixedMarketOracle,
    MarketExecutor,
    MarketOracle,
    SimulatedMarketExecutor,
    TradingHoursOracle,
)
from tradebook.execution import TradeCoordinator, TradeGate

__all__ = [
    "Trade",
    "TradeKind",
    "Transaction",
    "Position",
    "PortfolioStore",
    "Ledger",
    "MarketOracle",
    "MarketExecutor",
    "FixedMarketOracle",
    "TradingHoursOracle",
    "SimulatedMarketExecutor",
    "TradeGate",
    "TradeCoordinator",
    "TradebookError",
    "MarketClosed",
    "InvalidTrade",
    "InvalidTransaction",
    "ConfigurationError",
    "DuplicatePositionError",
    "ExecutionError",
]
