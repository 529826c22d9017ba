"""
Market collaborators: whether trading is permitted, and how a trade settles.

MarketOracle and MarketExecutor are the interfaces the core consumes. The
concrete classes here are simple implementations for scripts, tests and
simulation; real calendars and venues implement the same ABCs.
"""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime

from tradebook.errors import ConfigurationError
from tradebook.trade import Trade
from tradebook.transaction import Transaction

logger = logging.getLogger(__name__)

# Environment variables read by TradingHoursOracle.from_env().
OPEN_HOUR_ENV = "TRADEBOOK_MARKET_OPEN_HOUR"
CLOSE_HOUR_ENV = "TRADEBOOK_MARKET_CLOSE_HOUR"

DEFAULT_OPEN_HOUR = 9
DEFAULT_CLOSE_HOUR = 17


class MarketOracle(ABC):
    """Answers whether trading is currently permitted."""

    @abstractmethod
    def is_open(self) -> bool:
        """True if trades may execute right now. Must not have side effects."""
        ...


class MarketExecutor(ABC):
    """
    Turns an admitted trade into a realized transaction.
    Implementations: SimulatedMarketExecutor (in this module); venue adapters.
    """

    @abstractmethod
    def execute(self, trade: Trade) -> Transaction:
        """
        Settle the trade. Only called while the market is open. The returned
        transaction's instrument must match the trade's.
        """
        ...


class FixedMarketOracle(MarketOracle):
    """Oracle with a settable open/closed flag."""

    def __init__(self, is_open: bool = True) -> None:
        self._open = is_open

    def set_open(self, value: bool) -> None:
        self._open = value

    def is_open(self) -> bool:
        return self._open


def _hour_from_env(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer hour, got {raw!r}") from None


class TradingHoursOracle(MarketOracle):
    """
    Open between open_hour (inclusive) and close_hour (exclusive) of the
    local clock, every day. No holiday calendar.
    """

    def __init__(
        self,
        open_hour: int = DEFAULT_OPEN_HOUR,
        close_hour: int = DEFAULT_CLOSE_HOUR,
        *,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        if not (0 <= open_hour <= 24 and 0 <= close_hour <= 24):
            raise ConfigurationError(f"Trading hours must be within 0..24, got {open_hour}..{close_hour}")
        if open_hour >= close_hour:
            raise ConfigurationError(f"open_hour {open_hour} must be before close_hour {close_hour}")
        self.open_hour = open_hour
        self.close_hour = close_hour
        self._now = now

    @classmethod
    def from_env(cls, *, now: Callable[[], datetime] = datetime.now) -> TradingHoursOracle:
        """Build from TRADEBOOK_MARKET_OPEN_HOUR / TRADEBOOK_MARKET_CLOSE_HOUR."""
        open_hour = _hour_from_env(OPEN_HOUR_ENV, DEFAULT_OPEN_HOUR)
        close_hour = _hour_from_env(CLOSE_HOUR_ENV, DEFAULT_CLOSE_HOUR)
        logger.debug("TradingHoursOracle configured: %s:00-%s:00", open_hour, close_hour)
        return cls(open_hour, close_hour, now=now)

    def is_open(self) -> bool:
        hour = self._now().hour
        return self.open_hour <= hour < self.close_hour


class SimulatedMarketExecutor(MarketExecutor):
    """
    Settles every trade in full at the requested quantity. No slippage, no
    partial fills. Keeps a log of executed trades for inspection.
    """

    def __init__(self) -> None:
        self._execution_log: list[tuple[Trade, Transaction]] = []

    def execute(self, trade: Trade) -> Transaction:
        transaction = Transaction.from_trade(trade)
        self._execution_log.append((trade, transaction))
        return transaction

    @property
    def execution_count(self) -> int:
        return len(self._execution_log)

    def get_execution_log(self) -> list[tuple[Trade, Transaction]]:
        """Return every executed trade with its transaction, oldest first."""
        return list(self._execution_log)
