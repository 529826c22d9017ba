"""
Error types for the trading core.

MarketClosed is the only recoverable domain error; the rest signal a caller
or collaborator that broke its contract.
"""


class TradebookError(Exception):
    """Base class for all tradebook errors."""


class MarketClosed(TradebookError):
    """Trade rejected because the market is not open. Try again later."""

    def __init__(self, message: str = "Market is closed") -> None:
        super().__init__(message)


class InvalidTrade(TradebookError, ValueError):
    """Raised when a Trade is built from malformed values."""


class InvalidTransaction(TradebookError, ValueError):
    """Raised when a Transaction is built from malformed values."""


class ConfigurationError(TradebookError):
    """Missing collaborator or bad configuration value."""


class DuplicatePositionError(ConfigurationError):
    """Seed positions contain the same instrument more than once."""

    def __init__(self, instrument: str) -> None:
        self.instrument = instrument
        super().__init__(f"Duplicate seed position for instrument: {instrument}")


class ExecutionError(TradebookError):
    """Market executor returned a transaction that does not match the trade."""
