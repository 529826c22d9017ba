"""
Tests for execution layer: market collaborators, TradeGate, TradeCoordinator.
"""

from datetime import datetime

import pytest

from tradebook import (
    ConfigurationError,
    ExecutionError,
    FixedMarketOracle,
    Ledger,
    MarketClosed,
    MarketExecutor,
    MarketOracle,
    PortfolioStore,
    Position,
    SimulatedMarketExecutor,
    Trade,
    TradingHoursOracle,
    Transaction,
)
from tradebook.execution import TradeCoordinator, TradeGate


class SequenceOracle(MarketOracle):
    """Returns the given answers in order; counts calls."""

    def __init__(self, *answers: bool) -> None:
        self._answers = list(answers)
        self.calls = 0

    def is_open(self) -> bool:
        answer = self._answers[min(self.calls, len(self._answers) - 1)]
        self.calls += 1
        return answer


class WrongInstrumentExecutor(MarketExecutor):
    def execute(self, trade: Trade) -> Transaction:
        return Transaction("OTHER", trade.signed_quantity)


class NoTransactionExecutor(MarketExecutor):
    def execute(self, trade: Trade):
        return None


def _coordinator(oracle: MarketOracle, executor: MarketExecutor | None = None) -> TradeCoordinator:
    return TradeCoordinator.create(
        oracle,
        executor or SimulatedMarketExecutor(),
        positions=[Position("MSFT", 100.0), Position("APPL", 150.0)],
    )


# --- Market collaborators ---


def test_fixed_oracle_set_open():
    oracle = FixedMarketOracle(is_open=False)
    assert oracle.is_open() is False
    oracle.set_open(True)
    assert oracle.is_open() is True


@pytest.mark.parametrize(
    "hour, expected",
    [(8, False), (9, True), (12, True), (16, True), (17, False), (23, False)],
)
def test_trading_hours_oracle(hour, expected):
    oracle = TradingHoursOracle(now=lambda: datetime(2024, 1, 15, hour, 30))
    assert oracle.is_open() is expected


def test_trading_hours_oracle_from_env(monkeypatch):
    monkeypatch.setenv("TRADEBOOK_MARKET_OPEN_HOUR", "10")
    monkeypatch.setenv("TRADEBOOK_MARKET_CLOSE_HOUR", "12")
    oracle = TradingHoursOracle.from_env(now=lambda: datetime(2024, 1, 15, 9, 0))
    assert (oracle.open_hour, oracle.close_hour) == (10, 12)
    assert oracle.is_open() is False


def test_trading_hours_oracle_from_env_defaults(monkeypatch):
    monkeypatch.delenv("TRADEBOOK_MARKET_OPEN_HOUR", raising=False)
    monkeypatch.delenv("TRADEBOOK_MARKET_CLOSE_HOUR", raising=False)
    oracle = TradingHoursOracle.from_env()
    assert (oracle.open_hour, oracle.close_hour) == (9, 17)


def test_trading_hours_oracle_rejects_bad_env(monkeypatch):
    monkeypatch.setenv("TRADEBOOK_MARKET_OPEN_HOUR", "nine")
    with pytest.raises(ConfigurationError):
        TradingHoursOracle.from_env()


@pytest.mark.parametrize("open_hour, close_hour", [(17, 9), (9, 9), (-1, 5), (9, 25)])
def test_trading_hours_oracle_rejects_bad_hours(open_hour, close_hour):
    with pytest.raises(ConfigurationError):
        TradingHoursOracle(open_hour, close_hour)


def test_simulated_executor_full_fill():
    executor = SimulatedMarketExecutor()
    trade = Trade.sell("MSFT", 20.0)
    assert executor.execute(trade) == Transaction("MSFT", -20.0)
    assert executor.execution_count == 1
    assert executor.get_execution_log() == [(trade, Transaction("MSFT", -20.0))]


# --- TradeGate ---


def test_gate_requires_collaborators():
    with pytest.raises(ConfigurationError):
        TradeGate(None, SimulatedMarketExecutor())
    with pytest.raises(ConfigurationError):
        TradeGate(FixedMarketOracle(), None)


def test_gate_executes_when_open():
    executor = SimulatedMarketExecutor()
    gate = TradeGate(FixedMarketOracle(True), executor)
    assert gate.execute(Trade.buy("APPL", 120.0)) == Transaction("APPL", 120.0)
    assert executor.execution_count == 1


def test_gate_rejects_when_closed_without_executing():
    executor = SimulatedMarketExecutor()
    gate = TradeGate(FixedMarketOracle(False), executor)
    with pytest.raises(MarketClosed):
        gate.execute(Trade.sell("MSFT", 20.0))
    assert executor.execution_count == 0


def test_gate_checks_oracle_on_every_call():
    oracle = SequenceOracle(True, False, True)
    executor = SimulatedMarketExecutor()
    gate = TradeGate(oracle, executor)
    gate.execute(Trade.buy("MSFT", 1.0))
    with pytest.raises(MarketClosed):
        gate.execute(Trade.buy("MSFT", 1.0))
    gate.execute(Trade.buy("MSFT", 1.0))
    assert oracle.calls == 3
    assert executor.execution_count == 2


def test_gate_rejects_mismatched_instrument():
    gate = TradeGate(FixedMarketOracle(True), WrongInstrumentExecutor())
    with pytest.raises(ExecutionError):
        gate.execute(Trade.buy("MSFT", 1.0))


def test_gate_rejects_non_transaction_result():
    gate = TradeGate(FixedMarketOracle(True), NoTransactionExecutor())
    with pytest.raises(ExecutionError):
        gate.execute(Trade.buy("MSFT", 1.0))


# --- TradeCoordinator ---


def test_coordinator_requires_collaborators():
    gate = TradeGate(FixedMarketOracle(), SimulatedMarketExecutor())
    with pytest.raises(ConfigurationError):
        TradeCoordinator(None, PortfolioStore(), Ledger())
    with pytest.raises(ConfigurationError):
        TradeCoordinator(gate, None, Ledger())
    with pytest.raises(ConfigurationError):
        TradeCoordinator(gate, PortfolioStore(), None)


def test_user_sells_while_market_open():
    coordinator = _coordinator(FixedMarketOracle(True))
    executed = coordinator.submit(Trade.sell("MSFT", 20.0))
    assert executed == [Transaction("MSFT", -20.0)]
    assert coordinator.portfolio.get("MSFT") == Position("MSFT", 80.0)
    assert coordinator.portfolio.get("APPL") == Position("APPL", 150.0)
    assert coordinator.ledger.transactions() == [Transaction("MSFT", -20.0)]


def test_after_hours_trade_is_rejected():
    executor = SimulatedMarketExecutor()
    coordinator = _coordinator(FixedMarketOracle(False), executor)
    with pytest.raises(MarketClosed):
        coordinator.submit(Trade.sell("MSFT", 20.0))
    assert coordinator.portfolio.get("MSFT") == Position("MSFT", 100.0)
    assert coordinator.portfolio.get("APPL") == Position("APPL", 150.0)
    assert coordinator.ledger.transactions() == []
    assert executor.execution_count == 0


def test_user_buys_and_sells_same_instrument():
    coordinator = _coordinator(FixedMarketOracle(True))
    coordinator.submit(Trade.buy("APPL", 120.0), Trade.sell("APPL", 50.0))
    assert coordinator.portfolio.get("APPL") == Position("APPL", 220.0)
    assert coordinator.portfolio.get("MSFT") == Position("MSFT", 100.0)
    assert coordinator.ledger.transactions() == [
        Transaction("APPL", 120.0),
        Transaction("APPL", -50.0),
    ]
    assert coordinator.ledger.change_in_balance("APPL") == 70.0


def test_separate_submits_accumulate():
    coordinator = _coordinator(FixedMarketOracle(True))
    coordinator.submit(Trade.buy("APPL", 120.0))
    coordinator.submit(Trade.sell("APPL", 50.0))
    assert coordinator.portfolio.all() == {Position("MSFT", 100.0), Position("APPL", 220.0)}


def test_batch_fails_fast_when_market_closes():
    oracle = SequenceOracle(True, False)
    executor = SimulatedMarketExecutor()
    coordinator = _coordinator(oracle, executor)
    with pytest.raises(MarketClosed):
        coordinator.submit(
            Trade.buy("APPL", 10.0),
            Trade.sell("MSFT", 20.0),
            Trade.buy("GOOG", 1.0),
        )
    assert coordinator.portfolio.get("APPL") == Position("APPL", 160.0)
    assert coordinator.portfolio.get("MSFT") == Position("MSFT", 100.0)
    assert coordinator.portfolio.get("GOOG") is None
    assert coordinator.ledger.transactions() == [Transaction("APPL", 10.0)]
    assert oracle.calls == 2
    assert executor.execution_count == 1


def test_submit_with_no_trades():
    coordinator = _coordinator(FixedMarketOracle(False))
    assert coordinator.submit() == []


def test_portfolio_equals_replay_of_ledger():
    seed = [Position("MSFT", 100.0), Position("APPL", 150.0)]
    coordinator = TradeCoordinator.create(FixedMarketOracle(), SimulatedMarketExecutor(), positions=seed)
    coordinator.submit(
        Trade.buy("APPL", 120.0),
        Trade.sell("APPL", 50.0),
        Trade.sell("MSFT", 20.0),
        Trade.buy("GOOG", 3.0),
    )
    replayed = PortfolioStore.replay(seed, coordinator.ledger.transactions())
    assert replayed.all() == coordinator.portfolio.all()
    for sym in ("APPL", "MSFT", "GOOG"):
        assert coordinator.ledger.change_in_balance(sym) == sum(
            t.signed_delta for t in coordinator.ledger.transactions() if t.instrument == sym
        )


def test_observers_called_after_commit():
    seen = []

    def observer(transaction, portfolio):
        seen.append((transaction, portfolio.quantity(transaction.instrument)))

    coordinator = TradeCoordinator.create(
        FixedMarketOracle(),
        SimulatedMarketExecutor(),
        positions=[Position("MSFT", 100.0)],
        observers=[observer],
    )
    coordinator.submit(Trade.sell("MSFT", 20.0), Trade.buy("MSFT", 5.0))
    assert seen == [(Transaction("MSFT", -20.0), 80.0), (Transaction("MSFT", 5.0), 85.0)]


def test_coordinator_preseeded_ledger():
    coordinator = TradeCoordinator.create(
        FixedMarketOracle(),
        SimulatedMarketExecutor(),
        transactions=[Transaction("MSFT", 100.0)],
    )
    coordinator.submit(Trade.buy("MSFT", 120.0), Trade.sell("MSFT", 50.0))
    assert coordinator.ledger.change_in_balance("MSFT") == 170.0
    assert coordinator.portfolio.get("MSFT") == Position("MSFT", 70.0)


def test_observer_error_stops_batch_after_commit():
    def failing_observer(transaction, portfolio):
        raise RuntimeError("journal unavailable")

    executor = SimulatedMarketExecutor()
    coordinator = TradeCoordinator.create(
        FixedMarketOracle(),
        executor,
        observers=[failing_observer],
    )
    with pytest.raises(RuntimeError):
        coordinator.submit(Trade.buy("A", 1.0), Trade.buy("B", 1.0))
    assert coordinator.ledger.transactions() == [Transaction("A", 1.0)]
    assert coordinator.portfolio.get("A") == Position("A", 1.0)
    assert coordinator.portfolio.get("B") is None
    assert executor.execution_count == 1
