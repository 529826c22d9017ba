"""
Reporting: tabular views of the ledger and current holdings.
"""

from __future__ import annotations

import pandas as pd

from tradebook.ledger import Ledger
from tradebook.portfolio import PortfolioStore


def ledger_to_frame(ledger: Ledger) -> pd.DataFrame:
    """
    One row per recorded transaction, in execution order.

    Returns
    -------
    pd.DataFrame
        Columns instrument, signed_delta; integer index named "sequence".
    """
    rows = [
        {"instrument": t.instrument, "signed_delta": t.signed_delta}
        for t in ledger.transactions()
    ]
    df = pd.DataFrame(rows, columns=["instrument", "signed_delta"])
    df["signed_delta"] = df["signed_delta"].astype(float)
    df.index.name = "sequence"
    return df


def balance_summary(portfolio: PortfolioStore, ledger: Ledger) -> pd.DataFrame:
    """
    Current quantity and net ledger change per instrument.

    Instruments known to either the portfolio or the ledger are included,
    sorted by name. Missing values are 0.
    """
    instruments = sorted(set(portfolio.instruments()) | set(ledger.instruments()))
    df = pd.DataFrame(
        {
            "quantity": [portfolio.quantity(sym) for sym in instruments],
            "change_in_balance": [ledger.change_in_balance(sym) for sym in instruments],
        },
        index=pd.Index(instruments, name="instrument"),
        dtype=float,
    )
    return df


def print_report(portfolio: PortfolioStore, ledger: Ledger) -> pd.DataFrame:
    """
    Print holdings and ledger totals; return the summary frame.

    Parameters
    ----------
    portfolio : PortfolioStore
        Current holdings.
    ledger : Ledger
        Transaction history.

    Returns
    -------
    pd.DataFrame
        Output of balance_summary (e.g. for programmatic use).
    """
    summary = balance_summary(portfolio, ledger)
    print("--- Holdings ---")
    if summary.empty:
        print("(no positions)")
    else:
        for sym, row in summary.iterrows():
            print(f"{sym:<10} qty {row['quantity']:>14,.2f}   change {row['change_in_balance']:>+14,.2f}")
    print(f"Transactions:   {len(ledger)}")
    print("----------------")
    return summary
