"""
Top sheet: a trial-balance style summary over derived ledgers.

Each ledger's closing balance lands in the debit or credit column according
to its closing Dr/Cr label (as an absolute amount). For a complete set of
double-entry postings the two column totals agree.

Also provides pandas views of ledgers and the top sheet for presentation
consumers; nothing here renders.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

import pandas as pd

from .ledger.model import AccountLedger

BALANCE_TOLERANCE = 0.005

LEDGER_COLUMNS = ["date", "particulars", "debit", "credit", "balance", "balance_type", "id"]
TOP_SHEET_COLUMNS = ["account", "account_type", "debit_balance", "credit_balance", "total_debit", "total_credit"]


@dataclass(frozen=True)
class TopSheetRow:
    account_name: str
    account_type: str
    debit_balance: float
    credit_balance: float
    total_debit: float
    total_credit: float


@dataclass(frozen=True)
class TopSheet:
    rows: Tuple[TopSheetRow, ...]
    total_debit_balance: float
    total_credit_balance: float

    @property
    def difference(self) -> float:
        return self.total_debit_balance - self.total_credit_balance

    @property
    def is_balanced(self) -> bool:
        return abs(self.difference) < BALANCE_TOLERANCE


def build_top_sheet(ledgers: Sequence[AccountLedger]) -> TopSheet:
    rows: List[TopSheetRow] = []
    total_dr = 0.0
    total_cr = 0.0
    for led in ledgers:
        amount = abs(led.closing_balance)
        if led.closing_balance_type == "Dr":
            dr, cr = amount, 0.0
        else:
            dr, cr = 0.0, amount
        total_dr += dr
        total_cr += cr
        rows.append(TopSheetRow(
            account_name=led.account_name,
            account_type=led.account_type,
            debit_balance=dr,
            credit_balance=cr,
            total_debit=led.total_debit,
            total_credit=led.total_credit,
        ))
    return TopSheet(rows=tuple(rows), total_debit_balance=total_dr, total_credit_balance=total_cr)


def ledger_frame(ledger: AccountLedger) -> pd.DataFrame:
    if not ledger.entries:
        return pd.DataFrame(columns=LEDGER_COLUMNS)
    return pd.DataFrame([
        {
            "date": e.date,
            "particulars": e.particulars,
            "debit": e.debit,
            "credit": e.credit,
            "balance": abs(e.balance),
            "balance_type": e.balance_type,
            "id": e.id,
        }
        for e in ledger.entries
    ], columns=LEDGER_COLUMNS)


def top_sheet_frame(sheet: TopSheet) -> pd.DataFrame:
    if not sheet.rows:
        return pd.DataFrame(columns=TOP_SHEET_COLUMNS)
    return pd.DataFrame([
        {
            "account": r.account_name,
            "account_type": r.account_type,
            "debit_balance": r.debit_balance,
            "credit_balance": r.credit_balance,
            "total_debit": r.total_debit,
            "total_credit": r.total_credit,
        }
        for r in sheet.rows
    ], columns=TOP_SHEET_COLUMNS)
