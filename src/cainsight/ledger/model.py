from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Literal, Tuple
import uuid

AccountType = Literal["Asset", "Liability", "Income", "Expense", "Equity"]
BalanceType = Literal["Dr", "Cr"]

ACCOUNT_TYPES: Tuple[str, ...] = ("Asset", "Liability", "Income", "Expense", "Equity")


def new_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Transaction:
    id: str
    date: str  # YYYY-MM-DD, ordered as a plain string
    particulars: str
    debit: float
    credit: float
    party: str
    account_type: AccountType


@dataclass(frozen=True)
class LedgerEntry(Transaction):
    """A transaction as it appears in its party's ledger.

    Attributes:
        balance: running balance after this entry, positive on the account's natural side
        balance_type: "Dr" or "Cr" nature of `balance` at this point
    """

    balance: float
    balance_type: BalanceType

    @property
    def transaction(self) -> Transaction:
        return Transaction(**{f.name: getattr(self, f.name) for f in fields(Transaction)})


@dataclass(frozen=True)
class AccountLedger:
    account_name: str
    account_type: AccountType
    entries: Tuple[LedgerEntry, ...]
    closing_balance: float
    closing_balance_type: BalanceType
    total_debit: float
    total_credit: float
    opening_balance: float = 0.0
