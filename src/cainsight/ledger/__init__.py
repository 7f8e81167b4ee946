"""Ledger package.

Public API:
- Transaction, LedgerEntry, AccountLedger: the ledger data model.
- derive_ledgers: pure per-party ledger derivation with running balances.
- TransactionStore: versioned owner of the transaction list.
"""

from .model import ACCOUNT_TYPES, AccountLedger, LedgerEntry, Transaction, new_id
from .engine import balance_type_for, derive_ledgers, is_debit_natured
from .store import TransactionStore

__all__ = [
    "ACCOUNT_TYPES",
    "AccountLedger",
    "LedgerEntry",
    "Transaction",
    "TransactionStore",
    "balance_type_for",
    "derive_ledgers",
    "is_debit_natured",
    "new_id",
]
