"""
Ledger derivation engine.

What it does:
- Partitions a flat transaction list by `party`, keeping first-seen order.
- Sorts each party's transactions by `date` (plain string order, stable).
- Walks them once, accumulating a running balance under the double-entry
  sign rule and labelling each balance Dr/Cr.

The engine is a pure function of its input: it never mutates the given
sequence and returns fresh objects on every call.

Sign rule:
- Asset / Expense accounts are debit-natured: balance += debit - credit.
- Liability / Income / Equity accounts are credit-natured: balance += credit - debit.

Each entry's step follows its own `account_type`; the ledger's closing label
is evaluated against the `account_type` of the earliest-dated transaction
(the first one after sorting).
"""

from __future__ import annotations

import json
import logging
from typing import Dict, List, Literal, Sequence

from ..errors import MixedAccountTypeError, UnknownAccountTypeError
from ..metrics import get_ledger_derivations_total
from .model import AccountLedger, BalanceType, LedgerEntry, Transaction

logger = logging.getLogger(__name__)

MixedTypesPolicy = Literal["preserve", "reject"]

DEBIT_NATURED = frozenset({"Asset", "Expense"})
CREDIT_NATURED = frozenset({"Liability", "Income", "Equity"})


def is_debit_natured(account_type: str, party: str = "") -> bool:
    if account_type in DEBIT_NATURED:
        return True
    if account_type in CREDIT_NATURED:
        return False
    raise UnknownAccountTypeError(account_type, party)


def balance_type_for(balance: float, debit_natured: bool) -> BalanceType:
    """Label a running balance; a negative balance shows on the opposite side."""
    if balance >= 0:
        return "Dr" if debit_natured else "Cr"
    return "Cr" if debit_natured else "Dr"


def _group_by_party(transactions: Sequence[Transaction]) -> Dict[str, List[Transaction]]:
    # dicts keep insertion order, which gives first-seen party order
    groups: Dict[str, List[Transaction]] = {}
    for tx in transactions:
        groups.setdefault(tx.party, []).append(tx)
    return groups


def _by_date(txs: List[Transaction]) -> List[Transaction]:
    # sorted() is stable, so equal dates keep their input order
    return sorted(txs, key=lambda t: t.date)


def _check_account_types(party: str, txs: List[Transaction], mixed_types: MixedTypesPolicy) -> None:
    seen: List[str] = []
    for tx in _by_date(txs):
        if tx.account_type not in seen:
            seen.append(tx.account_type)
    if len(seen) <= 1:
        return
    if mixed_types == "reject":
        raise MixedAccountTypeError(party, seen)
    logger.warning(json.dumps({
        "event": "ledger_mixed_account_types",
        "party": party,
        "account_types": seen,
        "closing_label_from": seen[0],
    }))


def derive_ledger(party: str, txs: List[Transaction]) -> AccountLedger:
    """Build one party's ledger from its transactions in input order."""
    total_debit = 0.0
    total_credit = 0.0
    for tx in txs:
        total_debit += tx.debit
        total_credit += tx.credit

    running = 0.0
    entries: List[LedgerEntry] = []
    ordered = _by_date(txs)
    for tx in ordered:
        debit_natured = is_debit_natured(tx.account_type, party)
        if debit_natured:
            running += tx.debit - tx.credit
        else:
            running += tx.credit - tx.debit
        entries.append(LedgerEntry(
            id=tx.id,
            date=tx.date,
            particulars=tx.particulars,
            debit=tx.debit,
            credit=tx.credit,
            party=tx.party,
            account_type=tx.account_type,
            balance=running,
            balance_type=balance_type_for(running, debit_natured),
        ))

    first = ordered[0]
    return AccountLedger(
        account_name=party,
        account_type=first.account_type,
        entries=tuple(entries),
        opening_balance=0.0,
        closing_balance=running,
        closing_balance_type=balance_type_for(running, is_debit_natured(first.account_type, party)),
        total_debit=total_debit,
        total_credit=total_credit,
    )


def derive_ledgers(
    transactions: Sequence[Transaction],
    mixed_types: MixedTypesPolicy = "preserve",
) -> List[AccountLedger]:
    """Derive one ledger per distinct party, in order of first appearance.

    Args:
        transactions: full transaction snapshot; not modified.
        mixed_types: "preserve" keeps per-entry sign rules when a party's
            transactions carry different account types (logged as a warning);
            "reject" raises MixedAccountTypeError instead.

    Raises:
        UnknownAccountTypeError: a transaction's account type is not one of the five.
        MixedAccountTypeError: mixed account types under the "reject" policy.
    """
    if mixed_types not in ("preserve", "reject"):
        raise ValueError(f"unknown mixed_types policy: {mixed_types!r}")
    ledgers: List[AccountLedger] = []
    for party, txs in _group_by_party(transactions).items():
        _check_account_types(party, txs, mixed_types)
        ledgers.append(derive_ledger(party, txs))
    get_ledger_derivations_total().inc()
    logger.debug(json.dumps({
        "event": "ledgers_derived",
        "transactions": len(transactions),
        "ledgers": len(ledgers),
    }))
    return ledgers
