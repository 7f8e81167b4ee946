"""
Producer-boundary validation for transaction records.

Raw records arrive from manual vouchers or from an extraction service as
plain dicts (camelCase `accountType` or snake_case `account_type`). They are
validated here so the ledger engine only ever sees well-formed transactions:
ISO dates (string order == calendar order), finite non-negative amounts and
one of the five account types.
"""

from __future__ import annotations

import datetime
import json
import logging
import math
import os
import re
from typing import Any, Iterable, List, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import TransactionValidationError
from .ledger.model import AccountType, Transaction, new_id
from .metrics import get_transactions_ingested_total, get_transactions_rejected_total

logger = logging.getLogger(__name__)

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class TransactionRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    id: Optional[str] = None
    date: str
    particulars: str = ""
    debit: float = Field(default=0.0, ge=0)
    credit: float = Field(default=0.0, ge=0)
    party: str
    account_type: AccountType = Field(alias="accountType")

    @field_validator("date", mode="before")
    @classmethod
    def date_as_text(cls, v):
        # YAML loads unquoted dates as datetime.date
        if isinstance(v, datetime.date):
            return v.isoformat()[:10]
        return v

    @field_validator("date")
    @classmethod
    def iso_date(cls, v: str):
        if not _ISO_DATE.match(v):
            raise ValueError("date must be YYYY-MM-DD")
        datetime.date.fromisoformat(v)  # rejects impossible dates like 2024-02-30
        return v

    @field_validator("id", mode="before")
    @classmethod
    def id_as_text(cls, v):
        # extraction output sometimes numbers its rows
        if v is None or v == "":
            return None
        return str(v)

    @field_validator("particulars", mode="before")
    @classmethod
    def particulars_as_text(cls, v):
        return "" if v is None else str(v)

    @field_validator("debit", "credit", mode="before")
    @classmethod
    def blank_is_zero(cls, v):
        if v is None or v == "":
            return 0.0
        return v

    @field_validator("debit", "credit")
    @classmethod
    def finite(cls, v: float):
        if not math.isfinite(v):
            raise ValueError("amount must be finite")
        return v

    @field_validator("party")
    @classmethod
    def non_empty(cls, v: str):
        if not v:
            raise ValueError("party required")
        return v

    def to_transaction(self) -> Transaction:
        return Transaction(
            id=self.id or new_id(),
            date=self.date,
            particulars=self.particulars,
            debit=float(self.debit),
            credit=float(self.credit),
            party=self.party,
            account_type=self.account_type,
        )


def _first_error(exc: ValidationError) -> tuple[str, str]:
    err = exc.errors()[0]
    loc = ".".join(str(p) for p in err.get("loc", ())) or "record"
    return loc, f"{loc}: {err.get('msg', 'invalid')}"


def parse_transactions(records: Iterable[Mapping[str, Any]], source: str = "manual") -> List[Transaction]:
    """Validate raw records and convert them to Transactions.

    The batch is all-or-nothing: the first invalid record raises
    TransactionValidationError and nothing is returned.
    """
    out: List[Transaction] = []
    for idx, rec in enumerate(records):
        if not isinstance(rec, Mapping):
            get_transactions_rejected_total().labels("not_a_mapping").inc()
            raise TransactionValidationError(idx, "record must be a mapping")
        try:
            out.append(TransactionRecord.model_validate(dict(rec)).to_transaction())
        except ValidationError as e:
            field, message = _first_error(e)
            get_transactions_rejected_total().labels(field).inc()
            logger.error(json.dumps({
                "event": "transaction_rejected",
                "source": source,
                "index": idx,
                "field": field,
                "message": message,
            }))
            raise TransactionValidationError(idx, message) from e
    get_transactions_ingested_total().labels(source).inc(len(out))
    return out


def load_transactions_file(path: str, source: str = "file") -> List[Transaction]:
    """Read a JSON or YAML file of transaction records and validate it.

    Accepts either a top-level list or a mapping with a `transactions` list.
    """
    with open(path, "r", encoding="utf-8") as f:
        if os.path.splitext(path)[1].lower() == ".json":
            data: Any = json.load(f)
        else:
            data = yaml.safe_load(f)
    if isinstance(data, dict):
        data = data.get("transactions", [])
    if data is None:
        data = []
    if not isinstance(data, list):
        raise TransactionValidationError(0, "expected a list of transaction records")
    return parse_transactions(data, source=source)
