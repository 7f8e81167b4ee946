from __future__ import annotations


class LedgerError(ValueError):
    """Base class for ledger derivation and intake failures."""
    pass


class UnknownAccountTypeError(LedgerError):
    """Raised when a transaction carries an account type outside the five known ones."""

    def __init__(self, account_type: object, party: str = ""):
        self.account_type = account_type
        self.party = party
        super().__init__(f"unknown account type {account_type!r} for party {party!r}")


class MixedAccountTypeError(LedgerError):
    """Raised when one party's transactions disagree on their account type."""

    def __init__(self, party: str, account_types: list):
        self.party = party
        self.account_types = list(account_types)
        super().__init__(f"party {party!r} has mixed account types: {', '.join(self.account_types)}")


class TransactionValidationError(LedgerError):
    """Raised when a raw record from a producer fails validation."""

    def __init__(self, index: int, message: str):
        self.index = index
        self.message = message
        super().__init__(f"record {index}: {message}")
