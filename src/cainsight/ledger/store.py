from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List, Optional, Tuple

from .engine import MixedTypesPolicy, derive_ledgers
from .model import AccountLedger, Transaction

if TYPE_CHECKING:
    from ..topsheet import TopSheet


class TransactionStore:
    """Owner of the working transaction list.

    Producers (manual entry, extraction) append whole batches; the only
    destructive operation is `reset`. Every change swaps in a new immutable
    snapshot and bumps `version`, so readers always derive against a fully
    materialized list.
    """

    def __init__(self, transactions: Iterable[Transaction] = (), mixed_types: MixedTypesPolicy = "preserve"):
        self.mixed_types = mixed_types
        self._snapshot: Tuple[Transaction, ...] = tuple(transactions)
        self.version = 0
        self._cached_version: Optional[int] = None
        self._cached_ledgers: List[AccountLedger] = []

    def __len__(self) -> int:
        return len(self._snapshot)

    def snapshot(self) -> Tuple[Transaction, ...]:
        return self._snapshot

    def append(self, transactions: Iterable[Transaction]) -> int:
        """Append a batch in one step; returns the new version."""
        batch = tuple(transactions)
        if not batch:
            return self.version
        self._snapshot = self._snapshot + batch
        self.version += 1
        return self.version

    def reset(self) -> int:
        self._snapshot = ()
        self.version += 1
        return self.version

    def ledgers(self) -> List[AccountLedger]:
        """Ledgers for the current snapshot, recomputed once per version."""
        if self._cached_version != self.version:
            self._cached_ledgers = derive_ledgers(self._snapshot, self.mixed_types)
            self._cached_version = self.version
        return list(self._cached_ledgers)

    def top_sheet(self) -> "TopSheet":
        from ..topsheet import build_top_sheet
        return build_top_sheet(self.ledgers())
