"""Prometheus metrics for cainsight.

Collectors are created lazily and tolerate duplicate registration, so the
module can be imported repeatedly in tests. Set `DISABLE_PROMETHEUS=1` to get
no-op collectors.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from prometheus_client import Counter, REGISTRY, start_http_server

_ledger_derivations = None
_transactions_ingested = None
_transactions_rejected = None


class _NoOp:
    def labels(self, *args, **kwargs):
        return self
    def inc(self, *args, **kwargs):
        return None


def _safe_counter(name: str, doc: str, labelnames=()):
    if os.getenv("DISABLE_PROMETHEUS", "0") == "1":
        return _NoOp()
    try:
        return Counter(name, doc, labelnames)
    except ValueError:
        # Already registered (module reloaded); reuse the existing collector
        coll = getattr(REGISTRY, "_names_to_collectors", {}).get(name)
        if coll is not None:
            return coll
        return _NoOp()


def get_ledger_derivations_total():
    global _ledger_derivations
    if _ledger_derivations is None:
        _ledger_derivations = _safe_counter("ledger_derivations_total", "Ledger derivation runs")
    return _ledger_derivations


def get_transactions_ingested_total():
    global _transactions_ingested
    if _transactions_ingested is None:
        _transactions_ingested = _safe_counter(
            "transactions_ingested_total", "Transactions accepted at intake", ["source"]
        )
    return _transactions_ingested


def get_transactions_rejected_total():
    global _transactions_rejected
    if _transactions_rejected is None:
        _transactions_rejected = _safe_counter(
            "transactions_rejected_total", "Transaction records rejected at intake", ["reason"]
        )
    return _transactions_rejected


def start_server_safe(port: int) -> Optional[int]:
    """Start Prometheus metrics server; return port or None if failed."""
    try:
        start_http_server(port)
        logging.info(f"Prometheus metrics server started on :{port}")
        return port
    except OSError as e:
        logging.warning(f"Failed to start Prometheus server on :{port}: {e}")
        return None
