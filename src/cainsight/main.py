"""
Main entrypoint for cainsight.

What it does:
- Loads runtime settings from `config/config.yaml` and environment overrides.
- Reads a JSON/YAML file of transaction records and validates them.
- Derives per-party ledgers and prints either every ledger or the top sheet.

Usage:
  python -m cainsight.main transactions.json --format topsheet
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config.loader import DEFAULT_CONFIG_PATH, load_settings
from .errors import LedgerError
from .intake import load_transactions_file
from .ledger.store import TransactionStore
from .metrics import start_server_safe
from .topsheet import ledger_frame, top_sheet_frame


def _print_ledgers(store: TransactionStore) -> None:
    for led in store.ledgers():
        print(f"== {led.account_name} ({led.account_type})")
        print(ledger_frame(led).to_string(index=False))
        print(
            f"Closing balance: {abs(led.closing_balance):.2f} {led.closing_balance_type}"
            f"  (Dr {led.total_debit:.2f} / Cr {led.total_credit:.2f})"
        )
        print()


def _print_top_sheet(store: TransactionStore) -> None:
    sheet = store.top_sheet()
    print(top_sheet_frame(sheet).to_string(index=False))
    print(f"Total Dr: {sheet.total_debit_balance:.2f}  Total Cr: {sheet.total_credit_balance:.2f}")
    if not sheet.is_balanced:
        logging.warning(f"Top sheet out of balance by {sheet.difference:.2f}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="cainsight", description="Derive party ledgers from transactions")
    parser.add_argument("path", help="JSON or YAML file of transaction records")
    parser.add_argument("--format", choices=("ledgers", "topsheet"), default="ledgers")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH)
    args = parser.parse_args(argv)

    settings = load_settings(args.config)
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(message)s")
    if settings.metrics_port:
        start_server_safe(settings.metrics_port)

    try:
        store = TransactionStore(mixed_types=settings.mixed_account_types)
        store.append(load_transactions_file(args.path))
        logging.info(f"Loaded {len(store)} transactions from {args.path}")
        if args.format == "topsheet":
            _print_top_sheet(store)
        else:
            _print_ledgers(store)
    except LedgerError as e:
        logging.error(f"Ledger derivation failed: {e}")
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
