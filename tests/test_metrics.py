from prometheus_client import REGISTRY

from src.cainsight import metrics
from src.cainsight.errors import TransactionValidationError
from src.cainsight.intake import parse_transactions
from src.cainsight.ledger.engine import derive_ledgers
from src.cainsight.ledger.model import Transaction


def _sample(metric: str, labels: dict) -> float:
    val = REGISTRY.get_sample_value(metric, labels)
    return 0.0 if val is None else float(val)


def _record(**overrides):
    rec = {"date": "2024-01-01", "debit": 10, "party": "Cash", "accountType": "Asset"}
    rec.update(overrides)
    return rec


def test_derive_ledgers_counts_each_run():
    before = _sample("ledger_derivations_total", {})
    txs = [Transaction(id="1", date="2024-01-01", particulars="", debit=1.0, credit=0.0, party="P", account_type="Asset")]
    derive_ledgers(txs)
    derive_ledgers([])
    assert _sample("ledger_derivations_total", {}) - before == 2.0


def test_intake_counts_ingested_by_source():
    labels = {"source": "metrics-test"}
    before = _sample("transactions_ingested_total", labels)
    parse_transactions([_record(), _record(party="Bank")], source="metrics-test")
    assert _sample("transactions_ingested_total", labels) - before == 2.0


def test_intake_counts_rejections_by_field():
    labels = {"reason": "date"}
    before = _sample("transactions_rejected_total", labels)
    try:
        parse_transactions([_record(date="2024/01/01")])
    except TransactionValidationError:
        pass
    assert _sample("transactions_rejected_total", labels) - before == 1.0


def test_safe_counter_disabled_is_noop(monkeypatch):
    monkeypatch.setenv("DISABLE_PROMETHEUS", "1")
    c = metrics._safe_counter("cainsight_disabled_total", "unused", ["x"])
    assert c.labels("a").inc() is None
    assert REGISTRY.get_sample_value("cainsight_disabled_total", {"x": "a"}) is None


def test_safe_counter_reuses_registered_collector():
    first = metrics._safe_counter("cainsight_reuse_total", "Reuse check")
    second = metrics._safe_counter("cainsight_reuse_total", "Reuse check")
    assert first is second


def test_start_server_safe(monkeypatch):
    calls = []
    monkeypatch.setattr(metrics, "start_http_server", lambda port: calls.append(port))
    assert metrics.start_server_safe(9123) == 9123
    assert calls == [9123]

    def _busy(port):
        raise OSError("address in use")

    monkeypatch.setattr(metrics, "start_http_server", _busy)
    assert metrics.start_server_safe(9123) is None
