import json

from src.cainsight.main import main


def _write(tmp_path, records):
    p = tmp_path / "txs.json"
    p.write_text(json.dumps(records))
    return str(p)


def _records():
    return [
        {"id": "1", "date": "2024-01-01", "particulars": "Goods", "debit": 1000, "credit": 0, "party": "ABC Traders", "accountType": "Asset"},
        {"id": "2", "date": "2024-01-05", "particulars": "Receipt", "debit": 0, "credit": 400, "party": "ABC Traders", "accountType": "Asset"},
        {"id": "3", "date": "2024-02-01", "particulars": "Sale", "debit": 0, "credit": 5000, "party": "Sales Revenue", "accountType": "Income"},
    ]


def test_main_prints_ledgers(tmp_path, capsys):
    rc = main([_write(tmp_path, _records()), "--config", str(tmp_path / "none.yaml")])
    assert rc == 0
    out = capsys.readouterr().out
    assert "== ABC Traders (Asset)" in out
    assert "Closing balance: 600.00 Dr" in out
    assert "Closing balance: 5000.00 Cr" in out


def test_main_prints_top_sheet(tmp_path, capsys):
    rc = main([_write(tmp_path, _records()), "--format", "topsheet", "--config", str(tmp_path / "none.yaml")])
    assert rc == 0
    out = capsys.readouterr().out
    assert "Total Dr: 600.00  Total Cr: 5000.00" in out


def test_main_invalid_record_exit_code(tmp_path):
    bad = _records()
    bad[1]["accountType"] = "Revenue"
    rc = main([_write(tmp_path, bad), "--config", str(tmp_path / "none.yaml")])
    assert rc == 2


def test_main_reject_policy_from_config(tmp_path):
    cfg = tmp_path / "config.yaml"
    cfg.write_text("ledger:\n  mixed_account_types: reject\n")
    recs = _records()
    recs[1]["accountType"] = "Liability"
    rc = main([_write(tmp_path, recs), "--config", str(cfg)])
    assert rc == 2
