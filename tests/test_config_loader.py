import pytest
from pydantic import ValidationError

from src.cainsight.config.loader import Settings, load_settings


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    for name in ("CAINSIGHT_MIXED_ACCOUNT_TYPES", "CAINSIGHT_LOG_LEVEL", "PROMETHEUS_PORT"):
        monkeypatch.delenv(name, raising=False)


def test_missing_file_gives_defaults(tmp_path):
    s = load_settings(str(tmp_path / "nope.yaml"))
    assert s == Settings()
    assert s.mixed_account_types == "preserve"
    assert s.metrics_port is None


def test_yaml_values(tmp_path):
    p = tmp_path / "config.yaml"
    p.write_text("log_level: debug\nmetrics_port: 9100\nledger:\n  mixed_account_types: reject\n")
    s = load_settings(str(p))
    assert s.log_level == "DEBUG"
    assert s.metrics_port == 9100
    assert s.mixed_account_types == "reject"


def test_env_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("CAINSIGHT_MIXED_ACCOUNT_TYPES", "reject")
    monkeypatch.setenv("CAINSIGHT_LOG_LEVEL", "warning")
    monkeypatch.setenv("PROMETHEUS_PORT", "8001")
    s = load_settings(str(tmp_path / "nope.yaml"))
    assert s.mixed_account_types == "reject"
    assert s.log_level == "WARNING"
    assert s.metrics_port == 8001


def test_invalid_policy_rejected(tmp_path):
    p = tmp_path / "config.yaml"
    p.write_text("ledger:\n  mixed_account_types: ignore\n")
    with pytest.raises(Exception):
        load_settings(str(p))


def test_non_numeric_prometheus_port_names_field(tmp_path, monkeypatch):
    monkeypatch.setenv("PROMETHEUS_PORT", "not-a-port")
    with pytest.raises(ValidationError) as exc:
        load_settings(str(tmp_path / "nope.yaml"))
    assert "metrics_port" in str(exc.value)
