"""
Configuration loader for cainsight.

What it does:
- Reads static settings from `config/config.yaml` (missing file => defaults).
- Applies environment overrides: `CAINSIGHT_MIXED_ACCOUNT_TYPES`,
  `CAINSIGHT_LOG_LEVEL`, `PROMETHEUS_PORT`.
- Validates the result with Pydantic.

Where it is used:
- `cainsight.main` builds a `Settings` object before deriving ledgers.
"""

import os
from typing import Any, Dict, Literal, Optional

import yaml
from pydantic import BaseModel, field_validator

DEFAULT_CONFIG_PATH = "config/config.yaml"


class Settings(BaseModel):
    """Runtime settings assembled from YAML + environment variables."""
    mixed_account_types: Literal["preserve", "reject"] = "preserve"
    log_level: str = "INFO"
    metrics_port: Optional[int] = None

    @field_validator("log_level")
    @classmethod
    def known_level(cls, v: str):
        level = str(v).upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level: {v}")
        return level


def load_settings(path: str = DEFAULT_CONFIG_PATH) -> Settings:
    """Load YAML config, apply env overrides, and return Settings."""
    config: Dict[str, Any] = {}
    if os.path.exists(path):
        with open(path, "r") as f:
            config = yaml.safe_load(f) or {}
    ledger_cfg = config.get("ledger", {}) or {}
    values: Dict[str, Any] = {
        "mixed_account_types": ledger_cfg.get("mixed_account_types", "preserve"),
        "log_level": config.get("log_level", "INFO"),
        "metrics_port": config.get("metrics_port"),
    }
    if os.getenv("CAINSIGHT_MIXED_ACCOUNT_TYPES"):
        values["mixed_account_types"] = os.environ["CAINSIGHT_MIXED_ACCOUNT_TYPES"]
    if os.getenv("CAINSIGHT_LOG_LEVEL"):
        values["log_level"] = os.environ["CAINSIGHT_LOG_LEVEL"]
    if os.getenv("PROMETHEUS_PORT"):
        values["metrics_port"] = os.environ["PROMETHEUS_PORT"]
    return Settings(**values)
