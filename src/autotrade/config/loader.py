"""Config loader — reads YAML, applies AUTOTRADE_* env var overrides."""

from __future__ import annotations

import os
from pathlib import Path

import yaml

from autotrade.config.schema import AppConfig


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from a YAML file, then apply env var overrides.

    If *path* is None or the file doesn't exist, returns defaults.

    Environment variable overrides:
        AUTOTRADE_LOG_LEVEL        -> logging.level
        AUTOTRADE_LOG_FORMAT       -> logging.format
        AUTOTRADE_INITIAL_CAPITAL  -> engine.initial_capital
    """
    data: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            with open(p) as f:
                data = yaml.safe_load(f) or {}

    # Apply env var overrides
    log_level = os.environ.get("AUTOTRADE_LOG_LEVEL")
    if log_level:
        data.setdefault("logging", {})["level"] = log_level

    log_format = os.environ.get("AUTOTRADE_LOG_FORMAT")
    if log_format:
        data.setdefault("logging", {})["format"] = log_format

    capital = os.environ.get("AUTOTRADE_INITIAL_CAPITAL")
    if capital:
        data.setdefault("engine", {})["initial_capital"] = capital

    return AppConfig.model_validate(data)
