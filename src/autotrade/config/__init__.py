"""Configuration system."""

from autotrade.config.loader import load_config
from autotrade.config.schema import AppConfig, EngineConfig, RiskConfig

__all__ = ["AppConfig", "EngineConfig", "RiskConfig", "load_config"]
