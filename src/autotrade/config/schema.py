"""Configuration schema — Pydantic models for config.yaml."""

from __future__ import annotations

from pydantic import BaseModel, Field


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "json"


class FactorWeights(BaseModel):
    technical: float = 10
    fundamental: float = 8
    sentiment: float = 5
    custom: float = 0


class EngineConfig(BaseModel):
    initial_capital: float = 100000
    trade_notional: float = 10000
    commission_rate: float = 0.001
    base_confidence: float = 50
    confidence_threshold: float = 60
    factor_weights: FactorWeights = Field(default_factory=FactorWeights)
    # Exit rules for generated sell signals
    stop_loss_pct: float = 0.05
    take_profit_pct: float = 0.10
    history_limit: int = 50
    # Equity points kept on each portfolio; drawdowns track the full run
    equity_history_limit: int = Field(default=500, ge=2)


class RiskConfig(BaseModel):
    drawdown_warning_pct: float = -10
    drawdown_critical_pct: float = -20
    loss_warning: float = -5000
    loss_critical: float = -10000
    concentration_warning_pct: float = 30
    concentration_critical_pct: float = 50


class ApiConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000


class AppConfig(BaseModel):
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    engine: EngineConfig = Field(default_factory=EngineConfig)
    risk: RiskConfig = Field(default_factory=RiskConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)
