"""Pydantic domain models."""

from autotrade.models.order import OrderStatus, Pairing, TradeLog, TradeOrder
from autotrade.models.portfolio import (
    AlertLevel,
    AlertType,
    PortfolioStatus,
    PositionInfo,
    RiskAlert,
    StrategyPerformance,
)
from autotrade.models.signal import Action, SignalStatus, TradeSignal
from autotrade.models.strategy import (
    Candidate,
    CheckboxFactor,
    FactorCategory,
    FactorOption,
    RangeFactor,
    SelectFactor,
    SelectionFactor,
    Strategy,
    TextFactor,
)

__all__ = [
    "Action",
    "AlertLevel",
    "AlertType",
    "Candidate",
    "CheckboxFactor",
    "FactorCategory",
    "FactorOption",
    "OrderStatus",
    "Pairing",
    "PortfolioStatus",
    "PositionInfo",
    "RangeFactor",
    "RiskAlert",
    "SelectFactor",
    "SelectionFactor",
    "SignalStatus",
    "Strategy",
    "StrategyPerformance",
    "TextFactor",
    "TradeLog",
    "TradeOrder",
    "TradeSignal",
]
