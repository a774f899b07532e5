"""Drawdown and closed-trade metrics."""

from autotrade.metrics.formulas import (
    current_drawdown,
    drawdown_series,
    max_drawdown,
    profit_factor,
    win_rate,
)

__all__ = [
    "current_drawdown",
    "drawdown_series",
    "max_drawdown",
    "profit_factor",
    "win_rate",
]
