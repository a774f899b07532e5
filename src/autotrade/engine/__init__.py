"""Automated trading engine: signals, execution, portfolios, risk, trade logs."""

from autotrade.engine.engine import TradingEngine
from autotrade.engine.execution import calculate_commission, fill_signal
from autotrade.engine.portfolio import PortfolioTracker, realized_profit, weighted_entry_price
from autotrade.engine.risk import (
    check_concentration,
    check_drawdown,
    check_loss,
    evaluate_alerts,
)
from autotrade.engine.scoring import score_candidate
from autotrade.engine.signals import build_exit_signals, build_signals, calculate_quantity
from autotrade.engine.tradelog import build_trade_log, fifo_round_trips, positional_profit

__all__ = [
    "PortfolioTracker",
    "TradingEngine",
    "build_exit_signals",
    "build_signals",
    "build_trade_log",
    "calculate_commission",
    "calculate_quantity",
    "check_concentration",
    "check_drawdown",
    "check_loss",
    "evaluate_alerts",
    "fifo_round_trips",
    "fill_signal",
    "positional_profit",
    "realized_profit",
    "score_candidate",
    "weighted_entry_price",
]
