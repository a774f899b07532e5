"""TradingEngine, the single owner of signals, orders, trade logs and portfolios."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable, Mapping

import structlog

from autotrade.config.schema import AppConfig
from autotrade.engine.execution import fill_signal
from autotrade.engine.portfolio import PortfolioTracker
from autotrade.engine.signals import build_exit_signals, build_manual_signal, build_signals
from autotrade.engine.tradelog import build_trade_log, fifo_round_trips
from autotrade.metrics.formulas import profit_factor, win_rate
from autotrade.models import (
    Candidate,
    Pairing,
    PortfolioStatus,
    RiskAlert,
    Strategy,
    StrategyPerformance,
    TradeLog,
    TradeOrder,
    TradeSignal,
)

log = structlog.get_logger("trading_engine")


class TradingEngine:
    """Simulated execution engine.

    One instance owns its signals, orders, trade logs and portfolios; separate
    instances share nothing.  Every call runs to completion synchronously and
    getters hand back live objects, so treat them as snapshots.
    """

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config = config or AppConfig()
        self.portfolios = PortfolioTracker(self.config.engine, self.config.risk)
        self._signals: list[TradeSignal] = []
        self._orders: list[TradeOrder] = []
        self._trade_logs: list[TradeLog] = []

    # ── Signals ───────────────────────────────────────────────

    def generate_signals(
        self,
        strategy: Strategy,
        candidates: Iterable[Candidate | Mapping],
    ) -> list[TradeSignal]:
        """Score candidates under *strategy* and queue the resulting buy signals."""
        signals = build_signals(strategy, candidates, self.config.engine)
        self._signals.extend(signals)
        return signals

    def submit_signal(
        self,
        strategy_id: str,
        code: str,
        name: str,
        action: str,
        price: Decimal | float,
        quantity: int,
        reason: str = "manual",
        confidence: float = 100.0,
    ) -> TradeSignal:
        """Queue a caller-built signal, e.g. a manual sell."""
        signal = build_manual_signal(
            strategy_id, code, name, action, price, quantity, reason, confidence,
        )
        self._signals.append(signal)
        log.info(
            "signal_submitted",
            signal_id=signal.id,
            strategy_id=strategy_id,
            code=code,
            action=action,
            quantity=quantity,
        )
        return signal

    def generate_exit_signals(
        self,
        strategy_id: str,
        prices: Mapping[str, Decimal | float],
    ) -> list[TradeSignal]:
        """Queue stop-loss / take-profit sells for the strategy's open positions."""
        portfolio = self.portfolios.get(strategy_id)
        if portfolio is None:
            return []
        exits = build_exit_signals(portfolio, prices, self.config.engine)
        self._signals.extend(exits)
        return exits

    def _find_pending(self, signal_id: str) -> TradeSignal | None:
        for signal in self._signals:
            if signal.id == signal_id and signal.is_pending:
                return signal
        return None

    def get_pending_signals(self, strategy_id: str | None = None) -> list[TradeSignal]:
        return [
            s for s in self._signals
            if s.is_pending and (strategy_id is None or s.strategy_id == strategy_id)
        ]

    def cancel_signal(self, signal_id: str) -> None:
        """Cancel a pending signal. Unknown or already-final ids are ignored."""
        signal = self._find_pending(signal_id)
        if signal is None:
            log.info("cancel_ignored", signal_id=signal_id)
            return
        signal.status = "cancelled"
        log.info("signal_cancelled", signal_id=signal_id, strategy_id=signal.strategy_id)

    # ── Execution ─────────────────────────────────────────────

    def execute_signal(
        self,
        signal_id: str,
        price: Decimal | float | None = None,
    ) -> TradeOrder | None:
        """Fill a pending signal and update its portfolio.

        Returns None when no *pending* signal has this id, so executing the
        same signal twice never creates a second order.
        """
        signal = self._find_pending(signal_id)
        if signal is None:
            log.warning("signal_not_found", signal_id=signal_id)
            return None

        order = fill_signal(signal, self.config.engine, price)
        signal.status = "executed"
        self._orders.append(order)

        log.info(
            "order_filled",
            order_id=order.id,
            signal_id=signal.id,
            strategy_id=order.strategy_id,
            code=order.code,
            action=order.action,
            quantity=order.executed_quantity,
            price=float(order.executed_price),
            commission=float(order.commission),
        )

        self.portfolios.apply_order(order)
        return order

    def execute_signals(self, signal_ids: Iterable[str]) -> list[TradeOrder]:
        orders = [self.execute_signal(signal_id) for signal_id in signal_ids]
        return [order for order in orders if order is not None]

    # ── Portfolio & risk ──────────────────────────────────────

    def get_portfolio_status(self, strategy_id: str) -> PortfolioStatus | None:
        """None means the strategy has not traded yet."""
        return self.portfolios.get(strategy_id)

    def mark_to_market(
        self,
        strategy_id: str,
        prices: Mapping[str, Decimal | float],
    ) -> PortfolioStatus | None:
        return self.portfolios.mark_to_market(strategy_id, prices)

    def get_risk_alerts(self, strategy_id: str | None = None) -> list[RiskAlert]:
        if strategy_id is not None:
            portfolio = self.portfolios.get(strategy_id)
            return portfolio.alerts if portfolio is not None else []
        return [alert for p in self.portfolios.all() for alert in p.alerts]

    # ── History & logs ────────────────────────────────────────

    def get_trade_history(self, strategy_id: str, limit: int | None = None) -> list[TradeOrder]:
        """Newest first by order timestamp; later executions win ties."""
        if limit is None:
            limit = self.config.engine.history_limit
        limit = max(limit, 0)
        indexed = [(i, o) for i, o in enumerate(self._orders) if o.strategy_id == strategy_id]
        indexed.sort(key=lambda pair: (pair[1].timestamp, pair[0]), reverse=True)
        return [order for _, order in indexed[:limit]]

    def generate_trade_log(self, strategy_id: str, pairing: Pairing = "positional") -> TradeLog:
        trade_log = build_trade_log(strategy_id, self._orders, pairing)
        self._trade_logs.append(trade_log)
        log.info(
            "trade_log_generated",
            strategy_id=strategy_id,
            pairing=pairing,
            orders=len(trade_log.orders),
            total_profit=float(trade_log.total_profit),
            total_commission=float(trade_log.total_commission),
        )
        return trade_log

    def get_trade_log(self, strategy_id: str) -> TradeLog | None:
        """Most recently generated log for the strategy, if any."""
        for trade_log in reversed(self._trade_logs):
            if trade_log.strategy_id == strategy_id:
                return trade_log
        return None

    def get_performance(self, strategy_id: str) -> StrategyPerformance | None:
        """Closed round-trip statistics. None if the strategy has no portfolio."""
        portfolio = self.portfolios.get(strategy_id)
        if portfolio is None:
            return None

        orders = [o for o in self._orders if o.strategy_id == strategy_id]
        trips = fifo_round_trips(orders)
        # Per-trip return in percent of the entry notional
        returns = [
            float(t.profit / (t.entry_price * t.quantity) * 100) for t in trips
        ]
        wins = [r for r in returns if r > 0]
        losses = [r for r in returns if r <= 0]
        gross_profit = sum(float(t.profit) for t in trips if t.profit > 0)
        gross_loss = -sum(float(t.profit) for t in trips if t.profit <= 0)

        return StrategyPerformance(
            strategy_id=strategy_id,
            total_return=portfolio.profit_rate,
            win_rate=win_rate(len(wins), len(returns)),
            max_drawdown=portfolio.max_drawdown,
            profit_factor=profit_factor(gross_profit, gross_loss),
            trades_count=len(returns),
            win_trades=len(wins),
            loss_trades=len(losses),
            avg_profit=sum(wins) / len(wins) if wins else 0.0,
            avg_loss=sum(losses) / len(losses) if losses else 0.0,
            best_trade=max(returns, default=0.0),
            worst_trade=min(returns, default=0.0),
            last_updated=datetime.now(timezone.utc),
        )
