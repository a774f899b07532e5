"""Portfolio tracker — one running snapshot per strategy, fed by filled orders."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Mapping

import structlog

from autotrade.config.schema import EngineConfig, RiskConfig
from autotrade.engine.risk import refresh_alerts
from autotrade.metrics.formulas import current_drawdown
from autotrade.models import PortfolioStatus, PositionInfo, TradeOrder

log = structlog.get_logger("portfolio_tracker")


def weighted_entry_price(
    held_qty: int,
    held_price: Decimal,
    added_qty: int,
    added_price: Decimal,
) -> Decimal:
    """Cost basis after adding to a position.

    (q_old * p_old + q_new * p_new) / (q_old + q_new)
    """
    total_qty = held_qty + added_qty
    if total_qty == 0:
        return added_price
    return (held_price * held_qty + added_price * added_qty) / total_qty


def realized_profit(entry_price: Decimal, order: TradeOrder) -> Decimal:
    """(exit - entry) * qty - commission of the closing order."""
    return (order.executed_price - entry_price) * order.executed_quantity - order.commission


class PortfolioTracker:
    """Owns every strategy's PortfolioStatus. Single writer, no locking."""

    def __init__(self, engine_config: EngineConfig, risk_config: RiskConfig) -> None:
        self.engine_config = engine_config
        self.risk_config = risk_config
        self._portfolios: dict[str, PortfolioStatus] = {}

    @property
    def initial_capital(self) -> Decimal:
        return Decimal(str(self.engine_config.initial_capital))

    # ── Lookup ────────────────────────────────────────────────

    def get(self, strategy_id: str) -> PortfolioStatus | None:
        return self._portfolios.get(strategy_id)

    def all(self) -> list[PortfolioStatus]:
        return list(self._portfolios.values())

    def _ensure(self, strategy_id: str) -> PortfolioStatus:
        portfolio = self._portfolios.get(strategy_id)
        if portfolio is not None:
            return portfolio
        capital = self.initial_capital
        portfolio = PortfolioStatus(
            strategy_id=strategy_id,
            initial_capital=capital,
            total_value=capital,
            peak_equity=capital,
            equity_history=[float(capital)],
            last_updated=datetime.now(timezone.utc),
        )
        self._portfolios[strategy_id] = portfolio
        log.info("portfolio_created", strategy_id=strategy_id, initial_capital=float(capital))
        return portfolio

    # ── Order application ─────────────────────────────────────

    def apply_order(self, order: TradeOrder) -> PortfolioStatus:
        """Fold a filled order into its strategy's portfolio and re-run risk."""
        portfolio = self._ensure(order.strategy_id)

        if order.action == "buy":
            self._apply_buy(portfolio, order)
        else:
            self._apply_sell(portfolio, order)

        self._refresh(portfolio, {order.code: order.executed_price})
        return portfolio

    def _apply_buy(self, portfolio: PortfolioStatus, order: TradeOrder) -> None:
        position = portfolio.find_position(order.code)
        if position is not None:
            position.entry_price = weighted_entry_price(
                position.quantity,
                position.entry_price,
                order.executed_quantity,
                order.executed_price,
            )
            position.quantity += order.executed_quantity
        else:
            portfolio.positions.append(PositionInfo(
                code=order.code,
                name=order.name,
                quantity=order.executed_quantity,
                entry_price=order.executed_price,
                current_price=order.executed_price,
            ))
        portfolio.total_cost += order.total_amount

    def _apply_sell(self, portfolio: PortfolioStatus, order: TradeOrder) -> None:
        position = portfolio.find_position(order.code)
        if position is None:
            # Known gap: a sell without a holding records no profit.
            log.warning(
                "sell_without_position",
                strategy_id=order.strategy_id,
                code=order.code,
                order_id=order.id,
            )
            return

        profit = realized_profit(position.entry_price, order)
        portfolio.total_profit += profit
        position.quantity = max(position.quantity - order.executed_quantity, 0)
        if position.quantity == 0:
            portfolio.positions = [p for p in portfolio.positions if p.code != order.code]

        log.info(
            "position_reduced",
            strategy_id=order.strategy_id,
            code=order.code,
            realized_profit=float(profit),
            remaining=position.quantity,
        )

    # ── Valuation ─────────────────────────────────────────────

    def mark_to_market(
        self,
        strategy_id: str,
        prices: Mapping[str, Decimal | float],
    ) -> PortfolioStatus | None:
        """Reprice held instruments from a quote snapshot. None if no portfolio yet."""
        portfolio = self._portfolios.get(strategy_id)
        if portfolio is None:
            log.info("portfolio_not_found", strategy_id=strategy_id)
            return None
        quotes: dict[str, Decimal] = {}
        for code, price in prices.items():
            quote = Decimal(str(price))
            if quote <= 0:
                log.warning(
                    "quote_rejected",
                    strategy_id=strategy_id,
                    code=code,
                    price=float(quote),
                )
                continue
            quotes[code] = quote
        self._refresh(portfolio, quotes)
        return portfolio

    def _refresh(self, portfolio: PortfolioStatus, quotes: Mapping[str, Decimal]) -> None:
        capital = portfolio.initial_capital
        portfolio.total_value = capital - portfolio.total_cost + portfolio.total_profit
        portfolio.profit_rate = float(portfolio.total_profit / capital * 100) if capital else 0.0

        self._revalue(portfolio, quotes)
        refresh_alerts(portfolio, self.risk_config)
        portfolio.last_updated = datetime.now(timezone.utc)

    def _revalue(self, portfolio: PortfolioStatus, quotes: Mapping[str, Decimal]) -> None:
        for pos in portfolio.positions:
            if pos.code in quotes:
                pos.current_price = quotes[pos.code]
            pos.profit = (pos.current_price - pos.entry_price) * pos.quantity
            if pos.entry_price:
                pos.profit_rate = float((pos.current_price / pos.entry_price - 1) * 100)
            else:
                pos.profit_rate = 0.0

        equity = portfolio.equity
        for pos in portfolio.positions:
            pos.percentage = float(pos.market_value / equity * 100) if equity > 0 else 0.0

        portfolio.peak_equity = max(portfolio.peak_equity, equity)
        # Measured against the all-time peak, not just the retained window
        portfolio.current_drawdown = current_drawdown([float(portfolio.peak_equity), float(equity)])
        portfolio.max_drawdown = min(portfolio.max_drawdown, portfolio.current_drawdown)

        history = portfolio.equity_history
        history.append(float(equity))
        del history[:-self.engine_config.equity_history_limit]
