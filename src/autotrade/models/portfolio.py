"""Portfolio, position, alert and performance models."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field

AlertType = Literal["drawdown", "loss", "volatility", "concentration"]
AlertLevel = Literal["warning", "critical"]


class RiskAlert(BaseModel):
    """A threshold breach derived from the current portfolio snapshot."""

    id: str
    strategy_id: str
    type: AlertType
    level: AlertLevel
    message: str
    current_value: float
    threshold: float
    timestamp: datetime


class PositionInfo(BaseModel):
    """An open holding in one instrument."""

    code: str
    name: str
    quantity: int = Field(ge=0)
    entry_price: Decimal
    current_price: Decimal
    profit: Decimal = Decimal("0")
    profit_rate: float = 0.0
    percentage: float = 0.0

    @property
    def market_value(self) -> Decimal:
        return self.current_price * self.quantity


class PortfolioStatus(BaseModel):
    """Running state of one strategy's simulated account."""

    strategy_id: str
    initial_capital: Decimal
    total_value: Decimal
    total_cost: Decimal = Decimal("0")
    total_profit: Decimal = Decimal("0")
    profit_rate: float = 0.0
    max_drawdown: float = 0.0
    current_drawdown: float = 0.0
    peak_equity: Decimal
    positions: list[PositionInfo] = Field(default_factory=list)
    alerts: list[RiskAlert] = Field(default_factory=list)
    equity_history: list[float] = Field(default_factory=list)
    last_updated: datetime

    @property
    def unrealized_profit(self) -> Decimal:
        return sum((p.profit for p in self.positions), Decimal("0"))

    @property
    def equity(self) -> Decimal:
        """initial_capital + realised profit + unrealised profit."""
        return self.initial_capital + self.total_profit + self.unrealized_profit

    def find_position(self, code: str) -> PositionInfo | None:
        for position in self.positions:
            if position.code == code:
                return position
        return None


class StrategyPerformance(BaseModel):
    """Closed-trade statistics for one strategy. Percentages are 0-100."""

    strategy_id: str
    total_return: float = 0.0
    win_rate: float = 0.0
    max_drawdown: float = 0.0
    profit_factor: float = 0.0
    trades_count: int = 0
    win_trades: int = 0
    loss_trades: int = 0
    avg_profit: float = 0.0
    avg_loss: float = 0.0
    best_trade: float = 0.0
    worst_trade: float = 0.0
    last_updated: datetime
