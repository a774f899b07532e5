"""Order and trade log models."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field

from autotrade.models.signal import Action

# Only "filled" is produced today; the others are reserved for partial fills.
OrderStatus = Literal["pending", "partial", "filled", "cancelled"]
Pairing = Literal["positional", "fifo"]


class TradeOrder(BaseModel):
    """A committed trade. Created once per executed signal."""

    id: str
    strategy_id: str
    code: str
    name: str
    action: Action
    price: Decimal = Field(gt=0)
    quantity: int = Field(gt=0)
    total_amount: Decimal
    status: OrderStatus = "filled"
    executed_quantity: int
    executed_price: Decimal
    commission: Decimal
    timestamp: datetime
    executed_at: datetime | None = None
    signal_id: str | None = None


class TradeLog(BaseModel):
    """Point-in-time rollup of a strategy's orders."""

    id: str
    strategy_id: str
    orders: list[TradeOrder] = Field(default_factory=list)
    total_profit: Decimal = Decimal("0")
    total_commission: Decimal = Decimal("0")
    pairing: Pairing = "positional"
    timestamp: datetime
