"""Trade signal model."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field

Action = Literal["buy", "sell"]
SignalStatus = Literal["pending", "executed", "cancelled"]


class TradeSignal(BaseModel):
    """A trade proposed by the signal generator or submitted by a caller.

    Status only moves pending -> executed or pending -> cancelled.
    """

    id: str
    strategy_id: str
    code: str
    name: str
    action: Action
    price: Decimal = Field(gt=0)
    quantity: int = Field(gt=0)
    reason: str
    confidence: float = Field(ge=0.0, le=100.0)
    timestamp: datetime
    status: SignalStatus = "pending"

    @property
    def is_pending(self) -> bool:
        return self.status == "pending"
