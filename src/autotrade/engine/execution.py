"""Order execution — pending signal to filled order, pure functions."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from autotrade.config.schema import EngineConfig
from autotrade.engine.ids import new_id
from autotrade.models import TradeOrder, TradeSignal


def calculate_commission(price: Decimal, quantity: int, commission_rate: float) -> Decimal:
    """Commission charged on the notional value: price * qty * rate."""
    return price * quantity * Decimal(str(commission_rate))


def resolve_execution_price(
    signal: TradeSignal,
    override: Decimal | float | None = None,
) -> Decimal:
    """Override price when given and non-zero, else the signal's proposed price."""
    if override:
        return Decimal(str(override))
    return signal.price


def fill_signal(
    signal: TradeSignal,
    config: EngineConfig,
    price: Decimal | float | None = None,
) -> TradeOrder:
    """Build the filled order for *signal*.  Does not touch the signal itself.

    total_amount = price * qty + commission
    """
    execution_price = resolve_execution_price(signal, price)
    commission = calculate_commission(execution_price, signal.quantity, config.commission_rate)
    return TradeOrder(
        id=new_id("order"),
        strategy_id=signal.strategy_id,
        code=signal.code,
        name=signal.name,
        action=signal.action,
        price=execution_price,
        quantity=signal.quantity,
        total_amount=execution_price * signal.quantity + commission,
        status="filled",
        executed_quantity=signal.quantity,
        executed_price=execution_price,
        commission=commission,
        timestamp=signal.timestamp,
        executed_at=datetime.now(timezone.utc),
        signal_id=signal.id,
    )
