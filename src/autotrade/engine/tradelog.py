"""Trade log rollups with realised profit and commission totals."""

from __future__ import annotations

from collections import defaultdict, deque
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Sequence

from autotrade.engine.ids import new_id
from autotrade.models import Pairing, TradeLog, TradeOrder


@dataclass
class RoundTrip:
    """A matched buy/sell quantity of one instrument."""

    code: str
    quantity: int
    entry_price: Decimal
    exit_price: Decimal
    commission: Decimal

    @property
    def profit(self) -> Decimal:
        return (self.exit_price - self.entry_price) * self.quantity - self.commission


def positional_profit(orders: Sequence[TradeOrder]) -> Decimal:
    """Profit from pairing orders by position: (0, 1), (2, 3), ...

    A pair only counts when the first leg is a buy and the second a sell.
    Correct only when buys and sells strictly alternate in execution order;
    interleaved instruments or scaled entries are mispaired.
    """
    total = Decimal("0")
    for i in range(0, len(orders) - 1, 2):
        buy, sell = orders[i], orders[i + 1]
        if buy.action == "buy" and sell.action == "sell":
            total += (
                (sell.executed_price - buy.executed_price) * buy.quantity
                - (buy.commission + sell.commission)
            )
    return total


def fifo_round_trips(orders: Sequence[TradeOrder]) -> list[RoundTrip]:
    """Match each sell against the oldest open buy lots of the same instrument.

    Commissions are apportioned to the matched quantity of each leg.
    Sell quantity with no open lot left is ignored.
    """
    # Per instrument: [order, remaining quantity]
    lots: dict[str, deque[list]] = defaultdict(deque)
    trips: list[RoundTrip] = []

    for order in orders:
        if order.action == "buy":
            lots[order.code].append([order, order.executed_quantity])
            continue

        remaining = order.executed_quantity
        open_lots = lots[order.code]
        while remaining > 0 and open_lots:
            lot = open_lots[0]
            buy, lot_qty = lot[0], lot[1]
            matched = min(lot_qty, remaining)
            commission = (
                buy.commission * matched / buy.executed_quantity
                + order.commission * matched / order.executed_quantity
            )
            trips.append(RoundTrip(
                code=order.code,
                quantity=matched,
                entry_price=buy.executed_price,
                exit_price=order.executed_price,
                commission=commission,
            ))
            lot[1] -= matched
            remaining -= matched
            if lot[1] == 0:
                open_lots.popleft()

    return trips


def fifo_profit(orders: Sequence[TradeOrder]) -> Decimal:
    return sum((trip.profit for trip in fifo_round_trips(orders)), Decimal("0"))


def build_trade_log(
    strategy_id: str,
    orders: Sequence[TradeOrder],
    pairing: Pairing = "positional",
) -> TradeLog:
    """Roll up *strategy_id*'s orders (in execution order) into a TradeLog."""
    strategy_orders = [o for o in orders if o.strategy_id == strategy_id]
    total_commission = sum((o.commission for o in strategy_orders), Decimal("0"))

    if pairing == "fifo":
        total_profit = fifo_profit(strategy_orders)
    else:
        total_profit = positional_profit(strategy_orders)

    return TradeLog(
        id=new_id("log"),
        strategy_id=strategy_id,
        orders=strategy_orders,
        total_profit=total_profit,
        total_commission=total_commission,
        pairing=pairing,
        timestamp=datetime.now(timezone.utc),
    )
