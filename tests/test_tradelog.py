"""Tests for trade log rollups — positional and FIFO pairing."""

from __future__ import annotations

import itertools
from datetime import datetime, timezone
from decimal import Decimal

from autotrade.engine.tradelog import (
    build_trade_log,
    fifo_profit,
    fifo_round_trips,
    positional_profit,
)
from autotrade.models import TradeOrder

NOW = datetime.now(timezone.utc)
_ids = itertools.count(1)


def _order(action, price, qty, code="A", strategy_id="s"):
    price = Decimal(str(price))
    commission = price * qty * Decimal("0.001")
    return TradeOrder(
        id=f"order-{next(_ids)}",
        strategy_id=strategy_id,
        code=code,
        name=code,
        action=action,
        price=price,
        quantity=qty,
        total_amount=price * qty + commission,
        executed_quantity=qty,
        executed_price=price,
        commission=commission,
        timestamp=NOW,
    )


class TestPositionalProfit:
    def test_single_round_trip(self):
        orders = [_order("buy", 100, 100), _order("sell", 120, 100)]
        # 2000 - 10 - 12
        assert positional_profit(orders) == Decimal("1978")

    def test_two_round_trips(self):
        orders = [
            _order("buy", 10, 10), _order("sell", 11, 10),
            _order("buy", 20, 5), _order("sell", 18, 5),
        ]
        expected = (Decimal("10") - Decimal("0.1") - Decimal("0.11")) + (
            Decimal("-10") - Decimal("0.1") - Decimal("0.09")
        )
        assert positional_profit(orders) == expected

    def test_odd_trailing_order_ignored(self):
        orders = [_order("buy", 100, 10), _order("sell", 110, 10), _order("buy", 50, 10)]
        assert positional_profit(orders) == Decimal("100") - Decimal("1") - Decimal("1.1")

    def test_misaligned_pairs_contribute_nothing(self):
        # buy, buy, sell, sell: pairs (buy, buy) and (sell, sell) never match
        orders = [
            _order("buy", 10, 10), _order("buy", 12, 10),
            _order("sell", 15, 10), _order("sell", 15, 10),
        ]
        assert positional_profit(orders) == 0

    def test_empty(self):
        assert positional_profit([]) == 0


class TestFifoPairing:
    def test_scaled_entry(self):
        orders = [
            _order("buy", 10, 10), _order("buy", 12, 10),
            _order("sell", 15, 20),
        ]
        trips = fifo_round_trips(orders)
        assert [(t.quantity, t.entry_price) for t in trips] == [(10, Decimal("10")), (10, Decimal("12"))]
        gross = Decimal("50") + Decimal("30")
        commission = Decimal("0.1") + Decimal("0.12") + Decimal("0.3")
        assert fifo_profit(orders) == gross - commission

    def test_interleaved_instruments(self):
        orders = [
            _order("buy", 10, 10, code="A"), _order("buy", 50, 2, code="B"),
            _order("sell", 60, 2, code="B"), _order("sell", 9, 10, code="A"),
        ]
        trips = fifo_round_trips(orders)
        assert [t.code for t in trips] == ["B", "A"]
        assert trips[0].profit == Decimal("20") - Decimal("0.1") - Decimal("0.12")

    def test_partial_lot(self):
        orders = [_order("buy", 10, 10), _order("sell", 12, 4)]
        trip = fifo_round_trips(orders)[0]
        assert trip.quantity == 4
        # 4/10 of the buy commission + whole sell commission
        assert trip.commission == Decimal("0.04") + Decimal("0.048")

    def test_unmatched_sell_ignored(self):
        assert fifo_round_trips([_order("sell", 10, 5)]) == []


class TestBuildTradeLog:
    def test_filters_by_strategy(self):
        orders = [
            _order("buy", 100, 100, strategy_id="s"),
            _order("buy", 5, 5, strategy_id="other"),
            _order("sell", 120, 100, strategy_id="s"),
        ]
        log = build_trade_log("s", orders)
        assert [o.strategy_id for o in log.orders] == ["s", "s"]
        assert log.total_commission == Decimal("22")
        assert log.total_profit == Decimal("1978")
        assert log.pairing == "positional"

    def test_fifo_option(self):
        orders = [_order("buy", 10, 10), _order("buy", 12, 10), _order("sell", 15, 20)]
        assert build_trade_log("s", orders).total_profit == 0
        assert build_trade_log("s", orders, pairing="fifo").total_profit == fifo_profit(orders)

    def test_no_orders(self):
        log = build_trade_log("nobody", [])
        assert log.orders == []
        assert log.total_profit == 0
        assert log.total_commission == 0
