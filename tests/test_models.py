"""Tests for Pydantic domain models."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from autotrade.models import (
    Candidate,
    CheckboxFactor,
    PortfolioStatus,
    PositionInfo,
    RangeFactor,
    RiskAlert,
    SelectFactor,
    TextFactor,
    TradeOrder,
    TradeSignal,
)

NOW = datetime.now(timezone.utc)


def _signal(**overrides):
    data = dict(
        id="signal-1",
        strategy_id="s",
        code="X",
        name="X Corp",
        action="buy",
        price=Decimal("100"),
        quantity=100,
        reason="test",
        confidence=68,
        timestamp=NOW,
    )
    data.update(overrides)
    return TradeSignal(**data)


class TestTradeSignal:
    def test_defaults_to_pending(self):
        s = _signal()
        assert s.status == "pending"
        assert s.is_pending

    def test_invalid_action(self):
        with pytest.raises(ValidationError):
            _signal(action="short")

    def test_quantity_must_be_positive(self):
        with pytest.raises(ValidationError):
            _signal(quantity=0)

    def test_price_must_be_positive(self):
        with pytest.raises(ValidationError):
            _signal(price=Decimal("0"))

    def test_confidence_bounds(self):
        with pytest.raises(ValidationError):
            _signal(confidence=100.5)
        with pytest.raises(ValidationError):
            _signal(confidence=-1)

    def test_invalid_status(self):
        with pytest.raises(ValidationError):
            _signal(status="filled")


class TestTradeOrder:
    def test_status_enumeration(self):
        order = TradeOrder(
            id="order-1",
            strategy_id="s",
            code="X",
            name="X Corp",
            action="sell",
            price=Decimal("120"),
            quantity=100,
            total_amount=Decimal("12012"),
            executed_quantity=100,
            executed_price=Decimal("120"),
            commission=Decimal("12"),
            timestamp=NOW,
        )
        assert order.status == "filled"
        assert order.executed_at is None
        with pytest.raises(ValidationError):
            TradeOrder.model_validate({**order.model_dump(), "status": "rejected"})


class TestFactors:
    def test_enabled_rules(self):
        assert CheckboxFactor(id="a", name="a", category="technical", value=True).enabled
        assert not CheckboxFactor(id="a", name="a", category="technical").enabled
        assert RangeFactor(id="r", name="r", category="fundamental", value=(1, 2)).enabled
        assert not RangeFactor(id="r", name="r", category="fundamental").enabled
        assert SelectFactor(id="s", name="s", category="sentiment", value="hot").enabled
        assert not SelectFactor(id="s", name="s", category="sentiment", value="").enabled
        assert TextFactor(id="t", name="t", category="custom", value="keyword").enabled
        assert not TextFactor(id="t", name="t", category="custom").enabled

    def test_invalid_category(self):
        with pytest.raises(ValidationError):
            CheckboxFactor(id="a", name="a", category="macro", value=True)


class TestPortfolioStatus:
    def test_equity_includes_unrealised(self):
        p = PortfolioStatus(
            strategy_id="s",
            initial_capital=Decimal("100000"),
            total_value=Decimal("90000"),
            total_profit=Decimal("500"),
            peak_equity=Decimal("100000"),
            positions=[
                PositionInfo(
                    code="X",
                    name="X",
                    quantity=10,
                    entry_price=Decimal("100"),
                    current_price=Decimal("110"),
                    profit=Decimal("100"),
                ),
            ],
            last_updated=NOW,
        )
        assert p.unrealized_profit == Decimal("100")
        assert p.equity == Decimal("100600")
        assert p.find_position("X").market_value == Decimal("1100")
        assert p.find_position("Y") is None

    def test_negative_position_quantity_rejected(self):
        with pytest.raises(ValidationError):
            PositionInfo(
                code="X", name="X", quantity=-1,
                entry_price=Decimal("1"), current_price=Decimal("1"),
            )


class TestRiskAlert:
    def test_invalid_level(self):
        with pytest.raises(ValidationError):
            RiskAlert(
                id="a", strategy_id="s", type="loss", level="info", message="m",
                current_value=-6000, threshold=-5000, timestamp=NOW,
            )


class TestCandidate:
    def test_price_coerced_to_decimal(self):
        assert Candidate(code="X", name="X", price="12.34").price == Decimal("12.34")
