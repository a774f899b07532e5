"""Signal generation — candidates and exits turned into pending trade signals."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import ROUND_FLOOR, Decimal
from typing import Iterable, Mapping

import structlog

from autotrade.config.schema import EngineConfig
from autotrade.engine.ids import new_id
from autotrade.engine.scoring import enabled_factor_names, score_candidate
from autotrade.models import Candidate, PortfolioStatus, Strategy, TradeSignal

log = structlog.get_logger("signal_generator")


def calculate_quantity(price: Decimal, notional: float) -> int:
    """Whole units a fixed notional buys: floor(notional / price).

    Returns 0 for non-positive prices.
    """
    if price <= 0:
        return 0
    units = (Decimal(str(notional)) / price).to_integral_value(rounding=ROUND_FLOOR)
    return int(units)


def calculate_stop_price(entry_price: Decimal, stop_loss_pct: float) -> Decimal:
    """entry * (1 - pct)"""
    return entry_price * (1 - Decimal(str(stop_loss_pct)))


def calculate_take_profit_price(entry_price: Decimal, take_profit_pct: float) -> Decimal:
    """entry * (1 + pct)"""
    return entry_price * (1 + Decimal(str(take_profit_pct)))


def _describe(strategy: Strategy) -> str:
    names = enabled_factor_names(strategy)
    if not names:
        return "strategy factor evaluation"
    return "strategy factor evaluation: " + ", ".join(names)


def _as_candidate(candidate: Candidate | Mapping) -> Candidate:
    if isinstance(candidate, Candidate):
        return candidate
    return Candidate.model_validate(candidate)


def build_signals(
    strategy: Strategy,
    candidates: Iterable[Candidate | Mapping],
    config: EngineConfig,
) -> list[TradeSignal]:
    """Emit one pending buy signal per candidate whose confidence clears the threshold.

    Candidates that cannot buy a single unit with the per-trade notional
    (including non-positive prices) are skipped.
    """
    confidence = score_candidate(strategy, config)
    reason = _describe(strategy)
    now = datetime.now(timezone.utc)

    signals: list[TradeSignal] = []
    for raw in candidates:
        candidate = _as_candidate(raw)
        if confidence <= config.confidence_threshold:
            continue
        quantity = calculate_quantity(candidate.price, config.trade_notional)
        if quantity <= 0:
            log.info(
                "zero_quantity_skipped",
                strategy_id=strategy.id,
                code=candidate.code,
                price=float(candidate.price),
            )
            continue
        signals.append(TradeSignal(
            id=new_id("signal"),
            strategy_id=strategy.id,
            code=candidate.code,
            name=candidate.name,
            action="buy",
            price=candidate.price,
            quantity=quantity,
            reason=reason,
            confidence=confidence,
            timestamp=now,
        ))

    log.info(
        "signals_generated",
        strategy_id=strategy.id,
        confidence=confidence,
        signals_count=len(signals),
    )
    return signals


def build_manual_signal(
    strategy_id: str,
    code: str,
    name: str,
    action: str,
    price: Decimal,
    quantity: int,
    reason: str = "manual",
    confidence: float = 100.0,
) -> TradeSignal:
    """A caller-proposed signal. Raises ``ValidationError`` on bad input."""
    return TradeSignal(
        id=new_id("signal"),
        strategy_id=strategy_id,
        code=code,
        name=name,
        action=action,
        price=Decimal(str(price)),
        quantity=quantity,
        reason=reason,
        confidence=confidence,
        timestamp=datetime.now(timezone.utc),
    )


def build_exit_signals(
    portfolio: PortfolioStatus,
    prices: Mapping[str, Decimal | float],
    config: EngineConfig,
) -> list[TradeSignal]:
    """Sell signals for open positions that hit their stop-loss or take-profit.

    Positions without a positive price in *prices* are left alone.  Each exit sells
    the whole position at the quoted price.
    """
    exits: list[TradeSignal] = []
    for pos in portfolio.positions:
        if pos.code not in prices or pos.quantity <= 0:
            continue
        price = Decimal(str(prices[pos.code]))
        if price <= 0:
            continue
        stop = calculate_stop_price(pos.entry_price, config.stop_loss_pct)
        tp = calculate_take_profit_price(pos.entry_price, config.take_profit_pct)

        # stop_loss wins over take_profit
        if price <= stop:
            exit_reason = "stop_loss"
        elif price >= tp:
            exit_reason = "take_profit"
        else:
            continue

        exits.append(build_manual_signal(
            strategy_id=portfolio.strategy_id,
            code=pos.code,
            name=pos.name,
            action="sell",
            price=price,
            quantity=pos.quantity,
            reason=exit_reason,
        ))
        log.info(
            "exit_signal_built",
            strategy_id=portfolio.strategy_id,
            code=pos.code,
            exit_reason=exit_reason,
            price=float(price),
            entry_price=float(pos.entry_price),
        )
    return exits
