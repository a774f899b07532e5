"""Risk monitor — threshold checks over a portfolio snapshot."""

from __future__ import annotations

from datetime import datetime, timezone

import structlog

from autotrade.config.schema import RiskConfig
from autotrade.engine.ids import new_id
from autotrade.models import PortfolioStatus, RiskAlert

log = structlog.get_logger("risk_monitor")


def _alert(
    portfolio: PortfolioStatus,
    alert_type: str,
    critical: bool,
    message: str,
    value: float,
    threshold: float,
    now: datetime,
) -> RiskAlert:
    return RiskAlert(
        id=new_id(f"alert-{alert_type}"),
        strategy_id=portfolio.strategy_id,
        type=alert_type,
        level="critical" if critical else "warning",
        message=message,
        current_value=value,
        threshold=threshold,
        timestamp=now,
    )


# ── Pure check functions ──────────────────────────────────────


def check_drawdown(
    portfolio: PortfolioStatus,
    config: RiskConfig,
    now: datetime,
) -> RiskAlert | None:
    """Alert when the current drawdown is below the warning level (e.g. -10%)."""
    drawdown = portfolio.current_drawdown
    if drawdown >= config.drawdown_warning_pct:
        return None
    return _alert(
        portfolio,
        "drawdown",
        critical=drawdown < config.drawdown_critical_pct,
        message=f"Current drawdown {drawdown:.2f}% exceeds the alert threshold",
        value=drawdown,
        threshold=config.drawdown_warning_pct,
        now=now,
    )


def check_loss(
    portfolio: PortfolioStatus,
    config: RiskConfig,
    now: datetime,
) -> RiskAlert | None:
    """Alert when cumulative realised profit is below the warning level."""
    profit = float(portfolio.total_profit)
    if profit >= config.loss_warning:
        return None
    return _alert(
        portfolio,
        "loss",
        critical=profit < config.loss_critical,
        message=f"Cumulative loss {abs(profit):.0f} exceeds the alert threshold",
        value=profit,
        threshold=config.loss_warning,
        now=now,
    )


def max_position_percentage(portfolio: PortfolioStatus) -> float:
    """Largest single-position share of the portfolio, 0.0 when flat."""
    return max((p.percentage for p in portfolio.positions), default=0.0)


def check_concentration(
    portfolio: PortfolioStatus,
    config: RiskConfig,
    now: datetime,
) -> RiskAlert | None:
    """Alert when one instrument holds too large a share of the portfolio."""
    largest = max_position_percentage(portfolio)
    if largest <= config.concentration_warning_pct:
        return None
    return _alert(
        portfolio,
        "concentration",
        critical=largest > config.concentration_critical_pct,
        message=f"Single position at {largest:.1f}% of the portfolio, holdings too concentrated",
        value=largest,
        threshold=config.concentration_warning_pct,
        now=now,
    )


def evaluate_alerts(portfolio: PortfolioStatus, config: RiskConfig) -> list[RiskAlert]:
    """Recompute the full alert set for *portfolio* from scratch."""
    now = datetime.now(timezone.utc)
    alerts: list[RiskAlert] = []
    for check in (check_drawdown, check_loss, check_concentration):
        alert = check(portfolio, config, now)
        if alert is not None:
            alerts.append(alert)
    return alerts


def refresh_alerts(portfolio: PortfolioStatus, config: RiskConfig) -> list[RiskAlert]:
    """Replace the portfolio's alerts with a freshly evaluated set."""
    portfolio.alerts = evaluate_alerts(portfolio, config)
    if portfolio.alerts:
        log.warning(
            "risk_alerts_raised",
            strategy_id=portfolio.strategy_id,
            alerts=[f"{a.type}:{a.level}" for a in portfolio.alerts],
        )
    return portfolio.alerts
