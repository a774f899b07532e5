"""Pure metric computation functions — no engine state."""

from __future__ import annotations

from typing import Sequence

import numpy as np


def win_rate(wins: int, total: int) -> float:
    """Win rate as a percentage 0-100."""
    if total <= 0:
        return 0.0
    return wins / total * 100


def profit_factor(gross_profit: float, gross_loss: float) -> float:
    """Gross profit / gross loss.  *gross_loss* should be a positive number."""
    if gross_loss <= 0:
        return 0.0
    return gross_profit / gross_loss


def drawdown_series(equity_series: Sequence[float]) -> list[float]:
    """Drawdown of every point from its running peak, as percentages <= 0."""
    if len(equity_series) == 0:
        return []
    arr = np.array(equity_series, dtype=np.float64)
    peak = np.maximum.accumulate(arr)
    # Avoid division by zero where peak is 0
    safe_peak = np.where(peak == 0, 1.0, peak)
    return ((arr - peak) / safe_peak * 100).tolist()


def current_drawdown(equity_series: Sequence[float]) -> float:
    """Drawdown of the latest point, e.g. -12.5 for 12.5% below the peak."""
    series = drawdown_series(equity_series)
    if not series:
        return 0.0
    return float(series[-1])


def max_drawdown(equity_series: Sequence[float]) -> float:
    """Deepest drawdown seen so far, as a percentage <= 0."""
    if len(equity_series) < 2:
        return 0.0
    return float(min(drawdown_series(equity_series)))
