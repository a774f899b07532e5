"""Confidence scoring — pure functions, no engine state."""

from __future__ import annotations

from autotrade.config.schema import EngineConfig
from autotrade.models import Strategy


def factor_weight(category: str, config: EngineConfig) -> float:
    """Points an enabled factor of *category* adds to the base confidence."""
    return float(getattr(config.factor_weights, category, 0))


def enabled_factor_names(strategy: Strategy) -> list[str]:
    return [f.name for f in strategy.factors if f.enabled]


def score_candidate(strategy: Strategy, config: EngineConfig) -> float:
    """Confidence 0-100 for buying under *strategy*.

    confidence = base + sum(weight[category] for each enabled factor)

    With the default weights: technical +10, fundamental +8, sentiment +5,
    custom +0, starting from 50.  The candidate itself does not move the
    score; every candidate of one strategy scores the same.
    """
    confidence = config.base_confidence
    for factor in strategy.factors:
        if factor.enabled:
            confidence += factor_weight(factor.category, config)
    return max(0.0, min(float(confidence), 100.0))
