"""Shared test fixtures."""

import logging
from decimal import Decimal

import pytest
import structlog

from autotrade.config import AppConfig
from autotrade.engine import TradingEngine
from autotrade.models import Candidate, CheckboxFactor, Strategy


def make_strategy(
    strategy_id: str = "strat-1",
    technical: int = 1,
    fundamental: int = 1,
    sentiment: int = 0,
    disabled: int = 0,
) -> Strategy:
    """Strategy with the given number of enabled checkbox factors per category."""
    factors = []
    for category, count in (
        ("technical", technical),
        ("fundamental", fundamental),
        ("sentiment", sentiment),
    ):
        for i in range(count):
            factors.append(CheckboxFactor(
                id=f"{category}-{i}",
                name=f"{category} factor {i}",
                category=category,
                value=True,
            ))
    for i in range(disabled):
        factors.append(CheckboxFactor(
            id=f"off-{i}",
            name=f"disabled factor {i}",
            category="technical",
            value=False,
        ))
    return Strategy(id=strategy_id, name=f"Strategy {strategy_id}", factors=factors)


@pytest.fixture
def config():
    return AppConfig()


@pytest.fixture
def engine(config):
    """Fresh engine per test; instances share no state."""
    return TradingEngine(config)


@pytest.fixture
def strategy():
    """One technical + one fundamental factor: confidence 68."""
    return make_strategy()


@pytest.fixture
def candidate():
    return Candidate(code="X", name="X Corp", price=Decimal("100"))


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop handlers bound to a previous test's captured stderr."""
    yield
    logging.getLogger().handlers.clear()
    structlog.reset_defaults()
