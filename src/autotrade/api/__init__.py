"""HTTP adapter for the trading engine."""

from autotrade.api.app import create_app

__all__ = ["create_app"]
