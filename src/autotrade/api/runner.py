#!/usr/bin/env python3
"""FastAPI server runner."""

from __future__ import annotations

import argparse

import structlog
import uvicorn

from autotrade.api.app import create_app
from autotrade.config.loader import load_config
from autotrade.engine import TradingEngine
from autotrade.logging.setup import configure_logging

logger = structlog.get_logger("api_runner")


def main(argv: list[str] | None = None) -> None:
    """Run the FastAPI server around a fresh in-memory engine."""
    parser = argparse.ArgumentParser(description="Automated trading API")
    parser.add_argument("--config", default=None, help="Path to config.yaml")
    args = parser.parse_args(argv)

    config = load_config(args.config)
    configure_logging(config.logging)
    app = create_app(TradingEngine(config))

    logger.info("Starting FastAPI server", host=config.api.host, port=config.api.port)

    try:
        uvicorn.run(
            app,
            host=config.api.host,
            port=config.api.port,
            log_config=None,  # Use our structlog setup
        )
    except Exception as e:
        logger.error("Failed to start server", error=str(e))
        raise


if __name__ == "__main__":
    main()
