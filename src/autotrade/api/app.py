"""FastAPI adapter exposing one TradingEngine to the dashboard."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Annotated, Literal, Optional

import structlog
from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from autotrade.config.schema import AppConfig
from autotrade.engine import TradingEngine
from autotrade.models import Candidate, Strategy

logger = structlog.get_logger("api")


class GenerateSignalsRequest(BaseModel):
    strategy: Strategy
    candidates: list[Candidate] = Field(default_factory=list)


class SubmitSignalRequest(BaseModel):
    strategy_id: str
    code: str
    name: str
    action: Literal["buy", "sell"]
    price: Decimal = Field(gt=0)
    quantity: int = Field(gt=0)
    reason: str = "manual"
    confidence: float = 100.0


class ExecuteSignalRequest(BaseModel):
    price: Optional[Decimal] = Field(default=None, gt=0)


class ExecuteSignalsRequest(BaseModel):
    signal_ids: list[str]


class PricesRequest(BaseModel):
    prices: dict[str, Annotated[Decimal, Field(gt=0)]]


def _dump(items) -> list[dict]:
    return [item.model_dump(mode="json") for item in items]


def create_app(engine: TradingEngine | None = None, config: AppConfig | None = None) -> FastAPI:
    """Build the API around *engine* (a fresh one when omitted)."""
    config = config or (engine.config if engine is not None else AppConfig())
    engine = engine or TradingEngine(config)

    app = FastAPI(
        title="Automated Trading API",
        description="Signals, execution, portfolios and risk alerts for dashboard strategies",
        version="0.1.0",
    )
    app.state.engine = engine

    # CORS middleware - adjust origins in production
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def get_engine(request: Request) -> TradingEngine:
        return request.app.state.engine

    @app.get("/api/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}

    # ═══════════════════════════════════════════════════════════
    # Signals
    # ═══════════════════════════════════════════════════════════

    @app.post("/api/signals/generate")
    async def generate_signals(req: GenerateSignalsRequest, request: Request):
        signals = get_engine(request).generate_signals(req.strategy, req.candidates)
        return {"signals": _dump(signals)}

    @app.post("/api/signals", status_code=201)
    async def submit_signal(req: SubmitSignalRequest, request: Request):
        signal = get_engine(request).submit_signal(**req.model_dump())
        return signal.model_dump(mode="json")

    @app.get("/api/signals")
    async def list_pending_signals(request: Request, strategy_id: Optional[str] = None):
        return {"signals": _dump(get_engine(request).get_pending_signals(strategy_id))}

    @app.post("/api/signals/execute")
    async def execute_signals(req: ExecuteSignalsRequest, request: Request):
        orders = get_engine(request).execute_signals(req.signal_ids)
        return {"orders": _dump(orders)}

    @app.post("/api/signals/{signal_id}/execute")
    async def execute_signal(signal_id: str, request: Request, req: Optional[ExecuteSignalRequest] = None):
        price = req.price if req is not None else None
        order = get_engine(request).execute_signal(signal_id, price)
        if order is None:
            raise HTTPException(status_code=404, detail="Pending signal not found")
        return order.model_dump(mode="json")

    @app.post("/api/signals/{signal_id}/cancel")
    async def cancel_signal(signal_id: str, request: Request):
        get_engine(request).cancel_signal(signal_id)
        return {"id": signal_id}

    # ═══════════════════════════════════════════════════════════
    # Portfolios & risk
    # ═══════════════════════════════════════════════════════════

    @app.get("/api/portfolios/{strategy_id}")
    async def get_portfolio(strategy_id: str, request: Request):
        portfolio = get_engine(request).get_portfolio_status(strategy_id)
        if portfolio is None:
            raise HTTPException(status_code=404, detail="Portfolio not found")
        return portfolio.model_dump(mode="json")

    @app.post("/api/portfolios/{strategy_id}/mark")
    async def mark_portfolio(strategy_id: str, req: PricesRequest, request: Request):
        portfolio = get_engine(request).mark_to_market(strategy_id, req.prices)
        if portfolio is None:
            raise HTTPException(status_code=404, detail="Portfolio not found")
        return portfolio.model_dump(mode="json")

    @app.post("/api/portfolios/{strategy_id}/exits")
    async def generate_exits(strategy_id: str, req: PricesRequest, request: Request):
        signals = get_engine(request).generate_exit_signals(strategy_id, req.prices)
        return {"signals": _dump(signals)}

    @app.get("/api/alerts")
    async def list_alerts(request: Request, strategy_id: Optional[str] = None):
        return {"alerts": _dump(get_engine(request).get_risk_alerts(strategy_id))}

    # ═══════════════════════════════════════════════════════════
    # History, logs, performance
    # ═══════════════════════════════════════════════════════════

    @app.get("/api/orders/{strategy_id}")
    async def trade_history(
        strategy_id: str,
        request: Request,
        limit: Optional[int] = Query(default=None, ge=0),
    ):
        return {"orders": _dump(get_engine(request).get_trade_history(strategy_id, limit))}

    @app.post("/api/trade-logs/{strategy_id}")
    async def generate_trade_log(
        strategy_id: str,
        request: Request,
        pairing: Literal["positional", "fifo"] = "positional",
    ):
        return get_engine(request).generate_trade_log(strategy_id, pairing).model_dump(mode="json")

    @app.get("/api/trade-logs/{strategy_id}")
    async def latest_trade_log(strategy_id: str, request: Request):
        trade_log = get_engine(request).get_trade_log(strategy_id)
        if trade_log is None:
            raise HTTPException(status_code=404, detail="Trade log not found")
        return trade_log.model_dump(mode="json")

    @app.get("/api/performance/{strategy_id}")
    async def performance(strategy_id: str, request: Request):
        perf = get_engine(request).get_performance(strategy_id)
        if perf is None:
            raise HTTPException(status_code=404, detail="Portfolio not found")
        return perf.model_dump(mode="json")

    logger.info("api_created", initial_capital=config.engine.initial_capital)
    return app
