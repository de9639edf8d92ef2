from __future__ import annotations

import logging
import time
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from top_movers.config.settings import settings
from top_movers.errors import MoversError
from top_movers.observability import RequestTimer, observability
from top_movers.presentation import render_dashboard
from top_movers.schemas.error import ErrorSchema
from top_movers.schemas.health import ApiLatencyMetrics, HealthResponse, ProviderHealth
from top_movers.schemas.movers import TopMoversSchema
from top_movers.schemas.quote import YahooGainersSchema
from top_movers.services.movers_service import MoversService, build_movers_service
from top_movers.tools import build_mcp_server

logger = logging.getLogger(__name__)
router = APIRouter()

ERROR_RESPONSES = {
    500: {
        "model": ErrorSchema,
        "description": "Upstream or configuration failure",
    },
}

LIMIT_QUERY = Query(None, description="Rows per list, clamped to 1-20 (default 10).")


def error_response(message: str, status_code: int = 500) -> JSONResponse:
    return JSONResponse(ErrorSchema(error=message).model_dump(), status_code=status_code)


def get_service(request: Request) -> MoversService:
    return request.app.state.movers_service


def create_app(service: Optional[MoversService] = None) -> FastAPI:
    service = service or build_movers_service()
    mcp_server = build_mcp_server(service)
    mcp_app = mcp_server.streamable_http_app()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting Top Movers...")
        if not settings.alpha_vantage_api_key:
            logger.warning("ALPHA_VANTAGE_API_KEY is not set; top movers requests will fail")
        async with mcp_server.session_manager.run():
            yield
        logger.info("Shutdown complete")

    app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)
    app.state.movers_service = service

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        request_id = request.headers.get("x-request-id", str(uuid.uuid4()))
        timer = RequestTimer()
        response = None
        try:
            response = await call_next(request)
            return response
        finally:
            elapsed_ms = timer.elapsed_ms()
            observability.mark_request_timing(elapsed_ms)
            logger.info(
                "request_complete",
                extra={
                    "request_id": request_id,
                    "path": request.url.path,
                    "limit": request.query_params.get("limit", ""),
                    "latency_ms": round(elapsed_ms, 2),
                    "status_code": response.status_code if response else None,
                },
            )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(_: Request, exc: Exception):
        logger.error(f"Unhandled API exception: {exc}", exc_info=True)
        return error_response("Unexpected server error")

    app.include_router(router)
    # The MCP app routes its own "/mcp" path; a Route keeps it ahead of the widget mount.
    app.add_route("/mcp", mcp_app, include_in_schema=False)

    if settings.public_dir.is_dir():
        app.mount("/", StaticFiles(directory=settings.public_dir, html=True), name="widget")
    else:
        logger.warning(f"Widget directory {settings.public_dir} not found; static assets disabled")

    return app


@router.get("/health", response_model=HealthResponse)
def health():
    latency = observability.request_metrics()
    providers = {
        name: ProviderHealth(
            last_success=status.last_success,
            last_failure=status.last_failure,
            last_error=status.last_error,
        )
        for name, status in observability.provider_snapshot().items()
    }
    return HealthResponse(
        status="ok",
        service=settings.app_name,
        version=settings.app_version,
        credentials_configured=bool(settings.alpha_vantage_api_key),
        uptime_seconds=round(observability.uptime_seconds(), 3),
        providers=providers,
        api_latency_ms=ApiLatencyMetrics(
            request_count=latency.request_count,
            average=latency.average_ms,
            max=latency.max_ms,
            last=latency.last_ms,
        ),
        timestamp=datetime.now(timezone.utc),
    )


@router.get("/api/top-movers", response_model=TopMoversSchema, responses=ERROR_RESPONSES)
async def top_movers(limit: Optional[str] = LIMIT_QUERY, service: MoversService = Depends(get_service)):
    try:
        return await service.get_top_movers(limit)
    except MoversError as exc:
        logger.error(f"Failed to fetch top movers: {exc}", exc_info=True)
        return error_response(str(exc))


@router.get("/api/yahoo-gainers", response_model=YahooGainersSchema, responses=ERROR_RESPONSES)
async def yahoo_gainers(limit: Optional[str] = LIMIT_QUERY, service: MoversService = Depends(get_service)):
    try:
        quotes = await service.get_yahoo_gainers(limit)
    except MoversError as exc:
        logger.error(f"Failed to fetch Yahoo gainers: {exc}", exc_info=True)
        return error_response(str(exc))
    return YahooGainersSchema(quotes=quotes)


@router.get("/dashboard", response_class=HTMLResponse)
async def dashboard(limit: Optional[str] = LIMIT_QUERY, service: MoversService = Depends(get_service)):
    started = time.perf_counter()
    data = await service.load_dashboard(limit)
    logger.debug(
        "Dashboard rendered",
        extra={
            "limit": data.limit,
            "movers_ok": data.movers.ok,
            "yahoo_ok": data.yahoo.ok,
            "elapsed_ms": round((time.perf_counter() - started) * 1000, 2),
        },
    )
    return HTMLResponse(render_dashboard(data, title=settings.app_name))
