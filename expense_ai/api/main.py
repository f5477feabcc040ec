"""FastAPI application factory"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from expense_ai.api.dependencies import get_chat_client
from expense_ai.api.middleware import RequestIDMiddleware, MetricsMiddleware
from expense_ai.api.v1 import ai, plans, debug
from expense_ai.infrastructure.observability.logging import setup_logging
from expense_ai.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Close the shared client only if a request created it
    if get_chat_client.cache_info().currsize:
        await get_chat_client().aclose()
        get_chat_client.cache_clear()


def create_app(enable_debug_routes: bool | None = None) -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="ExpenseTracker AI Gateway",
        description="Expense categorization, spending insights and subscription plans",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(ai.router, prefix="/v1", tags=["ai"])
    app.include_router(plans.router, prefix="/v1", tags=["plans"])

    if enable_debug_routes is None:
        enable_debug_routes = settings.enable_debug_routes
    if enable_debug_routes:
        app.include_router(debug.router, prefix="/v1", tags=["debug"])

    return app


app = create_app()
