"""
Main FastAPI application for the storefront.
Serves purchase/verification routes, the protected download, health and metrics,
and the static storefront page when present.
"""
import logging
import os
import time
import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from storefront.api.routes import downloads, health, purchases
from storefront.core.config import Settings, settings as default_settings
from storefront.core.logging import configure_logging
from storefront.grants import AccessGate, GrantIssuer, GrantStore
from storefront.services.payments.service import PaymentService
from storefront.utils.metrics import router as metrics_router

logger = logging.getLogger("http")


def create_app(settings: Settings | None = None, store: GrantStore | None = None) -> FastAPI:
    """Build the app with its own GrantStore; tests pass fresh settings/store."""
    settings = settings or default_settings
    store = store if store is not None else GrantStore()

    app = FastAPI(
        title="Storefront API",
        description="Checkout, payment verification and token-gated download",
        version="1.0.0",
    )

    issuer = GrantIssuer(store, purge_expired_on_issue=settings.purge_expired_on_issue)
    app.state.settings = settings
    app.state.grant_store = store
    app.state.grant_issuer = issuer
    app.state.access_gate = AccessGate(store, enforce_resource_set=settings.enforce_resource_set)
    app.state.payment_service = PaymentService(settings, issuer)

    if not settings.stripe_configured:
        logger.warning("stripe_not_configured")

    # CORS
    origins = settings.cors_origins_list or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_id = request.headers.get(settings.request_id_header) or uuid.uuid4().hex
        started = time.perf_counter()
        response = await call_next(request)
        response.headers[settings.request_id_header] = request_id
        logger.info(
            "http_request",
            extra={
                "request_id": request_id,
                "path": request.url.path,
                "method": request.method,
                "status_code": response.status_code,
                "latency_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )
        return response

    # Routers
    app.include_router(health.router, tags=["health"])
    app.include_router(purchases.router)
    app.include_router(downloads.router)
    app.include_router(metrics_router)

    # Static storefront page last, so API routes take precedence
    if settings.static_dir and os.path.isdir(settings.static_dir):
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")

    return app


configure_logging()
app = create_app()
