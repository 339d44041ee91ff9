"""
Soisy Commerce Gateway - Main Application Entry Point

This module initializes the FastAPI application that connects the commerce
ledger to Soisy installment loans: order submission during checkout and
the asynchronous webhook that records loan progress.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

from api import routes
from api.middleware import log_api_entry
from core.dependencies import clear_settings, get_settings, init_settings
from core.logging import configure_logging
from core.metrics import setup_metrics
from core.settings import Settings
from core.tracing import init_tracer
from db.session import init_db
from payments.errors import PaymentError, UnsupportedOperationError

log = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI application startup and shutdown events."""
    # Startup
    init_settings()
    settings = get_settings()

    init_tracer(settings.OTEL_SERVICE_NAME, settings.OTEL_EXPORTER_OTLP_ENDPOINT)
    init_db(settings)

    log.info(
        "app.startup",
        environment=settings.ENVIRONMENT,
        sandbox=settings.SOISY_SANDBOX_ENABLED,
    )

    yield
    # Shutdown
    clear_settings()


app = FastAPI(
    title="Soisy Commerce Gateway",
    description="Installment-loan checkout and webhook processing for Soisy.",
    version="1.0.0",
    lifespan=lifespan,
)

FastAPIInstrumentor.instrument_app(app)

setup_metrics(app)

app.middleware("http")(log_api_entry)


@app.exception_handler(PaymentError)
async def payment_error_handler(request: Request, exc: PaymentError):
    return JSONResponse(status_code=502, content={"detail": str(exc)})


@app.exception_handler(UnsupportedOperationError)
async def unsupported_operation_handler(request: Request, exc: UnsupportedOperationError):
    return JSONResponse(
        status_code=501,
        content={"detail": str(exc), "operation": exc.operation},
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    log.error("api.unhandled_error", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=500,
        content={"detail": str(exc)},
    )


@app.get("/health")
async def health(settings: Settings = Depends(get_settings)):
    """Health check endpoint alias."""
    return await health_check(settings)


@app.get("/healthz")
async def health_check(settings: Settings = Depends(get_settings)):
    """Health check endpoint to verify API status."""
    return {
        "status": "ok",
        "app_name": settings.APP_NAME,
        "environment": settings.ENVIRONMENT,
        "sandbox": settings.SOISY_SANDBOX_ENABLED,
        "metrics": settings.METRICS_ENABLED,
    }


API_PREFIX = "/api/v1"

app.include_router(routes.router, prefix=API_PREFIX)


def main():
    import uvicorn

    configure_logging()
    uvicorn.run(app, host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
