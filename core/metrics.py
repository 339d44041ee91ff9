"""
Prometheus metrics instrumentation for the Soisy gateway.

Exposes FastAPI request metrics plus gateway counters at /metrics.
"""

import os

from fastapi import Request, status
from fastapi.responses import JSONResponse
from prometheus_client import Counter
from prometheus_fastapi_instrumentator import Instrumentator

orders_total = Counter(
    "soisy_orders_total",
    "Orders submitted to Soisy",
    ["outcome"],  # success, failure, error
)

webhook_events_total = Counter(
    "soisy_webhook_events_total",
    "Webhook notifications received from Soisy",
    ["event_id", "outcome"],  # outcome: recorded, unknown_transaction, duplicate, rejected
)


def init_metrics(app):
    """
    Initialize Prometheus metrics instrumentation for the FastAPI app.

    Args:
        app: FastAPI application instance

    Returns:
        Instrumentator instance
    """
    inst = Instrumentator(
        should_group_status_codes=False,
        should_ignore_untemplated=True,
    )
    inst.instrument(app).expose(app, endpoint="/metrics", include_in_schema=False)
    return inst


def _is_private_address(host: str | None) -> bool:
    return bool(host) and host.startswith(("10.", "192.168.", "172.", "127."))


def add_metrics_auth_middleware(app):
    """
    Protect the /metrics endpoint outside development.
    Set METRICS_AUTH_TOKEN to allow scraping from public addresses.
    """

    @app.middleware("http")
    async def metrics_auth_middleware(request: Request, call_next):
        if request.url.path != "/metrics":
            return await call_next(request)

        if os.getenv("ENVIRONMENT", "development") == "development":
            return await call_next(request)

        expected_token = os.getenv("METRICS_AUTH_TOKEN")
        if expected_token and request.headers.get("X-Metrics-Auth") == expected_token:
            return await call_next(request)

        if _is_private_address(request.client.host if request.client else None):
            return await call_next(request)

        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"detail": "Metrics endpoint access denied"},
        )


def metrics_enabled() -> bool:
    """Read METRICS_ENABLED; the app is assembled before Settings are loaded."""
    return os.getenv("METRICS_ENABLED", "true").lower() in {"1", "true", "yes"}


def setup_metrics(app):
    """Instrument the app and protect /metrics unless METRICS_ENABLED is off."""
    if not metrics_enabled():
        return None
    inst = init_metrics(app)
    add_metrics_auth_middleware(app)
    return inst
