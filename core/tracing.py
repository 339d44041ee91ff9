import os

import structlog
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)

log = structlog.get_logger(__name__)


def tracing_disabled() -> bool:
    return os.getenv("DISABLE_TRACING", "").lower() in {"1", "true", "yes"}


def build_span_exporter(endpoint: str | None = None) -> SpanExporter:
    """OTLP exporter for the collector at `endpoint`, console output otherwise."""
    if tracing_disabled():
        return ConsoleSpanExporter()
    try:
        return OTLPSpanExporter(endpoint=endpoint) if endpoint else OTLPSpanExporter()
    except Exception as exc:
        log.warning("tracing.exporter_unavailable", endpoint=endpoint, error=str(exc))
        return ConsoleSpanExporter()


def init_tracer(service_name: str = "soisy-commerce-gateway", endpoint: str | None = None):
    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    provider.add_span_processor(BatchSpanProcessor(build_span_exporter(endpoint)))
    trace.set_tracer_provider(provider)
    return provider
