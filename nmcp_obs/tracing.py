"""
Distributed Tracing Setup (OpenTelemetry).

Auto-instruments httpx, which carries every Notion API request.
"""

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from nmcp_config.settings import Settings


def setup_tracing(settings: Settings) -> bool:
    """
    Setup OpenTelemetry distributed tracing.

    Without this call the global tracer is a no-op, so spans opened by the
    dispatcher cost nothing.
    """
    if not settings.OTEL_TRACES_ENABLED:
        return False

    resource = Resource.create(
        {
            "service.name": settings.OTEL_SERVICE_NAME,
            "service.version": settings.MCP_SERVER_VERSION,
            "deployment.environment": settings.ENVIRONMENT,
        }
    )

    provider = TracerProvider(resource=resource)
    otlp_exporter = OTLPSpanExporter(endpoint=settings.OTEL_EXPORTER_OTLP_ENDPOINT)
    provider.add_span_processor(BatchSpanProcessor(otlp_exporter))
    trace.set_tracer_provider(provider)

    HTTPXClientInstrumentor().instrument()
    return True
