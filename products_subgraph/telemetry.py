"""
Optional OpenTelemetry tracing for GraphQL execution.

Enabled by APOLLO_OTEL_EXPORTER_TYPE (console, zipkin or collector).
"""

from loguru import logger
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.exporter.zipkin.json import ZipkinExporter
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter, SpanExporter
from strawberry.extensions.tracing import OpenTelemetryExtension

SERVICE = "products"


def create_exporter(exporter_type: str, host: str, port: int) -> SpanExporter:
    if exporter_type == "console":
        return ConsoleSpanExporter()
    if exporter_type == "zipkin":
        return ZipkinExporter(endpoint=f"http://{host}:{port}/api/v2/spans")
    if exporter_type == "collector":
        return OTLPSpanExporter(endpoint=f"http://{host}:{port}/v1/traces")
    raise ValueError(f"Unknown OpenTelemetry exporter type: {exporter_type!r}")


def setup_tracing(exporter_type: str | None, host: str, port: int) -> list:
    """
    Install a tracer provider exporting to `exporter_type`.

    Returns:
        Strawberry schema extensions to add; empty when tracing is disabled
    """
    if not exporter_type:
        return []
    provider = TracerProvider(resource=Resource.create({SERVICE_NAME: SERVICE}))
    provider.add_span_processor(BatchSpanProcessor(create_exporter(exporter_type, host, port)))
    trace.set_tracer_provider(provider)
    logger.info("Tracing enabled, exporting to {} ({}:{})", exporter_type, host, port)
    return [OpenTelemetryExtension]
