"""OpenTelemetry tracing configuration.

Tracing is opt-in: the server only calls ``setup_tracing`` when an OTLP
endpoint is configured. Code that opens spans uses the OpenTelemetry API,
which is a no-op until a provider is installed.
"""

import logging

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

logger = logging.getLogger(__name__)


def setup_tracing(
    service_name: str,
    otlp_endpoint: str,
    environment: str = "production",
    enable_instrumentation: bool = True,
) -> trace.Tracer:
    """Configure OpenTelemetry tracing with an OTLP/HTTP exporter.

    Args:
        service_name: Name of the service (e.g., "twosplit")
        otlp_endpoint: OTLP HTTP endpoint, without the /v1/traces suffix
        environment: Value for the deployment.environment resource attribute
        enable_instrumentation: Whether to auto-instrument httpx, which the
            Anthropic SDK uses for its requests

    Returns:
        Tracer instance
    """
    resource = Resource.create(
        {
            "service.name": service_name,
            "service.namespace": "twosplit",
            "deployment.environment": environment,
        }
    )

    provider = TracerProvider(resource=resource)
    span_exporter = OTLPSpanExporter(
        endpoint=f"{otlp_endpoint.rstrip('/')}/v1/traces",
    )
    provider.add_span_processor(BatchSpanProcessor(span_exporter))
    trace.set_tracer_provider(provider)

    if enable_instrumentation:
        HTTPXClientInstrumentor().instrument()

    logger.info(f"Tracing enabled, exporting to {otlp_endpoint}")
    return trace.get_tracer(__name__)


def shutdown_tracing() -> None:
    """Flush and shut down the tracer provider if one was installed."""
    provider = trace.get_tracer_provider()
    shutdown = getattr(provider, "shutdown", None)
    if shutdown is not None:
        shutdown()
