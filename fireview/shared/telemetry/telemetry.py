"""OpenTelemetry tracing for the console service.

setup_tracing() is called from the lifespan when TELEMETRY_ENABLED is set.
Spans come from the FastAPI instrumentation plus the @traced Firestore and
prompt calls; log records get trace_id/span_id through the logging
instrumentation. The provider lives in this module until shutdown_tracing().
"""

import logging

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter, SpanExporter
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased

from fireview.core.config import Settings

logger = logging.getLogger(__name__)

# Polled by the console page after every action; tracing them is noise.
_UNTRACED_ROUTES = "/api/v1/health,/api/v1/notifications"

_provider: TracerProvider | None = None


def _build_exporter(kind: str, otlp_endpoint: str | None) -> SpanExporter | None:
    if kind == "none":
        return None
    if kind == "otlp":
        if not otlp_endpoint:
            logger.warning("TELEMETRY_EXPORTER=otlp without TELEMETRY_OTLP_ENDPOINT; using console")
            return ConsoleSpanExporter()
        return OTLPSpanExporter(
            endpoint=otlp_endpoint, insecure=otlp_endpoint.startswith("http://")
        )
    if kind != "console":
        logger.warning("Unknown telemetry exporter %r; using console", kind)
    return ConsoleSpanExporter()


def setup_tracing(app: FastAPI, settings: Settings) -> TracerProvider | None:
    """Install the global tracer provider and instrument app and logging.

    A failure here is logged and tracing stays off; the console still starts.
    """
    global _provider
    if _provider is not None:
        return _provider
    try:
        resource = Resource(
            attributes={
                SERVICE_NAME: settings.app_name,
                SERVICE_VERSION: settings.app_version,
                "deployment.environment": settings.telemetry_environment,
            }
        )
        provider = TracerProvider(
            resource=resource, sampler=TraceIdRatioBased(settings.telemetry_sample_rate)
        )
        exporter = _build_exporter(settings.telemetry_exporter, settings.telemetry_otlp_endpoint)
        if exporter is not None:
            provider.add_span_processor(BatchSpanProcessor(exporter))
        trace.set_tracer_provider(provider)
        FastAPIInstrumentor.instrument_app(
            app, tracer_provider=provider, excluded_urls=_UNTRACED_ROUTES
        )
        LoggingInstrumentor().instrument(tracer_provider=provider, set_logging_format=True)
    except Exception:
        logger.exception("Failed to initialize tracing; continuing without it")
        return None
    _provider = provider
    logger.info(
        "Tracing enabled: exporter=%s sample_rate=%s",
        settings.telemetry_exporter,
        settings.telemetry_sample_rate,
    )
    return provider


def shutdown_tracing() -> None:
    """Flush pending spans and drop the provider (no-op if tracing is off)."""
    global _provider
    if _provider is None:
        return
    provider, _provider = _provider, None
    provider.shutdown()
    logger.info("Tracing shut down")
