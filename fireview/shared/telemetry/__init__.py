"""Logging setup and OpenTelemetry tracing."""

from fireview.shared.telemetry.logging import RedactApiKeyFilter, get_logger, setup_logging
from fireview.shared.telemetry.tracing import add_span_attributes, traced

__all__ = [
    "RedactApiKeyFilter",
    "add_span_attributes",
    "get_logger",
    "setup_logging",
    "traced",
]
