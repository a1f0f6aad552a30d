"""OpenTelemetry tracing for layout runs.

Environment Variables:
    LAYOUT_TRACING_ENABLED: Set to 'true' to enable tracing (default: false)
    LAYOUT_TRACING_ENDPOINT: OTLP collector URL (default: http://localhost:6006)
    LAYOUT_TRACING_SERVICE: Tracer name shown in the trace UI (default: family-tree-layout)
"""

import os
from typing import Any

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.trace import ReadableSpan, SpanProcessor, TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

LAYOUT_PASS_ATTRIBUTE = "family_layout.pass"
SPAN_PREFIX = "layout."


def is_tracing_enabled() -> bool:
    """Check if tracing is enabled via environment variable."""
    return os.getenv("LAYOUT_TRACING_ENABLED", "false").lower() == "true"


def get_tracing_endpoint() -> str:
    """Get the OTLP collector endpoint."""
    return os.getenv("LAYOUT_TRACING_ENDPOINT", "http://localhost:6006")


def get_service_name() -> str:
    return os.getenv("LAYOUT_TRACING_SERVICE", "family-tree-layout")


class LayoutPassProcessor(SpanProcessor):
    """Tags 'layout.<pass>' spans with the pass name so runs can be grouped.

    Mappings:
        - 'layout.heights' -> heights
        - 'layout.placement' -> placement
        - anything without the prefix -> other
    """

    def on_start(self, span: Any, parent_context: Any = None) -> None:
        if not hasattr(span, "name") or not hasattr(span, "set_attribute"):
            return

        name = span.name.lower()
        if name.startswith(SPAN_PREFIX):
            span.set_attribute(LAYOUT_PASS_ATTRIBUTE, name[len(SPAN_PREFIX) :])
        else:
            span.set_attribute(LAYOUT_PASS_ATTRIBUTE, "other")

    def on_end(self, span: ReadableSpan) -> None:
        pass

    def shutdown(self) -> None:
        pass

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        return True


_tracer_provider: TracerProvider | None = None


def initialize_tracing() -> TracerProvider | None:
    """Initialize OpenTelemetry tracing.

    Returns:
        TracerProvider if tracing is enabled, None otherwise.
    """
    global _tracer_provider

    if not is_tracing_enabled():
        return None

    if _tracer_provider is not None:
        return _tracer_provider

    exporter = OTLPSpanExporter(endpoint=f"{get_tracing_endpoint()}/v1/traces")

    _tracer_provider = TracerProvider()
    _tracer_provider.add_span_processor(LayoutPassProcessor())
    _tracer_provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(_tracer_provider)

    return _tracer_provider


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Get a tracer instance (no-op if tracing disabled)."""
    return trace.get_tracer(name or get_service_name())
