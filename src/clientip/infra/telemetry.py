"""OpenTelemetry bootstrap and the span side of client IP tagging.

``init_telemetry`` configures a ``TracerProvider`` with an OTLP HTTP
exporter when tracing is enabled via ``TracingConfig``; when disabled it
is a graceful no-op and spans stay non-recording.

``SpanTagTarget`` adapts an OTEL span to the ``Taggable`` protocol so the
tag writer never depends on a concrete span type::

    apply_outcome(current_span_target(), outcome)
"""

from __future__ import annotations

import base64
import logging
from typing import Any

from opentelemetry import trace

from clientip.configs.system import TracingConfig

logger = logging.getLogger(__name__)

tracer = trace.get_tracer("clientip")

SPAN_CLIENT_IP_RESOLVE = "client_ip.resolve"


class SpanTagTarget:
    """``Taggable`` view of an OpenTelemetry span."""

    def __init__(self, span: trace.Span) -> None:
        self.span = span

    def set_tag(self, key: str, value: Any) -> None:
        self.span.set_attribute(key, value)

    def get_tag(self, key: str) -> Any:
        # Only SDK spans expose what was recorded; API no-op spans do not.
        attributes = getattr(self.span, "attributes", None)
        if not attributes:
            return None
        return attributes.get(key)


def current_span_target() -> SpanTagTarget:
    """Wrap the active span (a no-op span when tracing is off)."""
    return SpanTagTarget(trace.get_current_span())


def init_telemetry(
    app: object | None = None,
    settings: TracingConfig | None = None,
) -> bool:
    """Initialise the OTEL ``TracerProvider`` and FastAPI instrumentation.

    Parameters
    ----------
    app:
        The FastAPI application instance, handed to the FastAPI
        instrumentor so inbound requests get a server span to tag.
    settings:
        Tracing configuration.  When ``None`` or ``enabled`` is
        ``False``, this function is a no-op.

    Returns ``True`` when tracing was set up.
    """
    if settings is None or not settings.enabled:
        logger.info("OpenTelemetry tracing disabled.")
        return False

    if not settings.endpoint:
        logger.warning(
            "Tracing enabled but no endpoint configured — "
            "skipping OpenTelemetry setup."
        )
        return False

    from opentelemetry.exporter.otlp.proto.http.trace_exporter import (
        OTLPSpanExporter,
    )
    from opentelemetry.sdk.resources import Resource
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import BatchSpanProcessor
    from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased

    resource = Resource.create({"service.name": settings.service_name})

    sampler = ParentBased(root=TraceIdRatioBased(settings.sample_rate))
    provider = TracerProvider(resource=resource, sampler=sampler)

    headers: dict[str, str] = {}
    if settings.username and settings.password:
        credentials = f"{settings.username}:{settings.password}"
        encoded = base64.b64encode(credentials.encode()).decode()
        headers["Authorization"] = f"Basic {encoded}"

    exporter = OTLPSpanExporter(endpoint=settings.endpoint, headers=headers)
    provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(provider)

    if app is not None:
        from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

        excluded = ",".join(settings.excluded_urls) if settings.excluded_urls else ""
        FastAPIInstrumentor.instrument_app(app, excluded_urls=excluded)

    logger.info(
        "OpenTelemetry tracing initialised (service=%s).", settings.service_name
    )
    return True
