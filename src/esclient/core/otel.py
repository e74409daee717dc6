from __future__ import annotations

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from esclient.core.config import get_settings

_initialized = False


def init_tracer(service_name: str | None = None) -> None:
    global _initialized
    if _initialized:
        return
    settings = get_settings()
    resource = Resource(attributes={"service.name": service_name or settings.service_name})
    provider = TracerProvider(resource=resource)
    processor = BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.otlp_endpoint + "/v1/traces"))
    provider.add_span_processor(processor)
    trace.set_tracer_provider(provider)
    _initialized = True


def get_tracer(name: str = "esclient"):
    # Until init_tracer runs this is the API's no-op proxy tracer
    return trace.get_tracer(name)
