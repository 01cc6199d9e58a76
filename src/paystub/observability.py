from typing import Optional

from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from .config import Settings, get_settings

SERVICE_NAME = "paystub"

tracer = trace.get_tracer(SERVICE_NAME)
meter = metrics.get_meter(SERVICE_NAME)

render_counter = meter.create_counter(
    "paystub.render.requests", unit="1", description="Statements rendered, by output kind"
)
fallback_counter = meter.create_counter(
    "paystub.render.fallbacks", unit="1", description="Renders that degraded to HTML"
)


def _resource(settings: Settings) -> Resource:
    return Resource.create({"service.name": SERVICE_NAME, "deployment.env": settings.env})


def configure_tracing(settings: Settings, otlp_endpoint: Optional[str] = None) -> None:
    tracer_provider = TracerProvider(resource=_resource(settings))
    endpoint = otlp_endpoint or settings.otlp_endpoint
    if endpoint:
        tracer_provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint)))
    trace.set_tracer_provider(tracer_provider)


def configure_metrics(settings: Settings, otlp_endpoint: Optional[str] = None) -> None:
    endpoint = otlp_endpoint or settings.otlp_endpoint
    provider_kwargs = {"resource": _resource(settings)}
    if endpoint:
        provider_kwargs["metric_readers"] = [PeriodicExportingMetricReader(OTLPMetricExporter(endpoint=endpoint))]
    metrics.set_meter_provider(MeterProvider(**provider_kwargs))


def configure_observability(settings: Settings | None = None) -> None:
    settings = settings or get_settings()
    configure_tracing(settings)
    configure_metrics(settings)
