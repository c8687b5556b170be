# ecommerce/shared/telemetry.py
import structlog

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

from ecommerce.shared.config import Settings

logger = structlog.get_logger()

def setup_telemetry(settings: Settings) -> bool:
    """
    Initializes the OpenTelemetry SDK with OTLP export.
    Should be called once at process startup.

    Returns True when a tracer provider was installed.
    """
    if not settings.OTEL_EXPORTER_OTLP_ENDPOINT:
        logger.info("telemetry_disabled", reason="no OTEL_EXPORTER_OTLP_ENDPOINT")
        return False

    logger.info("telemetry_init", service=settings.OTEL_SERVICE_NAME)

    # 1. Define Resource (Service Identity)
    resource = Resource.create(attributes={
        "service.name": settings.OTEL_SERVICE_NAME,
        "deployment.environment": settings.APP_ENV.value,
    })

    # 2. Configure Tracer Provider
    trace_provider = TracerProvider(resource=resource)

    # 3. Configure Exporter (Send data to Jaeger/Tempo)
    endpoint = settings.OTEL_EXPORTER_OTLP_ENDPOINT.rstrip("/")
    otlp_exporter = OTLPSpanExporter(endpoint=f"{endpoint}/v1/traces")
    trace_provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

    # 4. Optional: Console Exporter for local Debugging
    if settings.DEBUG:
        trace_provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    # 5. Set Global Provider
    trace.set_tracer_provider(trace_provider)
    return True

def instrument_fastapi(app, settings: Settings) -> None:
    """
    Auto-instruments the FastAPI application to trace incoming HTTP requests.
    """
    if settings.OTEL_EXPORTER_OTLP_ENDPOINT:
        FastAPIInstrumentor.instrument_app(app)

def get_tracer(name: str):
    """
    Utility to get a tracer for manual instrumentation in use cases.
    Usage:
        tracer = get_tracer(__name__)
        with tracer.start_as_current_span("my_custom_logic"):
            ...
    """
    return trace.get_tracer(name)
